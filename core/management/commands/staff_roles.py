import os

from django.core.management.base import BaseCommand, CommandError

from accounts.session import BUSINESS_ID_KEY, TOKEN_KEY, DashboardSession
from core.api_client import ApiError, PosApiClient
from core.core_models import build_working_sets
from core.queries import get_staff_accounts


class Command(BaseCommand):
    help = "Fetch a business's staff directory and print the role panel working sets (no PINs)."

    def add_arguments(self, parser):
        parser.add_argument("--business-id", required=True, help="Business id sent as x-business-id.")
        parser.add_argument(
            "--token",
            default=os.getenv("UBOX_API_TOKEN"),
            help="Bearer token (defaults to UBOX_API_TOKEN).",
        )

    def handle(self, *args, **options):
        store = {BUSINESS_ID_KEY: options["business_id"]}
        if options["token"]:
            store[TOKEN_KEY] = options["token"]
        client = PosApiClient(DashboardSession(store))

        self.stdout.write(self.style.NOTICE(f"API: {client.base_url}"))
        try:
            accounts = get_staff_accounts(client)
        except ApiError as e:
            raise CommandError(f"Could not fetch staff users: {e.message}")

        sets = build_working_sets(accounts)
        for label, members in (
            ("Mozos", sets.waiters),
            ("Cajeros", sets.cashiers),
            ("Barman", sets.barmen),
            ("Administración", sets.management),
        ):
            self.stdout.write(self.style.SUCCESS(f"{label} ({len(members)})"))
            for account in members:
                self.stdout.write(f"  {account.id}  {account.name}  [{account.role}]")

        skipped = len(accounts) - sum(len(m) for m in (sets.waiters, sets.cashiers, sets.barmen, sets.management))
        if skipped:
            self.stdout.write(self.style.WARNING(f"{skipped} account(s) inactive or with an unknown role"))
