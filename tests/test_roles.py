import pytest

from core.core_models import StaffAccount, build_working_sets
from core.roles import RoleKind, classify_role, management_route_role


@pytest.mark.parametrize("raw, kind", [
    ("mozo", RoleKind.WAITER),
    ("MOZO", RoleKind.WAITER),
    ("Cajero", RoleKind.CASHIER),
    ("barman", RoleKind.BARMAN),
    ("Administrador", RoleKind.MANAGEMENT),
    ("admin", RoleKind.MANAGEMENT),
    ("Boss", RoleKind.MANAGEMENT),
    ("jefe", RoleKind.MANAGEMENT),
    ("Super Administrador", RoleKind.MANAGEMENT),
    ("cocinero", RoleKind.OTHER),
    ("", RoleKind.OTHER),
    (None, RoleKind.OTHER),
])
def test_classify_role_uses_lowercased_table(raw, kind):
    assert classify_role(raw) is kind


def test_classify_role_does_not_trim_whitespace():
    assert classify_role(" mozo") is RoleKind.OTHER


@pytest.mark.parametrize("raw, route_role", [
    ("Administrador", "admin"),
    ("Super Administrador", "admin"),
    ("ADMIN", "admin"),
    ("Jefe", "boss"),
    ("boss", "boss"),
])
def test_management_route_role(raw, route_role):
    assert management_route_role(raw) == route_role


def test_from_api_stringifies_id_and_drops_non_string_pin():
    account = StaffAccount.from_api({"id": 7, "name": "Eva", "role": "mozo", "status": "Active", "pin": 1234})
    assert account.id == "7"
    assert account.pin is None
    assert account.kind is RoleKind.WAITER


def test_working_sets_keep_only_active_known_roles(staff_payload):
    accounts = [StaffAccount.from_api(raw) for raw in staff_payload]
    sets = build_working_sets(accounts)

    assert [a.name for a in sets.cashiers] == ["Ana"]
    assert [a.name for a in sets.waiters] == ["Luis"]
    assert [a.name for a in sets.barmen] == ["Rosa"]
    assert [a.name for a in sets.management] == ["ADMIN", "Carlos"]

    every_member = sets.waiters + sets.cashiers + sets.barmen + sets.management
    assert all(a.status == "Active" for a in every_member)
    assert "Pedro" not in {a.name for a in every_member}
    assert "Eva" not in {a.name for a in every_member}


def test_status_match_is_exact():
    accounts = [StaffAccount.from_api({"id": 1, "name": "Ana", "role": "cajero", "status": "ACTIVE"})]
    assert build_working_sets(accounts).cashiers == []
