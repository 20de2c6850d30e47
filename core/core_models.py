# core/core_models.py
from dataclasses import dataclass, field
from typing import List, Optional

from core.roles import ACTIVE_STATUS, RoleKind, classify_role


# -------------------------
# Staff accounts
# -------------------------
@dataclass
class StaffAccount:
    """
    One staff account as returned by GET /staff-users.
    Owned by the backend; read-only here.
    """
    id: str
    name: str
    role: str
    status: str
    pin: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[str] = None
    kind: RoleKind = field(init=False)

    def __post_init__(self):
        self.kind = classify_role(self.role)

    @classmethod
    def from_api(cls, raw: dict) -> "StaffAccount":
        pin = raw.get("pin")
        return cls(
            id=str(raw.get("id")),
            name=raw.get("name") or "",
            role=raw.get("role") or "",
            status=raw.get("status") or "",
            # PIN is compared as-is; anything that is not a string never matches
            pin=pin if isinstance(pin, str) else None,
            email=raw.get("email"),
            created_at=raw.get("createdAt"),
        )

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS

    def __str__(self):
        return f"{self.name} ({self.role})"


# -------------------------
# Working sets for the role panel
# -------------------------
@dataclass
class WorkingSets:
    waiters: List[StaffAccount] = field(default_factory=list)
    cashiers: List[StaffAccount] = field(default_factory=list)
    barmen: List[StaffAccount] = field(default_factory=list)
    management: List[StaffAccount] = field(default_factory=list)

    def for_kind(self, kind: RoleKind) -> List[StaffAccount]:
        return {
            RoleKind.WAITER: self.waiters,
            RoleKind.CASHIER: self.cashiers,
            RoleKind.BARMAN: self.barmen,
            RoleKind.MANAGEMENT: self.management,
        }.get(kind, [])


def build_working_sets(accounts) -> WorkingSets:
    """Partition accounts into the four disjoint active sets; inactive accounts are dropped."""
    sets = WorkingSets()
    for account in accounts:
        if not account.is_active:
            continue
        bucket = sets.for_kind(account.kind)
        if account.kind is not RoleKind.OTHER:
            bucket.append(account)
    return sets
