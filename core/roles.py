# core/roles.py
from enum import Enum


class RoleKind(Enum):
    WAITER = "mozo"
    CASHIER = "cajero"
    BARMAN = "barman"
    MANAGEMENT = "management"
    OTHER = "other"


# Raw backend role strings (lower-cased) -> RoleKind
ROLE_KINDS = {
    "mozo": RoleKind.WAITER,
    "cajero": RoleKind.CASHIER,
    "barman": RoleKind.BARMAN,
    "administrador": RoleKind.MANAGEMENT,
    "admin": RoleKind.MANAGEMENT,
    "boss": RoleKind.MANAGEMENT,
    "jefe": RoleKind.MANAGEMENT,
    "super administrador": RoleKind.MANAGEMENT,
}

ACTIVE_STATUS = "Active"


def classify_role(raw_role) -> RoleKind:
    """Map a free-text backend role to a RoleKind (case-insensitive)."""
    if not isinstance(raw_role, str):
        return RoleKind.OTHER
    return ROLE_KINDS.get(raw_role.lower(), RoleKind.OTHER)


def management_route_role(raw_role) -> str:
    """Management accounts whose role mentions 'admin' land as admin, the rest as boss."""
    return "admin" if "admin" in (raw_role or "").lower() else "boss"
