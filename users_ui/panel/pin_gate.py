# users_ui/panel/pin_gate.py
"""
PIN gate for the role selection panel.

Each role category (waiter, cashier, barman, management) has its own
dialog, modelled by RoleGate:

    Closed -> AccountSelection -> PinEntry -> Granted | Denied

Digits are collected by PinPad, which hands back the completed PIN exactly
once, when the fourth digit arrives. RoleGate then compares it with the
selected account's stored PIN and either produces a NavigationTarget or
records an error. Nothing here knows about Django; the views persist the
gate through to_dict()/from_dict() in the session.
"""
import hmac
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
from urllib.parse import quote, urlencode

from core.core_models import StaffAccount, WorkingSets
from core.roles import RoleKind, management_route_role

logger = logging.getLogger(__name__)

PIN_LENGTH = 4
CLEAR_KEY = "clear"
BACKSPACE_KEY = "back"
ADMIN_ACCOUNT_NAME = "ADMIN"


class GateCategory(Enum):
    WAITER = "waiter"
    CASHIER = "cashier"
    BARMAN = "barman"
    MANAGEMENT = "management"

    @property
    def role_kind(self) -> RoleKind:
        return {
            GateCategory.WAITER: RoleKind.WAITER,
            GateCategory.CASHIER: RoleKind.CASHIER,
            GateCategory.BARMAN: RoleKind.BARMAN,
            GateCategory.MANAGEMENT: RoleKind.MANAGEMENT,
        }[self]

    @property
    def requires_explicit_selection(self) -> bool:
        return self is not GateCategory.MANAGEMENT


class GateState(Enum):
    CLOSED = "closed"
    ACCOUNT_SELECTION = "account_selection"
    PIN_ENTRY = "pin_entry"
    GRANTED = "granted"
    DENIED = "denied"


# Staff destinations: (path, role query value)
STAFF_DESTINATIONS = {
    GateCategory.WAITER: ("/waiter/", "mozo"),
    GateCategory.CASHIER: ("/cashier/", "cajero"),
    GateCategory.BARMAN: ("/bar/", "barman"),
}
MANAGEMENT_DESTINATION = "/admin-dashboard/"

MISSING_SELECTION_ERRORS = {
    GateCategory.WAITER: "Por favor, selecciona tu nombre.",
    GateCategory.CASHIER: "Por favor, selecciona tu nombre.",
    GateCategory.BARMAN: "Por favor, selecciona tu nombre.",
    GateCategory.MANAGEMENT: "Selecciona un usuario",
}
WRONG_PIN_ERRORS = {
    GateCategory.WAITER: "PIN incorrecto. Inténtalo de nuevo.",
    GateCategory.CASHIER: "PIN incorrecto. Inténtalo de nuevo.",
    GateCategory.BARMAN: "PIN incorrecto. Inténtalo de nuevo.",
    GateCategory.MANAGEMENT: "PIN incorrecto",
}


@dataclass
class NavigationTarget:
    path: str
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        # Percent-encode like encodeURIComponent (spaces as %20)
        return f"{self.path}?{urlencode(self.params, quote_via=quote)}"


def navigation_for(category: GateCategory, account: StaffAccount) -> NavigationTarget:
    if category is GateCategory.MANAGEMENT:
        return NavigationTarget(MANAGEMENT_DESTINATION, {
            "role": management_route_role(account.role),
            "displayRole": account.role,
            "name": account.name,
            "id": account.id,
        })
    path, role = STAFF_DESTINATIONS[category]
    return NavigationTarget(path, {"role": role, "name": account.name, "id": account.id})


def pins_match(entered: str, stored: Optional[str]) -> bool:
    """Exact string equality on a full-length entry; accounts without a PIN never match."""
    if not isinstance(stored, str) or len(entered) != PIN_LENGTH:
        return False
    return hmac.compare_digest(entered.encode("utf-8"), stored.encode("utf-8"))


class PinPad:
    """
    Keypad input accumulator.

    press() returns the completed PIN when the entry reaches PIN_LENGTH and
    None otherwise; presses on a full pad are ignored, so each completed
    entry is reported once.
    """

    def __init__(self, digits: str = "", length: int = PIN_LENGTH):
        self.length = length
        self.digits = digits[:length]

    def press(self, key: str) -> Optional[str]:
        if key == CLEAR_KEY:
            self.clear()
            return None
        if key == BACKSPACE_KEY:
            self.digits = self.digits[:-1]
            return None
        if not (isinstance(key, str) and len(key) == 1 and key.isdigit() and key.isascii()):
            raise ValueError(f"Unsupported keypad key: {key!r}")
        if self.is_full:
            return None
        self.digits += key
        return self.digits if self.is_full else None

    def clear(self):
        self.digits = ""

    @property
    def is_full(self) -> bool:
        return len(self.digits) >= self.length


@dataclass
class RoleGate:
    category: GateCategory
    state: GateState = GateState.CLOSED
    selected_account_id: Optional[str] = None
    digits: str = ""
    error: Optional[str] = None

    # -------------------------
    # Transitions
    # -------------------------
    def open(self, accounts: List[StaffAccount]):
        self.error = None
        self.digits = ""
        if self.category.requires_explicit_selection:
            self.selected_account_id = None
        elif not self.selected_account_id:
            admin = next((a for a in accounts if a.name.upper() == ADMIN_ACCOUNT_NAME), None)
            if admin is not None:
                self.selected_account_id = admin.id
        self.state = GateState.PIN_ENTRY if self.selected_account_id else GateState.ACCOUNT_SELECTION

    def select(self, account_id, accounts: List[StaffAccount]):
        account = self._find(account_id, accounts)
        if account is None:
            self.error = MISSING_SELECTION_ERRORS[self.category]
            return
        self.selected_account_id = account.id
        self.error = None
        if self.state is not GateState.CLOSED:
            self.state = GateState.PIN_ENTRY

    def press(self, key: str, accounts: List[StaffAccount]) -> Optional[NavigationTarget]:
        """Feed one keypad key; returns the navigation target when access is granted."""
        if not self.is_open:
            return None
        pad = PinPad(self.digits)
        attempt = pad.press(key)
        self.digits = pad.digits
        if attempt is None:
            return None
        return self.attempt(attempt, accounts)

    def attempt(self, entered: str, accounts: List[StaffAccount]) -> Optional[NavigationTarget]:
        account = self._find(self.selected_account_id, accounts)
        if account is None:
            # Nothing to compare against; keep the entry and the state as they are
            self.error = MISSING_SELECTION_ERRORS[self.category]
            return None

        if pins_match(entered, account.pin):
            self.state = GateState.GRANTED
            self.error = None
            target = navigation_for(self.category, account)
            logger.info("PIN accepted for %s account %s", self.category.value, account.id)
            self.close()
            return target

        self.state = GateState.DENIED
        logger.warning("PIN rejected for %s account %s", self.category.value, account.id)
        self.error = WRONG_PIN_ERRORS[self.category]
        self.digits = ""
        if self.category.requires_explicit_selection:
            self.selected_account_id = None
            self.state = GateState.ACCOUNT_SELECTION
        else:
            self.state = GateState.PIN_ENTRY
        return None

    def close(self):
        """Cancel: digits go, the selection stays."""
        self.digits = ""
        self.state = GateState.CLOSED

    # -------------------------
    # Helpers
    # -------------------------
    @staticmethod
    def _find(account_id, accounts: List[StaffAccount]) -> Optional[StaffAccount]:
        if not account_id:
            return None
        return next((a for a in accounts if a.id == str(account_id)), None)

    @property
    def is_open(self) -> bool:
        return self.state is not GateState.CLOSED

    @property
    def masked_digits(self) -> str:
        return "*" * len(self.digits)

    # -------------------------
    # Session persistence
    # -------------------------
    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "selected_account_id": self.selected_account_id,
            "digits": self.digits,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, category: GateCategory, data: Optional[dict]) -> "RoleGate":
        data = data or {}
        try:
            state = GateState(data.get("state", GateState.CLOSED.value))
        except ValueError:
            state = GateState.CLOSED
        return cls(
            category=category,
            state=state,
            selected_account_id=data.get("selected_account_id"),
            digits=(data.get("digits") or "")[:PIN_LENGTH],
            error=data.get("error"),
        )


def accounts_for(category: GateCategory, working_sets: WorkingSets) -> List[StaffAccount]:
    return working_sets.for_kind(category.role_kind)
