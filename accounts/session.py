# accounts/session.py
import json

# Keys kept in the Django session for the signed-in owner
TOKEN_KEY = "cloud_token"
USER_INFO_KEY = "user_info"
BUSINESS_ID_KEY = "businessId"
USER_NAME_KEY = "userName"
BUSINESS_NAME_KEY = "businessName"

SESSION_KEYS = (TOKEN_KEY, USER_INFO_KEY, BUSINESS_ID_KEY, USER_NAME_KEY, BUSINESS_NAME_KEY)


class DashboardSession:
    """
    Explicit session context for one browser session.

    Wraps the Django session mapping. Written by login/registration,
    cleared by logout, read by everything else (the API client takes one
    of these in its constructor).
    """

    def __init__(self, store):
        self._store = store

    # -------------------------
    # Read side
    # -------------------------
    @property
    def token(self):
        return self._store.get(TOKEN_KEY)

    @property
    def business_id(self):
        return self._store.get(BUSINESS_ID_KEY)

    @property
    def user_info(self) -> dict:
        raw = self._store.get(USER_INFO_KEY)
        if not raw:
            return {}
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return {}

    @property
    def user_name(self) -> str:
        return self._store.get(USER_NAME_KEY) or "Usuario"

    @property
    def business_name(self) -> str:
        return self._store.get(BUSINESS_NAME_KEY) or "Mi Negocio"

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    # -------------------------
    # Lifecycle
    # -------------------------
    def login(self, token, user=None, business=None):
        """Store the credentials returned by /auth/login or /auth/register."""
        user = user or {}
        self._store[TOKEN_KEY] = token
        self._store[USER_INFO_KEY] = json.dumps(user)

        business_id = _business_id_from(user, business)
        if business_id:
            self._store[BUSINESS_ID_KEY] = str(business_id)

        if user.get("name"):
            self._store[USER_NAME_KEY] = user["name"]
        business_name = (business or {}).get("name") or (user.get("business") or {}).get("name")
        if business_name:
            self._store[BUSINESS_NAME_KEY] = business_name

    def logout(self):
        """Drop every stored key, dialog state included."""
        if hasattr(self._store, "flush"):
            self._store.flush()
        else:
            self._store.clear()


def _business_id_from(user: dict, business) -> str:
    # Registration returns the business next to the user; login only
    # carries it inside the user payload, if at all.
    if business and business.get("id"):
        return business["id"]
    if user.get("businessId"):
        return user["businessId"]
    nested = user.get("business") or {}
    return nested.get("id")
