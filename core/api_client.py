# core/api_client.py
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for transport failures, non-2xx replies and `success: false` envelopes."""

    def __init__(self, message, status_code=None, detail=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # error text supplied by the backend, when it sent one
        self.detail = detail


class MissingBusinessError(ApiError):
    """A business-scoped endpoint was called without a business id in the session."""

    def __init__(self):
        super().__init__("No se encontró el ID del negocio")


class PosApiClient:
    """
    HTTP client for the Ubox POS cloud API.

    Built per request from a DashboardSession; attaches the bearer token
    whenever the session holds one and `x-business-id` on business-scoped
    calls. Every call carries a timeout.
    """

    def __init__(self, session, base_url=None, timeout=None, http=None):
        self.session = session
        self.base_url = (base_url or settings.UBOX_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.UBOX_API_TIMEOUT
        self.http = http or requests.Session()

    # -------------------------
    # Low-level helpers
    # -------------------------
    def _headers(self, business_scoped=False):
        headers = {"Accept": "application/json"}
        token = self.session.token if self.session is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if business_scoped:
            headers["x-business-id"] = self.require_business_id()
        return headers

    def require_business_id(self):
        business_id = self.session.business_id if self.session is not None else None
        if not business_id:
            raise MissingBusinessError()
        return str(business_id)

    def request(self, method, path, business_scoped=False, json=None):
        """Send one request and return the `data` member of the reply envelope."""
        # Resolve headers first so a missing business id never reaches the wire
        headers = self._headers(business_scoped=business_scoped)
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.http.request(method, url, headers=headers, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("API %s %s failed: %s", method, path, e)
            raise ApiError(f"No se pudo conectar con el servidor: {e}") from e

        payload = _decode(response)
        if not response.ok or payload.get("success") is False:
            detail = _error_message(payload)
            message = detail or f"Error {response.status_code} en {path}"
            logger.warning("API %s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code, detail=detail)
        return payload.get("data")

    def get(self, path, business_scoped=False):
        return self.request("GET", path, business_scoped=business_scoped)

    def post(self, path, json=None, business_scoped=False):
        return self.request("POST", path, business_scoped=business_scoped, json=json)

    # -------------------------
    # Auth
    # -------------------------
    def login(self, email, password):
        return self.post("/auth/login", json={"email": email, "password": password})

    def register(self, name, email, password):
        return self.post("/auth/register", json={"name": name, "email": email, "password": password})

    # -------------------------
    # Business-scoped reads
    # -------------------------
    def staff_users(self):
        return self.get("/staff-users", business_scoped=True) or []

    def orders(self):
        return self.get("/orders", business_scoped=True) or []

    def order_stats(self):
        return self.get("/orders/stats", business_scoped=True) or {}

    def products(self):
        return self.get("/products", business_scoped=True) or []

    def devices(self):
        return self.get("/device/list", business_scoped=True) or []

    def authorize_device(self, device_id, authorize):
        return self.post(
            "/device/authorize",
            json={"deviceId": device_id, "authorize": bool(authorize)},
            business_scoped=True,
        )

    def license_logs(self):
        return self.get("/license/logs", business_scoped=True) or []

    def recovery(self):
        return self.get("/recovery", business_scoped=True) or {}

    # -------------------------
    # Business resources (id in the path)
    # -------------------------
    def business(self):
        return self.get(f"/business/{self.require_business_id()}") or {}

    def business_users(self):
        return self.get(f"/business/{self.require_business_id()}/users") or []


def _decode(response):
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _error_message(payload):
    error = payload.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return payload.get("message")
