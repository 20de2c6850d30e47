import pytest
import requests

from accounts.session import DashboardSession
from core.api_client import ApiError, MissingBusinessError, PosApiClient
from tests.conftest import FakeResponse


def _client(token="tok-123", business_id="biz-1"):
    store = {}
    if token:
        store["cloud_token"] = token
    if business_id:
        store["businessId"] = business_id
    return PosApiClient(DashboardSession(store), timeout=5)


def test_business_scoped_call_sends_bearer_and_business_headers(backend, staff_payload):
    backend.reply("GET", "/staff-users", staff_payload)

    assert _client().staff_users() == staff_payload

    call = backend.calls[0]
    assert call["headers"]["Authorization"] == "Bearer tok-123"
    assert call["headers"]["x-business-id"] == "biz-1"
    assert call["timeout"] == 5


def test_login_sends_no_business_header(backend):
    backend.reply("POST", "/auth/login", {"token": "t", "user": {"name": "Ana"}})

    data = _client(token=None, business_id=None).login("a@b.pe", "secret")

    assert data["token"] == "t"
    call = backend.calls[0]
    assert "Authorization" not in call["headers"]
    assert "x-business-id" not in call["headers"]
    assert call["json"] == {"email": "a@b.pe", "password": "secret"}


def test_missing_business_id_fails_before_any_request(backend):
    with pytest.raises(MissingBusinessError) as exc_info:
        _client(business_id=None).orders()
    assert exc_info.value.message == "No se encontró el ID del negocio"
    assert backend.calls == []


def test_business_path_uses_session_business_id(backend):
    backend.reply("GET", "/business/biz-1", {"id": "biz-1", "plan": "BASIC"})
    assert _client().business()["plan"] == "BASIC"


def test_backend_error_message_is_surfaced(backend):
    backend.reply("POST", "/auth/login", status_code=401, success=False, error="Usuario no encontrado")

    with pytest.raises(ApiError) as exc_info:
        _client(token=None).login("x@y.pe", "bad")

    assert exc_info.value.message == "Usuario no encontrado"
    assert exc_info.value.detail == "Usuario no encontrado"
    assert exc_info.value.status_code == 401


def test_success_false_with_2xx_is_an_error(backend):
    backend.reply("GET", "/orders", success=False, error="Licencia vencida")
    with pytest.raises(ApiError, match="Licencia vencida"):
        _client().orders()


def test_non_json_error_body_falls_back_to_status(backend):
    backend.raw("GET", "/products", FakeResponse(ValueError("not json"), status_code=502))
    with pytest.raises(ApiError) as exc_info:
        _client().products()
    assert exc_info.value.detail is None
    assert "502" in exc_info.value.message


def test_transport_failure_becomes_api_error(backend):
    backend.raw("GET", "/device/list", requests.ConnectionError("boom"))
    with pytest.raises(ApiError) as exc_info:
        _client().devices()
    assert exc_info.value.status_code is None
    assert exc_info.value.message.startswith("No se pudo conectar con el servidor")


def test_authorize_device_posts_flag(backend):
    backend.reply("POST", "/device/authorize", {"id": "d1", "isAuthorized": False})
    _client().authorize_device("d1", False)
    assert backend.calls[0]["json"] == {"deviceId": "d1", "authorize": False}
