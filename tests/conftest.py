import pytest
import requests
from django.conf import settings

from accounts.session import BUSINESS_ID_KEY, BUSINESS_NAME_KEY, TOKEN_KEY, USER_NAME_KEY


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeBackend:
    """Routes (METHOD, path) to canned envelopes and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def reply(self, method, path, data=None, status_code=200, success=True, error=None):
        payload = {"success": success, "data": data}
        if error is not None:
            payload["error"] = {"message": error}
        self.routes[(method.upper(), path)] = FakeResponse(payload, status_code)

    def raw(self, method, path, response):
        self.routes[(method.upper(), path)] = response

    # Set on the class, an instance is not bound, so no Session argument arrives
    def __call__(self, method, url, headers=None, json=None, timeout=None, **kwargs):
        path = url[len(settings.UBOX_API_BASE_URL):]
        self.calls.append({"method": method, "path": path, "headers": headers or {}, "json": json, "timeout": timeout})
        response = self.routes.get((method.upper(), path))
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse({"success": False, "error": {"message": f"no route {path}"}}, 404)
        return response


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()
    monkeypatch.setattr(requests.Session, "request", fake)
    return fake


@pytest.fixture
def staff_payload():
    return [
        {"id": 1, "name": "Ana", "role": "cajero", "status": "Active", "pin": "1234"},
        {"id": 2, "name": "Luis", "role": "Mozo", "status": "Active", "pin": "1111"},
        {"id": 3, "name": "Rosa", "role": "barman", "status": "Active", "pin": "2222"},
        {"id": 4, "name": "ADMIN", "role": "Super Administrador", "status": "Active", "pin": "9999"},
        {"id": 5, "name": "Carlos", "role": "Jefe", "status": "Active", "pin": "5555"},
        {"id": 6, "name": "Pedro", "role": "cajero", "status": "Inactive", "pin": "3333"},
        {"id": 7, "name": "Eva", "role": "cocinero", "status": "Active", "pin": "4444"},
    ]


@pytest.fixture
def owner_client(client, db):
    """Django test client with an owner already signed in."""
    session = client.session
    session[TOKEN_KEY] = "tok-123"
    session[BUSINESS_ID_KEY] = "biz-1"
    session[USER_NAME_KEY] = "María"
    session[BUSINESS_NAME_KEY] = "Bar Central"
    session.save()
    return client
