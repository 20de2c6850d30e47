import json

from accounts.session import DashboardSession


def test_login_stores_token_user_and_business():
    store = {}
    session = DashboardSession(store)
    session.login("tok", {"id": "u1", "name": "María"}, {"id": "biz-9", "name": "Bar Central"})

    assert session.is_authenticated
    assert session.token == "tok"
    assert session.business_id == "biz-9"
    assert session.user_name == "María"
    assert session.business_name == "Bar Central"
    assert json.loads(store["user_info"]) == {"id": "u1", "name": "María"}


def test_login_reads_business_id_from_user_payload():
    session = DashboardSession({})
    session.login("tok", {"name": "Ana", "businessId": "biz-2"})
    assert session.business_id == "biz-2"

    session = DashboardSession({})
    session.login("tok", {"name": "Ana", "business": {"id": "biz-3", "name": "Cevichería"}})
    assert session.business_id == "biz-3"
    assert session.business_name == "Cevichería"


def test_defaults_when_empty():
    session = DashboardSession({})
    assert not session.is_authenticated
    assert session.business_id is None
    assert session.user_name == "Usuario"
    assert session.business_name == "Mi Negocio"
    assert session.user_info == {}


def test_corrupt_user_info_reads_as_empty():
    assert DashboardSession({"user_info": "{not json"}).user_info == {}


def test_logout_clears_every_key():
    store = {"cloud_token": "tok", "businessId": "b", "pin_gates": {"cashier": {}}}
    DashboardSession(store).logout()
    assert store == {}
