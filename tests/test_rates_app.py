import json
from http import HTTPStatus

from starlette.testclient import TestClient

from paygate.cache import DEFAULT_RATES, InMemoryCache
from paygate.rates_app import create_app


def _client():
    return TestClient(create_app(InMemoryCache()))


def test_get_param_returns_default_document():
    response = _client().get("/param")
    assert response.status_code == HTTPStatus.OK
    assert response.content == DEFAULT_RATES


def test_update_then_get_round_trip():
    client = _client()
    document = json.dumps({"rates": {"978": [{"bank_name": "SlowBank", "rate_value": 0.1}]}}).encode()
    response = client.patch("/param", content=document)
    assert response.status_code == HTTPStatus.OK
    assert client.get("/param").content == document
    chosen = client.post("/choose_bank_name", json={"currency_code": 978})
    assert chosen.text == "SlowBank"


def test_update_rejects_malformed_document():
    client = _client()
    response = client.patch("/param", content=b"{broken")
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.get("/param").content == DEFAULT_RATES


def test_choose_bank_name_picks_cheapest():
    client = _client()
    response = client.post("/choose_bank_name", json={"currency_code": 123})
    assert response.status_code == HTTPStatus.OK
    assert response.text == "FastBank"
    assert client.post("/choose_bank_name", json={"currency_code": 321}).text == "UnknownBank"


def test_choose_bank_name_unknown_currency():
    response = _client().post("/choose_bank_name", json={"currency_code": 999})
    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.text == "no such currency in parameter: 999"


def test_choose_bank_name_malformed_request():
    response = _client().post("/choose_bank_name", content=b"[")
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_choose_bank_name_without_banks():
    client = _client()
    client.patch("/param", content=json.dumps({"rates": {"5": []}}).encode())
    response = client.post("/choose_bank_name", json={"currency_code": 5})
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.text == "there are no banks for chosen currency: 5"