from http import HTTPStatus

from starlette.testclient import TestClient

from paygate.contract import PayRequest, PayResponse, PayStatus
from paygate.gateway_app import build_service, create_app


class FakeService:
    def __init__(self, response=None, status=PayStatus.PENDING, error=None):
        self.response = response
        self.status = status
        self.error = error
        self.pay_requests = []
        self.status_requests = []

    async def pay(self, req):
        self.pay_requests.append(req)
        if self.error:
            raise self.error
        return self.response

    async def pay_status(self, req):
        self.status_requests.append(req)
        if self.error:
            raise self.error
        return self.status


def test_pay_success():
    service = FakeService(response=PayResponse(pay_id="42", status=PayStatus.SUCCESS))
    client = TestClient(create_app(service))
    payload = {"amount": 10.5, "currency_code": 123, "pan": "0000", "cvv": "000", "expired": "01/30"}
    response = client.post("/pay", json=payload)
    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"pay_id": "42", "status": int(PayStatus.SUCCESS)}
    assert service.pay_requests == [
        PayRequest(amount=10.5, currency_code=123, pan="0000", cvv="000", expired="01/30")
    ]


def test_pay_malformed_body():
    service = FakeService()
    client = TestClient(create_app(service))
    response = client.post("/pay", content=b"{not json")
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.text.startswith("json.Unmarshal error")
    assert service.pay_requests == []


def test_pay_service_error():
    service = FakeService(error=RuntimeError("boom"))
    client = TestClient(create_app(service))
    response = client.post("/pay", json={"currency_code": 123})
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.text == "service.Pay error: boom"


def test_pay_status_returns_status_number():
    service = FakeService(status=PayStatus.PENDING)
    client = TestClient(create_app(service))
    response = client.get("/pay_status/abc")
    assert response.status_code == HTTPStatus.OK
    assert response.json() == int(PayStatus.PENDING)
    assert [req.pay_id for req in service.status_requests] == ["abc"]


def test_pay_status_service_error():
    service = FakeService(error=RuntimeError("down"))
    client = TestClient(create_app(service))
    response = client.get("/pay_status/abc")
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.text == "service.PayStatus error: down"


def test_cors_allows_any_origin():
    service = FakeService(status=PayStatus.SUCCESS)
    client = TestClient(create_app(service))
    response = client.get("/pay_status/abc", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_build_service_registers_both_banks():
    service = build_service()
    assert service._rates.get_bank_client_by_name("FastBank").bank_name == "FastBank"
    assert service._rates.get_bank_client_by_name("SlowBank").bank_name == "SlowBank"