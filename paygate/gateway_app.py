"""HTTP front end of the payment gateway."""

from __future__ import annotations

import argparse
import json
import logging
from http import HTTPStatus
from typing import Any, Protocol

import httpx
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from paygate.banks import new_fast_bank, new_slow_bank
from paygate.contract import HTTPError, PayRequest, PayResponse, PayStatus, PayStatusRequest
from paygate.rates_client import RatesClient
from paygate.service import PaymentService
from paygate.transactions_client import TransactionsClient

DEFAULT_RATES_HOST = "http://rates:3001"
DEFAULT_TRANSACTIONS_HOST = "http://transactions:3002"
DEFAULT_TIMEOUT = 60.0
DEFAULT_PORT = 3000


class Service(Protocol):
    async def pay(self, req: PayRequest) -> PayResponse: ...

    async def pay_status(self, req: PayStatusRequest) -> PayStatus: ...


def _json_response(payload: Any) -> Response:
    body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return Response(body, status_code=HTTPStatus.OK, media_type="application/json")


class GatewayServer:
    """Request handlers for payments and payment status lookups."""

    def __init__(self, service: Service) -> None:
        self._service = service

    async def pay(self, request: Request) -> Response:
        body = await request.body()
        try:
            req = PayRequest.from_dict(json.loads(body))
        except ValueError as exc:
            raise HTTPError(HTTPStatus.UNPROCESSABLE_ENTITY, f"json.Unmarshal error: {exc}") from exc
        try:
            resp = await self._service.pay(req)
        except Exception as exc:
            raise HTTPError(HTTPStatus.INTERNAL_SERVER_ERROR, f"service.Pay error: {exc}") from exc
        return _json_response(resp.to_dict())

    async def pay_status(self, request: Request) -> Response:
        req = PayStatusRequest(pay_id=request.path_params["pay_id"])
        try:
            status = await self._service.pay_status(req)
        except Exception as exc:
            raise HTTPError(HTTPStatus.INTERNAL_SERVER_ERROR, f"service.PayStatus error: {exc}") from exc
        return _json_response(int(status))


async def _http_error_handler(request: Request, exc: Exception) -> Response:
    assert isinstance(exc, HTTPError)
    return PlainTextResponse(exc.message, status_code=int(exc.status_code))


def build_service(
    rates_host: str = DEFAULT_RATES_HOST,
    transactions_host: str = DEFAULT_TRANSACTIONS_HOST,
    timeout: float = DEFAULT_TIMEOUT,
) -> PaymentService:
    """Wire the payment service to the rates and transactions services and both banks."""
    http_client = httpx.AsyncClient(timeout=timeout)
    rates_client = RatesClient(rates_host, http_client, new_slow_bank(), new_fast_bank())
    transactions_client = TransactionsClient(transactions_host, http_client)
    return PaymentService(rates_client, transactions_client)


def create_app(service: Service) -> Starlette:
    """Build the gateway web application around ``service``."""
    server = GatewayServer(service)
    return Starlette(
        routes=[
            Route("/pay", server.pay, methods=["POST"]),
            Route("/pay_status/{pay_id:path}", server.pay_status, methods=["GET"]),
        ],
        middleware=[Middleware(CORSMiddleware, allow_origins=["*"])],
        exception_handlers={HTTPError: _http_error_handler},
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the payment gateway.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--rates-url", default=DEFAULT_RATES_HOST)
    parser.add_argument("--transactions-url", default=DEFAULT_TRANSACTIONS_HOST)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    service = build_service(args.rates_url, args.transactions_url, args.timeout)
    uvicorn.run(create_app(service), host=args.host, port=args.port)


if __name__ == "__main__":
    main()