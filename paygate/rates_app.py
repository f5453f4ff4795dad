"""HTTP front end of the rates service."""

from __future__ import annotations

import argparse
import logging
from http import HTTPStatus

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from paygate.cache import InMemoryCache
from paygate.contract import HTTPError
from paygate.rates_server import CacheClient, RatesServer

DEFAULT_PORT = 3001


async def _http_error_handler(request: Request, exc: Exception) -> Response:
    assert isinstance(exc, HTTPError)
    return PlainTextResponse(exc.message, status_code=int(exc.status_code))


def create_app(cache: CacheClient | None = None) -> Starlette:
    """Build the rates web application; a fresh in-memory cache is used by default."""
    server = RatesServer(cache if cache is not None else InMemoryCache())

    async def get_param(request: Request) -> Response:
        return Response(server.get_param(), status_code=HTTPStatus.OK)

    async def update_param(request: Request) -> Response:
        server.update_param(await request.body())
        return PlainTextResponse(HTTPStatus.OK.phrase, status_code=HTTPStatus.OK)

    async def choose_bank_name(request: Request) -> Response:
        return Response(server.choose_bank_name(await request.body()), status_code=HTTPStatus.OK)

    return Starlette(
        routes=[
            Route("/param", get_param, methods=["GET"]),
            Route("/param", update_param, methods=["PATCH"]),
            Route("/choose_bank_name", choose_bank_name, methods=["POST"]),
        ],
        middleware=[Middleware(CORSMiddleware, allow_origins=["*"])],
        exception_handlers={HTTPError: _http_error_handler},
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the rates service.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()