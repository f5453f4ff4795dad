"""HTTP client of the transactions service."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

import httpx

from paygate.contract import (
    ClientError,
    CreateTransactionRequest,
    GetTransactionResponse,
    UpdateTransactionRequest,
)

_JSON_HEADERS = {"Content-Type": "application/json"}


def _encode(payload: Any) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


class TransactionsClient:
    """Reads, creates and updates transaction records over HTTP."""

    def __init__(self, host: str, http_client: httpx.AsyncClient) -> None:
        self._host = host
        self._http = http_client

    async def _send(self, method: str, url: str, body: bytes | None = None) -> httpx.Response:
        try:
            return await self._http.request(
                method, url, content=body, headers=_JSON_HEADERS if body is not None else None
            )
        except httpx.HTTPError as exc:
            raise ClientError(f"httpClient.Do error: {exc}") from exc

    async def get(self, pay_id: str) -> GetTransactionResponse:
        """Fetch the stored status and bank of a payment."""
        response = await self._send("GET", f"{self._host}/one/{pay_id}")
        if response.status_code != HTTPStatus.OK:
            raise ClientError(f"httpClient.Do status code is: {response.status_code}")
        try:
            return GetTransactionResponse.from_dict(json.loads(response.content))
        except ValueError as exc:
            raise ClientError(f"json.Unmarshal error: {exc}") from exc

    async def create(self, req: CreateTransactionRequest) -> str:
        """Create a transaction and return its payment id."""
        response = await self._send("POST", self._host, _encode(req.to_dict()))
        if response.status_code not in (HTTPStatus.OK, HTTPStatus.CREATED):
            raise ClientError(f"httpClient.Do status code is: {response.status_code}")
        return response.content.decode("utf-8", errors="replace")

    async def update(self, req: UpdateTransactionRequest) -> None:
        """Store a new status for the payment."""
        response = await self._send("PATCH", f"{self._host}/{req.pay_id}", _encode(req.to_dict()))
        if response.status_code != HTTPStatus.OK:
            raise ClientError(f"httpClient.Do status code is: {response.status_code}")