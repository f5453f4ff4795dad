"""HTTP client of the rates service that resolves bank clients by name."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

import httpx

from paygate.contract import ChooseBankClientRequest, ClientError
from paygate.service import BankClient

CHOOSE_BANK_CLIENT_PATH = "choose_bank_name"


def _encode(payload: Any) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


class RatesClient:
    """Asks the rates service for the cheapest bank and hands out its client."""

    def __init__(self, host: str, http_client: httpx.AsyncClient, *args: BankClient) -> None:
        self._host = host
        self._http = http_client
        self._banks: dict[str, BankClient] = {bank.bank_name: bank for bank in args}

    async def choose_bank_client(self, req: ChooseBankClientRequest) -> BankClient:
        """Return the client of the bank the rates service picks for the currency."""
        try:
            response = await self._http.post(
                f"{self._host}/{CHOOSE_BANK_CLIENT_PATH}",
                content=_encode(req.to_dict()),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise ClientError(f"httpClient.Do error: {exc}") from exc
        if response.status_code != HTTPStatus.OK:
            raise ClientError(f"httpClient.Do status code is: {response.status_code}")
        bank_name = response.content.decode("utf-8", errors="replace")
        return self.get_bank_client_by_name(bank_name)

    def get_bank_client_by_name(self, bank_name: str) -> BankClient:
        """Return the registered client for ``bank_name``."""
        try:
            return self._banks[bank_name]
        except KeyError:
            raise ClientError(f"there is no bankClient with name: {bank_name}") from None