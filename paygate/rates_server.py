"""Rates service: stores per-currency bank rates and picks the cheapest bank."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol

from paygate.contract import HTTPError

RATES_PARAMETER_CACHE_KEY = "rates"


class CacheClient(Protocol):
    def get(self, key: str) -> bytes: ...

    def set(self, key: str, value: bytes) -> None: ...


@dataclass(frozen=True)
class Rate:
    bank_name: str = ""
    rate_value: float = 0.0


def _parse_rate(data: Any) -> Rate:
    if data is None:
        return Rate()
    if not isinstance(data, dict):
        raise ValueError("rate entry must be a JSON object")
    bank_name = data.get("bank_name")
    rate_value = data.get("rate_value")
    if bank_name is None:
        bank_name = ""
    elif not isinstance(bank_name, str):
        raise ValueError("field 'bank_name' must be a string")
    if rate_value is None:
        rate_value = 0.0
    elif isinstance(rate_value, bool) or not isinstance(rate_value, (int, float)):
        raise ValueError("field 'rate_value' must be a number")
    return Rate(bank_name=bank_name, rate_value=float(rate_value))


@dataclass
class RatesParameter:
    """Bank rates keyed by the currency code written as a decimal string."""

    rates: dict[str, list[Rate]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, body: bytes | str) -> RatesParameter:
        """Decode and validate a rates document, raising ValueError if malformed."""
        data = json.loads(body)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("rates parameter must be a JSON object")
        raw_rates = data.get("rates")
        if raw_rates is None:
            return cls()
        if not isinstance(raw_rates, dict):
            raise ValueError("field 'rates' must be a JSON object")
        rates: dict[str, list[Rate]] = {}
        for code, banks in raw_rates.items():
            if banks is None:
                rates[code] = []
            elif isinstance(banks, list):
                rates[code] = [_parse_rate(bank) for bank in banks]
            else:
                raise ValueError(f"rates for currency {code} must be a list")
        return cls(rates=rates)


def cheapest_bank_name(parameter: RatesParameter, currency_code: int) -> str:
    """Name of the bank with the lowest rate; the first one wins a tie.

    Raises LookupError for an unknown currency and ValueError when it has no banks.
    """
    banks = parameter.rates.get(str(currency_code))
    if banks is None:
        raise LookupError(f"no such currency in parameter: {currency_code}")
    if not banks:
        raise ValueError(f"there are no banks for chosen currency: {currency_code}")
    return min(banks, key=lambda bank: bank.rate_value).bank_name


def _parse_currency_code(body: bytes | str) -> int:
    data = json.loads(body)
    if data is None:
        return 0
    if not isinstance(data, dict):
        raise ValueError("request must be a JSON object")
    code = data.get("currency_code")
    if code is None:
        return 0
    if isinstance(code, bool) or not isinstance(code, int):
        raise ValueError("field 'currency_code' must be an integer")
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"field 'currency_code' is out of range: {code}")
    return code


class RatesServer:
    """Request handlers of the rates service, independent of any web framework."""

    def __init__(self, cache: CacheClient) -> None:
        self._cache = cache

    def _load_parameter(self) -> tuple[bytes, RatesParameter]:
        try:
            body = self._cache.get(RATES_PARAMETER_CACHE_KEY)
        except Exception as exc:
            raise HTTPError(500, f"cache.Get error: {exc}") from exc
        try:
            return body, RatesParameter.from_json(body)
        except ValueError as exc:
            raise HTTPError(500, f"json.Unmarshal error: {exc}") from exc

    def get_param(self) -> bytes:
        """Return the stored rates document as it was saved."""
        body, _ = self._load_parameter()
        return body

    def update_param(self, body: bytes) -> None:
        """Validate and store a new rates document."""
        try:
            RatesParameter.from_json(body)
        except ValueError as exc:
            raise HTTPError(422, f"json.Unmarshal error: {exc}") from exc
        try:
            self._cache.set(RATES_PARAMETER_CACHE_KEY, bytes(body))
        except Exception as exc:
            raise HTTPError(500, f"cache.Set error: {exc}") from exc

    def choose_bank_name(self, body: bytes) -> bytes:
        """Return the name of the cheapest bank for the requested currency."""
        try:
            currency_code = _parse_currency_code(body)
        except ValueError as exc:
            raise HTTPError(422, f"json.Unmarshal error: {exc}") from exc
        _, parameter = self._load_parameter()
        try:
            name = cheapest_bank_name(parameter, currency_code)
        except LookupError as exc:
            raise HTTPError(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPError(500, str(exc)) from exc
        return name.encode("utf-8")