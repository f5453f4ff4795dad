"""Request, response and status types shared by the payment gateway."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class PayStatus(IntEnum):
    """Lifecycle state of a payment, encoded as a small integer on the wire."""

    FAIL = 0
    SUCCESS = 1
    PENDING = 2
    NEW = 3


class HTTPError(Exception):
    """An error that maps directly onto an HTTP response status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ClientError(Exception):
    """Raised when a call to a downstream service fails."""


def _as_mapping(data: Any, type_name: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{type_name} must be a JSON object")
    return data


def _as_uint(data: Mapping[str, Any], name: str, bits: int) -> int:
    value = data.get(name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {name!r} must be an integer")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {name!r} is out of range: {value}")
    return value


def _as_float(data: Mapping[str, Any], name: str) -> float:
    value = data.get(name)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {name!r} must be a number")
    return float(value)


def _as_str(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


@dataclass
class PayRequest:
    """A card payment requested by a caller of the gateway."""

    amount: float = 0.0
    currency_code: int = 0
    pan: str = ""
    cvv: str = ""
    expired: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> PayRequest:
        """Build a request from decoded JSON, raising ValueError on bad fields."""
        fields = _as_mapping(data, "PayRequest")
        return cls(
            amount=_as_float(fields, "amount"),
            currency_code=_as_uint(fields, "currency_code", 16),
            pan=_as_str(fields, "pan"),
            cvv=_as_str(fields, "cvv"),
            expired=_as_str(fields, "expired"),
        )


@dataclass
class PayResponse:
    pay_id: str
    status: PayStatus

    def to_dict(self) -> dict[str, Any]:
        return {"pay_id": self.pay_id, "status": int(self.status)}


@dataclass
class PayStatusRequest:
    pay_id: str


@dataclass
class UpdateTransactionRequest:
    status: PayStatus
    pay_id: str

    def to_dict(self) -> dict[str, Any]:
        """Wire form; the payment id travels in the URL, not the body."""
        return {"status": int(self.status)}


@dataclass
class CreateTransactionRequest:
    amount: float
    currency_code: int
    bank_name: str
    status: PayStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "currency_code": self.currency_code,
            "bank_name": self.bank_name,
            "status": int(self.status),
        }


@dataclass
class GetTransactionResponse:
    status: PayStatus = PayStatus.FAIL
    bank_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> GetTransactionResponse:
        """Build from decoded JSON; unknown statuses raise ValueError."""
        fields = _as_mapping(data, "GetTransactionResponse")
        return cls(
            status=PayStatus(_as_uint(fields, "status", 8)),
            bank_name=_as_str(fields, "bank_name"),
        )


@dataclass
class ChooseBankClientRequest:
    currency_code: int

    def to_dict(self) -> dict[str, Any]:
        return {"currency_code": self.currency_code}