"""Thread-safe in-memory key/value store preloaded with default rates."""

from __future__ import annotations

import threading

DEFAULT_RATES = b"""
{
    "rates": {
        "123": [
            {
                "bank_name": "FastBank",
                "rate_value": 0.3
            },
            {
                "bank_name": "SlowBank",
                "rate_value": 0.5
            }
        ],
        "321": [
            {
                "bank_name": "UnknownBank",
                "rate_value": 1
            }
        ]
    }
}
"""


class CacheMissError(LookupError):
    """Raised when a key is not present in the cache."""


class InMemoryCache:
    """Stores byte values by key; starts with the default ``rates`` entry."""

    def __init__(self) -> None:
        self._memory: dict[str, bytes] = {"rates": DEFAULT_RATES}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._memory[key]
            except KeyError:
                raise CacheMissError(f"no data found by key: {key}") from None

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._memory[key] = bytes(value)