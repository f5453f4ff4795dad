import json
import threading

import pytest

from paygate.cache import CacheMissError, InMemoryCache


def test_default_rates_are_present():
    data = json.loads(InMemoryCache().get("rates"))
    assert [r["bank_name"] for r in data["rates"]["123"]] == ["FastBank", "SlowBank"]
    assert [r["bank_name"] for r in data["rates"]["321"]] == ["UnknownBank"]


def test_missing_key_raises():
    with pytest.raises(CacheMissError, match="no data found by key: absent"):
        InMemoryCache().get("absent")


def test_set_then_get_round_trip():
    cache = InMemoryCache()
    cache.set("k", b"value")
    assert cache.get("k") == b"value"


def test_set_overwrites():
    cache = InMemoryCache()
    cache.set("rates", b"{}")
    assert cache.get("rates") == b"{}"


def test_concurrent_sets_all_land():
    cache = InMemoryCache()

    def writer(n):
        cache.set(f"key{n}", str(n).encode())

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(cache.get(f"key{n}") == str(n).encode() for n in range(20))