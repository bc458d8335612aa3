from __future__ import annotations

import threading
import time

import pytest

from monolith.cache import RetrievalCache
from monolith.models import Address, AddressKind, Encoding, RetrievalKey

ADDRESS = Address("https://example.com/app.js", AddressKind.REMOTE_URL)
TEXT_KEY = RetrievalKey(ADDRESS, Encoding.TEXT)
BINARY_KEY = RetrievalKey(ADDRESS, Encoding.BINARY)


def test_fetch_runs_once_per_key() -> None:
    cache = RetrievalCache()
    calls = []

    def fetch() -> str:
        calls.append(1)
        return "payload"

    assert cache.get_or_fetch(TEXT_KEY, fetch) == "payload"
    assert cache.get_or_fetch(TEXT_KEY, fetch) == "payload"
    assert len(calls) == 1
    assert cache.misses == 1
    assert cache.hits == 1


def test_encodings_are_cached_independently() -> None:
    cache = RetrievalCache()
    cache.get_or_fetch(TEXT_KEY, lambda: "text")
    cache.get_or_fetch(BINARY_KEY, lambda: "dGV4dA==")
    assert len(cache) == 2
    assert cache.get(TEXT_KEY) == "text"
    assert cache.get(BINARY_KEY) == "dGV4dA=="


def test_empty_payload_is_a_hit() -> None:
    cache = RetrievalCache()
    cache.get_or_fetch(TEXT_KEY, lambda: "")
    assert cache.get_or_fetch(TEXT_KEY, lambda: "late") == ""
    assert TEXT_KEY in cache


def test_failed_fetch_leaves_no_entry() -> None:
    cache = RetrievalCache()

    def boom() -> str:
        raise OSError("unreadable")

    with pytest.raises(OSError):
        cache.get_or_fetch(TEXT_KEY, boom)
    assert TEXT_KEY not in cache
    assert cache.get_or_fetch(TEXT_KEY, lambda: "ok") == "ok"


def test_concurrent_requests_share_one_fetch() -> None:
    cache = RetrievalCache()
    calls = []
    results = []

    def slow_fetch() -> str:
        calls.append(1)
        time.sleep(0.05)
        return "shared"

    def worker() -> None:
        results.append(cache.get_or_fetch(TEXT_KEY, slow_fetch))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert results == ["shared"] * 8
