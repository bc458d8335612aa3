"""Retrieve document assets from disk or the network, through the run cache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import requests

from .addresses import resolve
from .cache import RetrievalCache
from .config import MonolithConfig
from .errors import LocalReadError
from .models import Address, Encoding, RetrievalKey
from .utils import to_base64

logger = logging.getLogger("monolith")

FetchObserver = Callable[[Address], None]


def log_fetch(address: Address) -> None:
    """Default cache-miss observer: a progress line on the monolith logger."""
    logger.info("Retrieving %s ...", address)


def read_local(address: Address, encoding: Encoding) -> str:
    """Read a local file as UTF-8 text or as base64.

    Undecodable bytes are replaced rather than rejected; only a missing or
    unreadable file is an error.
    """
    path = Path(address.value)
    try:
        if encoding is Encoding.BINARY:
            return to_base64(path.read_bytes())
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise LocalReadError(address.value, str(exc)) from exc


def fetch_remote(
    session: requests.Session,
    address: Address,
    encoding: Encoding,
    timeout: float,
    user_agent: str,
) -> str:
    """GET a URL; any transport or HTTP failure yields an empty payload."""
    try:
        resp = session.get(address.value, headers={"User-Agent": user_agent}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.debug("Failed to fetch %s: %s", address, exc)
        return ""
    if encoding is Encoding.BINARY:
        return to_base64(resp.content)
    return resp.text


class AssetRetriever:
    """Resolve, fetch and memoize document assets for one conversion run."""

    def __init__(
        self,
        config: MonolithConfig,
        cache: Optional[RetrievalCache] = None,
        session: Optional[requests.Session] = None,
        on_fetch: Optional[FetchObserver] = None,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else RetrievalCache()
        self.session = session if session is not None else requests.Session()
        if on_fetch is None and not config.quiet:
            on_fetch = log_fetch
        self.on_fetch = on_fetch

    def _fetch(self, address: Address, encoding: Encoding) -> str:
        if self.on_fetch is not None:
            self.on_fetch(address)
        if address.is_remote:
            return fetch_remote(
                self.session, address, encoding, self.config.timeout, self.config.user_agent
            )
        return read_local(address, encoding)

    def retrieve(self, base: Address, reference: str, binary: bool = False) -> str:
        """Return the text (or base64 text when ``binary``) behind ``reference``.

        Raises :class:`~monolith.errors.LocalReadError` when a local file is
        missing or unreadable. Remote failures are cached as empty strings.
        """
        address = resolve(base, reference)
        encoding = Encoding.BINARY if binary else Encoding.TEXT
        key = RetrievalKey(address, encoding)
        return self.cache.get_or_fetch(key, lambda: self._fetch(address, encoding))
