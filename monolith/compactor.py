"""High-level orchestration: turn a page into one self-contained document."""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .addresses import base_location
from .config import MonolithConfig
from .errors import DocumentParseError
from .fetcher import AssetRetriever, FetchObserver
from .passes import run_passes
from .utils import is_url, to_base64

logger = logging.getLogger("monolith")


def parse_document(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(f"Unable to parse document: {exc}") from exc


def compact(
    target: str,
    config: Optional[MonolithConfig] = None,
    session: Optional[requests.Session] = None,
    on_fetch: Optional[FetchObserver] = None,
) -> str:
    """Convert ``target`` (a path or http(s) URL) into a single HTML string.

    Stylesheets, scripts, images and favicons are embedded as data URIs and
    anchors are rewritten to absolute addresses. A fresh cache is used for
    every call. With ``config.output_as_base64`` the serialized document is
    returned base64-encoded.
    """
    config = config or MonolithConfig()
    start = time.perf_counter()

    base = base_location(target)
    retriever = AssetRetriever(config, session=session, on_fetch=on_fetch)
    logger.debug("Base location for %s is %s", target, base)

    # relative target paths already contain the base directory
    root = target if is_url(target) else os.path.abspath(target)
    html = retriever.retrieve(base, root)
    soup = parse_document(html)
    run_passes(soup, base, retriever)
    result = str(soup)

    logger.debug(
        "Compacted %s in %.2fs (%d resources fetched, %d cache hits)",
        target,
        time.perf_counter() - start,
        retriever.cache.misses,
        retriever.cache.hits,
    )
    return to_base64(result) if config.output_as_base64 else result
