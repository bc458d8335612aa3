"""Rewrite passes that inline assets into a parsed document.

Each pass walks one kind of element in document order, reads a single
reference attribute and writes back either an absolute address (anchors)
or a ``data:`` URI built from the retrieved payload.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from bs4 import BeautifulSoup, Tag

from .addresses import resolve
from .fetcher import AssetRetriever
from .models import Address
from .sniffer import sniff
from .utils import has_scheme, is_data_uri, is_url, make_data_uri

logger = logging.getLogger("monolith")

RewritePass = Callable[[BeautifulSoup, Address, AssetRetriever], None]


def _head(soup: BeautifulSoup) -> Tag:
    return soup.head if soup.head is not None else soup


def _rel_tokens(tag: Tag) -> List[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [token.lower() for token in rel]


def _reference(tag: Tag, attribute: str) -> str:
    """Trimmed attribute value, or "" when absent or already inlined."""
    value = (tag.get(attribute) or "").strip()
    if is_data_uri(value):
        return ""
    return value


def _first_srcset_candidate(value: str) -> str:
    """URL of the first srcset candidate; commas inside the URL are kept."""
    tokens = value.split()
    # a trailing comma ends a candidate that has no descriptor
    return tokens[0].rstrip(",") if tokens else ""


def embed_stylesheets(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    for link in _head(soup).find_all("link"):
        if "stylesheet" not in _rel_tokens(link):
            continue
        href = _reference(link, "href")
        if not href:
            continue
        data = retriever.retrieve(base, href, binary=True)
        link["href"] = make_data_uri("text/css", data)


def embed_scripts(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    """Inline ``<script src>`` as a data URI, or as element text when configured."""
    as_data_uri = retriever.config.scripts_as_data_uri
    for script in soup.find_all("script"):
        src = _reference(script, "src")
        if not src:
            continue
        data = retriever.retrieve(base, src, binary=as_data_uri)
        if as_data_uri:
            script["src"] = make_data_uri("text/javascript", data)
        else:
            del script["src"]
            script.string = data


def embed_images(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    """Inline ``<img src>`` and ``<picture><source srcset>`` images."""
    for img in soup.find_all("img"):
        src = _reference(img, "src")
        if not src:
            continue
        data = retriever.retrieve(base, src, binary=True)
        img["src"] = make_data_uri(sniff(data).value, data)

    for picture in soup.find_all("picture"):
        for source in picture.find_all("source"):
            srcset = _first_srcset_candidate(_reference(source, "srcset"))
            if not srcset:
                continue
            data = retriever.retrieve(base, srcset, binary=True)
            media_type = source.get("type") or sniff(data).value
            source["srcset"] = make_data_uri(media_type, data)


def embed_favicons(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    for link in _head(soup).find_all("link"):
        if not any("icon" in token for token in _rel_tokens(link)):
            continue
        href = _reference(link, "href")
        if not href:
            continue
        data = retriever.retrieve(base, href, binary=True)
        link["href"] = make_data_uri(sniff(data).value, data)


def absolutize_anchors(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    """Point every ``<a href>`` at an absolute address; nothing is fetched."""
    for anchor in soup.find_all("a"):
        href = (anchor.get("href") or "").strip()
        if not href or href.startswith("#"):
            continue
        if has_scheme(href) and not is_url(href):
            # mailto:, javascript:, data: and friends stay as written
            continue
        anchor["href"] = resolve(base, href).value


PASSES: List[RewritePass] = [
    embed_stylesheets,
    embed_scripts,
    embed_images,
    embed_favicons,
    absolutize_anchors,
]


def run_passes(soup: BeautifulSoup, base: Address, retriever: AssetRetriever) -> None:
    for rewrite in PASSES:
        logger.debug("Running %s", rewrite.__name__)
        rewrite(soup, base, retriever)
