"""Resolve document references against the base location of a run.

Two addressing universes meet here: filesystem paths for documents opened
from disk and http(s) URLs for documents fetched over the network. Every
reference found in a document goes through :func:`resolve`, which always
returns a single absolute :class:`~monolith.models.Address`.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urljoin, urlsplit

from .models import Address, AddressKind
from .utils import classify, is_url

logger = logging.getLogger("monolith")


def base_location(target: str) -> Address:
    """Compute the directory (or origin + directory) a target document lives in.

    ``https://site.com/blog/post.html`` becomes ``https://site.com/blog/`` and
    ``docs/index.html`` becomes the absolute ``.../docs/``. The result always
    ends with a separator.
    """
    if is_url(target):
        parts = urlsplit(target)
        directory = parts.path[: parts.path.rfind("/") + 1] or "/"
        return Address(f"{parts.scheme}://{parts.netloc}{directory}", AddressKind.REMOTE_URL)

    directory = os.path.dirname(os.path.abspath(target))
    return Address(directory.rstrip(os.sep) + os.sep, AddressKind.LOCAL_PATH)


def _resolve_remote(base: str, reference: str) -> str:
    try:
        parts = urlsplit(base)
        if reference.startswith("//"):
            return f"{parts.scheme}:{reference}"
        if reference.startswith("/"):
            return urljoin(f"{parts.scheme}://{parts.netloc}", reference)
        if is_url(reference):
            return reference
        return urljoin(base, reference)
    except ValueError as exc:
        # urllib rejects things like unbalanced IPv6 brackets; keep going.
        logger.debug("Could not parse reference %r against %s: %s", reference, base, exc)
        return base + reference.lstrip("/")


def resolve(base: Address, reference: str) -> Address:
    """Resolve ``reference`` against ``base``.

    Callers are expected to drop fragment-only references (``#top``) before
    getting here. An empty reference resolves to the base itself.
    """
    if not reference:
        return base

    if base.kind is AddressKind.REMOTE_URL:
        return classify(_resolve_remote(base.value, reference))

    if is_url(reference):
        return classify(reference)
    # join() lets an absolute path replace the base; abspath() folds ./ and ../
    return Address(os.path.abspath(os.path.join(base.value, reference)), AddressKind.LOCAL_PATH)
