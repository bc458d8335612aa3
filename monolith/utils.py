"""Utility helpers for address classification and data URIs."""

from __future__ import annotations

import base64
import re
from typing import Union

from .models import Address, AddressKind

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


def is_url(value: str) -> bool:
    """Return True when the string is an absolute http(s) URL."""
    return bool(URL_PATTERN.match(value))


def classify(value: str) -> Address:
    """Tag a raw string as a remote URL or a local path by its prefix."""
    kind = AddressKind.REMOTE_URL if is_url(value) else AddressKind.LOCAL_PATH
    return Address(value, kind)


def has_scheme(value: str) -> bool:
    """Detect references such as ``mailto:`` or ``javascript:``.

    Single letters followed by a colon are treated as Windows drive letters,
    not schemes.
    """
    match = SCHEME_PATTERN.match(value)
    return bool(match) and len(match.group(0)) > 2


def is_data_uri(value: str) -> bool:
    return value[:5].lower() == "data:"


def to_base64(data: Union[str, bytes]) -> str:
    """Base64-encode bytes (or UTF-8 text) into an ASCII string."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def make_data_uri(media_type: str, payload: str) -> str:
    """Build a ``data:`` URI from a media type and a base64 payload."""
    return f"data:{media_type};base64,{payload}"
