"""Guess an image media type from a base64 payload."""

from __future__ import annotations

from typing import Tuple

from .models import MediaType

# Markers as they appear in the base64 text, not in the raw bytes.
SIGNATURES: Tuple[Tuple[str, MediaType], ...] = (
    ("iVBORw0K", MediaType.PNG),
    ("R0lGODlh", MediaType.GIF),
    # "<" and "?" are outside the base64 alphabet, so this only matches a
    # payload that was never encoded; encoded SVG falls through to JPEG.
    ("<?xml", MediaType.SVG),
)


def sniff(payload: str) -> MediaType:
    """Return the first media type whose signature occurs in ``payload``.

    Anything unrecognised is reported as JPEG.
    """
    for marker, media_type in SIGNATURES:
        if marker in payload:
            return media_type
    return MediaType.JPEG
