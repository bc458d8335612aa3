from __future__ import annotations

import base64

from monolith.models import MediaType
from monolith.sniffer import sniff


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def test_png_signature() -> None:
    assert sniff(_b64(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)) is MediaType.PNG
    assert sniff("xxiVBORw0Kxx") is MediaType.PNG


def test_gif_signature() -> None:
    assert sniff(_b64(b"GIF89a" + b"\x01\x00")) is MediaType.GIF
    assert sniff("R0lGODlhAQABAIAAAP") is MediaType.GIF


def test_svg_marker() -> None:
    assert sniff('<?xml version="1.0"?><svg/>') is MediaType.SVG


def test_encoded_svg_is_not_recognised() -> None:
    assert sniff(_b64(b'<?xml version="1.0"?><svg/>')) is MediaType.JPEG


def test_unknown_payload_defaults_to_jpeg() -> None:
    assert sniff(_b64(b"\xff\xd8\xff\xe0")) is MediaType.JPEG
    assert sniff("") is MediaType.JPEG
    assert MediaType.JPEG.value == "image/jpeg"
