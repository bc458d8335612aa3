"""Data models shared by the resolver, retriever and rewrite passes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AddressKind(Enum):
    """The two addressing universes a reference can live in."""

    LOCAL_PATH = "local"
    REMOTE_URL = "remote"


class Encoding(Enum):
    """How a retrieved payload is handed back to the caller."""

    TEXT = "text"
    BINARY = "binary"


class MediaType(str, Enum):
    """Image media types the sniffer can report."""

    PNG = "image/png"
    GIF = "image/gif"
    SVG = "image/svg+xml"
    JPEG = "image/jpeg"


@dataclass(frozen=True)
class Address:
    """A resolved location tagged with the universe it belongs to."""

    value: str
    kind: AddressKind

    @property
    def is_remote(self) -> bool:
        return self.kind is AddressKind.REMOTE_URL

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RetrievalKey:
    """Cache key: the same address fetched as text and as binary is two entries."""

    address: Address
    encoding: Encoding
