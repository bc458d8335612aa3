"""Exceptions raised by the compactor."""

from __future__ import annotations


class MonolithError(Exception):
    """Base class for fatal conversion errors."""


class LocalReadError(MonolithError):
    """A local file referenced by the document could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to read local file {path}: {reason}")
        self.path = path


class DocumentParseError(MonolithError):
    """The root document could not be turned into a tree."""
