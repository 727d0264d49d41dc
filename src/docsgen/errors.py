"""Exceptions raised by docsgen.

Capture-time misses (empty body, non-JSON body, unknown endpoint) and
malformed ``@parameters`` lines are not exceptions; they are logged and
skipped.
"""
from __future__ import annotations

from pathlib import Path


class DocsGenError(Exception):
    """Base class for every error docsgen raises."""


class ScanError(DocsGenError):
    """Scanning or parsing the source tree failed; no endpoints are returned."""


class NoFilesError(ScanError):
    def __init__(self, pattern: str = "") -> None:
        msg = "no files to parse"
        if pattern:
            msg = f"{msg} (pattern={pattern!r})"
        super().__init__(msg)
        self.pattern = pattern


class ParseError(ScanError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"failed to parse {path}: {reason}")
        self.path = str(path)
        self.reason = reason


class SerializeError(DocsGenError):
    """Marshalling or writing the docs file failed."""
