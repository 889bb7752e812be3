# File: font_scout/errors.py
"""font_scout.errors: Exception hierarchy shared by the scanner, the server and the CLI."""

from __future__ import annotations

from font_scout.models import FailureKind

__all__ = ["FontScoutError", "InvalidInput", "BrowserUnavailable", "ScanFailed"]


class FontScoutError(Exception):
    """Base class for all FontScout errors."""


class InvalidInput(FontScoutError):
    """The batch request is malformed; no URL is scanned."""


class BrowserUnavailable(FontScoutError):
    """The browser engine cannot be started on this host; the whole batch fails."""


class ScanFailed(FontScoutError):
    """A single URL could not be scanned. Carries the failure kind."""

    def __init__(self, kind: FailureKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
