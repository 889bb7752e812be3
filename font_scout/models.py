# File: font_scout/models.py
"""font_scout.models: Scan result records, scan states and the batch request schema."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, StrictStr

from font_scout.matcher import render_matches

__all__ = [
    "ERROR_LABEL",
    "FailureKind",
    "ScanState",
    "ScanResult",
    "ScanRequest",
]

#: value of ``latinotype`` for a URL that could not be scanned
ERROR_LABEL = "Error"


class ScanState(str, Enum):
    """Lifecycle of one URL scan."""

    IDLE = "Idle"
    LAUNCHING = "Launching"
    NAVIGATING = "NavigatingPage"
    EXTRACTING = "ExtractingFonts"
    MATCHING = "Matching"
    COMPLETED = "Completed"
    FAILED = "Failed"

    @property
    def terminal(self) -> bool:
        return self in (ScanState.COMPLETED, ScanState.FAILED)


class FailureKind(str, Enum):
    """Why a URL ended in :attr:`ScanState.FAILED`."""

    LAUNCH_ERROR = "LaunchError"
    NAVIGATION_TIMEOUT = "NavigationTimeout"
    NAVIGATION_ERROR = "NavigationError"
    EVALUATION_ERROR = "EvaluationError"


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning one URL. Immutable once built."""

    url: str
    detected_fonts: Tuple[str, ...]
    matched_catalog: str
    date: str
    time: str
    error: Optional[str] = None
    matched: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        url: str,
        detected_fonts: Sequence[str],
        matched: Sequence[str],
        now: datetime,
        none_label: str = "Ninguna",
    ) -> ScanResult:
        """Build a result; *matched* are catalog names in catalog order."""
        return cls(
            url=url,
            detected_fonts=tuple(detected_fonts),
            matched_catalog=render_matches(matched, none_label),
            matched=tuple(matched),
            date=now.date().isoformat(),
            time=now.strftime("%X"),
        )

    @classmethod
    def failure(cls, url: str, kind: FailureKind, message: str, now: datetime) -> ScanResult:
        return cls(
            url=url,
            detected_fonts=(),
            matched_catalog=ERROR_LABEL,
            date=now.date().isoformat(),
            time=now.strftime("%X"),
            error=f"{kind.value}: {message}",
        )

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation used by the HTTP API, the webhook and reports."""
        payload: Dict[str, Any] = {
            "url": self.url,
            "fuentesDetectadas": list(self.detected_fonts),
            "latinotype": self.matched_catalog,
            "fecha": self.date,
            "hora": self.time,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


class ScanRequest(BaseModel):
    """Body of ``POST /scan``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    urls: List[StrictStr]
