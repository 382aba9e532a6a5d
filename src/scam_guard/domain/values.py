"""Value objects for Scam Guard.

All types here are frozen dataclasses -- immutable, compared by value.
They represent oracle verdicts, uploaded images, history records and
settings snapshots.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from .enums import Feature, RiskLevel

# Confidence band (inclusive) the oracle is instructed to use per verdict.
CONFIDENCE_BANDS: dict[RiskLevel, tuple[int, int]] = {
    RiskLevel.SAFE: (90, 100),
    RiskLevel.SUSPICIOUS: (40, 70),
    RiskLevel.SCAM: (80, 95),
}

_PAYMENT_LABELS = {
    RiskLevel.SAFE: "Genuine",
    RiskLevel.SUSPICIOUS: "Verification Needed",
    RiskLevel.SCAM: "Tampered / Fake",
}

# ---------------------------------------------------------------------------
# AnalysisResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """A validated classification verdict.

    Shape is checked on construction; the per-level confidence band is not
    (see :attr:`within_policy_band`).
    """

    risk_level: RiskLevel
    confidence_score: int
    reasons: tuple[str, ...]
    recommendation: str

    def __post_init__(self) -> None:
        if not isinstance(self.risk_level, RiskLevel):
            raise ValueError(f"risk_level must be a RiskLevel, got {self.risk_level!r}")
        if isinstance(self.confidence_score, bool) or not isinstance(self.confidence_score, int):
            raise ValueError(
                f"confidence_score must be an integer, got {self.confidence_score!r}"
            )
        if not 0 <= self.confidence_score <= 100:
            raise ValueError(
                f"confidence_score must be in [0, 100], got {self.confidence_score}"
            )
        if not isinstance(self.reasons, (list, tuple)):
            raise ValueError(
                f"reasons must be a list or tuple of strings, got {type(self.reasons).__name__}"
            )
        if isinstance(self.reasons, list):
            object.__setattr__(self, "reasons", tuple(self.reasons))
        if not self.reasons:
            raise ValueError("reasons must not be empty")
        if not all(isinstance(r, str) for r in self.reasons):
            raise ValueError("reasons must all be strings")
        if not isinstance(self.recommendation, str):
            raise ValueError("recommendation must be a string")

    @property
    def is_scam(self) -> bool:
        return self.risk_level is RiskLevel.SCAM

    @property
    def within_policy_band(self) -> bool:
        """True when the score falls inside the band for its risk level."""
        low, high = CONFIDENCE_BANDS[self.risk_level]
        return low <= self.confidence_score <= high

    def verdict_label(self, feature: Feature | None = None) -> str:
        """Display label for the verdict, worded for payment checks when relevant."""
        if feature is Feature.PAYMENT_PROOF:
            return _PAYMENT_LABELS[self.risk_level]
        return self.risk_level.value

    def to_dict(self) -> dict[str, object]:
        return {
            "risk_level": self.risk_level.value,
            "confidence_score": self.confidence_score,
            "reasons": list(self.reasons),
            "recommendation": self.recommendation,
        }


# ---------------------------------------------------------------------------
# ImagePayload
# ---------------------------------------------------------------------------

_SUFFIX_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
}


@dataclass(frozen=True)
class ImagePayload:
    """Raw image bytes plus their declared MIME type."""

    data: bytes
    mime_type: str = "image/jpeg"

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("image data must not be empty")

    @classmethod
    def from_path(cls, path: str | Path) -> ImagePayload:
        path = Path(path)
        mime_type = _SUFFIX_MIME_TYPES.get(path.suffix.lower(), "image/jpeg")
        return cls(data=path.read_bytes(), mime_type=mime_type)

    @classmethod
    def from_data_url(cls, value: str) -> ImagePayload:
        """Accept either a ``data:<mime>;base64,<data>`` URL or bare base64 text."""
        mime_type = "image/jpeg"
        encoded = value
        if value.startswith("data:") and "," in value:
            header, encoded = value.split(",", 1)
            declared = header[len("data:"):].split(";", 1)[0]
            if declared:
                mime_type = declared
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"image is not valid base64: {exc}") from exc
        return cls(data=data, mime_type=mime_type)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


# ---------------------------------------------------------------------------
# HistoryItem
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HistoryItem:
    """One past classification, created once when the oracle call succeeds."""

    feature: Feature
    input: str
    result: AnalysisResult
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)

    @property
    def type(self) -> str:
        return self.feature.history_label


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Settings:
    """Independent user preference toggles.

    ``comfort_mode`` only drives presentation; none of the flags affect
    classification or bookkeeping.
    """

    notifications: bool = True
    comfort_mode: bool = False
    auto_scan: bool = False
    stronger_encryption: bool = True

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def toggled(self, name: str) -> Settings:
        """Return a copy with the flag *name* flipped."""
        if name not in self.names():
            raise KeyError(f"Unknown setting {name!r}")
        return dataclasses.replace(self, **{name: not getattr(self, name)})


# ---------------------------------------------------------------------------
# RewardSnapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RewardSnapshot:
    """Read-only view of the reward ledger counters."""

    points: int = 0
    report_count: int = 0
