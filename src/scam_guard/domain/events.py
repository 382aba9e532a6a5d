"""Domain events for Scam Guard.

Every event is a frozen dataclass inheriting from ``DomainEvent``.  The
controller and navigator emit events; listeners (presentation, logging,
tests) react to them without holding references to the aggregates.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .enums import Feature, Screen
from .values import AnalysisResult

# ---------------------------------------------------------------------------
# Base event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    timestamp: float = field(default_factory=time.time)
    source_id: str = ""


# ---------------------------------------------------------------------------
# Classification events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassificationCompleted(DomainEvent):
    """The oracle returned a valid verdict for a module submission."""

    feature: Feature | None = None
    input: str = ""
    result: AnalysisResult | None = None
    history_id: str = ""


@dataclass(frozen=True)
class ClassificationFailed(DomainEvent):
    """An oracle call failed; ``error`` is the diagnostic cause."""

    feature: Feature | None = None
    error: str = ""


# ---------------------------------------------------------------------------
# Reward events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DetectionCredited(DomainEvent):
    """A scam verdict earned detection points for a new input."""

    input_key: str = ""
    points_awarded: int = 0
    total_points: int = 0


@dataclass(frozen=True)
class ReportCredited(DomainEvent):
    """An explicit user report earned report points for a new input."""

    input_key: str = ""
    points_awarded: int = 0
    total_points: int = 0
    report_count: int = 0


# ---------------------------------------------------------------------------
# Navigation / settings events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScreenChanged(DomainEvent):
    """The top-level screen changed (intro, login, dashboard)."""

    previous: Screen | None = None
    current: Screen | None = None
    user: str | None = None


@dataclass(frozen=True)
class ViewChanged(DomainEvent):
    """The dashboard view changed between home, a module, and settings."""

    selected_module: Feature | None = None
    settings_open: bool = False


@dataclass(frozen=True)
class SettingToggled(DomainEvent):
    """A settings flag was flipped."""

    name: str = ""
    value: bool = False
