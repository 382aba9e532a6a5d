"""Domain layer for Scam Guard.

Re-exports all public domain types so that consumers can write::

    from scam_guard.domain import AnalysisResult, Feature, RiskLevel
"""

# -- Enumerations -------------------------------------------------------------
from .enums import Feature, RiskLevel, Screen, SessionStatus

# -- Value Objects ------------------------------------------------------------
from .values import (
    CONFIDENCE_BANDS,
    AnalysisResult,
    HistoryItem,
    ImagePayload,
    RewardSnapshot,
    Settings,
)

# -- Aggregates ---------------------------------------------------------------
from .aggregates import HistoryLog, RewardLedger, normalize_key

# -- Domain Events ------------------------------------------------------------
from .events import (
    ClassificationCompleted,
    ClassificationFailed,
    DetectionCredited,
    DomainEvent,
    ReportCredited,
    ScreenChanged,
    SettingToggled,
    ViewChanged,
)

# -- Exceptions ---------------------------------------------------------------
from .exceptions import (
    InputValidationError,
    NavigationError,
    OracleError,
    OracleResponseError,
    OracleTransportError,
    ScamGuardError,
    SessionStateError,
)

__all__ = [
    # Enums
    "Feature",
    "RiskLevel",
    "Screen",
    "SessionStatus",
    # Values
    "CONFIDENCE_BANDS",
    "AnalysisResult",
    "HistoryItem",
    "ImagePayload",
    "RewardSnapshot",
    "Settings",
    # Aggregates
    "HistoryLog",
    "RewardLedger",
    "normalize_key",
    # Events
    "ClassificationCompleted",
    "ClassificationFailed",
    "DetectionCredited",
    "DomainEvent",
    "ReportCredited",
    "ScreenChanged",
    "SettingToggled",
    "ViewChanged",
    # Exceptions
    "InputValidationError",
    "NavigationError",
    "OracleError",
    "OracleResponseError",
    "OracleTransportError",
    "ScamGuardError",
    "SessionStateError",
]
