"""Domain exceptions for Scam Guard.

All domain-specific exceptions inherit from ``ScamGuardError`` so callers can
catch the full family with a single ``except`` clause when needed.  None of
them is fatal to the process: each is scoped to one screen or one analysis
session.
"""

from __future__ import annotations

from typing import Any

ORACLE_FAILURE_MESSAGE = (
    "Unable to analyze content at this moment. Please check your connection."
)


class ScamGuardError(Exception):
    """Base exception for all Scam Guard domain errors."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class InputValidationError(ScamGuardError):
    """Raised when a required input is missing or empty.

    Recovered locally: the action is simply not permitted and no oracle call
    is made.
    """

    def __init__(
        self,
        message: str = "Required input missing",
        field: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class SessionStateError(ScamGuardError):
    """Raised when an analysis session action is not allowed in its current state.

    Examples: submitting while a call is already in flight, or reporting a
    result that is not a scam or was already reported.
    """

    def __init__(
        self,
        message: str = "Action not allowed in the current session state",
        status: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status = status


class NavigationError(ScamGuardError):
    """Raised when a screen or view transition is attempted from the wrong screen."""

    def __init__(
        self,
        message: str = "Navigation not allowed",
        screen: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.screen = screen


class OracleError(ScamGuardError):
    """Raised when the classification oracle cannot produce a usable verdict.

    Every subclass collapses to the same end-user message; the underlying
    cause is chained (``raise ... from``) and logged for diagnostics.
    """

    user_message: str = ORACLE_FAILURE_MESSAGE

    def __init__(
        self,
        message: str = "Oracle call failed",
        feature: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.feature = feature


class OracleTransportError(OracleError):
    """The provider could not be reached or returned an error status."""


class OracleResponseError(OracleError):
    """The provider replied, but not with a valid verdict object.

    Covers unparseable JSON, missing fields, and risk levels outside the
    enumeration.
    """
