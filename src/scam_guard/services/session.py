"""Per-module analysis session state machine.

An :class:`AnalysisSession` holds the inputs, in-flight status, verdict and
one-shot report flag for a single module view::

    IDLE -> EDITING -> PENDING -> RESOLVED | FAILED

``reset()`` returns to ``IDLE`` from any state.  The session owns the call to
the analysis graph and reports outcomes through two callbacks supplied by
the controller; it never touches the ledger or history itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scam_guard.domain.enums import Feature, RiskLevel, SessionStatus
from scam_guard.domain.exceptions import (
    ORACLE_FAILURE_MESSAGE,
    InputValidationError,
    SessionStateError,
)
from scam_guard.domain.values import AnalysisResult, ImagePayload
from scam_guard.graph.graph import build_analysis_graph
from scam_guard.graph.nodes import MISSING_IMAGE_MESSAGE, prepare_submission
from scam_guard.services.oracle import ClassificationOracle

logger = logging.getLogger(__name__)

ResolvedCallback = Callable[[Feature, str, AnalysisResult], None]
ReportCallback = Callable[[str], bool]
FailedCallback = Callable[[Feature, str], None]


class AnalysisSession:
    """UI state for one analysis module.

    Parameters
    ----------
    feature:
        The module this session serves.
    oracle:
        Oracle client; ignored when *graph* is given.
    on_resolved:
        Called with ``(feature, input_key, result)`` after a verdict arrives.
    on_report:
        Called with ``input_key`` when the user reports a scam; returns
        whether the ledger granted credit.
    on_failed:
        Called with ``(feature, error_detail)`` when the oracle call fails.
    graph:
        A pre-built analysis graph to share between sessions.
    """

    def __init__(
        self,
        feature: Feature,
        oracle: ClassificationOracle | None = None,
        on_resolved: ResolvedCallback | None = None,
        on_report: ReportCallback | None = None,
        on_failed: FailedCallback | None = None,
        graph: Any | None = None,
    ) -> None:
        if graph is None:
            if oracle is None:
                raise ValueError("AnalysisSession needs an oracle or a graph")
            graph = build_analysis_graph(oracle)
        self.feature = feature
        self._graph = graph
        self._on_resolved = on_resolved
        self._on_report = on_report
        self._on_failed = on_failed
        self._generation = 0
        self._clear()

    def _clear(self) -> None:
        self.text = ""
        self.phone = ""
        self.image: ImagePayload | None = None
        self.status = SessionStatus.IDLE
        self.result: AnalysisResult | None = None
        self.error: str | None = None
        self.reported = False
        self._input_key = ""

    # -- inputs -------------------------------------------------------------

    def set_text(self, text: str) -> None:
        """Message, URL, phone context, or notes depending on the module."""
        self.text = text
        self._refresh_editing()

    def set_phone(self, phone: str) -> None:
        self.phone = phone
        self._refresh_editing()

    def set_image(self, image: ImagePayload) -> None:
        self.image = image
        self._refresh_editing()

    def clear_image(self) -> None:
        self.image = None
        self._refresh_editing()

    @property
    def has_input(self) -> bool:
        return bool(self.text.strip() or self.phone.strip() or self.image is not None)

    def _refresh_editing(self) -> None:
        if self.status in (SessionStatus.IDLE, SessionStatus.EDITING):
            self.status = SessionStatus.EDITING if self.has_input else SessionStatus.IDLE

    # -- gating -------------------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self.status is SessionStatus.PENDING

    @property
    def inputs_complete(self) -> bool:
        try:
            prepare_submission(self.feature, self.text, self.phone, self.image)
        except InputValidationError:
            return False
        return True

    @property
    def can_submit(self) -> bool:
        return not self.is_pending and self.inputs_complete

    @property
    def can_report(self) -> bool:
        return (
            self.status is SessionStatus.RESOLVED
            and self.result is not None
            and self.result.risk_level is RiskLevel.SCAM
            and not self.reported
        )

    @property
    def input_key(self) -> str:
        """Ledger key of the last resolved submission."""
        return self._input_key

    # -- transitions --------------------------------------------------------

    async def submit(self) -> SessionStatus:
        """Run the analysis for the current inputs.

        Returns the resulting status (``RESOLVED`` or ``FAILED``), or the
        unchanged status if a reset happened while the call was in flight.

        Raises
        ------
        SessionStateError
            If a submission is already in flight.
        InputValidationError
            If required inputs are missing; no oracle call is made.
        """
        if self.is_pending:
            raise SessionStateError(
                "Verification already in progress", status=self.status.value
            )

        try:
            prepare_submission(self.feature, self.text, self.phone, self.image)
        except InputValidationError as exc:
            if exc.field == "image":
                self.error = MISSING_IMAGE_MESSAGE
            raise

        generation = self._generation
        self.status = SessionStatus.PENDING
        self.result = None
        self.error = None
        logger.debug("AnalysisSession[%s]: pending", self.feature.value)

        try:
            outcome = await self._graph.ainvoke(
                {
                    "feature": self.feature,
                    "text": self.text,
                    "phone": self.phone,
                    "image": self.image,
                }
            )
        except Exception:
            if generation == self._generation:
                self.status = SessionStatus.FAILED
                self.error = ORACLE_FAILURE_MESSAGE
            raise

        if generation != self._generation:
            logger.debug(
                "AnalysisSession[%s]: dropping late response after reset",
                self.feature.value,
            )
            return self.status

        result = outcome.get("result")
        if result is None:
            self.status = SessionStatus.FAILED
            self.error = outcome.get("error") or outcome.get("validation_error")
            logger.debug(
                "AnalysisSession[%s]: failed (%s)",
                self.feature.value,
                outcome.get("error_type", "validation"),
            )
            if self._on_failed is not None:
                self._on_failed(self.feature, outcome.get("error_detail", ""))
            return self.status

        self.status = SessionStatus.RESOLVED
        self.result = result
        self.reported = False
        self._input_key = outcome["input_key"]
        logger.debug(
            "AnalysisSession[%s]: resolved %s", self.feature.value, result.risk_level.value
        )
        if self._on_resolved is not None:
            self._on_resolved(self.feature, self._input_key, result)
        return self.status

    def report(self) -> bool:
        """Report the displayed scam verdict.

        Allowed once per displayed result.  Returns whether the ledger granted
        report credit (it may not, if the same input was reported before).

        Raises
        ------
        SessionStateError
            If there is no scam verdict to report or it was already reported.
        """
        if not self.can_report:
            if self.reported:
                message = "Threat already reported"
            else:
                message = "Only a scam verdict can be reported"
            raise SessionStateError(message, status=self.status.value)

        self.reported = True
        if self._on_report is None:
            return False
        return self._on_report(self._input_key)

    def reset(self) -> None:
        """Clear inputs, verdict, error and the report flag."""
        self._generation += 1
        self._clear()
        logger.debug("AnalysisSession[%s]: reset", self.feature.value)

    def __repr__(self) -> str:
        return f"AnalysisSession(feature={self.feature.value}, status={self.status.value})"
