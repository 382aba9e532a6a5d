"""LangGraph node functions for the analysis pipeline.

Each node takes an ``AnalysisState`` and returns a partial update dict.
Nodes delegate to the prompt helpers and the oracle client rather than
reimplementing any logic.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from scam_guard.domain.enums import Feature
from scam_guard.domain.exceptions import InputValidationError, OracleError
from scam_guard.domain.values import ImagePayload
from scam_guard.services.oracle import ClassificationOracle
from scam_guard.services.prompts import build_phone_input

logger = logging.getLogger(__name__)

MISSING_IMAGE_MESSAGE = "Please upload the required screenshot to proceed."


def prepare_submission(
    feature: Feature,
    text: str = "",
    phone: str = "",
    image: ImagePayload | None = None,
) -> tuple[str, str]:
    """Check that a module's inputs are complete and build its request.

    Returns ``(analysis_input, input_key)``: the text sent to the oracle and
    the ledger key recorded for it.  Image-only submissions fall back to the
    feature's placeholder label for the key.

    Raises
    ------
    InputValidationError
        If a required input is missing.
    """
    if feature is Feature.PHONE:
        analysis_input = build_phone_input(phone, text)
    elif feature.requires_image:
        if image is None:
            raise InputValidationError(MISSING_IMAGE_MESSAGE, field="image")
        analysis_input = text
    else:
        if not text.strip():
            label = "message" if feature is Feature.SMS else "link"
            raise InputValidationError(f"Enter the {label} to analyze.", field="text")
        analysis_input = text

    input_key = analysis_input if analysis_input.strip() else feature.placeholder_input
    return analysis_input, input_key


def prepare_node(state: dict[str, Any]) -> dict[str, Any]:
    """Validate the raw inputs and build the oracle request.

    Reads ``feature``, ``text``, ``phone`` and ``image``.
    Writes ``analysis_input`` and ``input_key``, or ``validation_error``.
    """
    try:
        analysis_input, input_key = prepare_submission(
            state["feature"],
            state.get("text", ""),
            state.get("phone", ""),
            state.get("image"),
        )
    except InputValidationError as exc:
        logger.debug("prepare_node: rejected %s input: %s", state["feature"].value, exc)
        return {"validation_error": str(exc), "validation_field": exc.field}

    return {"analysis_input": analysis_input, "input_key": input_key}


def make_classify_node(
    oracle: ClassificationOracle,
) -> Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]:
    """Create a classify node bound to *oracle*.

    Oracle failures are captured into the state (``error``, ``error_detail``,
    ``error_type``) instead of propagating, so the graph always completes.
    """

    async def classify_node(state: dict[str, Any]) -> dict[str, Any]:
        feature: Feature = state["feature"]
        try:
            result = await oracle.classify(
                feature,
                state.get("analysis_input", ""),
                state.get("image"),
            )
        except OracleError as exc:
            return {
                "result": None,
                "error": exc.user_message,
                "error_detail": str(exc),
                "error_type": type(exc).__name__,
            }

        logger.debug(
            "classify_node: %s -> %s (%d)",
            feature.value,
            result.risk_level.value,
            result.confidence_score,
        )
        return {"result": result}

    return classify_node
