"""LangGraph state definition for one analysis submission.

Defines ``AnalysisState``, a ``TypedDict`` that flows through the analysis
``StateGraph``: the raw module inputs go in, and either a validation error,
an oracle error, or a result comes out.

Note: We intentionally do NOT use ``from __future__ import annotations`` because
LangGraph needs to resolve type hints at runtime via ``get_type_hints()``.
"""

from typing import Optional, TypedDict

from scam_guard.domain.enums import Feature
from scam_guard.domain.values import AnalysisResult, ImagePayload


class AnalysisState(TypedDict, total=False):
    """State channels of the analysis graph."""

    # -- Inputs
    feature: Feature
    text: str
    phone: str
    image: Optional[ImagePayload]

    # -- Prepared request
    analysis_input: str
    input_key: str

    # -- Validation outcome
    validation_error: str
    validation_field: str

    # -- Oracle outcome
    result: Optional[AnalysisResult]
    error: str  # user-facing message
    error_detail: str  # diagnostic cause
    error_type: str
