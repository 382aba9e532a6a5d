"""Conditional edge functions for the analysis LangGraph."""

from __future__ import annotations

from typing import Any, Literal


def after_prepare(state: dict[str, Any]) -> Literal["classify", "__end__"]:
    """Skip the oracle call entirely when the inputs were rejected."""
    if state.get("validation_error"):
        return "__end__"
    return "classify"
