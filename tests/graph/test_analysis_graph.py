"""Tests for the analysis StateGraph, its nodes and edges."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import pytest

from scam_guard.domain.enums import Feature, RiskLevel
from scam_guard.domain.exceptions import ORACLE_FAILURE_MESSAGE, InputValidationError
from scam_guard.graph import (
    after_prepare,
    build_analysis_graph,
    prepare_node,
    prepare_submission,
)
from scam_guard.services.oracle import ClassificationOracle

MakeOracle = Callable[..., ClassificationOracle]


class TestPrepareSubmission:

    def test_sms_blank_rejected(self) -> None:
        with pytest.raises(InputValidationError, match="message") as excinfo:
            prepare_submission(Feature.SMS, "   ")
        assert excinfo.value.field == "text"

    def test_link_blank_rejected(self) -> None:
        with pytest.raises(InputValidationError, match="link"):
            prepare_submission(Feature.LINK, "")

    def test_phone_combined(self) -> None:
        assert prepare_submission(Feature.PHONE, "fine", "112") == (
            "Phone: 112 | Context: fine",
            "Phone: 112 | Context: fine",
        )

    def test_screenshot_placeholder_key(self, png_image) -> None:
        assert prepare_submission(Feature.SCREENSHOT, "", image=png_image) == (
            "",
            "Image Scan",
        )

    def test_screenshot_notes_become_key(self, png_image) -> None:
        _, key = prepare_submission(Feature.SCREENSHOT, "job offer", image=png_image)
        assert key == "job offer"


class TestNodesAndEdges:

    def test_prepare_node_captures_error(self) -> None:
        update = prepare_node({"feature": Feature.PAYMENT_PROOF, "text": "notes"})
        assert update["validation_field"] == "image"
        assert after_prepare(update) == "__end__"

    def test_prepare_node_ok(self) -> None:
        update = prepare_node({"feature": Feature.LINK, "text": "https://sbi.co.in"})
        assert update == {
            "analysis_input": "https://sbi.co.in",
            "input_key": "https://sbi.co.in",
        }
        assert after_prepare(update) == "classify"


class TestAnalysisGraph:

    @pytest.mark.asyncio
    async def test_success(self, make_oracle: MakeOracle, scam_reply: dict[str, Any]) -> None:
        graph = build_analysis_graph(make_oracle([scam_reply]))
        out = await graph.ainvoke({"feature": Feature.SMS, "text": "Send OTP now"})
        assert out["result"].risk_level is RiskLevel.SCAM
        assert out["input_key"] == "Send OTP now"

    @pytest.mark.asyncio
    async def test_validation_skips_oracle(self, make_oracle: MakeOracle) -> None:
        oracle = make_oracle([])
        graph = build_analysis_graph(oracle)
        out = await graph.ainvoke({"feature": Feature.SMS, "text": ""})
        assert out["validation_error"]
        assert out.get("result") is None
        assert oracle.model.call_count == 0

    @pytest.mark.asyncio
    async def test_oracle_failure_captured(self, make_oracle: MakeOracle) -> None:
        graph = build_analysis_graph(make_oracle([OSError("reset by peer")]))
        out = await graph.ainvoke({"feature": Feature.LINK, "text": "http://x.in"})
        assert out.get("result") is None
        assert out["error"] == ORACLE_FAILURE_MESSAGE
        assert out["error_type"] == "OracleTransportError"

    def test_builder_takes_only_the_oracle(self, make_oracle: MakeOracle) -> None:
        assert list(inspect.signature(build_analysis_graph).parameters) == ["oracle"]
        with pytest.raises(TypeError):
            build_analysis_graph(make_oracle([]), checkpointer=None)  # type: ignore[call-arg]
