"""Tests for the AnalysisSession state machine."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from scam_guard.domain.enums import Feature, RiskLevel, SessionStatus
from scam_guard.domain.exceptions import (
    ORACLE_FAILURE_MESSAGE,
    InputValidationError,
    SessionStateError,
)
from scam_guard.domain.values import AnalysisResult, ImagePayload
from scam_guard.graph.nodes import MISSING_IMAGE_MESSAGE
from scam_guard.services.oracle import ClassificationOracle
from scam_guard.services.session import AnalysisSession

MakeOracle = Callable[..., ClassificationOracle]


class _Recorder:
    """Collects the session callbacks."""

    def __init__(self, grant_report: bool = True) -> None:
        self.resolved: list[tuple[Feature, str, AnalysisResult]] = []
        self.reports: list[str] = []
        self.failures: list[tuple[Feature, str]] = []
        self._grant = grant_report

    def on_resolved(self, feature: Feature, key: str, result: AnalysisResult) -> None:
        self.resolved.append((feature, key, result))

    def on_report(self, key: str) -> bool:
        self.reports.append(key)
        return self._grant

    def on_failed(self, feature: Feature, detail: str) -> None:
        self.failures.append((feature, detail))


def _session(
    feature: Feature, oracle: ClassificationOracle, recorder: _Recorder
) -> AnalysisSession:
    return AnalysisSession(
        feature,
        oracle=oracle,
        on_resolved=recorder.on_resolved,
        on_report=recorder.on_report,
        on_failed=recorder.on_failed,
    )


class TestGating:

    def test_requires_oracle_or_graph(self) -> None:
        with pytest.raises(ValueError):
            AnalysisSession(Feature.SMS)

    def test_editing_follows_input(self, make_oracle: MakeOracle) -> None:
        session = _session(Feature.SMS, make_oracle([]), _Recorder())
        assert session.status is SessionStatus.IDLE
        session.set_text("hello")
        assert session.status is SessionStatus.EDITING
        session.set_text("   ")
        assert session.status is SessionStatus.IDLE

    def test_sms_needs_text(self, make_oracle: MakeOracle) -> None:
        session = _session(Feature.SMS, make_oracle([]), _Recorder())
        assert not session.can_submit
        session.set_text("Win a lottery")
        assert session.can_submit

    def test_phone_needs_both_fields(self, make_oracle: MakeOracle) -> None:
        session = _session(Feature.PHONE, make_oracle([]), _Recorder())
        session.set_phone("+91 90000 00000")
        assert not session.can_submit
        session.set_text("Asked me to pay a fine")
        assert session.can_submit

    def test_image_modules_need_image(
        self, make_oracle: MakeOracle, png_image: ImagePayload
    ) -> None:
        session = _session(Feature.PAYMENT_PROOF, make_oracle([]), _Recorder())
        session.set_text("notes only")
        assert not session.can_submit
        session.set_image(png_image)
        assert session.can_submit
        session.clear_image()
        assert not session.can_submit

    @pytest.mark.asyncio
    async def test_missing_image_sets_message(self, make_oracle: MakeOracle) -> None:
        oracle = make_oracle([])
        session = _session(Feature.SCREENSHOT, oracle, _Recorder())
        with pytest.raises(InputValidationError):
            await session.submit()
        assert session.error == MISSING_IMAGE_MESSAGE
        assert session.status is SessionStatus.IDLE
        assert oracle.model.call_count == 0


class TestSubmit:

    @pytest.mark.asyncio
    async def test_resolves_and_notifies(
        self, make_oracle: MakeOracle, scam_reply: dict[str, Any]
    ) -> None:
        recorder = _Recorder()
        session = _session(Feature.SMS, make_oracle([scam_reply]), recorder)
        session.set_text("Your SIM will be blocked")

        status = await session.submit()

        assert status is SessionStatus.RESOLVED
        assert session.result is not None and session.result.risk_level is RiskLevel.SCAM
        assert session.input_key == "Your SIM will be blocked"
        assert recorder.resolved[0][:2] == (Feature.SMS, "Your SIM will be blocked")

    @pytest.mark.asyncio
    async def test_phone_key_is_combined_input(
        self, make_oracle: MakeOracle, safe_reply: dict[str, Any]
    ) -> None:
        recorder = _Recorder()
        session = _session(Feature.PHONE, make_oracle([safe_reply]), recorder)
        session.set_phone("100")
        session.set_text("Police helpline")
        await session.submit()
        assert session.input_key == "Phone: 100 | Context: Police helpline"

    @pytest.mark.asyncio
    async def test_image_key_falls_back_to_placeholder(
        self,
        make_oracle: MakeOracle,
        safe_reply: dict[str, Any],
        png_image: ImagePayload,
    ) -> None:
        session = _session(Feature.PAYMENT_PROOF, make_oracle([safe_reply]), _Recorder())
        session.set_image(png_image)
        await session.submit()
        assert session.input_key == "Payment Verification"
        assert session.result is not None
        assert session.result.verdict_label(Feature.PAYMENT_PROOF) == "Genuine"

    @pytest.mark.asyncio
    async def test_failure(self, make_oracle: MakeOracle) -> None:
        recorder = _Recorder()
        session = _session(Feature.LINK, make_oracle([TimeoutError("slow")]), recorder)
        session.set_text("http://bit.ly/x")

        status = await session.submit()

        assert status is SessionStatus.FAILED
        assert session.error == ORACLE_FAILURE_MESSAGE
        assert session.result is None
        assert recorder.resolved == []
        assert recorder.failures and "TimeoutError" in recorder.failures[0][1]

    @pytest.mark.asyncio
    async def test_retry_after_failure(
        self, make_oracle: MakeOracle, safe_reply: dict[str, Any]
    ) -> None:
        session = _session(
            Feature.LINK, make_oracle(["garbage", safe_reply]), _Recorder()
        )
        session.set_text("https://amazon.in")
        assert await session.submit() is SessionStatus.FAILED
        assert await session.submit() is SessionStatus.RESOLVED
        assert session.error is None

    @pytest.mark.asyncio
    async def test_rejects_submit_while_pending(
        self, make_oracle: MakeOracle, safe_reply: dict[str, Any]
    ) -> None:
        gate = asyncio.Event()
        oracle = make_oracle([safe_reply], gate=gate)
        session = _session(Feature.SMS, oracle, _Recorder())
        session.set_text("hello")

        task = asyncio.create_task(session.submit())
        await asyncio.sleep(0)
        assert session.is_pending
        assert not session.can_submit
        with pytest.raises(SessionStateError):
            await session.submit()

        gate.set()
        assert await task is SessionStatus.RESOLVED
        assert oracle.model.call_count == 1

    @pytest.mark.asyncio
    async def test_reset_drops_late_response(
        self, make_oracle: MakeOracle, scam_reply: dict[str, Any]
    ) -> None:
        gate = asyncio.Event()
        recorder = _Recorder()
        session = _session(Feature.SMS, make_oracle([scam_reply], gate=gate), recorder)
        session.set_text("late one")

        task = asyncio.create_task(session.submit())
        await asyncio.sleep(0)
        session.reset()
        gate.set()

        assert await task is SessionStatus.IDLE
        assert session.result is None
        assert recorder.resolved == []


class TestReport:

    @pytest.mark.asyncio
    async def test_report_is_one_shot(
        self, make_oracle: MakeOracle, scam_reply: dict[str, Any]
    ) -> None:
        recorder = _Recorder()
        session = _session(Feature.SMS, make_oracle([scam_reply]), recorder)
        session.set_text("Claim your refund")
        await session.submit()

        assert session.can_report
        assert session.report() is True
        assert recorder.reports == ["Claim your refund"]
        assert not session.can_report
        with pytest.raises(SessionStateError, match="already reported"):
            session.report()

    @pytest.mark.asyncio
    async def test_non_scam_cannot_be_reported(
        self, make_oracle: MakeOracle, suspicious_reply: dict[str, Any]
    ) -> None:
        session = _session(Feature.SMS, make_oracle([suspicious_reply]), _Recorder())
        session.set_text("Pay the delivery fee")
        await session.submit()
        assert not session.can_report
        with pytest.raises(SessionStateError, match="Only a scam"):
            session.report()

    @pytest.mark.asyncio
    async def test_new_verdict_rearms_report(
        self, make_oracle: MakeOracle, scam_reply: dict[str, Any]
    ) -> None:
        recorder = _Recorder(grant_report=False)
        session = _session(Feature.SMS, make_oracle([scam_reply]), recorder)
        session.set_text("same")
        await session.submit()
        assert session.report() is False
        await session.submit()
        assert session.can_report

    @pytest.mark.asyncio
    async def test_reset_clears_everything(
        self, make_oracle: MakeOracle, scam_reply: dict[str, Any]
    ) -> None:
        session = _session(Feature.SMS, make_oracle([scam_reply]), _Recorder())
        session.set_text("x")
        await session.submit()
        session.report()
        session.reset()
        assert session.status is SessionStatus.IDLE
        assert session.text == ""
        assert session.result is None
        assert session.reported is False
