"""Shared fixtures for the Scam Guard test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from scam_guard.domain.enums import RiskLevel
from scam_guard.domain.events import DomainEvent
from scam_guard.domain.values import AnalysisResult, ImagePayload
from scam_guard.infrastructure.config import AppConfig
from scam_guard.infrastructure.event_bus import EventBus
from scam_guard.services.controller import ScamGuardController
from scam_guard.services.oracle import ClassificationOracle
from scam_guard.testing import MockChatModel

FIXED_TODAY = date(2026, 10, 19)

# ---------------------------------------------------------------------------
# Oracle replies
# ---------------------------------------------------------------------------


@pytest.fixture
def scam_reply() -> dict[str, Any]:
    """A well-formed Scam verdict as the oracle would send it."""
    return {
        "risk_level": "Scam",
        "confidence_score": 92,
        "reasons": ["Urgency", "OTP request"],
        "recommendation": "Do not share your OTP. Block the sender.",
    }


@pytest.fixture
def safe_reply() -> dict[str, Any]:
    return {
        "risk_level": "Safe",
        "confidence_score": 95,
        "reasons": ["Trusted domain"],
        "recommendation": "No action needed.",
    }


@pytest.fixture
def suspicious_reply() -> dict[str, Any]:
    return {
        "risk_level": "Suspicious",
        "confidence_score": 55,
        "reasons": ["Payment request"],
        "recommendation": "Verify with the sender through another channel.",
    }


@pytest.fixture
def scam_result() -> AnalysisResult:
    return AnalysisResult(
        risk_level=RiskLevel.SCAM,
        confidence_score=90,
        reasons=("Fake bank impersonation",),
        recommendation="Ignore the message.",
    )


@pytest.fixture
def png_image() -> ImagePayload:
    return ImagePayload(data=b"\x89PNG\r\n\x1a\nfake", mime_type="image/png")


# ---------------------------------------------------------------------------
# Oracle / controller factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_oracle() -> Callable[..., ClassificationOracle]:
    """Build an oracle around a scripted ``MockChatModel``.

    Usage: ``oracle = make_oracle([reply, ...], gate=event)``.
    """

    def _make(
        responses: list[Any],
        gate: Any = None,
        enforce_confidence_bands: bool = False,
    ) -> ClassificationOracle:
        model = MockChatModel(responses=responses, gate=gate)
        return ClassificationOracle(
            model,
            enforce_confidence_bands=enforce_confidence_bands,
            today=lambda: FIXED_TODAY,
        )

    return _make


@pytest.fixture
def published() -> list[DomainEvent]:
    """Every event seen on the ``event_bus`` fixture, in publish order."""
    return []


@pytest.fixture
def event_bus(published: list[DomainEvent]) -> EventBus:
    bus = EventBus()
    bus.subscribe(DomainEvent, published.append)
    return bus


@pytest.fixture
def make_controller(
    make_oracle: Callable[..., ClassificationOracle],
    event_bus: EventBus,
) -> Callable[..., ScamGuardController]:
    """Build a controller already signed in and sitting on the dashboard."""

    def _make(responses: list[Any], gate: Any = None) -> ScamGuardController:
        controller = ScamGuardController(
            make_oracle(responses, gate=gate),
            config=AppConfig(intro_delay=0.0),
            event_bus=event_bus,
        )
        controller.navigator.finish_intro()
        controller.login("asha@example.in", "secret")
        return controller

    return _make
