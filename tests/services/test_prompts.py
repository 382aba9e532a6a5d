"""Tests for the oracle system policy and per-module prompts."""

from __future__ import annotations

from datetime import date

import pytest

from scam_guard.domain.enums import Feature
from scam_guard.domain.exceptions import InputValidationError
from scam_guard.services.prompts import (
    FUTURE_DATE_REASON,
    SYSTEM_POLICY,
    TRUSTED_DOMAINS,
    build_phone_input,
    build_prompt,
    format_current_date,
)


class TestSystemPolicy:

    def test_lists_trusted_domains(self) -> None:
        for domain in TRUSTED_DOMAINS:
            assert domain in SYSTEM_POLICY

    def test_states_bands_and_format(self) -> None:
        assert "Safe: 90-100%" in SYSTEM_POLICY
        assert "Suspicious: 40-70%" in SYSTEM_POLICY
        assert "Scam: 80-95%" in SYSTEM_POLICY
        assert '"risk_level"' in SYSTEM_POLICY
        assert FUTURE_DATE_REASON in SYSTEM_POLICY

    def test_sms_threshold(self) -> None:
        assert "2 or more indicators" in SYSTEM_POLICY


class TestBuildPrompt:

    def test_sms_quotes_text(self) -> None:
        prompt = build_prompt(Feature.SMS, "Your account is blocked")
        assert '"Your account is blocked"' in prompt
        assert "SMS" in prompt

    def test_link(self) -> None:
        prompt = build_prompt(Feature.LINK, "https://paytm.com/offers")
        assert '"https://paytm.com/offers"' in prompt

    def test_screenshot_context_optional(self) -> None:
        assert "Additional user context" not in build_prompt(Feature.SCREENSHOT, "")
        prompt = build_prompt(Feature.SCREENSHOT, "Job offer on WhatsApp")
        assert "Additional user context: Job offer on WhatsApp" in prompt

    def test_payment_proof_carries_date(self) -> None:
        prompt = build_prompt(Feature.PAYMENT_PROOF, "", today=date(2026, 10, 19))
        assert "Current System Date for comparison: 19 October 2026." in prompt
        assert "Past dates are perfectly valid" in prompt
        assert "Shop owner notes" not in prompt

    def test_payment_proof_notes(self) -> None:
        prompt = build_prompt(
            Feature.PAYMENT_PROOF, "Rs 500 for groceries", today=date(2026, 1, 2)
        )
        assert "02 January 2026" in prompt
        assert prompt.endswith("Shop owner notes: Rs 500 for groceries")

    def test_format_current_date(self) -> None:
        assert format_current_date(date(2026, 3, 7)) == "07 March 2026"


class TestBuildPhoneInput:

    def test_combines_fields(self) -> None:
        assert (
            build_phone_input("+91 98765 43210", "Asked for my UPI PIN")
            == "Phone: +91 98765 43210 | Context: Asked for my UPI PIN"
        )

    def test_phone_required(self) -> None:
        with pytest.raises(InputValidationError) as excinfo:
            build_phone_input("  ", "context")
        assert excinfo.value.field == "phone"

    def test_context_required(self) -> None:
        with pytest.raises(InputValidationError) as excinfo:
            build_phone_input("12345", "")
        assert excinfo.value.field == "context"
