"""Tests for RewardLedger and HistoryLog."""

from __future__ import annotations

import pytest

from scam_guard.domain.aggregates import HistoryLog, RewardLedger, normalize_key
from scam_guard.domain.enums import Feature, RiskLevel
from scam_guard.domain.values import AnalysisResult, HistoryItem


class TestNormalizeKey:

    def test_strips_and_lowercases(self) -> None:
        assert normalize_key("  Win A PRIZE now \n") == "win a prize now"

    def test_inner_whitespace_kept(self) -> None:
        assert normalize_key("a  b") != normalize_key("a b")


class TestRewardLedger:

    def test_detection_is_idempotent(self) -> None:
        ledger = RewardLedger()
        assert ledger.credit_detection("Share your OTP") is True
        assert ledger.credit_detection("  share your otp ") is False
        assert ledger.points == 5
        assert ledger.report_count == 0

    def test_report_is_idempotent(self) -> None:
        ledger = RewardLedger()
        assert ledger.credit_report("bad-link.in") is True
        assert ledger.credit_report("BAD-LINK.IN") is False
        assert ledger.points == 10
        assert ledger.report_count == 1

    def test_namespaces_are_independent(self) -> None:
        ledger = RewardLedger()
        ledger.credit_detection("same input")
        ledger.credit_report("same input")
        assert ledger.points == 15
        assert ledger.has_credited_detection("SAME INPUT")
        assert ledger.has_credited_report("same input")

    def test_empty_key_is_noop(self) -> None:
        ledger = RewardLedger()
        assert ledger.credit_detection("   ") is False
        assert ledger.credit_report("") is False
        assert ledger.snapshot().points == 0

    def test_record_result_only_credits_scam(self) -> None:
        ledger = RewardLedger()
        assert ledger.record_result(RiskLevel.SAFE, "a") is False
        assert ledger.record_result(RiskLevel.SUSPICIOUS, "a") is False
        assert ledger.points == 0
        assert ledger.record_result(RiskLevel.SCAM, "a") is True
        assert ledger.points == 5

    def test_custom_amounts(self) -> None:
        ledger = RewardLedger(detection_points=1, report_points=2)
        ledger.credit_detection("x")
        ledger.credit_report("x")
        assert ledger.snapshot().points == 3

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValueError):
            RewardLedger(detection_points=-1)

    def test_points_match_credited_keys(self) -> None:
        ledger = RewardLedger()
        inputs = ["a", "A", "b", " b ", "c"]
        for text in inputs:
            ledger.credit_detection(text)
        for text in ["a", "c", "C"]:
            ledger.credit_report(text)
        assert ledger.points == 5 * 3 + 10 * 2
        assert ledger.report_count == 2


def _item(n: int) -> HistoryItem:
    result = AnalysisResult(RiskLevel.SAFE, 95, ("ok",), "none")
    return HistoryItem(feature=Feature.SMS, input=f"msg-{n}", result=result)


class TestHistoryLog:

    def test_most_recent_first(self) -> None:
        log = HistoryLog()
        for n in range(3):
            log.append(_item(n))
        assert [i.input for i in log] == ["msg-2", "msg-1", "msg-0"]
        assert log.latest is not None and log.latest.input == "msg-2"

    def test_bounded_to_limit(self) -> None:
        log = HistoryLog()
        for n in range(15):
            log.append(_item(n))
        assert len(log) == 10
        assert log.items[0].input == "msg-14"
        assert log.items[-1].input == "msg-5"

    def test_custom_limit(self) -> None:
        log = HistoryLog(limit=2)
        for n in range(5):
            log.append(_item(n))
        assert [i.input for i in log.items] == ["msg-4", "msg-3"]

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            HistoryLog(limit=0)

    def test_empty(self) -> None:
        log = HistoryLog()
        assert log.latest is None
        assert log.items == ()
