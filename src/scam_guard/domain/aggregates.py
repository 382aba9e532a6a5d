"""Aggregate roots for Scam Guard.

Aggregates enforce consistency boundaries.  External code should only mutate
process-wide state through aggregate methods, never by reaching into their
internals directly.

* ``RewardLedger`` -- points and report counter with per-input deduplication.
* ``HistoryLog`` -- bounded, most-recent-first list of past classifications.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .enums import RiskLevel
from .values import HistoryItem, RewardSnapshot

logger = logging.getLogger(__name__)

DETECTION_POINTS = 5
REPORT_POINTS = 10
HISTORY_LIMIT = 10

_DETECT_PREFIX = "detect:"
_REPORT_PREFIX = "report:"


def normalize_key(text: str) -> str:
    """Dedup key for an input: surrounding whitespace stripped, lower-cased."""
    return text.strip().lower()


# ---------------------------------------------------------------------------
# RewardLedger
# ---------------------------------------------------------------------------

class RewardLedger:
    """Reward points and report count, credited at most once per input.

    Detection credit and report credit live in separate key namespaces, so
    the same literal input can earn each of them exactly once.  Counters are
    never decremented or reset.
    """

    def __init__(
        self,
        detection_points: int = DETECTION_POINTS,
        report_points: int = REPORT_POINTS,
    ) -> None:
        if detection_points < 0 or report_points < 0:
            raise ValueError("point amounts must be >= 0")
        self._detection_points = detection_points
        self._report_points = report_points
        self._points = 0
        self._report_count = 0
        self._credited: set[str] = set()

    # -- properties -----------------------------------------------------------

    @property
    def points(self) -> int:
        return self._points

    @property
    def report_count(self) -> int:
        return self._report_count

    @property
    def detection_points(self) -> int:
        return self._detection_points

    @property
    def report_points(self) -> int:
        return self._report_points

    # -- credits --------------------------------------------------------------

    def credit_detection(self, text: str) -> bool:
        """Award detection points for *text* unless already credited.

        Returns ``True`` if points were added.
        """
        key = normalize_key(text)
        if not key:
            return False
        namespaced = _DETECT_PREFIX + key
        if namespaced in self._credited:
            return False
        self._credited.add(namespaced)
        self._points += self._detection_points
        logger.info(
            "RewardLedger: detection credit +%d (total=%d)",
            self._detection_points,
            self._points,
        )
        return True

    def credit_report(self, text: str) -> bool:
        """Award report points and count a report for *text* unless already credited."""
        key = normalize_key(text)
        if not key:
            return False
        namespaced = _REPORT_PREFIX + key
        if namespaced in self._credited:
            return False
        self._credited.add(namespaced)
        self._points += self._report_points
        self._report_count += 1
        logger.info(
            "RewardLedger: report credit +%d (total=%d, reports=%d)",
            self._report_points,
            self._points,
            self._report_count,
        )
        return True

    def record_result(self, risk_level: RiskLevel, text: str) -> bool:
        """Automatic credit path: only scam verdicts earn detection points."""
        if risk_level is not RiskLevel.SCAM:
            return False
        return self.credit_detection(text)

    # -- queries --------------------------------------------------------------

    def has_credited_detection(self, text: str) -> bool:
        return _DETECT_PREFIX + normalize_key(text) in self._credited

    def has_credited_report(self, text: str) -> bool:
        return _REPORT_PREFIX + normalize_key(text) in self._credited

    def snapshot(self) -> RewardSnapshot:
        return RewardSnapshot(points=self._points, report_count=self._report_count)

    def __repr__(self) -> str:
        return (
            f"RewardLedger(points={self._points}, "
            f"report_count={self._report_count}, "
            f"credited={len(self._credited)})"
        )


# ---------------------------------------------------------------------------
# HistoryLog
# ---------------------------------------------------------------------------

class HistoryLog:
    """Most-recent-first list of classifications, capped at ``limit`` entries.

    Ordering is by insertion, not by timestamp.  Entries that fall past the
    limit are discarded; there is no other removal.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self._limit = limit
        self._items: list[HistoryItem] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def items(self) -> tuple[HistoryItem, ...]:
        return tuple(self._items)

    @property
    def latest(self) -> HistoryItem | None:
        return self._items[0] if self._items else None

    def append(self, item: HistoryItem) -> None:
        """Insert *item* at the front and drop anything beyond the limit."""
        self._items.insert(0, item)
        del self._items[self._limit:]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"HistoryLog(size={len(self._items)}, limit={self._limit})"
