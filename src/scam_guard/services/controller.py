"""Top-level session controller.

``ScamGuardController`` owns the process-wide aggregates (reward ledger,
history log, settings) and the navigator, and hands each module view an
:class:`~scam_guard.services.session.AnalysisSession` wired to narrow
callbacks.  Module sessions never hold copies of the aggregates.

Ledger and history are scoped to the process, not to the signed-in user:
they survive logout and a login as someone else.
"""

from __future__ import annotations

import logging
from typing import Any

from scam_guard.domain.aggregates import HistoryLog, RewardLedger
from scam_guard.domain.enums import Feature
from scam_guard.domain.events import (
    ClassificationCompleted,
    ClassificationFailed,
    DetectionCredited,
    ReportCredited,
    SettingToggled,
)
from scam_guard.domain.values import AnalysisResult, HistoryItem, RewardSnapshot, Settings
from scam_guard.graph.graph import build_analysis_graph
from scam_guard.infrastructure.config import AppConfig
from scam_guard.infrastructure.event_bus import EventBus
from scam_guard.services.navigation import Navigator
from scam_guard.services.oracle import ClassificationOracle
from scam_guard.services.session import AnalysisSession

logger = logging.getLogger(__name__)


class ScamGuardController:
    """Owns app-wide state and mediates every mutation of it.

    Parameters
    ----------
    oracle:
        Oracle client shared by all module sessions.
    config:
        Application configuration; defaults to :class:`AppConfig` defaults.
    event_bus:
        Bus receiving classification, reward, navigation and settings events.
    """

    def __init__(
        self,
        oracle: ClassificationOracle,
        config: AppConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.config.validate()
        self.bus = event_bus or EventBus()
        self.oracle = oracle
        self.ledger = RewardLedger(
            detection_points=self.config.detection_points,
            report_points=self.config.report_points,
        )
        self.history = HistoryLog(limit=self.config.history_limit)
        self.navigator = Navigator(intro_delay=self.config.intro_delay, event_bus=self.bus)
        self._settings = Settings()
        self._graph: Any = build_analysis_graph(oracle)
        self._session: AnalysisSession | None = None

    @classmethod
    def from_config(cls, config: AppConfig, event_bus: EventBus | None = None) -> ScamGuardController:
        """Build a controller whose oracle model comes from ``config.oracle``."""
        return cls(
            oracle=ClassificationOracle.from_config(config.oracle),
            config=config,
            event_bus=event_bus,
        )

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Start the intro timer (requires a running event loop)."""
        self.navigator.start()

    def close(self) -> None:
        self._drop_session()
        self.navigator.close()

    # -- navigation ---------------------------------------------------------

    def login(self, email: str, password: str) -> None:
        self.navigator.login(email, password)

    def logout(self) -> None:
        self.navigator.logout()
        self._drop_session()

    def select_module(self, feature: Feature) -> AnalysisSession:
        """Open *feature*'s view with a fresh analysis session."""
        self.navigator.select_module(feature)
        self._drop_session()
        self._session = AnalysisSession(
            feature,
            graph=self._graph,
            on_resolved=self._record_result,
            on_report=self._record_report,
            on_failed=self._record_failure,
        )
        return self._session

    def open_settings(self) -> None:
        self.navigator.open_settings()
        self._drop_session()

    def go_home(self) -> None:
        self.navigator.go_home()
        self._drop_session()

    @property
    def session(self) -> AnalysisSession | None:
        """The session of the open module view, if any."""
        return self._session

    def _drop_session(self) -> None:
        if self._session is not None:
            # a reset makes any in-flight response for this view unobservable
            self._session.reset()
            self._session = None

    # -- settings -----------------------------------------------------------

    @property
    def settings(self) -> Settings:
        return self._settings

    def toggle_setting(self, name: str) -> bool:
        """Flip one setting and return its new value."""
        self._settings = self._settings.toggled(name)
        value = getattr(self._settings, name)
        logger.debug("ScamGuardController: setting %s=%s", name, value)
        self.bus.publish(SettingToggled(source_id="controller", name=name, value=value))
        return value

    # -- rewards / history ----------------------------------------------------

    @property
    def rewards(self) -> RewardSnapshot:
        return self.ledger.snapshot()

    @property
    def user(self) -> str | None:
        return self.navigator.user

    # -- session callbacks ----------------------------------------------------

    def _record_result(self, feature: Feature, input_key: str, result: AnalysisResult) -> None:
        item = HistoryItem(feature=feature, input=input_key, result=result)
        self.history.append(item)
        self.bus.publish(
            ClassificationCompleted(
                source_id="controller",
                feature=feature,
                input=input_key,
                result=result,
                history_id=item.id,
            )
        )
        if self.ledger.record_result(result.risk_level, input_key):
            self.bus.publish(
                DetectionCredited(
                    source_id="controller",
                    input_key=input_key,
                    points_awarded=self.ledger.detection_points,
                    total_points=self.ledger.points,
                )
            )

    def _record_report(self, input_key: str) -> bool:
        credited = self.ledger.credit_report(input_key)
        if credited:
            self.bus.publish(
                ReportCredited(
                    source_id="controller",
                    input_key=input_key,
                    points_awarded=self.ledger.report_points,
                    total_points=self.ledger.points,
                    report_count=self.ledger.report_count,
                )
            )
        return credited

    def _record_failure(self, feature: Feature, detail: str) -> None:
        self.bus.publish(
            ClassificationFailed(source_id="controller", feature=feature, error=detail)
        )

    def __repr__(self) -> str:
        return (
            f"ScamGuardController(screen={self.navigator.screen.value}, "
            f"points={self.ledger.points}, history={len(self.history)})"
        )
