"""Screen and dashboard-view state machine.

Screens::

    INTRO --(intro_delay)--> LOGIN --login()--> DASHBOARD --logout()--> LOGIN

Inside the dashboard, a module view and the settings view are mutually
exclusive; ``go_home()`` clears both.
"""

from __future__ import annotations

import asyncio
import logging

from scam_guard.domain.enums import Feature, Screen
from scam_guard.domain.events import ScreenChanged, ViewChanged
from scam_guard.domain.exceptions import InputValidationError, NavigationError
from scam_guard.infrastructure.event_bus import EventBus

logger = logging.getLogger(__name__)

INTRO_DELAY = 3.0


class Navigator:
    """Owns the current screen, the signed-in user and the dashboard view.

    Parameters
    ----------
    intro_delay:
        Seconds before the intro screen advances to login.
    event_bus:
        Optional bus that receives ``ScreenChanged`` and ``ViewChanged``.
    """

    def __init__(
        self,
        intro_delay: float = INTRO_DELAY,
        event_bus: EventBus | None = None,
    ) -> None:
        self.intro_delay = intro_delay
        self._bus = event_bus
        self._timer: asyncio.TimerHandle | None = None
        self.screen = Screen.INTRO
        self.user: str | None = None
        self.selected_module: Feature | None = None
        self.settings_open = False

    # -- intro timer --------------------------------------------------------

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Schedule the intro -> login transition on the event loop."""
        if self.screen is not Screen.INTRO or self._timer is not None:
            return
        loop = loop or asyncio.get_running_loop()
        self._timer = loop.call_later(self.intro_delay, self.finish_intro)

    def close(self) -> None:
        """Cancel a pending intro timer so it cannot fire into a torn-down app."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def finish_intro(self) -> None:
        """Leave the intro screen; no-op on any other screen."""
        self._timer = None
        if self.screen is Screen.INTRO:
            self._set_screen(Screen.LOGIN)

    # -- authentication gate --------------------------------------------------

    def login(self, email: str, password: str) -> None:
        """Accept any non-empty credential pair and open the dashboard."""
        if self.screen is not Screen.LOGIN:
            raise NavigationError(
                f"Cannot log in from the {self.screen.value} screen",
                screen=self.screen.value,
            )
        if not email.strip():
            raise InputValidationError("Email is required.", field="email")
        if not password.strip():
            raise InputValidationError("Password is required.", field="password")
        self.user = email.strip()
        self._set_screen(Screen.DASHBOARD)

    def logout(self) -> None:
        """Return to login, forgetting the user and the dashboard view."""
        self._require_dashboard("log out")
        self.user = None
        self.selected_module = None
        self.settings_open = False
        self._set_screen(Screen.LOGIN)

    # -- dashboard views ----------------------------------------------------

    def select_module(self, feature: Feature) -> None:
        self._require_dashboard("open a module")
        self.settings_open = False
        self.selected_module = feature
        self._view_changed()

    def open_settings(self) -> None:
        self._require_dashboard("open settings")
        self.selected_module = None
        self.settings_open = True
        self._view_changed()

    def go_home(self) -> None:
        self._require_dashboard("go home")
        self.selected_module = None
        self.settings_open = False
        self._view_changed()

    @property
    def current_title(self) -> str:
        if self.settings_open:
            return "Settings & Security"
        if self.selected_module is not None:
            return self.selected_module.title
        return "System Overview"

    # -- internal helpers -----------------------------------------------------

    def _require_dashboard(self, action: str) -> None:
        if self.screen is not Screen.DASHBOARD:
            raise NavigationError(
                f"Cannot {action} from the {self.screen.value} screen",
                screen=self.screen.value,
            )

    def _set_screen(self, screen: Screen) -> None:
        previous = self.screen
        self.screen = screen
        logger.info("Navigator: %s -> %s", previous.value, screen.value)
        if self._bus is not None:
            self._bus.publish(
                ScreenChanged(
                    source_id="navigator",
                    previous=previous,
                    current=screen,
                    user=self.user,
                )
            )

    def _view_changed(self) -> None:
        logger.debug("Navigator: view -> %s", self.current_title)
        if self._bus is not None:
            self._bus.publish(
                ViewChanged(
                    source_id="navigator",
                    selected_module=self.selected_module,
                    settings_open=self.settings_open,
                )
            )

    def __repr__(self) -> str:
        return f"Navigator(screen={self.screen.value}, user={self.user!r})"
