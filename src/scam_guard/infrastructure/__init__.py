"""Infrastructure layer for Scam Guard.

Re-exports the public API surface for convenience::

    from scam_guard.infrastructure import (
        EventBus, AppConfig, OracleConfig, ChatModelFactory,
    )
"""

from scam_guard.infrastructure.config import (
    AppConfig,
    OracleConfig,
    load_config_from_json,
)
from scam_guard.infrastructure.event_bus import EventBus
from scam_guard.infrastructure.llm import ChatModelFactory

__all__ = [
    # Event bus
    "EventBus",
    # Configuration
    "AppConfig",
    "OracleConfig",
    "load_config_from_json",
    # LLM
    "ChatModelFactory",
]
