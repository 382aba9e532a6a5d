"""Chat-model layer for Scam Guard.

The oracle talks to any LangChain ``BaseChatModel``; this sub-package only
decides which one to build from configuration.
"""

from scam_guard.infrastructure.llm.factory import ChatModelFactory

__all__ = ["ChatModelFactory"]
