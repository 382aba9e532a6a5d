"""Public testing utilities for Scam Guard.

Provides a scripted chat model for writing self-contained examples and tests
without requiring API keys.
"""

from scam_guard.testing.mock_llm import MockChatModel

__all__ = ["MockChatModel"]
