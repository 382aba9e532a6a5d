"""Presentation layer for Scam Guard."""

from scam_guard.presentation.console import ConsoleDashboard

__all__ = ["ConsoleDashboard"]
