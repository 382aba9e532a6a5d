"""Scam Guard.

Classifies SMS messages, links, phone-call scenarios, screenshots and UPI
payment proofs as Safe, Suspicious or Scam using a chat-model oracle, and
keeps a small reward ledger and activity history for the signed-in session.
"""

__version__ = "0.1.0"

from scam_guard.domain import AnalysisResult, Feature, RiskLevel
from scam_guard.services.controller import ScamGuardController
from scam_guard.services.oracle import ClassificationOracle

__all__ = [
    "AnalysisResult",
    "ClassificationOracle",
    "Feature",
    "RiskLevel",
    "ScamGuardController",
]
