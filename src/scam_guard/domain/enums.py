"""Domain enumerations for Scam Guard.

These enums capture the fixed vocabularies used across the domain layer:
oracle verdicts, analysis modules, screens, and analysis session states.
"""

from enum import Enum


class RiskLevel(Enum):
    """Verdict returned by the classification oracle.

    No ordering is defined between levels; they are compared only for
    equality.
    """

    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    SCAM = "Scam"


class Feature(Enum):
    """The five analysis modules offered on the dashboard."""

    SMS = "SMS"
    LINK = "LINK"
    PHONE = "PHONE"
    SCREENSHOT = "SCREENSHOT"
    PAYMENT_PROOF = "PAYMENT_PROOF"

    @property
    def history_label(self) -> str:
        """Label recorded as the ``type`` of a history entry."""
        return _HISTORY_LABELS[self]

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def requires_image(self) -> bool:
        """True for modules that cannot run without an uploaded screenshot."""
        return self in (Feature.SCREENSHOT, Feature.PAYMENT_PROOF)

    @property
    def placeholder_input(self) -> str:
        """Stand-in input label for image submissions without any text."""
        if self is Feature.PAYMENT_PROOF:
            return "Payment Verification"
        return "Image Scan"


_HISTORY_LABELS = {
    Feature.SMS: "SMS",
    Feature.LINK: "Link",
    Feature.PHONE: "Phone",
    Feature.SCREENSHOT: "Screenshot",
    Feature.PAYMENT_PROOF: "Payment Proof",
}

_TITLES = {
    Feature.SMS: "Message Analysis",
    Feature.LINK: "Link Analysis",
    Feature.PHONE: "Phone Check",
    Feature.SCREENSHOT: "Screenshot Analysis",
    Feature.PAYMENT_PROOF: "Payment Verification",
}

_DESCRIPTIONS = {
    Feature.SMS: "Scan for fraudulent SMS text, phishing links, and fake bank alerts.",
    Feature.LINK: "Verify URLs against known scam patterns and malicious redirects.",
    Feature.PHONE: "Analyze phone numbers and payment scenarios for fraud risks.",
    Feature.SCREENSHOT: "Extract and analyze text from images to detect hidden scam signals.",
    Feature.PAYMENT_PROOF: "Verify UPI and GPay screenshots to prevent payment manipulation.",
}


class Screen(Enum):
    """Top-level screens of the application."""

    INTRO = "intro"
    LOGIN = "login"
    DASHBOARD = "dashboard"


class SessionStatus(Enum):
    """Finite-state-machine states for a single analysis module."""

    IDLE = "idle"  # no input yet
    EDITING = "editing"
    PENDING = "pending"  # oracle call in flight
    RESOLVED = "resolved"
    FAILED = "failed"
