"""Prompt text for the classification oracle.

``SYSTEM_POLICY`` is sent out-of-band (as the system message) on every call.
``build_prompt`` produces the per-call user prompt for one module.
"""

from __future__ import annotations

from datetime import date

from scam_guard.domain.enums import Feature, RiskLevel
from scam_guard.domain.exceptions import InputValidationError
from scam_guard.domain.values import CONFIDENCE_BANDS

TRUSTED_DOMAINS: tuple[str, ...] = (
    "google.com",
    "flipkart.com",
    "amazon.in",
    "paytm.com",
    "hdfcbank.com",
    "icicibank.com",
    "sbi.co.in",
)

SMS_INDICATORS: tuple[str, ...] = (
    "Urgency",
    "Payment request",
    "Fake bank impersonation",
    "Suspicious link",
    "OTP request",
)

FUTURE_DATE_REASON = "Transaction date appears to be in the future."


def _band(level: RiskLevel) -> str:
    low, high = CONFIDENCE_BANDS[level]
    return f"{low}-{high}%"


SYSTEM_POLICY = f"""\
You are a cybersecurity assistant specialised in detecting INDIAN scams and fraudulent documents.
You protect individuals and shop owners from SMS, link, screenshot, phone and payment-based fraud.
Do not hallucinate. Do not over-warn. Do not under-warn.

RULES:
1. SMS / MESSAGE:
   - Indicators: {", ".join(SMS_INDICATORS)}.
   - Classify as Scam only if 2 or more indicators are present.
   - Exactly 1 indicator -> Suspicious. 0 indicators -> Safe.

2. LINK:
   - Trusted domains ({", ".join(TRUSTED_DOMAINS)}) MUST be classified as Safe,
     whatever the path or query string contains.
   - Look-alike domains or suspicious redirects -> Scam.

3. PAYMENT PROOF (for shop owners):
   - Analyse screenshots of UPI apps (GPay, PhonePe, Paytm).
   - Compare the transaction date in the screenshot with the current date given in the prompt.
     * Past transactions are VALID; an older date is never a sign of fraud on its own.
     * Transactions dated today are VALID.
     * ONLY a transaction dated in the FUTURE relative to the current date is suspicious.
   - Scam (fake) if: inconsistent fonts or colours, missing transaction ID, a "Processing" or
     "Pending" status presented as success, obvious visual manipulation, or a future date.
   - Suspicious if: status is "Pending" or "Scheduled", or the text is blurry or unclear.
   - If flagged because of the date, include the reason "{FUTURE_DATE_REASON}" verbatim.
   - Always advise the owner to check the actual bank or app balance before releasing goods.

4. SCREENSHOT:
   - Extract the visible text and look for scam indicators (job scams, investment fraud).

5. PHONE NUMBER:
   - The context is mandatory. Strong payment pressure or impersonation -> Scam.

CONFIDENCE SCORES:
- Safe: {_band(RiskLevel.SAFE)}
- Suspicious: {_band(RiskLevel.SUSPICIOUS)}
- Scam: {_band(RiskLevel.SCAM)}

RESPONSE FORMAT:
Return ONLY a valid JSON object, with no surrounding prose or markdown:
{{
  "risk_level": "Safe" | "Suspicious" | "Scam",
  "confidence_score": integer 0-100,
  "reasons": ["string", ...],
  "recommendation": "string"
}}
"""


def format_current_date(today: date) -> str:
    """Human-readable date used in payment-proof prompts, e.g. ``19 October 2026``."""
    return today.strftime("%d %B %Y")


def build_phone_input(phone: str, context: str) -> str:
    """Combine a phone number and its context into one labelled analysis input."""
    if not phone.strip():
        raise InputValidationError("A phone number is required.", field="phone")
    if not context.strip():
        raise InputValidationError(
            "Describe what the caller asked for.", field="context"
        )
    return f"Phone: {phone} | Context: {context}"


def build_prompt(feature: Feature, text: str, today: date | None = None) -> str:
    """Return the per-call user prompt for *feature*.

    *text* is the analysis input: the message, the URL, the combined phone
    string, or optional notes for the image modules.
    """
    if feature is Feature.SMS:
        return f'Analyze this SMS/Message for potential scams in an Indian context: "{text}"'

    if feature is Feature.LINK:
        return f'Analyze this URL/Link for potential scams targeting Indian users: "{text}"'

    if feature is Feature.PHONE:
        return (
            "Analyze this phone number and the following context "
            f'for payment fraud: "{text}"'
        )

    if feature is Feature.SCREENSHOT:
        prompt = "Extract text and analyze this screenshot for scam indicators."
        if text:
            prompt += f" Additional user context: {text}"
        return prompt

    if feature is Feature.PAYMENT_PROOF:
        current = format_current_date(today or date.today())
        lines = [
            "SHOP OWNER ALERT: Analyze this payment proof screenshot "
            "(UPI/GPay/PhonePe/Paytm) for validity.",
            f"Current System Date for comparison: {current}.",
            'Check for "Pending", "Processing", missing IDs, visual manipulation, '
            "or FUTURE transaction dates.",
            "Note: Past dates are perfectly valid.",
        ]
        if text:
            lines.append(f"Shop owner notes: {text}")
        return "\n".join(lines)

    raise ValueError(f"Unsupported feature: {feature!r}")
