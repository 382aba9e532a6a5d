"""Classification oracle client.

Sends one module submission to a LangChain chat model together with the
fixed :data:`~scam_guard.services.prompts.SYSTEM_POLICY`, then parses the
reply into an :class:`~scam_guard.domain.values.AnalysisResult`.

The model's reply is treated as untrusted input: it is parsed as JSON and
validated with the ``OracleVerdict`` pydantic schema.  Any transport failure
or shape mismatch surfaces as an :class:`~scam_guard.domain.exceptions.OracleError`;
nothing is silently defaulted.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from datetime import date
from typing import Any, Literal

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scam_guard.domain.enums import Feature, RiskLevel
from scam_guard.domain.exceptions import (
    InputValidationError,
    OracleResponseError,
    OracleTransportError,
)
from scam_guard.domain.values import CONFIDENCE_BANDS, AnalysisResult, ImagePayload
from scam_guard.infrastructure.config import OracleConfig
from scam_guard.services.prompts import SYSTEM_POLICY, build_prompt

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


# -- Structured output schema ------------------------------------------------


class OracleVerdict(BaseModel):
    """Wire schema of the oracle's JSON reply."""

    model_config = ConfigDict(extra="ignore")

    risk_level: Literal["Safe", "Suspicious", "Scam"]
    confidence_score: int = Field(ge=0, le=100, strict=True)
    reasons: list[str] = Field(min_length=1)
    recommendation: str

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            risk_level=RiskLevel(self.risk_level),
            confidence_score=self.confidence_score,
            reasons=tuple(self.reasons),
            recommendation=self.recommendation,
        )


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


def _message_text(message: Any) -> str:
    """Flatten a chat model reply (string or content blocks) into text."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


def parse_verdict(text: str, feature: Feature | None = None) -> AnalysisResult:
    """Parse and validate an oracle reply body.

    Raises
    ------
    OracleResponseError
        If the body is not JSON or does not match the verdict shape.
    """
    try:
        verdict = OracleVerdict.model_validate_json(_strip_code_fence(text))
    except ValidationError as exc:
        raise OracleResponseError(
            f"Oracle reply is not a valid verdict: {exc.error_count()} error(s)",
            feature=feature.value if feature else "",
            details={"errors": exc.errors(include_url=False), "body": text[:500]},
        ) from exc
    return verdict.to_result()


# -- ClassificationOracle ----------------------------------------------------


class ClassificationOracle:
    """Stateless client that asks a chat model for a scam verdict.

    Parameters
    ----------
    model:
        A LangChain chat model (e.g. ``ChatAnthropic``, ``ChatOpenAI``).
    enforce_confidence_bands:
        Reject verdicts whose score falls outside the policy band for their
        risk level.  Out-of-band scores are always logged.
    today:
        Date source for payment-proof prompts.
    """

    def __init__(
        self,
        model: BaseChatModel,
        enforce_confidence_bands: bool = False,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.model = model
        self.enforce_confidence_bands = enforce_confidence_bands
        self._today = today

    @classmethod
    def from_config(
        cls,
        config: OracleConfig,
        factory: Any | None = None,
    ) -> ClassificationOracle:
        """Build an oracle whose chat model is created from *config*."""
        from scam_guard.infrastructure.llm import ChatModelFactory

        factory = factory or ChatModelFactory()
        return cls(
            model=factory.from_config(config),
            enforce_confidence_bands=config.enforce_confidence_bands,
        )

    def build_messages(
        self,
        feature: Feature,
        text: str,
        image: ImagePayload | None = None,
    ) -> list[BaseMessage]:
        """System policy plus one human message holding the image (if any) and prompt."""
        prompt = build_prompt(feature, text, today=self._today())
        content: list[dict[str, Any]] = []
        if image is not None:
            content.append(
                {"type": "image_url", "image_url": {"url": image.to_data_url()}}
            )
        content.append({"type": "text", "text": prompt})
        return [SystemMessage(content=SYSTEM_POLICY), HumanMessage(content=content)]

    async def classify(
        self,
        feature: Feature,
        text: str,
        image: ImagePayload | None = None,
    ) -> AnalysisResult:
        """Classify one submission.

        Raises
        ------
        InputValidationError
            If an image module is called without an image.
        OracleTransportError
            If the model call itself fails.
        OracleResponseError
            If the reply is not a valid verdict.
        """
        if feature.requires_image and image is None:
            raise InputValidationError(
                "Please upload the required screenshot to proceed.", field="image"
            )

        messages = self.build_messages(feature, text, image)
        logger.debug(
            "ClassificationOracle: classifying %s (image=%s)",
            feature.value,
            image is not None,
        )

        try:
            reply = await self.model.ainvoke(messages)
        except Exception as exc:
            logger.warning(
                "ClassificationOracle: model call failed for %s: %s",
                feature.value,
                exc,
                exc_info=True,
            )
            raise OracleTransportError(
                f"Oracle call failed: {type(exc).__name__}: {exc}",
                feature=feature.value,
            ) from exc

        try:
            result = parse_verdict(_message_text(reply), feature)
        except OracleResponseError as exc:
            logger.warning(
                "ClassificationOracle: malformed reply for %s: %s (%s)",
                feature.value,
                exc,
                exc.details.get("errors"),
            )
            raise

        if not result.within_policy_band:
            low, high = CONFIDENCE_BANDS[result.risk_level]
            logger.warning(
                "ClassificationOracle: %s confidence %d outside policy band %d-%d",
                result.risk_level.value,
                result.confidence_score,
                low,
                high,
            )
            if self.enforce_confidence_bands:
                raise OracleResponseError(
                    f"confidence_score {result.confidence_score} outside "
                    f"{low}-{high} for {result.risk_level.value}",
                    feature=feature.value,
                )

        return result

    def classify_sync(
        self,
        feature: Feature,
        text: str,
        image: ImagePayload | None = None,
    ) -> AnalysisResult:
        """Blocking wrapper around :meth:`classify` for one-shot callers."""
        return asyncio.run(self.classify(feature, text, image))

    def __repr__(self) -> str:
        return f"ClassificationOracle(model={type(self.model).__name__})"
