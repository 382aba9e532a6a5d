"""Configuration dataclasses for Scam Guard.

Each config is a plain ``dataclass`` with a ``validate()`` method that raises
``ValueError`` on invalid combinations.  Configs are **frozen** so a single
instance can be shared by the controller, sessions and the oracle without
risking silent mutation.

Provider API keys are not part of the config; the provider SDKs read their
own environment variables (``ANTHROPIC_API_KEY``, ``OPENAI_API_KEY``).
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any

# ===================================================================== #
#  Oracle Configuration                                                  #
# ===================================================================== #

_VALID_PROVIDERS = frozenset({"anthropic", "openai"})

DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4o",
}


@dataclass(frozen=True)
class OracleConfig:
    """How the classification oracle is reached.

    Attributes
    ----------
    provider:
        Chat-model backend, ``"anthropic"`` or ``"openai"``.
    model:
        Model identifier.  Empty means the provider's default.
    temperature:
        Sampling temperature; kept low so verdicts are stable.
    max_tokens:
        Maximum tokens in the oracle's reply.
    timeout:
        Request timeout in seconds.
    enforce_confidence_bands:
        If ``True``, a confidence score outside the policy band for its
        risk level is rejected as a malformed reply instead of only logged.
    """

    provider: str = "anthropic"
    model: str = ""
    temperature: float = 0.2
    max_tokens: int = 1024
    timeout: float = 60.0
    enforce_confidence_bands: bool = False

    @property
    def resolved_model(self) -> str:
        return self.model or DEFAULT_MODELS.get(self.provider, "")

    def validate(self) -> None:
        if self.provider not in _VALID_PROVIDERS:
            raise ValueError(
                f"provider must be one of {sorted(_VALID_PROVIDERS)}, "
                f"got '{self.provider}'"
            )
        if not (0.0 <= self.temperature <= 2.0):
            raise ValueError(
                f"temperature must be in [0, 2], got {self.temperature}"
            )
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {self.max_tokens}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OracleConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Application Configuration                                             #
# ===================================================================== #

@dataclass(frozen=True)
class AppConfig:
    """Process-wide settings for the controller and its aggregates.

    Attributes
    ----------
    intro_delay:
        Seconds the intro screen stays up before moving to login.
    history_limit:
        Number of classifications retained in the history log.
    detection_points:
        Points for the first scam verdict on a given input.
    report_points:
        Points for the first explicit report of a given input.
    oracle:
        Oracle connection settings.
    """

    intro_delay: float = 3.0
    history_limit: int = 10
    detection_points: int = 5
    report_points: int = 10
    oracle: OracleConfig = field(default_factory=OracleConfig)

    def __post_init__(self) -> None:
        # frozen=True prevents normal assignment; coerce a nested dict
        if isinstance(self.oracle, dict):
            object.__setattr__(self, "oracle", OracleConfig.from_dict(self.oracle))

    def validate(self) -> None:
        if self.intro_delay < 0:
            raise ValueError(f"intro_delay must be >= 0, got {self.intro_delay}")
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got {self.history_limit}")
        if self.detection_points < 0:
            raise ValueError(
                f"detection_points must be >= 0, got {self.detection_points}"
            )
        if self.report_points < 0:
            raise ValueError(f"report_points must be >= 0, got {self.report_points}")
        self.oracle.validate()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AppConfig:
        """Build a config from ``SCAM_GUARD_*`` environment variables."""
        env = os.environ if environ is None else environ
        oracle_data: dict[str, Any] = {}
        if env.get("SCAM_GUARD_PROVIDER"):
            oracle_data["provider"] = env["SCAM_GUARD_PROVIDER"]
        if env.get("SCAM_GUARD_MODEL"):
            oracle_data["model"] = env["SCAM_GUARD_MODEL"]
        if env.get("SCAM_GUARD_TEMPERATURE"):
            oracle_data["temperature"] = float(env["SCAM_GUARD_TEMPERATURE"])

        data: dict[str, Any] = {"oracle": OracleConfig.from_dict(oracle_data)}
        if env.get("SCAM_GUARD_INTRO_DELAY"):
            data["intro_delay"] = float(env["SCAM_GUARD_INTRO_DELAY"])
        return cls.from_dict(data)


# ===================================================================== #
#  Unified config loader                                                 #
# ===================================================================== #

def load_config_from_json(json_str: str) -> AppConfig:
    """Parse a JSON object into a validated :class:`AppConfig`.

    Top-level keys match ``AppConfig`` fields; the ``oracle`` section is an
    object matching ``OracleConfig``.  Unknown keys are ignored.
    """
    raw = json.loads(json_str)
    if not isinstance(raw, dict):
        raise ValueError("Top-level JSON must be an object")
    oracle = raw.get("oracle", {})
    if not isinstance(oracle, dict):
        raise ValueError("'oracle' section must be an object")
    return AppConfig.from_dict({**raw, "oracle": OracleConfig.from_dict(oracle)})
