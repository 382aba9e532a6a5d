"""Chat-model factory for the classification oracle.

Registry-based factory that creates LangChain ``BaseChatModel`` instances by
provider name.  Built-in providers import their integration package only
when actually constructed, so a missing optional package does not prevent
the factory (or the ``info`` command) from being used.

Usage::

    factory = ChatModelFactory()
    model = factory.create("anthropic", model="claude-sonnet-4-5-20250929")
    model = factory.from_config(OracleConfig(provider="openai"))
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from langchain_core.language_models import BaseChatModel

from scam_guard.infrastructure.config import OracleConfig

logger = logging.getLogger(__name__)

ModelConstructor = Callable[..., BaseChatModel]

# Provider name -> importable integration package
_DEPENDENCIES: dict[str, str] = {
    "anthropic": "langchain_anthropic",
    "openai": "langchain_openai",
}


class ChatModelFactory:
    """Registry-based factory for creating chat models.

    Parameters
    ----------
    auto_discover:
        If ``True`` (default), pre-register the built-in providers.
    """

    def __init__(self, auto_discover: bool = True) -> None:
        self._registry: dict[str, ModelConstructor] = {}
        if auto_discover:
            self._registry["anthropic"] = self._create_anthropic
            self._registry["openai"] = self._create_openai

    # -- registration ---------------------------------------------------------

    def register(
        self,
        name: str,
        constructor: ModelConstructor,
        overwrite: bool = False,
    ) -> None:
        """Register a model constructor under *name*.

        Raises ``ValueError`` when *name* is taken and ``overwrite`` is false.
        """
        if name in self._registry and not overwrite:
            raise ValueError(
                f"Provider {name!r} is already registered. "
                f"Use overwrite=True to replace it."
            )
        self._registry[name] = constructor
        logger.debug("ChatModelFactory: registered provider %r", name)

    # -- creation -------------------------------------------------------------

    def create(self, provider_name: str, **kwargs: Any) -> BaseChatModel:
        """Create a chat model by provider name.

        Raises
        ------
        ValueError
            If the provider name is not registered.
        ImportError
            If the provider's integration package is not installed.
        """
        constructor = self._registry.get(provider_name)
        if constructor is None:
            available = ", ".join(sorted(self._registry))
            raise ValueError(
                f"Unknown provider {provider_name!r}. "
                f"Available providers: {available}"
            )
        logger.info(
            "ChatModelFactory: creating %r model with kwargs %s",
            provider_name,
            sorted(kwargs),
        )
        return constructor(**kwargs)

    def from_config(self, config: OracleConfig) -> BaseChatModel:
        """Create the chat model described by an :class:`OracleConfig`."""
        config.validate()
        return self.create(
            config.provider,
            model=config.resolved_model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    # -- query ----------------------------------------------------------------

    @property
    def registered_providers(self) -> list[str]:
        return sorted(self._registry)

    def available_providers(self) -> dict[str, bool]:
        """Map each registered provider to whether its package imports."""
        return {name: self._check_availability(name) for name in self._registry}

    # -- built-in constructors ------------------------------------------------

    @staticmethod
    def _create_anthropic(**kwargs: Any) -> BaseChatModel:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(**kwargs)

    @staticmethod
    def _create_openai(**kwargs: Any) -> BaseChatModel:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(**kwargs)

    @staticmethod
    def _check_availability(name: str) -> bool:
        module_name = _DEPENDENCIES.get(name)
        if module_name is None:
            return True
        try:
            __import__(module_name)
            return True
        except ImportError:
            return False

    def __repr__(self) -> str:
        return f"ChatModelFactory(providers={sorted(self._registry)})"

    def __contains__(self, name: str) -> bool:
        return name in self._registry
