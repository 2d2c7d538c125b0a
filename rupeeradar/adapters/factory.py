"""LLM adapter selection."""
import logging
from typing import Optional, Tuple, Type

from rupeeradar.adapters.anthropic_adapter import AnthropicAdapter
from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.adapters.gemini_adapter import GeminiAdapter
from rupeeradar.adapters.mock import MockLLMAdapter
from rupeeradar.adapters.openai_adapter import OpenAIAdapter
from rupeeradar.config import settings

logger = logging.getLogger(__name__)

# (model id prefixes, provider markers anywhere in the id, adapter class)
PROVIDERS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...], Type[LLMAdapter]], ...] = (
    (("gpt-", "o1-"), ("openai",), OpenAIAdapter),
    ((), ("claude", "anthropic"), AnthropicAdapter),
    ((), ("gemini", "google"), GeminiAdapter),
)


def get_llm_adapter(model_id: str, **kwargs) -> LLMAdapter:
    """
    Build the adapter for a model id.

    Only "mock:*" ids get the MockLLMAdapter.

    Args:
        model_id: e.g. "gemini-2.0-flash-001", "gpt-4o-mini", "claude-3-5-haiku-latest", "mock:skeptic"
        **kwargs: Passed through to the adapter

    Raises:
        ValueError: If no provider claims the id, or its API key is not configured
    """
    if model_id.startswith("mock:"):
        return MockLLMAdapter(model_id, **kwargs)

    lowered = model_id.lower()
    for prefixes, markers, adapter_class in PROVIDERS:
        if lowered.startswith(prefixes) or any(marker in lowered for marker in markers):
            return adapter_class(model_id, **kwargs)

    raise ValueError(f"No LLM provider for model id {model_id!r}")


def adapter_from_settings() -> Optional[LLMAdapter]:
    """Build the configured adapter, or None when the provider has no API key."""
    try:
        return get_llm_adapter(settings.llm_model_id)
    except ValueError as e:
        logger.warning("AI features disabled for %s: %s", settings.llm_model_id, e)
        return None
