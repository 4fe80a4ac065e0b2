"""
LLM Provider Factory - Creates the configured LLM provider instance.
"""

from typing import Any, Optional
from .base import LLMProvider
from .anthropic_provider import AnthropicProvider
from .openai_compatible_provider import OpenAICompatibleProvider

_PROVIDERS = {
    "anthropic": AnthropicProvider,
    "openai": OpenAICompatibleProvider,
}


def create_llm_provider(
    provider: str = "anthropic",
    api_key: str = "",
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    **kwargs
) -> Optional[LLMProvider]:
    """
    Create an LLM provider instance based on configuration.

    Args:
        provider: Provider name ("anthropic" or "openai")
        api_key: API key for the provider
        model: Model name (uses provider default if not specified)
        base_url: Custom base URL (uses provider default if not specified)
        **kwargs: Additional provider-specific parameters

    Returns:
        LLMProvider instance, or None if api_key is not configured
    """
    if not api_key:
        return None

    provider_cls = _PROVIDERS.get(provider)
    if provider_cls is None:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    params: dict = {"api_key": api_key}
    if model:
        params["model"] = model
    if base_url:
        params["base_url"] = base_url
    params.update(kwargs)
    return provider_cls(**params)


def create_llm_provider_from_settings(config: Any) -> Optional[LLMProvider]:
    """Build the provider described by the ``llm_*`` settings."""
    return create_llm_provider(
        provider=config.llm_provider,
        api_key=config.llm_api_key or "",
        model=config.llm_model,
        base_url=config.llm_base_url,
        default_max_tokens=config.llm_max_tokens,
        timeout=config.llm_timeout,
    )
