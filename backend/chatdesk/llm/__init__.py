"""LLM module - provides unified interface for completion providers."""

from .base import LLMProvider, LLMMessage, LLMResponse, ProviderError
from .anthropic_provider import AnthropicProvider
from .openai_compatible_provider import OpenAICompatibleProvider
from .factory import create_llm_provider, create_llm_provider_from_settings

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'ProviderError',
    'AnthropicProvider',
    'OpenAICompatibleProvider',
    'create_llm_provider',
    'create_llm_provider_from_settings',
]
