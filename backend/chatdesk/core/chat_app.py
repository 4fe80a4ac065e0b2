"""
Chat application container - Wires storage, store, log and orchestrator
together and exposes the process-wide instance.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..llm.base import LLMProvider
from ..llm.factory import create_llm_provider_from_settings
from ..storage import StorageInterface, create_storage
from .confirmation import ConfirmationGate
from .message_log import MessageLog
from .orchestrator import CompletionOrchestrator
from .session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ChatApp:
    """All chat components sharing one ChatState."""
    store: SessionStore
    message_log: MessageLog
    orchestrator: CompletionOrchestrator
    gate: ConfirmationGate


def build_chat_app(
    storage: StorageInterface,
    llm_provider: Optional[LLMProvider] = None,
    chats_key: str = "all_chats",
    confirmation_ttl_seconds: int = 120,
    max_tokens: Optional[int] = None,
) -> ChatApp:
    gate = ConfirmationGate(ttl_seconds=confirmation_ttl_seconds)
    store = SessionStore(storage, gate, key=chats_key)
    message_log = MessageLog(store, gate)
    orchestrator = CompletionOrchestrator(
        store, message_log, llm_provider=llm_provider, max_tokens=max_tokens
    )
    return ChatApp(store=store, message_log=message_log, orchestrator=orchestrator, gate=gate)


# Global chat app instance
_chat_app: Optional[ChatApp] = None


async def init_chat_app(config: Any, storage: Optional[StorageInterface] = None,
                        llm_provider: Optional[LLMProvider] = None) -> ChatApp:
    """
    Build the global chat app from settings and load persisted chats.

    Args:
        config: Settings object
        storage: Optional storage override. If None, built from settings.
        llm_provider: Optional provider override. If None, built from settings.
    """
    global _chat_app
    if storage is None:
        storage = create_storage(config)
    if llm_provider is None:
        llm_provider = create_llm_provider_from_settings(config)
        if llm_provider is None:
            logger.warning("LLM_API_KEY not set; replies will be error messages")

    chat_app = build_chat_app(
        storage,
        llm_provider=llm_provider,
        chats_key=config.chats_key,
        confirmation_ttl_seconds=config.confirmation_ttl_seconds,
        max_tokens=config.llm_max_tokens,
    )
    await chat_app.store.load()
    _chat_app = chat_app
    return chat_app


def get_chat_app() -> ChatApp:
    """
    Get the global chat app instance.

    Raises:
        RuntimeError: If the chat app has not been initialized
    """
    if _chat_app is None:
        raise RuntimeError("Chat app not initialized. Call init_chat_app() first.")
    return _chat_app
