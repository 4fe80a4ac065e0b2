"""
Completion Orchestrator - Runs one user message through the completion
provider and records the reply.

The orchestrator is either idle or sending; a submit while sending is
rejected. A request is bound to the chat it was issued from, so its reply
lands in that chat even if the user switched away in the meantime. If the
chat was deleted, cleared or undone while waiting, the reply is dropped.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..llm.base import LLMMessage, LLMProvider
from ..models.session import ChatTurn
from .logging_config import LoggerAdapter, truncate_large_data
from .message_log import MessageLog
from .session_store import SessionStore

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error. Please try again."


@dataclass
class SubmitResult:
    """Outcome of an accepted submit."""
    session_id: str
    reply: Optional[ChatTurn]  # None if the chat changed before the reply arrived


class CompletionOrchestrator:
    """Drives the request/response cycle with a completion provider."""

    def __init__(
        self,
        store: SessionStore,
        message_log: MessageLog,
        llm_provider: Optional[LLMProvider] = None,
        max_tokens: Optional[int] = None,
    ):
        """
        Args:
            store: Session store holding the shared state
            message_log: Log used to commit turns
            llm_provider: Completion provider; without one every submit
                produces the error reply
            max_tokens: Response cap passed to the provider
        """
        self.store = store
        self.message_log = message_log
        self.llm_provider = llm_provider
        self.max_tokens = max_tokens

    @property
    def sending(self) -> bool:
        return self.store.state.sending

    async def submit(self, user_text: str) -> Optional[SubmitResult]:
        """
        Send ``user_text`` in the active chat and record the reply.

        Returns:
            SubmitResult, or None if the message was rejected (blank text,
            a request already in flight, or no active chat)
        """
        if not user_text or not user_text.strip():
            return None
        if self.store.state.sending:
            logger.debug("Submit rejected: a completion is already in flight")
            return None
        session = self.store.active_session
        if session is None:
            return None

        origin_id = session.id
        log = LoggerAdapter(logger, {"session_id": origin_id})
        history = [*session.messages, ChatTurn.user(user_text)]

        self.store.state.sending = True
        try:
            await self.message_log.append(history, session_id=origin_id)
            log.info(f"Completion requested: {truncate_large_data(user_text, max_length=100)}")

            reply = await self._complete(history, log)

            current = self.store.get(origin_id)
            if current is None:
                log.warning("Chat deleted while waiting for completion; reply discarded")
                return SubmitResult(session_id=origin_id, reply=None)
            if current.messages != history:
                log.warning("Chat cleared or undone while waiting for completion; reply discarded")
                return SubmitResult(session_id=origin_id, reply=None)

            await self.message_log.append([*history, reply], session_id=origin_id)
            return SubmitResult(session_id=origin_id, reply=reply)
        finally:
            self.store.state.sending = False

    async def _complete(self, history: List[ChatTurn], log: LoggerAdapter) -> ChatTurn:
        """Ask the provider for the next assistant turn; failures become an error turn."""
        if self.llm_provider is None:
            log.warning("No LLM provider configured. Set LLM_API_KEY and LLM_PROVIDER.")
            return ChatTurn.assistant(ERROR_REPLY, is_error=True)

        messages = [LLMMessage.text(turn.role, turn.content) for turn in history]
        try:
            response = await self.llm_provider.chat_completion(messages, max_tokens=self.max_tokens)
        except Exception as e:
            log.error(
                f"Completion failed: {str(e)}",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}}
            )
            return ChatTurn.assistant(ERROR_REPLY, is_error=True)

        log.info(
            "Completion received",
            extra={"extra_fields": {"response_length": len(response.content)}}
        )
        return ChatTurn.assistant(response.content)
