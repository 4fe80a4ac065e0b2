"""
Message Log - Append, undo and clear operations on a chat's turns.
"""

import logging
from typing import List, Optional

from ..models.session import ChatTurn
from .confirmation import ACTION_CLEAR_SESSION, ConfirmationGate
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class MessageLog:
    """
    The turns of the active chat.
    Every operation is a no-op returning False when no chat is active.
    """

    def __init__(self, store: SessionStore, gate: ConfirmationGate):
        self.store = store
        self.gate = gate

    @property
    def messages(self) -> List[ChatTurn]:
        session = self.store.active_session
        return list(session.messages) if session else []

    async def append(self, turns: List[ChatTurn], session_id: Optional[str] = None) -> bool:
        """
        Commit ``turns`` as the complete message list of a chat.

        Args:
            turns: The full new list, not a delta
            session_id: Chat to write to; defaults to the active chat

        Returns:
            bool: True if the chat exists and was updated
        """
        target = session_id or self.store.active_id
        if target is None:
            return False
        return await self.store.update(target, turns) is not None

    async def truncate_last_exchange(self) -> bool:
        """Undo: drop the trailing user/assistant pair."""
        session = self.store.active_session
        if session is None or len(session.messages) < 2:
            return False
        logger.info(f"Undoing last exchange in chat {session.id}")
        return await self.append(session.messages[:-2], session_id=session.id)

    async def clear(self, token: Optional[str]) -> bool:
        """Remove all turns of the active chat once the user has confirmed."""
        session = self.store.active_session
        if session is None:
            return False
        if not self.gate.consume(token, ACTION_CLEAR_SESSION, session.id):
            logger.info(f"Clear of chat {session.id} not confirmed")
            return False
        logger.info(f"Clearing chat {session.id}")
        return await self.append([], session_id=session.id)
