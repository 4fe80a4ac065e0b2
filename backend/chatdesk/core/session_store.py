"""
Session Store - Owns the ordered chat collection and the active chat id.

Every mutation updates the in-memory state first and then writes the whole
collection under a single key. Write failures are logged and otherwise
ignored; the in-memory state is never rolled back.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pydantic import ValidationError

from ..models.session import ChatSession, ChatTurn, SessionSummary, dump_sessions, load_sessions
from ..storage import StorageInterface
from .confirmation import ACTION_DELETE_SESSION, ConfirmationGate

logger = logging.getLogger(__name__)

DEFAULT_CHATS_KEY = "all_chats"


class SessionNotFoundError(LookupError):
    """Raised when a session id is not in the collection."""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


@dataclass
class ChatState:
    """
    Mutable application state shared by the store, message log and
    orchestrator.

    ``sessions`` is newest first. ``active_id`` is None only while
    ``sessions`` is empty.
    """
    sessions: List[ChatSession] = field(default_factory=list)
    active_id: Optional[str] = None
    sending: bool = False


class SessionStore:
    """
    Creates, switches, deletes and updates chat sessions and persists the
    collection through a StorageInterface.
    """

    def __init__(
        self,
        storage: StorageInterface,
        gate: ConfirmationGate,
        key: str = DEFAULT_CHATS_KEY,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            storage: Key-value backend
            gate: Confirmation gate guarding delete
            key: Storage key of the serialized collection
            id_factory: Source of new session ids (uuid4 hex by default)
        """
        self.storage = storage
        self.gate = gate
        self.key = key
        self.state = ChatState()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._write_lock = asyncio.Lock()

    async def load(self) -> None:
        """Replace the in-memory state with the persisted collection."""
        sessions: List[ChatSession] = []
        stored = await self.storage.get(self.key)
        if stored is not None:
            try:
                sessions = load_sessions(stored.value)
            except (ValidationError, ValueError) as e:
                logger.warning(f"Ignoring malformed chat collection under {self.key!r}: {e}")

        self.state.sessions = sessions
        self.state.active_id = sessions[0].id if sessions else None
        logger.info(
            f"Loaded {len(sessions)} chats",
            extra={"extra_fields": {"active_id": self.state.active_id}}
        )

    def list_sessions(self) -> List[SessionSummary]:
        return [session.summary() for session in self.state.sessions]

    def get(self, session_id: str) -> Optional[ChatSession]:
        for session in self.state.sessions:
            if session.id == session_id:
                return session
        return None

    @property
    def active_id(self) -> Optional[str]:
        return self.state.active_id

    @property
    def active_session(self) -> Optional[ChatSession]:
        if self.state.active_id is None:
            return None
        return self.get(self.state.active_id)

    async def create(self) -> ChatSession:
        """Start a new empty chat at the head of the list and activate it."""
        session = self._new_session()
        self.state.sessions = [session, *self.state.sessions]
        self.state.active_id = session.id
        logger.info(f"Created chat {session.id}")
        await self._persist()
        return session

    def switch_to(self, session_id: str) -> List[ChatTurn]:
        """
        Make ``session_id`` the active chat.

        Returns:
            The messages of the newly active chat

        Raises:
            SessionNotFoundError: if no chat has that id
        """
        session = self.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        self.state.active_id = session_id
        logger.debug(f"Switched to chat {session_id}")
        return list(session.messages)

    async def delete(self, session_id: str, token: Optional[str]) -> bool:
        """
        Delete a chat once the user has confirmed it.

        If the deleted chat was active, the head of the remaining list becomes
        active, or a fresh chat is created when none remain.

        Returns:
            bool: False when the token is not valid for this chat or the chat
            does not exist
        """
        if self.get(session_id) is None:
            return False
        if not self.gate.consume(token, ACTION_DELETE_SESSION, session_id):
            logger.info(f"Delete of chat {session_id} not confirmed")
            return False

        remaining = [s for s in self.state.sessions if s.id != session_id]
        if session_id == self.state.active_id:
            if not remaining:
                remaining = [self._new_session()]
            self.state.active_id = remaining[0].id
        self.state.sessions = remaining

        logger.info(
            f"Deleted chat {session_id}",
            extra={"extra_fields": {"active_id": self.state.active_id}}
        )
        await self._persist()
        return True

    async def update(self, session_id: str, messages: List[ChatTurn]) -> Optional[ChatSession]:
        """
        Replace the messages of one chat and persist the collection.

        The chat's title is derived from its first message the first time it
        gains messages; ``updated_at`` is stamped on every call.

        Returns:
            The updated chat, or None if it no longer exists
        """
        updated: Optional[ChatSession] = None
        sessions = []
        for session in self.state.sessions:
            if session.id == session_id:
                updated = session.with_messages(messages)
                sessions.append(updated)
            else:
                sessions.append(session)

        if updated is None:
            logger.warning(f"Update for unknown chat {session_id} dropped")
            return None

        self.state.sessions = sessions
        await self._persist()
        return updated

    def _new_session(self) -> ChatSession:
        existing = {s.id for s in self.state.sessions}
        session_id = self._id_factory()
        while session_id in existing:
            session_id = self._id_factory()
        return ChatSession(id=session_id)

    async def _persist(self) -> bool:
        """Write the current collection; failures are logged, never raised."""
        payload = dump_sessions(self.state.sessions)
        # Writes land in the order they were issued
        async with self._write_lock:
            try:
                saved = await self.storage.set(self.key, payload)
            except Exception as e:
                logger.error(f"Persisting chats failed: {e}", exc_info=True)
                return False

        if not saved:
            logger.warning(
                f"Persisting chats failed; in-memory state kept",
                extra={"extra_fields": {"chat_count": len(self.state.sessions)}}
            )
        return saved
