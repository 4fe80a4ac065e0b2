"""
Session Models - Defines structures for chat sessions and their turns.

The persisted form uses camelCase keys (``createdAt``, ``isError``); the
Python attributes are snake_case. Both names are accepted when loading.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

NEW_CHAT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 30
TITLE_ELLIPSIS = "..."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def derive_title(content: str) -> str:
    """Title for a chat whose first message is ``content``."""
    if len(content) > TITLE_MAX_LENGTH:
        return content[:TITLE_MAX_LENGTH] + TITLE_ELLIPSIS
    return content


class ChatTurn(BaseModel):
    """One message of a conversation. Immutable once created."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=utc_now)
    is_error: Optional[bool] = None  # only set on failed assistant turns

    @classmethod
    def user(cls, content: str) -> "ChatTurn":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str, is_error: bool = False) -> "ChatTurn":
        return cls(role="assistant", content=content, is_error=True if is_error else None)


class ChatSession(BaseModel):
    """A titled conversation with its full message history."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    title: str = NEW_CHAT_TITLE
    messages: List[ChatTurn] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    title_derived: Optional[bool] = None  # set once the title came from a message

    def with_messages(self, messages: List[ChatTurn]) -> "ChatSession":
        """
        Copy of this session holding ``messages``.

        The sentinel title is replaced by one derived from the first turn the
        first time the session gains messages. This happens at most once, even
        if the derived title equals the sentinel.
        """
        title = self.title
        title_derived = self.title_derived
        if not title_derived and title == NEW_CHAT_TITLE and not self.messages and messages:
            title = derive_title(messages[0].content)
            title_derived = True
        return self.model_copy(update={
            "messages": list(messages),
            "title": title,
            "title_derived": title_derived,
            "updated_at": utc_now(),
        })

    def summary(self) -> "SessionSummary":
        return SessionSummary(
            id=self.id,
            title=self.title,
            message_count=len(self.messages),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SessionSummary(BaseModel):
    """Session metadata shown in the chat list."""
    id: str
    title: str
    message_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None


class SessionList(BaseModel):
    """Ordered session summaries, newest first."""
    sessions: List[SessionSummary]
    active_id: Optional[str] = None


_SESSION_LIST_ADAPTER = TypeAdapter(List[ChatSession])


def dump_sessions(sessions: List[ChatSession]) -> str:
    """Serialize the whole collection for storage."""
    return _SESSION_LIST_ADAPTER.dump_json(
        sessions, by_alias=True, exclude_none=True
    ).decode("utf-8")


def load_sessions(raw: str) -> List[ChatSession]:
    """
    Parse a stored collection.

    Raises:
        pydantic.ValidationError: if ``raw`` is not a valid collection
    """
    return _SESSION_LIST_ADAPTER.validate_json(raw)
