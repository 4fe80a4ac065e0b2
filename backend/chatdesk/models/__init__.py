"""Models module."""

from .session import (
    NEW_CHAT_TITLE, ChatTurn, ChatSession, SessionSummary, SessionList,
    derive_title, dump_sessions, load_sessions,
)
from .chat import (
    SendMessageRequest, SendMessageResponse, ConfirmationTicket, ClearRequest,
    ActionResult, ChatStatus,
)

__all__ = [
    'NEW_CHAT_TITLE', 'ChatTurn', 'ChatSession', 'SessionSummary', 'SessionList',
    'derive_title', 'dump_sessions', 'load_sessions',
    'SendMessageRequest', 'SendMessageResponse', 'ConfirmationTicket', 'ClearRequest',
    'ActionResult', 'ChatStatus',
]
