"""Core module - chat state, persistence and completion logic."""

from .confirmation import ConfirmationGate, Confirmation, ACTION_DELETE_SESSION, ACTION_CLEAR_SESSION
from .session_store import SessionStore, ChatState, SessionNotFoundError
from .message_log import MessageLog
from .orchestrator import CompletionOrchestrator, SubmitResult, ERROR_REPLY
from .chat_app import ChatApp, build_chat_app, init_chat_app, get_chat_app

__all__ = [
    'ConfirmationGate', 'Confirmation', 'ACTION_DELETE_SESSION', 'ACTION_CLEAR_SESSION',
    'SessionStore', 'ChatState', 'SessionNotFoundError',
    'MessageLog',
    'CompletionOrchestrator', 'SubmitResult', 'ERROR_REPLY',
    'ChatApp', 'build_chat_app', 'init_chat_app', 'get_chat_app',
]
