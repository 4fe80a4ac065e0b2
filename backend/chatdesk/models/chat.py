"""
Chat API Models - Request and response bodies of the HTTP surface.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from .session import ChatTurn


class SendMessageRequest(BaseModel):
    """A user message to submit to the active chat."""
    content: str


class SendMessageResponse(BaseModel):
    """Outcome of a submit; ``reply`` is None when the message was rejected."""
    accepted: bool
    session_id: Optional[str] = None
    reply: Optional[ChatTurn] = None


class ConfirmationTicket(BaseModel):
    """Token that must be presented to carry out a destructive action."""
    token: str
    action: str
    target_id: str
    expires_at: datetime


class ClearRequest(BaseModel):
    token: str


class ActionResult(BaseModel):
    """Outcome of an undo, clear, or delete."""
    accepted: bool
    active_id: Optional[str] = None
    messages: List[ChatTurn] = []


class ChatStatus(BaseModel):
    sending: bool
    active_id: Optional[str] = None
