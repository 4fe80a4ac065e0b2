"""
Session API endpoints - List, create, switch and delete chats.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status, Query
from typing import List, Optional

from ..core import ChatApp, get_chat_app, SessionNotFoundError, ACTION_DELETE_SESSION
from ..models import ChatSession, ChatTurn, SessionList, ConfirmationTicket, ActionResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionList)
async def list_sessions(chat_app: ChatApp = Depends(get_chat_app)):
    """List chats, newest first, with the active chat id."""
    return SessionList(
        sessions=chat_app.store.list_sessions(),
        active_id=chat_app.store.active_id,
    )


@router.post("", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_session(chat_app: ChatApp = Depends(get_chat_app)):
    """Start a new chat and make it active."""
    return await chat_app.store.create()


@router.get("/active", response_model=Optional[ChatSession])
async def get_active_session(chat_app: ChatApp = Depends(get_chat_app)):
    """The active chat with its messages, or null when there are no chats."""
    return chat_app.store.active_session


@router.post("/{session_id}/activate", response_model=List[ChatTurn])
async def activate_session(session_id: str, chat_app: ChatApp = Depends(get_chat_app)):
    """
    Switch to another chat.

    Returns:
        The messages of the chat that is now active
    """
    try:
        return chat_app.store.switch_to(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{session_id}/delete-request", response_model=ConfirmationTicket)
async def request_delete(session_id: str, chat_app: ChatApp = Depends(get_chat_app)):
    """Issue the token required to delete a chat."""
    if chat_app.store.get(session_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}"
        )
    confirmation = chat_app.gate.request(ACTION_DELETE_SESSION, session_id)
    return ConfirmationTicket(
        token=confirmation.token,
        action=confirmation.action,
        target_id=confirmation.target_id,
        expires_at=confirmation.expires_at,
    )


@router.delete("/{session_id}", response_model=ActionResult)
async def delete_session(
    session_id: str,
    token: Optional[str] = Query(None, description="Token from the delete-request endpoint"),
    chat_app: ChatApp = Depends(get_chat_app),
):
    """Delete a chat. Without a valid token nothing happens and accepted is false."""
    accepted = await chat_app.store.delete(session_id, token)
    return ActionResult(
        accepted=accepted,
        active_id=chat_app.store.active_id,
        messages=chat_app.message_log.messages,
    )
