"""
Chat API endpoints - Send messages, undo, clear and read the transcript
of the active chat.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from typing import List

from ..core import ChatApp, get_chat_app, ACTION_CLEAR_SESSION
from ..core.transcript import RenderedTurn, render_transcript
from ..models import (
    SendMessageRequest, SendMessageResponse, ConfirmationTicket, ClearRequest,
    ActionResult, ChatStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=SendMessageResponse)
async def send_message(message: SendMessageRequest, chat_app: ChatApp = Depends(get_chat_app)):
    """
    Send a message in the active chat and wait for the reply.

    Provider failures are not errors here: the reply is then an error turn
    (``isError`` true) that has been stored like any other.
    """
    result = await chat_app.orchestrator.submit(message.content)
    if result is None:
        return SendMessageResponse(accepted=False, session_id=chat_app.store.active_id)
    return SendMessageResponse(accepted=True, session_id=result.session_id, reply=result.reply)


@router.post("/undo", response_model=ActionResult)
async def undo_last_exchange(chat_app: ChatApp = Depends(get_chat_app)):
    """Remove the last user/assistant pair of the active chat."""
    accepted = await chat_app.message_log.truncate_last_exchange()
    return ActionResult(
        accepted=accepted,
        active_id=chat_app.store.active_id,
        messages=chat_app.message_log.messages,
    )


@router.post("/clear-request", response_model=ConfirmationTicket)
async def request_clear(chat_app: ChatApp = Depends(get_chat_app)):
    """Issue the token required to clear the active chat."""
    active_id = chat_app.store.active_id
    if active_id is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No active session")
    confirmation = chat_app.gate.request(ACTION_CLEAR_SESSION, active_id)
    return ConfirmationTicket(
        token=confirmation.token,
        action=confirmation.action,
        target_id=confirmation.target_id,
        expires_at=confirmation.expires_at,
    )


@router.post("/clear", response_model=ActionResult)
async def clear_chat(request: ClearRequest, chat_app: ChatApp = Depends(get_chat_app)):
    """Remove every message of the active chat."""
    accepted = await chat_app.message_log.clear(request.token)
    return ActionResult(
        accepted=accepted,
        active_id=chat_app.store.active_id,
        messages=chat_app.message_log.messages,
    )


@router.get("/transcript", response_model=List[RenderedTurn])
async def get_transcript(chat_app: ChatApp = Depends(get_chat_app)):
    """The active chat split into text and code fragments for display."""
    return render_transcript(chat_app.message_log.messages)


@router.get("/status", response_model=ChatStatus)
async def get_status(chat_app: ChatApp = Depends(get_chat_app)):
    return ChatStatus(sending=chat_app.orchestrator.sending, active_id=chat_app.store.active_id)
