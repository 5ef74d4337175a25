"""Advisor chat endpoints."""
from fastapi import APIRouter, Depends

from drinkchain.api.deps import AppContainer, get_container
from drinkchain.api.schemas.chat import ChatMessageRequest, ChatTranscript
from drinkchain.domain.models import ChatMessage

router = APIRouter(prefix="/chat/{session_id}", tags=["chat"])


@router.get("", response_model=ChatTranscript)
def get_transcript(session_id: str, container: AppContainer = Depends(get_container)) -> ChatTranscript:
    session = container.chat.session(session_id)
    return ChatTranscript(session_id=session_id, messages=session.transcript, awaiting=session.awaiting)


@router.post("/messages", response_model=ChatMessage)
def send_message(
    session_id: str, payload: ChatMessageRequest, container: AppContainer = Depends(get_container),
) -> ChatMessage:
    return container.chat.send(session_id, payload.text)
