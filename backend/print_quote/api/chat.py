import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlmodel import Session

from print_quote.db.session import get_db
from print_quote.models.chat import ChatLog, ChatMessage, ChatReply, Language
from print_quote.models.quote import ServiceType
from print_quote.services.ai import AIServiceError, GeminiClient
from print_quote.services.chat import ChatAssistant, export_transcript, transcript_filename, welcome_message
from print_quote.services.chat_logs import ChatLogStore

logger = logging.getLogger(__name__)
router = APIRouter()


class ChatTurnRequest(BaseModel):
    content: str = Field(..., min_length=1)
    language: Language = "ja"


class ChatExportRequest(BaseModel):
    messages: List[ChatMessage]


class ChatLogCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: List[ChatMessage]
    service_type: Optional[ServiceType] = None
    quote_generated: bool = False


def get_assistant() -> ChatAssistant:
    return ChatAssistant()


@router.get("/status")
def chat_status():
    return {"apiConfigured": GeminiClient().configured}


@router.get("/welcome", response_model=ChatMessage)
def chat_welcome(language: Language = "ja"):
    return welcome_message(language)


@router.post("/messages", response_model=ChatReply, response_model_exclude_none=True)
def send_message(req: ChatTurnRequest, assistant: ChatAssistant = Depends(get_assistant)):
    if not req.content.strip():
        raise HTTPException(status_code=400, detail="Empty message")
    try:
        return assistant.reply(req.content, req.language)
    except AIServiceError as e:
        logger.exception("Chat reply failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/export", response_class=PlainTextResponse)
def export_chat(req: ChatExportRequest):
    filename = transcript_filename()
    return PlainTextResponse(
        export_transcript(req.messages),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/logs", response_model=List[ChatLog])
def list_chat_logs(session: Session = Depends(get_db)):
    return ChatLogStore(session).list()


@router.post("/logs", response_model=ChatLog, status_code=201)
def save_chat_log(req: ChatLogCreate, session: Session = Depends(get_db)):
    return ChatLogStore(session).save(req.messages, req.service_type, req.quote_generated)


@router.delete("/logs/{log_id}")
def delete_chat_log(log_id: str, session: Session = Depends(get_db)):
    ChatLogStore(session).delete(log_id)
    return {"ok": True, "id": log_id}


@router.delete("/logs")
def clear_chat_logs(session: Session = Depends(get_db)):
    ChatLogStore(session).clear()
    return {"ok": True}
