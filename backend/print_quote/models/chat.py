from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel
from sqlmodel import Field as SQLField

from print_quote.models.quote import Quote, ServiceType

Language = Literal["ja", "en", "zh", "ko"]


class ChatMessage(BaseModel):
    id: str
    content: str
    sender: Literal["user", "ai"]
    timestamp: datetime


class ChatLog(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    date: datetime
    messages: List[ChatMessage]
    service_type: Optional[ServiceType] = None
    quote_generated: bool = False


class ChatReply(BaseModel):
    """What the assistant hands back for one user turn."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: ChatMessage
    service_type: ServiceType
    quote: Optional[Quote] = None


class ChatLogRecord(SQLModel, table=True):
    id: str = SQLField(primary_key=True)
    date: datetime = SQLField(index=True)
    service_type: Optional[str] = None
    quote_generated: bool = False
    messages: list = SQLField(default_factory=list, sa_column=Column(JSON))
