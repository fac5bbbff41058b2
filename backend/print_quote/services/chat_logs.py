import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlmodel import Session, select

from print_quote.models.chat import ChatLog, ChatLogRecord, ChatMessage
from print_quote.models.quote import ServiceType

logger = logging.getLogger(__name__)

MAX_CHAT_LOGS = 100


class ChatLogStore:
    def __init__(self, session: Session, max_logs: int = MAX_CHAT_LOGS):
        self.session = session
        self.max_logs = max_logs

    def save(self, messages: Sequence[ChatMessage], service_type: Optional[ServiceType] = None,
             quote_generated: bool = False) -> ChatLog:
        log = ChatLog(
            id=f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:4]}",
            date=datetime.now(timezone.utc),
            messages=list(messages),
            service_type=service_type,
            quote_generated=quote_generated,
        )
        self.session.merge(ChatLogRecord(
            id=log.id,
            date=log.date,
            service_type=service_type.value if service_type else None,
            quote_generated=quote_generated,
            messages=[m.model_dump(mode="json") for m in log.messages],
        ))
        self.session.commit()
        self._prune()
        logger.info("Saved chat log id=%s messages=%s service=%s", log.id, len(log.messages), log.service_type)
        return log

    def _prune(self) -> None:
        stale = self.session.exec(
            select(ChatLogRecord).order_by(ChatLogRecord.date.desc()).offset(self.max_logs)
        ).all()
        if not stale:
            return
        for row in stale:
            self.session.delete(row)
        self.session.commit()
        logger.debug("Pruned %s old chat logs", len(stale))

    def list(self) -> List[ChatLog]:
        rows = self.session.exec(select(ChatLogRecord).order_by(ChatLogRecord.date.desc())).all()
        logs = []
        for r in rows:
            # pydantic turns the stored ISO strings back into datetimes
            logs.append(ChatLog(
                id=r.id,
                date=r.date,
                messages=[ChatMessage.model_validate(m) for m in r.messages or []],
                service_type=r.service_type,
                quote_generated=r.quote_generated,
            ))
        return logs

    def delete(self, log_id: str) -> None:
        row = self.session.get(ChatLogRecord, log_id)
        if row is None:
            return
        self.session.delete(row)
        self.session.commit()
        logger.info("Deleted chat log id=%s", log_id)

    def clear(self) -> None:
        for row in self.session.exec(select(ChatLogRecord)).all():
            self.session.delete(row)
        self.session.commit()
        logger.info("Cleared all chat logs")
