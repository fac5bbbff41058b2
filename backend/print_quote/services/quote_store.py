import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from print_quote.models.quote import Quote, QuoteRecord
from print_quote.services.pricing import new_quote_id

logger = logging.getLogger(__name__)


class QuoteNotFound(Exception):
    def __init__(self, quote_id: str):
        super().__init__(f"quote not found: {quote_id}")
        self.quote_id = quote_id


class QuoteStore:
    """Saved quotes, newest first."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, quote: Quote) -> Quote:
        """Persist ``quote``; an id and creation time are filled in when missing.

        Saving a quote whose id already exists replaces the stored one.
        """
        stamped = quote.model_copy(update={
            "id": quote.id or new_quote_id(),
            "created_at": quote.created_at or datetime.now(timezone.utc),
        })
        self.session.merge(QuoteRecord.from_quote(stamped))
        self.session.commit()
        logger.info("Saved quote id=%s service=%s price=%s", stamped.id, stamped.specs.service_type.value, stamped.price)
        return stamped

    def list(self) -> List[Quote]:
        rows = self.session.exec(select(QuoteRecord).order_by(QuoteRecord.created_at.desc())).all()
        return [r.to_quote() for r in rows]

    def get(self, quote_id: str) -> Optional[Quote]:
        row = self.session.get(QuoteRecord, quote_id)
        return row.to_quote() if row is not None else None

    def delete(self, quote_id: str) -> None:
        row = self.session.get(QuoteRecord, quote_id)
        if row is None:
            logger.warning("Delete requested for missing quote id=%s", quote_id)
            raise QuoteNotFound(quote_id)
        self.session.delete(row)
        self.session.commit()
        logger.info("Deleted quote id=%s", quote_id)

    def summary(self) -> Dict[str, Any]:
        rows = self.session.exec(select(QuoteRecord)).all()
        by_service: Dict[str, int] = {}
        for r in rows:
            by_service[r.service_type] = by_service.get(r.service_type, 0) + 1
        return {
            "total_quotes": len(rows),
            "total_value": sum(r.price for r in rows),
            "by_service": by_service,
        }
