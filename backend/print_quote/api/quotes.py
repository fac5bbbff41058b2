import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from print_quote.db.session import get_db
from print_quote.models.quote import Quote, Specification
from print_quote.services.pricing import PriceEngine
from print_quote.services.quote_store import QuoteNotFound, QuoteStore
from print_quote.services.validation import SpecValidator

logger = logging.getLogger(__name__)
router = APIRouter()

price_engine = PriceEngine()


def _validated_quote(spec: Specification) -> Quote:
    validation = SpecValidator().validate(spec)
    if validation["decision"] != "valid":
        logger.info("Rejected %s spec issues=%s", spec.service_type.value, validation["issues"])
        raise HTTPException(status_code=422, detail=validation)
    quote = price_engine.estimate(spec)
    logger.info("Quote %s service=%s price=%s turnaround=%s", quote.id, spec.service_type.value, quote.price, quote.turnaround)
    return quote


@router.post("/estimate", response_model=Quote, response_model_exclude_none=True)
def estimate_quote(spec: Specification) -> Quote:
    """Price a specification without saving it."""
    return _validated_quote(spec)


@router.post("", response_model=Quote, response_model_exclude_none=True, status_code=201)
def create_quote(spec: Specification, session: Session = Depends(get_db)) -> Quote:
    quote = _validated_quote(spec)
    return QuoteStore(session).save(quote)


@router.get("", response_model=List[Quote], response_model_exclude_none=True)
def list_quotes(session: Session = Depends(get_db)):
    return QuoteStore(session).list()


@router.get("/{quote_id}", response_model=Quote, response_model_exclude_none=True)
def get_quote(quote_id: str, session: Session = Depends(get_db)):
    quote = QuoteStore(session).get(quote_id)
    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.delete("/{quote_id}")
def delete_quote(quote_id: str, session: Session = Depends(get_db)):
    try:
        QuoteStore(session).delete(quote_id)
    except QuoteNotFound:
        raise HTTPException(status_code=404, detail="Quote not found")
    return {"ok": True, "id": quote_id}
