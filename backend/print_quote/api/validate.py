from fastapi import APIRouter

from print_quote.models.quote import Specification
from print_quote.services.validation import SpecValidator

router = APIRouter()


@router.post("/")
async def validate_spec(spec: Specification):
    v = SpecValidator()
    result = v.validate(spec)
    return result
