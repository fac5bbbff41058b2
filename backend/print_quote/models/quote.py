from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel
from sqlmodel import Field as SQLField


class ServiceType(str, Enum):
    PRINTING = "printing"
    BINDING = "binding"
    LOGISTICS = "logistics"
    ECO_PRINTING = "eco-printing"
    SDGS_CONSULTING = "sdgs-consulting"
    SUSTAINABILITY_REPORT = "sustainability-report"


class Specification(BaseModel):
    """Service specification submitted from the quote form or built by the chat.

    Attributes are snake_case; the JSON shape uses the camelCase keys the
    frontend sends (``serviceType``, ``productType``...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service_type: ServiceType = ServiceType.PRINTING
    product_type: str = ""
    size: str = ""
    quantity: int = 100
    paper_type: str = "standard"
    print_colors: str = "black-and-white"
    finishing: Optional[List[str]] = Field(default_factory=lambda: ["none"])
    custom_specs: Optional[str] = None
    delivery_date: Optional[date] = None
    delivery_address: Optional[str] = None

    # binding
    binding_type: Optional[str] = None
    page_count: Optional[int] = None
    cover_type: Optional[str] = None

    # logistics
    weight: Optional[float] = None
    dimensions: Optional[str] = None
    delivery_speed: Optional[str] = None

    # eco-printing
    eco_materials: Optional[List[str]] = None
    carbon_offset: Optional[bool] = None
    certifications: Optional[List[str]] = None

    # sdgs-consulting / sustainability-report, carried but not priced
    company_size: Optional[str] = None
    industry: Optional[str] = None
    consulting_scope: Optional[List[str]] = None
    report_type: Optional[str] = None
    report_period: Optional[str] = None


class Quote(BaseModel):
    """Priced result for one specification. Never mutated; edits produce a new quote."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    specs: Specification
    price: int
    turnaround: int  # days
    discount_applied: Optional[float] = None
    created_at: Optional[datetime] = None


class QuoteRecord(SQLModel, table=True):
    id: str = SQLField(primary_key=True)
    created_at: datetime = SQLField(index=True)
    service_type: str
    price: int
    turnaround: int
    discount_applied: Optional[float] = None
    specs: dict = SQLField(default_factory=dict, sa_column=Column(JSON))

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteRecord":
        return cls(
            id=quote.id,
            created_at=quote.created_at,
            service_type=quote.specs.service_type.value,
            price=quote.price,
            turnaround=quote.turnaround,
            discount_applied=quote.discount_applied,
            specs=quote.specs.model_dump(mode="json", by_alias=True),
        )

    def to_quote(self) -> Quote:
        return Quote(
            id=self.id,
            specs=Specification.model_validate(self.specs),
            price=self.price,
            turnaround=self.turnaround,
            discount_applied=self.discount_applied,
            created_at=self.created_at,
        )
