"""Static price tables used by the pricing engine.

Every table resolves unknown or missing codes to an explicit fallback so a
half-filled form still prices: additive tables fall back to 0, multiplier
tables to their ``standard`` entry, base-price tables to a named default code.
"""
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


class RateTable:
    """Read-only code -> number mapping with an explicit fallback."""

    def __init__(self, name: str, rates: Mapping[str, float], fallback_code: Optional[str] = None,
                 neutral: float = 0.0):
        if fallback_code is not None and fallback_code not in rates:
            raise ValueError(f"{name}: fallback code {fallback_code!r} missing from table")
        self.name = name
        self.rates = MappingProxyType(dict(rates))
        self.fallback_code = fallback_code
        self.neutral = neutral

    def lookup(self, code: Optional[str]) -> float:
        if code is not None and code in self.rates:
            return self.rates[code]
        if self.fallback_code is not None:
            return self.rates[self.fallback_code]
        return self.neutral

    def total(self, codes: Optional[Iterable[str]]) -> float:
        return sum(self.lookup(c) for c in (codes or ()))

    def __contains__(self, code: str) -> bool:
        return code in self.rates

    def __repr__(self) -> str:
        return f"RateTable({self.name!r}, {len(self.rates)} codes)"


PRODUCT_BASE_PRICE = RateTable(
    "product_base_price",
    {
        "business-card": 2000,
        "flyer": 5000,
        "brochure": 10000,
        "poster": 8000,
        "booklet": 15000,
        "postcard": 3000,
        "stationery": 4000,
        "other": 10000,
    },
    fallback_code="other",
)

PAPER_MULTIPLIER = RateTable(
    "paper_multiplier",
    {
        "standard": 1.0,
        "premium": 1.5,
        "recycled": 1.2,
        "glossy": 1.3,
        "matte": 1.2,
        "textured": 1.6,
        "eco-friendly": 1.3,
        "fsc-certified": 1.4,
    },
    fallback_code="standard",
)

COLOR_MODIFIER = RateTable(
    "color_modifier",
    {
        "black-and-white": 0,
        "full-color-one-side": 3000,
        "full-color-both-sides": 5000,
        "spot-color": 2000,
        "pantone": 4000,
        "vegetable-ink": 2500,
    },
)

FINISHING_PRICE = RateTable(
    "finishing_price",
    {
        "none": 0,
        "folding": 1000,
        "binding": 3000,
        "lamination": 2000,
        "die-cutting": 5000,
        "embossing": 4000,
        "foil-stamping": 3500,
        "uv-coating": 2500,
        "eco-varnish": 2000,
    },
)

BINDING_BASE_PRICE = RateTable(
    "binding_base_price",
    {
        "staple": 1500,
        "saddle-stitch": 2000,
        "spiral": 2500,
        "perfect": 3000,
        "hardcover": 8000,
        "case-bound": 10000,
    },
    fallback_code="perfect",
)

DELIVERY_SPEED_MULTIPLIER = RateTable(
    "delivery_speed_multiplier",
    {
        "standard": 1.0,
        "express": 1.8,
        "same-day": 2.5,
        "international": 3.0,
    },
    fallback_code="standard",
)

CERTIFICATION_PRICE = RateTable(
    "certification_price",
    {
        "fsc": 2000,
        "pefc": 2000,
        "carbon-neutral": 3000,
        "rainforest-alliance": 2500,
        "nordic-swan": 2500,
    },
)

# (minimum quantity, discount rate), ascending in both
QUANTITY_DISCOUNTS: Tuple[Tuple[int, float], ...] = (
    (100, 0.0),
    (250, 0.05),
    (500, 0.10),
    (1000, 0.15),
    (2500, 0.20),
    (5000, 0.25),
)

DEFAULT_BINDING_TYPE = "perfect"
DEFAULT_COVER_TYPE = "standard"
DEFAULT_DELIVERY_SPEED = "standard"

HARDCOVER_SURCHARGE = 5000
PREMIUM_COVER_SURCHARGE = 3000
CARBON_OFFSET_SURCHARGE = 3000
ECO_MATERIAL_MULTIPLIER = 1.2
PAGE_BLOCK = 50
PAGE_BLOCK_SURCHARGE = 0.1
LOGISTICS_BASE = 5000
LOGISTICS_PER_KG = 100
