import logging
import math
import time
import uuid
from typing import Callable, Dict, List, Optional

from print_quote.models.quote import Quote, ServiceType, Specification
from print_quote.services import rates

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return "".join(reversed(digits)) or "0"


def new_quote_id() -> str:
    """Time-derived quote id; the random tail keeps ids unique within one millisecond."""
    return f"Q-{_base36(int(time.time() * 1000))}{uuid.uuid4().hex[:6]}"


def _finishing(spec: Specification) -> List[str]:
    return list(spec.finishing or ["none"])


class PriceEngine:
    """Rule-based quote engine.

    Pure and synchronous: reads only the static tables in ``rates`` and the
    caller's specification, so one instance can be shared freely.
    """

    def __init__(self):
        self._calculators: Dict[ServiceType, Callable[[Specification], float]] = {
            ServiceType.PRINTING: self._price_printing,
            ServiceType.BINDING: self._price_binding,
            ServiceType.LOGISTICS: self._price_logistics,
            ServiceType.ECO_PRINTING: self._price_eco_printing,
            # no pricing rules exist for these two yet; they are billed as printing
            ServiceType.SDGS_CONSULTING: self._price_printing,
            ServiceType.SUSTAINABILITY_REPORT: self._price_printing,
        }

    # -- calculators (pre-discount, pre-rounding) --

    def _price_printing(self, spec: Specification) -> float:
        price = rates.PRODUCT_BASE_PRICE.lookup(spec.product_type) * rates.PAPER_MULTIPLIER.lookup(spec.paper_type)
        price += rates.COLOR_MODIFIER.lookup(spec.print_colors)
        price += rates.FINISHING_PRICE.total(_finishing(spec))
        # linear against a 100-unit baseline, never billed below 50 units
        return price * (max(50, spec.quantity) / 100)

    def _price_binding(self, spec: Specification) -> float:
        base = rates.BINDING_BASE_PRICE.lookup(spec.binding_type or rates.DEFAULT_BINDING_TYPE)
        pages = max(0, spec.page_count or 0)
        price = base + base * rates.PAGE_BLOCK_SURCHARGE * (pages // rates.PAGE_BLOCK)

        cover = spec.cover_type or rates.DEFAULT_COVER_TYPE
        if cover == "hardcover":
            price += rates.HARDCOVER_SURCHARGE
        elif cover == "premium":
            price += rates.PREMIUM_COVER_SURCHARGE

        price += rates.FINISHING_PRICE.total(_finishing(spec))
        return price * (max(10, spec.quantity) / 10)

    def _price_logistics(self, spec: Specification) -> float:
        weight = max(0.0, spec.weight or 0.0)
        speed = rates.DELIVERY_SPEED_MULTIPLIER.lookup(spec.delivery_speed or rates.DEFAULT_DELIVERY_SPEED)
        price = (rates.LOGISTICS_BASE + weight * rates.LOGISTICS_PER_KG) * speed
        # billed per started batch of 100 shipped units
        return price * max(1, math.ceil(spec.quantity / 100))

    def _price_eco_printing(self, spec: Specification) -> float:
        price = self._price_printing(spec)
        if spec.eco_materials:
            price *= rates.ECO_MATERIAL_MULTIPLIER
        if spec.carbon_offset:
            price += rates.CARBON_OFFSET_SURCHARGE
        price += rates.CERTIFICATION_PRICE.total(spec.certifications)
        return price

    # -- discount, turnaround, rounding --

    @staticmethod
    def quantity_discount(quantity: int) -> float:
        """Rate of the highest threshold not exceeding ``quantity``; 0.0 below the first one."""
        rate = 0.0
        for threshold, tier_rate in rates.QUANTITY_DISCOUNTS:
            if quantity >= threshold:
                rate = tier_rate
            else:
                break
        return rate

    @staticmethod
    def turnaround(spec: Specification) -> int:
        service = spec.service_type
        if service == ServiceType.PRINTING:
            days = {"business-card": 3, "booklet": 10}.get(spec.product_type, 5)
        elif service == ServiceType.BINDING:
            days = 7
            if spec.binding_type in ("hardcover", "case-bound"):
                days += 5
            if (spec.page_count or 0) > 200:
                days += 3
        elif service == ServiceType.LOGISTICS:
            days = {"express": 2, "same-day": 1, "international": 14}.get(spec.delivery_speed, 5)
        elif service == ServiceType.ECO_PRINTING:
            days = 7
            if spec.certifications:
                days += 2
        else:
            days = 5

        finishing = _finishing(spec)
        if "die-cutting" in finishing or "embossing" in finishing:
            days += 3
        elif any(f != "none" for f in finishing):
            days += 1

        if spec.quantity > 1000:
            days += 2
        return days

    @staticmethod
    def round_up(price: float) -> int:
        # round first so float noise (4200.0000000001) does not bump a whole step
        return int(math.ceil(round(price, 6) / 100) * 100)

    def raw_price(self, spec: Specification) -> float:
        calculator = self._calculators.get(spec.service_type, self._price_printing)
        return calculator(spec)

    def estimate(self, spec: Specification, quote_id: Optional[str] = None) -> Quote:
        raw = self.raw_price(spec)
        rate = self.quantity_discount(spec.quantity)
        discounted = raw - raw * rate
        price = self.round_up(discounted)
        days = self.turnaround(spec)

        logger.debug(
            "Priced service=%s product=%s qty=%s raw=%.2f rate=%s final=%s days=%s",
            spec.service_type.value, spec.product_type, spec.quantity, raw, rate, price, days,
        )
        return Quote(
            id=quote_id or new_quote_id(),
            specs=spec.model_copy(deep=True),
            price=price,
            turnaround=days,
            discount_applied=rate if rate > 0 else None,
        )


_default_engine = PriceEngine()


def compute_quote(spec: Specification) -> Quote:
    return _default_engine.estimate(spec)
