from typing import Any, Dict, List

from print_quote.models.quote import ServiceType, Specification
from print_quote.services import rates

PRINTED_SERVICES = {ServiceType.PRINTING, ServiceType.ECO_PRINTING}


class SpecValidator:
    """Required-field checks the quote form runs before asking for a price.

    Rules:
    - product type required for every service except logistics
    - size, paper type and print colors required for printed services
    - quantity < 1 -> invalid_quantity
    - binding requires a binding type, logistics a positive weight
    - unknown finishing codes are reported as ``unknown_finishing:<code>`` but do not
      invalidate the spec (the engine prices them at 0)

    Deterministic: issues are returned sorted.
    """

    WARNING_PREFIXES = ("unknown_finishing:",)

    def _add_issue(self, issues: List[str], issue: str) -> None:
        if issue not in issues:
            issues.append(issue)

    def validate(self, spec: Specification) -> Dict[str, Any]:
        issues: List[str] = []
        service = spec.service_type

        if service != ServiceType.LOGISTICS and not spec.product_type:
            self._add_issue(issues, "missing_product_type")

        if spec.quantity < 1:
            self._add_issue(issues, "invalid_quantity")

        if service in PRINTED_SERVICES:
            if not spec.size:
                self._add_issue(issues, "missing_size")
            if not spec.paper_type:
                self._add_issue(issues, "missing_paper_type")
            if not spec.print_colors:
                self._add_issue(issues, "missing_print_colors")

        if service == ServiceType.BINDING and not spec.binding_type:
            self._add_issue(issues, "missing_binding_type")

        if service == ServiceType.LOGISTICS and (spec.weight is None or spec.weight <= 0):
            self._add_issue(issues, "invalid_weight")

        for f in spec.finishing or []:
            if f not in rates.FINISHING_PRICE:
                self._add_issue(issues, f"unknown_finishing:{f}")

        blocking = [i for i in issues if not i.startswith(self.WARNING_PREFIXES)]
        decision = "invalid" if blocking else "valid"

        return {"decision": decision, "issues": sorted(issues)}
