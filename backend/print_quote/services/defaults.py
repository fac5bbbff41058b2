from typing import Optional

from print_quote.models.quote import ServiceType, Specification


def default_specification(service_type: ServiceType, custom_specs: Optional[str] = None) -> Specification:
    """Starting values the quote form shows for each service."""
    base = {
        "service_type": service_type,
        "product_type": "",
        "size": "",
        "quantity": 100,
        "paper_type": "standard",
        "print_colors": "black-and-white",
        "finishing": ["none"],
        "custom_specs": custom_specs or "",
    }

    if service_type == ServiceType.PRINTING:
        base.update(product_type="flyer", size="A4")
    elif service_type == ServiceType.BINDING:
        base.update(product_type="softcover-book", binding_type="perfect", page_count=50, cover_type="standard")
    elif service_type == ServiceType.LOGISTICS:
        base.update(
            product_type="other",
            weight=5,
            dimensions="30x20x10",
            delivery_speed="standard",
            delivery_address="",
        )
    elif service_type == ServiceType.ECO_PRINTING:
        base.update(
            product_type="flyer",
            size="A4",
            paper_type="recycled",
            eco_materials=["recycled-paper"],
            carbon_offset=False,
            certifications=[],
        )

    return Specification(**base)
