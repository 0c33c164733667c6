"""Per-form selection state."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from booking_form.schemas.booking_schema import CustomerDetails


@dataclass
class FormSelection:
    """
    Everything the customer has picked or typed so far.

    Mutated field-by-field by form events and replaced wholesale on reset.
    An empty ``stylist`` means no preference.
    """
    date: Optional[date] = None
    time: str = ""
    service: str = ""
    stylist: str = ""
    customer: CustomerDetails = field(default_factory=CustomerDetails)
