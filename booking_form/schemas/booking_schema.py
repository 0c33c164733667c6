"""Booking, availability and outcome data models.

Field names follow Python conventions; the backend's camelCase keys are
mapped through aliases so payloads can be validated as they arrive.
"""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

ANY_STYLIST = "any"


class TimeSlot(BaseModel):
    """One generated slot and whether it can currently be booked."""
    time: str
    available: bool = True


class BookedSlot(BaseModel):
    """An already-booked (time, stylist) pair reported by the backend."""
    time: str
    stylist: str = ""

    @field_validator("stylist", mode="before")
    @classmethod
    def _stylist_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class AvailabilityResponse(BaseModel):
    """Body of ``GET /bookings/availability/{date}``."""
    model_config = ConfigDict(populate_by_name=True)

    booked_slots: list[BookedSlot] = Field(default_factory=list, alias="bookedSlots")

    @field_validator("booked_slots", mode="before")
    @classmethod
    def _keep_well_formed(cls, value: Any) -> Any:
        """Treat null as no bookings and drop entries that don't parse.

        A single odd entry must not fail the whole response, or the
        resolver would fail open and free slots that are really booked.
        """
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        kept = []
        for index, entry in enumerate(value):
            try:
                kept.append(BookedSlot.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping malformed booked slot %d: %s", index, e)
        return kept


class CustomerDetails(BaseModel):
    """Contact details entered on the form. Name and phone are required."""
    name: str = ""
    phone: str = ""
    email: str = ""
    whatsapp: str = ""


class BookingRequest(BaseModel):
    """Body of ``POST /bookings``. Built once per submission."""
    model_config = ConfigDict(frozen=True)

    date: str
    time: str
    service: str
    stylist: str = ANY_STYLIST
    customer: CustomerDetails


class BookingCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: str = Field(alias="bookingId")


class CreateBookingResponse(BaseModel):
    """Body returned by ``POST /bookings``."""
    success: bool = False
    data: Optional[BookingCreated] = None
    message: Optional[str] = None


class BookingConfirmation(BaseModel):
    """Summary shown once the backend accepts a booking."""
    booking_id: str
    date: str
    time: str
    service_name: str
    stylist_name: str
    customer_name: str

    def summary(self) -> str:
        return (
            "Booking confirmed!\n"
            f"  Booking ID: {self.booking_id}\n"
            f"  Date: {self.date}\n"
            f"  Time: {self.time}\n"
            f"  Service: {self.service_name}\n"
            f"  Stylist: {self.stylist_name}\n"
            f"  Customer: {self.customer_name}\n"
            "A confirmation message will be sent to your phone/email."
        )


class BookingErrorKind(str, Enum):
    VALIDATION = "validation"
    SUBMISSION = "submission"


class BookingError(BaseModel):
    """A user-facing failure. Validation errors never reach the network."""
    kind: BookingErrorKind
    message: str
    missing_fields: list[str] = Field(default_factory=list)


class BookingOutcome(BaseModel):
    """Result of a submission: exactly one of confirmation or error is set."""
    success: bool
    confirmation: Optional[BookingConfirmation] = None
    error: Optional[BookingError] = None

    @classmethod
    def confirmed(cls, confirmation: BookingConfirmation) -> "BookingOutcome":
        return cls(success=True, confirmation=confirmation)

    @classmethod
    def failed(cls, error: BookingError) -> "BookingOutcome":
        return cls(success=False, error=error)
