"""
Slot availability resolver.

Generates every slot in business hours for a date and marks the ones
already booked for the selected stylist as unavailable. The backend stays
the final arbiter of conflicts at submission time.
"""

import logging
from datetime import date
from enum import Enum

from booking_form.config import BusinessHours
from booking_form.logging_context import get_form_logger
from booking_form.schemas.booking_schema import ANY_STYLIST, BookedSlot, TimeSlot
from booking_form.tools.api_client import BookingApiClient, BookingApiError
from booking_form.utils import format_slot_time

logger = get_form_logger(__name__)


class AvailabilityFailurePolicy(str, Enum):
    """What the resolver does when the availability lookup fails."""

    FAIL_OPEN = "fail_open"  # every slot available, failure logged
    RAISE = "raise"


def generate_slot_times(hours: BusinessHours) -> list[str]:
    """All slot start times from ``open_hour`` inclusive to ``close_hour`` exclusive."""
    return [
        format_slot_time(hour, minute)
        for hour in range(hours.open_hour, hours.close_hour)
        for minute in range(0, 60, hours.slot_minutes)
    ]


def stylist_matches(stylist_filter: str, booked_stylist: str) -> bool:
    """An empty or ``any`` filter matches every stylist; otherwise exact match."""
    if not stylist_filter or stylist_filter == ANY_STYLIST:
        return True
    return stylist_filter == booked_stylist


def mark_availability(
    times: list[str], booked: list[BookedSlot], stylist_filter: str
) -> list[TimeSlot]:
    """Flag each time unavailable iff a booking at that time matches the filter."""
    taken = {b.time for b in booked if stylist_matches(stylist_filter, b.stylist)}
    return [TimeSlot(time=t, available=t not in taken) for t in times]


async def resolve_slots(
    day: date,
    stylist_filter: str,
    client: BookingApiClient,
    hours: BusinessHours,
    on_failure: AvailabilityFailurePolicy = AvailabilityFailurePolicy.FAIL_OPEN,
) -> list[TimeSlot]:
    """
    Resolve bookable slots for ``day`` filtered by stylist.

    Args:
        day: Date to resolve.
        stylist_filter: Stylist id, ``"any"`` or ``""`` for no preference.
        client: Booking backend client used for the one availability read.
        hours: Business hours the slots are generated from.
        on_failure: Degradation policy when the lookup fails.

    Returns:
        One TimeSlot per generated time, in chronological order.

    Raises:
        BookingApiError: Only when ``on_failure`` is ``RAISE``.
    """
    times = generate_slot_times(hours)

    try:
        booked = await client.get_booked_slots(day)
    except BookingApiError as e:
        if on_failure == AvailabilityFailurePolicy.RAISE:
            raise
        logger.warning(
            "Availability lookup for %s failed, assuming all %d slots free: %s",
            day.isoformat(), len(times), e,
        )
        return [TimeSlot(time=t, available=True) for t in times]

    slots = mark_availability(times, booked, stylist_filter)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resolved %d/%d free slots on %s for stylist '%s'",
            sum(s.available for s in slots), len(slots), day.isoformat(), stylist_filter or ANY_STYLIST,
        )
    return slots
