"""
Booking submitter.

Checks the required fields locally, builds the request, sends it once and
turns the backend's answer into a BookingOutcome. Nothing here retries;
the customer resubmits by hand.
"""

from booking_form.logging_context import get_form_logger
from booking_form.schemas.booking_schema import (
    ANY_STYLIST,
    BookingConfirmation,
    BookingError,
    BookingErrorKind,
    BookingOutcome,
    BookingRequest,
)
from booking_form.schemas.form_schema import FormSelection
from booking_form.tools.api_client import BookingApiClient, BookingApiError
from booking_form.tools.catalog import Catalog
from booking_form.utils import is_blank

logger = get_form_logger(__name__)

VALIDATION_MESSAGE = "Please fill in all required fields"
CONNECTIVITY_MESSAGE = "Booking failed. Please check your internet connection and try again."


def missing_required_fields(selection: FormSelection) -> list[str]:
    """Names of the required fields that are still empty, in form order."""
    return [
        field_name
        for field_name, value in [
            ("date", selection.date.isoformat() if selection.date else ""),
            ("time", selection.time),
            ("service", selection.service),
            ("name", selection.customer.name),
            ("phone", selection.customer.phone),
        ]
        if is_blank(value)
    ]


def validation_error(missing: list[str]) -> BookingError:
    return BookingError(
        kind=BookingErrorKind.VALIDATION,
        message=f"{VALIDATION_MESSAGE}: {', '.join(missing)}.",
        missing_fields=missing,
    )


def build_request(selection: FormSelection) -> BookingRequest:
    """Snapshot the selection into an immutable request body."""
    if selection.date is None:
        raise ValueError("Cannot build a booking request without a date")
    return BookingRequest(
        date=selection.date.isoformat(),
        time=selection.time,
        service=selection.service,
        stylist=selection.stylist or ANY_STYLIST,
        customer=selection.customer.model_copy(),
    )


def submission_error(error: BookingApiError) -> BookingError:
    """Most specific user-facing message available for a failed submission."""
    if error.message:
        message = f"Booking failed: {error.message}"
    else:
        message = CONNECTIVITY_MESSAGE
    return BookingError(kind=BookingErrorKind.SUBMISSION, message=message)


async def submit_booking(
    selection: FormSelection,
    client: BookingApiClient,
    catalog: Catalog,
) -> BookingOutcome:
    """Validate, send and interpret one booking submission."""
    missing = missing_required_fields(selection)
    if missing:
        logger.info("Submission blocked, missing fields: %s", ", ".join(missing))
        return BookingOutcome.failed(validation_error(missing))

    request = build_request(selection)
    try:
        booking_id = await client.create_booking(request)
    except BookingApiError as e:
        logger.error("Booking failed: %s", e)
        return BookingOutcome.failed(submission_error(e))

    return BookingOutcome.confirmed(
        BookingConfirmation(
            booking_id=booking_id,
            date=request.date,
            time=request.time,
            service_name=catalog.service_name(request.service),
            stylist_name=catalog.stylist_name(request.stylist),
            customer_name=request.customer.name,
        )
    )
