"""
Stateful booking form driven by UI events.

Owns the customer's selection, the resolved slots for the selected date
and stylist, and the SELECTING/CONFIRMED view state. Date and stylist
changes refresh the slots; submit hands the selection to the submitter.

Usage:
    async with BookingApiClient(settings.api.base_url) as client:
        form = BookingForm(client)
        await form.select_date(date(2025, 3, 18))
        form.select_time("10:00")
        form.select_service("haircut")
        form.update_customer("name", "John Smith")
        form.update_customer("phone", "0412345678")
        outcome = await form.submit()
"""

from datetime import date
from typing import Callable, Optional

from booking_form.config import BookingRules, settings
from booking_form.form.state_machine import (
    FormState,
    FormStateMachine,
    FormTrigger,
    InvalidTransitionError,
)
from booking_form.logging_context import form_log_context, get_form_logger, new_form_id
from booking_form.schemas.booking_schema import (
    BookingConfirmation,
    BookingError,
    BookingErrorKind,
    BookingOutcome,
    TimeSlot,
)
from booking_form.schemas.form_schema import FormSelection
from booking_form.tools.api_client import BookingApiClient
from booking_form.tools.availability import AvailabilityFailurePolicy, resolve_slots
from booking_form.tools.booking import missing_required_fields, submit_booking
from booking_form.tools.catalog import DEFAULT_CATALOG, Catalog
from booking_form.utils import add_months

logger = get_form_logger(__name__)

SUBMIT_IN_PROGRESS_MESSAGE = "A booking is already being submitted. Please wait."


class DateOutOfRangeError(ValueError):
    """Raised when a date falls outside the booking window."""


class UnknownSelectionError(ValueError):
    """Raised for a service, stylist or customer field the form doesn't know."""


class SlotUnavailableError(ValueError):
    """Raised when picking a time that isn't a currently free slot."""


class BookingForm:
    """
    Headless rendition of the appointment booking page.

    Slot refreshes are last-request-wins: each refresh takes a token and a
    response that arrives after a newer refresh started is discarded.
    """

    CUSTOMER_FIELDS = ("name", "phone", "email", "whatsapp")

    def __init__(
        self,
        client: BookingApiClient,
        catalog: Catalog = DEFAULT_CATALOG,
        rules: Optional[BookingRules] = None,
        today: Callable[[], date] = date.today,
        form_id: Optional[str] = None,
    ) -> None:
        self._client = client
        self.catalog = catalog
        self.rules = rules or settings.rules
        self._today = today
        self.form_id = form_id or new_form_id()
        self._sm = FormStateMachine()
        self._slot_token = 0
        self._submitting = False

        self.selection = FormSelection()
        self.slots: list[TimeSlot] = []
        self.confirmation: Optional[BookingConfirmation] = None
        self.last_error: Optional[BookingError] = None

    # --- View state ---

    @property
    def state(self) -> FormState:
        return self._sm.current_state

    @property
    def state_machine(self) -> FormStateMachine:
        return self._sm

    @property
    def min_date(self) -> date:
        return self._today()

    @property
    def max_date(self) -> date:
        return add_months(self._today(), self.rules.horizon_months)

    @property
    def failure_policy(self) -> AvailabilityFailurePolicy:
        if self.rules.fail_open:
            return AvailabilityFailurePolicy.FAIL_OPEN
        return AvailabilityFailurePolicy.RAISE

    @property
    def can_submit(self) -> bool:
        """Whether every required field is filled (the submit button rule)."""
        return not missing_required_fields(self.selection)

    def is_slot_available(self, time: str) -> bool:
        return any(slot.time == time and slot.available for slot in self.slots)

    def _require_selecting(self) -> None:
        if self._sm.current_state != FormState.SELECTING:
            raise InvalidTransitionError(
                f"Form is '{self._sm.current_state.value}'; reset it before editing."
            )

    # --- Selection events ---

    async def select_date(self, day: date) -> list[TimeSlot]:
        """
        Select a date inside the booking window and refresh its slots.

        The date is only taken once its slots resolve; if the lookup raises
        (``fail_open`` off) the previous date and slots stay in place.
        """
        with form_log_context(self.form_id):
            self._require_selecting()
            if not self.min_date <= day <= self.max_date:
                raise DateOutOfRangeError(
                    f"{day.isoformat()} is outside the booking window "
                    f"{self.min_date.isoformat()} to {self.max_date.isoformat()}"
                )
            if await self._load_slots(day, self.selection.stylist):
                self.selection.date = day
            return self.slots

    async def select_stylist(self, stylist_id: str) -> list[TimeSlot]:
        """Select a stylist (``""`` for no preference) and refresh slots."""
        with form_log_context(self.form_id):
            self._require_selecting()
            if stylist_id and self.catalog.get_stylist(stylist_id) is None:
                raise UnknownSelectionError(f"Unknown stylist: {stylist_id}")
            if self.selection.date is None:
                self.selection.stylist = stylist_id
                return self.slots
            if await self._load_slots(self.selection.date, stylist_id):
                self.selection.stylist = stylist_id
            return self.slots

    def select_time(self, time: str) -> None:
        self._require_selecting()
        if not self.is_slot_available(time):
            raise SlotUnavailableError(f"{time} is not an available slot")
        self.selection.time = time

    def select_service(self, service_id: str) -> None:
        self._require_selecting()
        if self.catalog.get_service(service_id) is None:
            raise UnknownSelectionError(f"Unknown service: {service_id}")
        self.selection.service = service_id

    def update_customer(self, field_name: str, value: str) -> None:
        self._require_selecting()
        if field_name not in self.CUSTOMER_FIELDS:
            raise UnknownSelectionError(f"Unknown customer field: {field_name}")
        setattr(self.selection.customer, field_name, value)

    async def refresh_slots(self) -> list[TimeSlot]:
        """Re-resolve slots for the current date and stylist."""
        with form_log_context(self.form_id):
            if self.selection.date is None:
                self.slots = []
            else:
                await self._load_slots(self.selection.date, self.selection.stylist)
            return self.slots

    async def _load_slots(self, day: date, stylist: str) -> bool:
        """
        Resolve slots for a candidate date and stylist.

        Returns False when a newer refresh started meanwhile and this
        response was dropped. Errors propagate with the form untouched.
        """
        self._slot_token += 1
        token = self._slot_token
        slots = await resolve_slots(
            day,
            stylist,
            self._client,
            self.rules.hours,
            on_failure=self.failure_policy,
        )
        if token != self._slot_token:
            logger.debug("Discarding stale slots for %s", day.isoformat())
            return False

        self.slots = slots
        if self.selection.time and not self.is_slot_available(self.selection.time):
            logger.info("Selected time %s is no longer available, clearing it", self.selection.time)
            self.selection.time = ""
        return True

    # --- Submission ---

    async def submit(self) -> BookingOutcome:
        """
        Submit the current selection.

        Success moves the form to CONFIRMED and stores the confirmation.
        Any failure keeps the form in SELECTING with every field intact
        and the error in ``last_error``. A submit made while another is
        still in flight is turned away without touching the network.
        """
        with form_log_context(self.form_id):
            self._require_selecting()
            if self._submitting:
                logger.info("Submission ignored, another is in flight")
                return BookingOutcome.failed(BookingError(
                    kind=BookingErrorKind.SUBMISSION,
                    message=SUBMIT_IN_PROGRESS_MESSAGE,
                ))

            self.last_error = None
            self._submitting = True
            try:
                outcome = await submit_booking(self.selection, self._client, self.catalog)
            finally:
                self._submitting = False

            if outcome.success:
                self.confirmation = outcome.confirmation
                self._sm.transition(FormTrigger.SUBMIT_SUCCEEDED)
                logger.info("Booking confirmed: %s", outcome.confirmation.booking_id)
            else:
                self.last_error = outcome.error
                self._sm.transition(FormTrigger.SUBMIT_FAILED)
            return outcome

    def reset(self) -> None:
        """Clear every field, drop the confirmation and return to SELECTING."""
        self._sm.transition(FormTrigger.RESET)
        self._slot_token += 1
        self.selection = FormSelection()
        self.slots = []
        self.confirmation = None
        self.last_error = None
        logger.debug("Form %s reset", self.form_id)
