from booking_form.form.booking_form import (
    BookingForm,
    DateOutOfRangeError,
    SlotUnavailableError,
    UnknownSelectionError,
)
from booking_form.form.state_machine import (
    FormState,
    FormStateMachine,
    FormTrigger,
    InvalidTransitionError,
)

__all__ = [
    "BookingForm",
    "DateOutOfRangeError",
    "SlotUnavailableError",
    "UnknownSelectionError",
    "FormStateMachine",
    "FormState",
    "FormTrigger",
    "InvalidTransitionError",
]
