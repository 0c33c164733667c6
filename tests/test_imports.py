"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from booking_form.schemas.booking_schema import (
            ANY_STYLIST, BookingErrorKind, BookingRequest, TimeSlot,
        )
        assert ANY_STYLIST == "any"
        assert BookingErrorKind.VALIDATION == "validation"
        assert TimeSlot(time="09:00").available
        assert BookingRequest is not None

    def test_import_catalog_schema(self):
        from booking_form.schemas.catalog_schema import Service, Stylist
        assert Stylist(id="any", name="Any").id == "any"
        assert Service is not None

    def test_import_form_schema(self):
        from booking_form.schemas.form_schema import FormSelection
        selection = FormSelection()
        assert selection.date is None
        assert selection.customer.name == ""


class TestFormImports:
    def test_form_package_reexports(self):
        from booking_form.form import (
            BookingForm, FormState, FormStateMachine, FormTrigger, InvalidTransitionError,
        )
        assert FormStateMachine().current_state == FormState.SELECTING
        assert FormTrigger.RESET == "reset"
        assert issubclass(InvalidTransitionError, Exception)
        assert BookingForm.CUSTOMER_FIELDS == ("name", "phone", "email", "whatsapp")

    def test_form_errors_are_value_errors(self):
        from booking_form.form import (
            DateOutOfRangeError, SlotUnavailableError, UnknownSelectionError,
        )
        for exc in (DateOutOfRangeError, SlotUnavailableError, UnknownSelectionError):
            assert issubclass(exc, ValueError)


class TestToolImports:
    def test_import_tools(self):
        from booking_form.tools.api_client import BookingApiClient, BookingApiError
        from booking_form.tools.availability import AvailabilityFailurePolicy, resolve_slots
        from booking_form.tools.booking import submit_booking
        from booking_form.tools.catalog import DEFAULT_CATALOG

        assert AvailabilityFailurePolicy.FAIL_OPEN == "fail_open"
        assert callable(resolve_slots)
        assert callable(submit_booking)
        assert DEFAULT_CATALOG.services
        assert issubclass(BookingApiError, Exception)
        assert BookingApiClient is not None


class TestConfigImports:
    def test_settings_singleton(self):
        from booking_form.config import settings
        assert settings.rules.hours.open_hour < settings.rules.hours.close_hour
        assert settings.api.base_url.startswith("http")
