"""Shared test fixtures and helpers."""

import asyncio
import json
from datetime import date
from typing import Any, Optional

import httpx
import pytest

from booking_form.config import BookingRules, BusinessHours
from booking_form.form.booking_form import BookingForm
from booking_form.form.state_machine import FormStateMachine
from booking_form.schemas.booking_schema import CustomerDetails
from booking_form.schemas.form_schema import FormSelection
from booking_form.tools.api_client import BookingApiClient
from booking_form.tools.catalog import Catalog

BASE_URL = "http://testserver/api"
TODAY = date(2025, 3, 10)


class FakeBackend:
    """In-memory booking API served through httpx.MockTransport.

    Tests tweak the public attributes to script responses; every request
    seen is kept in ``requests``.
    """

    def __init__(self) -> None:
        self.booked_slots: list[dict[str, str]] = []
        self.booked_by_date: dict[str, list[dict[str, str]]] = {}
        self.availability_status = 200
        self.availability_body: Optional[Any] = None
        self.availability_offline = False
        self.booking_status = 201
        self.booking_body: Any = {"success": True, "data": {"bookingId": "BK-1001"}}
        self.booking_offline = False
        self.gates: dict[str, asyncio.Event] = {}
        self.entered: dict[str, asyncio.Event] = {}
        self.booking_gate: Optional[asyncio.Event] = None
        self.booking_entered = asyncio.Event()
        self.requests: list[httpx.Request] = []

    @property
    def availability_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def posted_bookings(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    def hold(self, day: str) -> None:
        """Make availability for ``day`` block until ``release(day)``."""
        self.gates[day] = asyncio.Event()
        self.entered[day] = asyncio.Event()

    def release(self, day: str) -> None:
        self.gates[day].set()

    def hold_bookings(self) -> None:
        """Make ``POST /bookings`` block until ``release_bookings()``."""
        self.booking_gate = asyncio.Event()

    def release_bookings(self) -> None:
        self.booking_gate.set()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.startswith("/api/bookings/availability/"):
            day = path.rsplit("/", 1)[-1]
            if day in self.gates:
                self.entered[day].set()
                await self.gates[day].wait()
            if self.availability_offline:
                raise httpx.ConnectError("Connection refused", request=request)
            if self.availability_body is not None:
                return httpx.Response(self.availability_status, json=self.availability_body)
            booked = self.booked_by_date.get(day, self.booked_slots)
            return httpx.Response(self.availability_status, json={"bookedSlots": booked})

        if request.method == "POST" and path == "/api/bookings":
            self.booking_entered.set()
            if self.booking_gate is not None:
                await self.booking_gate.wait()
            if self.booking_offline:
                raise httpx.ConnectError("Connection refused", request=request)
            return httpx.Response(self.booking_status, json=self.booking_body)

        return httpx.Response(404, json={"message": "Not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    return BookingApiClient(BASE_URL, timeout=5.0, transport=backend.transport())


@pytest.fixture
def hours():
    return BusinessHours(open_hour=9, close_hour=18, slot_minutes=30)


@pytest.fixture
def rules(hours):
    return BookingRules(hours=hours, horizon_months=3, fail_open=True)


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def form(client, catalog, rules):
    return BookingForm(client, catalog=catalog, rules=rules, today=lambda: TODAY)


@pytest.fixture
def state_machine():
    return FormStateMachine()


def make_selection(
    day: Optional[date] = date(2025, 3, 18),
    time: str = "10:00",
    service: str = "haircut",
    stylist: str = "john",
    name: str = "John Smith",
    phone: str = "0412345678",
    email: str = "",
    whatsapp: str = "",
) -> FormSelection:
    """Helper to create a FormSelection with sensible defaults."""
    return FormSelection(
        date=day,
        time=time,
        service=service,
        stylist=stylist,
        customer=CustomerDetails(name=name, phone=phone, email=email, whatsapp=whatsapp),
    )


async def fill_form(form: BookingForm, day: date = date(2025, 3, 18), stylist: str = "john") -> None:
    """Drive a form through a complete, valid selection."""
    await form.select_date(day)
    await form.select_stylist(stylist)
    form.select_time("10:00")
    form.select_service("haircut")
    form.update_customer("name", "John Smith")
    form.update_customer("phone", "0412345678")
    form.update_customer("email", "john@example.com")
