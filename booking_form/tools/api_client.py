"""
HTTP client for the booking backend.

Two endpoints are used: the availability lookup for a date and booking
creation. Every failure (transport error, non-2xx status, malformed body
or an explicit ``success: false``) is raised as ``BookingApiError`` so the
callers have one thing to catch.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from booking_form.schemas.booking_schema import (
    AvailabilityResponse,
    BookedSlot,
    BookingRequest,
    CreateBookingResponse,
)


class BookingApiError(Exception):
    """Raised when the booking backend cannot be reached or rejects a call.

    ``message`` is the backend-provided message when the response carried
    one, otherwise ``None``.
    """

    def __init__(
        self,
        detail: str,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(detail)
        self.message = message
        self.status_code = status_code


def _extract_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class BookingApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> BookingApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self._logger.warning("Request %s %s failed: %s", method, url, e)
            raise BookingApiError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            message = _extract_message(response)
            self._logger.warning(
                "Request %s %s returned %s", method, url, response.status_code,
            )
            raise BookingApiError(
                f"{method} {url} returned {response.status_code}",
                message=message,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise BookingApiError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    async def get_booked_slots(self, day: date) -> list[BookedSlot]:
        """Return the (time, stylist) pairs already booked on ``day``."""
        body = await self._request("GET", f"/bookings/availability/{day.isoformat()}")
        try:
            availability = AvailabilityResponse.model_validate(body or {})
        except ValidationError as e:
            raise BookingApiError(f"Malformed availability response: {e}") from e
        self._logger.debug(
            "%d booked slot(s) on %s", len(availability.booked_slots), day.isoformat(),
        )
        return availability.booked_slots

    async def create_booking(self, request: BookingRequest) -> str:
        """Create a booking and return the backend's booking id."""
        body = await self._request("POST", "/bookings", json=request.model_dump())
        try:
            created = CreateBookingResponse.model_validate(body or {})
        except ValidationError as e:
            raise BookingApiError(f"Malformed booking response: {e}") from e

        if not created.success or created.data is None:
            raise BookingApiError("Booking was not accepted", message=created.message)

        self._logger.info(
            "Booking created: %s on %s at %s",
            created.data.booking_id, request.date, request.time,
        )
        return created.data.booking_id
