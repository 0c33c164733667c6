"""Service and stylist catalogs with name lookups."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from booking_form.schemas.booking_schema import ANY_STYLIST
from booking_form.schemas.catalog_schema import Service, Stylist

logger = logging.getLogger(__name__)

SERVICE_CATALOG: dict[str, dict[str, str]] = {
    "haircut": {"name": "Haircut", "price": "$25", "duration": "30 min"},
    "beard-trim": {"name": "Beard Trim", "price": "$15", "duration": "20 min"},
    "shave": {"name": "Classic Shave", "price": "$20", "duration": "25 min"},
    "haircut-beard": {"name": "Haircut + Beard Package", "price": "$35", "duration": "45 min"},
    "deluxe-package": {"name": "Deluxe Package", "price": "$50", "duration": "60 min"},
}

STYLIST_CATALOG: dict[str, str] = {
    ANY_STYLIST: "Any Available Stylist",
    "john": "John Smith - Senior Barber",
    "mike": "Mike Johnson - Master Stylist",
    "alex": "Alex Brown - Traditional Barber",
}


def _default_services() -> list[Service]:
    return [Service(id=sid, **info) for sid, info in SERVICE_CATALOG.items()]


def _default_stylists() -> list[Stylist]:
    return [Stylist(id=sid, name=name) for sid, name in STYLIST_CATALOG.items()]


@dataclass(frozen=True)
class Catalog:
    """Immutable set of services and stylists offered by the shop.

    Passed into the form and the submitter so tests can swap in their own.
    """

    services: list[Service] = field(default_factory=_default_services)
    stylists: list[Stylist] = field(default_factory=_default_stylists)

    def get_service(self, service_id: str) -> Optional[Service]:
        for service in self.services:
            if service.id == service_id:
                return service
        return None

    def get_stylist(self, stylist_id: str) -> Optional[Stylist]:
        for stylist in self.stylists:
            if stylist.id == stylist_id:
                return stylist
        return None

    def service_name(self, service_id: str) -> str:
        """Display name for a service, falling back to the raw id."""
        service = self.get_service(service_id)
        if service is None:
            logger.debug("Unknown service id '%s'", service_id)
            return service_id
        return service.name

    def stylist_name(self, stylist_id: str) -> str:
        """Display name for a stylist; an unset stylist means ``any``."""
        stylist = self.get_stylist(stylist_id or ANY_STYLIST)
        if stylist is None:
            logger.debug("Unknown stylist id '%s'", stylist_id)
            return stylist_id
        return stylist.name


DEFAULT_CATALOG = Catalog()
