"""Service and stylist catalog models."""

from pydantic import BaseModel, ConfigDict


class Service(BaseModel):
    """A bookable service. Price and duration are display strings."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: str
    duration: str


class Stylist(BaseModel):
    """A stylist; the ``any`` id stands for no preference."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
