"""Correlation ID logging context for tracing one booking form session.

Provides a form_id-aware logger that attaches a correlation ID to every
log message, so slot refreshes and submissions made from the same form
can be followed through the logs.

Usage:
    from booking_form.logging_context import form_log_context, get_form_logger

    logger = get_form_logger(__name__)
    with form_log_context("FORM-abc123"):
        logger.info("Refreshing slots")  # record.form_id == "FORM-abc123"
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_form_id: ContextVar[str] = ContextVar("form_id", default="NO_FORM_ID")


def new_form_id() -> str:
    """Generate a fresh correlation ID for a form session."""
    return f"FORM-{uuid.uuid4().hex[:8]}"


def get_form_id() -> str:
    """Retrieve the current correlation ID."""
    return _form_id.get()


@contextmanager
def form_log_context(form_id: str) -> Iterator[str]:
    """Tag log records with ``form_id`` for the duration of the block.

    The previous ID is restored on exit, so a form handler awaited from
    another form's context doesn't leave its ID behind.
    """
    token = _form_id.set(form_id)
    try:
        yield form_id
    finally:
        _form_id.reset(token)


class FormIdFilter(logging.Filter):
    """Injects form_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.form_id = _form_id.get()  # type: ignore[attr-defined]
        return True


def get_form_logger(name: str) -> logging.Logger:
    """Return a logger with the FormIdFilter attached.

    The filter adds ``form_id`` to each record so formatters can
    include ``%(form_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, FormIdFilter) for f in logger.filters):
        logger.addFilter(FormIdFilter())
    return logger
