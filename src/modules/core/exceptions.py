"""Shared domain exceptions and the DRF exception handler.

Domain modules subclass these so the API layer can tell the three error
classes apart:

- ``ValidationFailed``: input broke field constraints (client error, 400).
- ``NotFoundError``: the referenced record does not exist or is inactive (404).
- ``StorageError``: the persistence layer failed (500). The only class that
  is logged as a server fault.

``envelope_exception_handler`` is wired as DRF's ``EXCEPTION_HANDLER`` so that
framework-raised errors (malformed JSON, authentication, unknown routes,
wrong method) leave the API in the same envelope shape as domain errors.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for errors raised by the service and repository layers."""


class NotFoundError(DomainError):
    """The requested record does not exist or has been soft-deleted."""


class ValidationFailed(DomainError):
    """Input failed field-level validation.

    ``errors`` maps each offending field to its list of messages.
    """

    def __init__(
        self, errors: Dict[str, List[str]], message: str = "Validation failed"
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class StorageError(DomainError):
    """The persistence layer failed (connectivity, constraint violation, ...).

    The original database exception is kept as ``__cause__``.
    """


# ---------------------------------------------------------------------------
# DRF integration
# ---------------------------------------------------------------------------


_FORWARDED_HEADERS = ("WWW-Authenticate", "Allow", "Retry-After")


def _flatten_detail(detail: Any) -> Dict[str, List[str]]:
    if isinstance(detail, dict):
        return {
            str(field): [str(msg) for msg in (msgs if isinstance(msgs, list) else [msgs])]
            for field, msgs in detail.items()
        }
    if isinstance(detail, list):
        return {"non_field_errors": [str(msg) for msg in detail]}
    return {}


def envelope_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """Wrap DRF's default error response in the standard envelope.

    Returns ``None`` for exceptions DRF does not handle, so Django's own
    500 handling (and logging) still applies to genuine bugs.
    """
    from modules.core.responses import error, validation_error

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        wrapped = validation_error(_flatten_detail(exc.detail))
    else:
        detail = getattr(exc, "detail", None)
        if isinstance(detail, dict):
            # simplejwt nests the human readable text under "detail"
            detail = detail.get("detail", detail)
        message = str(detail) if detail is not None else "Request failed"
        wrapped = error(message, response.status_code)
        # Codes outside the envelope's mapping (405, 415, 429, ...) keep
        # the status DRF chose.
        wrapped.status_code = response.status_code

    for header in _FORWARDED_HEADERS:
        if header in response:
            wrapped[header] = response[header]

    logger.info(
        "api.request_rejected",
        status_code=wrapped.status_code,
        error_type=type(exc).__name__,
    )
    return wrapped
