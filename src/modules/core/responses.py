"""Standard response envelope.

Every API response body has the same shape::

    {"success": bool, "message": str, "data": <payload or null>, "metadata": ...}

``metadata`` is only present when set. ``PaginatedResponse`` adds the page
bookkeeping fields. Keys are camelCase on the wire.

The builders below are pure formatting: they never touch storage and
only decide the HTTP status that goes with the envelope.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from rest_framework import status as http_status
from rest_framework.response import Response

T = TypeVar("T")

# Codes the envelope maps one-to-one to an HTTP status; anything else is a 400.
_ERROR_STATUS = {
    400: http_status.HTTP_400_BAD_REQUEST,
    401: http_status.HTTP_401_UNAUTHORIZED,
    403: http_status.HTTP_403_FORBIDDEN,
    404: http_status.HTTP_404_NOT_FOUND,
    500: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success/error wrapper."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    success: bool
    message: str = ""
    data: Optional[T] = None
    metadata: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        if payload.get("metadata") is None:
            payload.pop("metadata", None)
        return payload


class PaginatedResponse(ApiResponse[List[T]], Generic[T]):
    """Envelope for one page of a larger result set."""

    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


def _to_primitive(value: Any) -> Any:
    """Render DTOs (and containers of DTOs) into JSON-ready primitives."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Mapping):
        return {key: _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    return value


def success(
    data: Any,
    message: str = "Success",
    status: int = http_status.HTTP_200_OK,
    headers: Optional[Mapping[str, str]] = None,
    metadata: Any = None,
) -> Response:
    """Wrap ``data`` in a successful envelope."""
    envelope = ApiResponse[Any](
        success=True,
        message=message,
        data=_to_primitive(data),
        metadata=metadata,
    )
    return Response(envelope.to_payload(), status=status, headers=headers)


def error(message: str, code: int = 400) -> Response:
    """Build an error envelope; ``code`` outside 400/401/403/404/500 becomes 400."""
    envelope = ApiResponse[Any](success=False, message=message, data=None)
    return Response(
        envelope.to_payload(),
        status=_ERROR_STATUS.get(code, http_status.HTTP_400_BAD_REQUEST),
    )


def validation_error(
    field_errors: Mapping[str, Sequence[str]], message: str = "Validation failed"
) -> Response:
    """Build a 400 envelope carrying the field -> messages map as ``data``."""
    envelope = ApiResponse[Dict[str, List[str]]](
        success=False,
        message=message,
        data={field: list(messages) for field, messages in field_errors.items()},
    )
    return Response(envelope.to_payload(), status=http_status.HTTP_400_BAD_REQUEST)


def paginated(
    items: Sequence[Any],
    page_number: int,
    page_size: int,
    total_count: int,
    message: str = "Success",
) -> Response:
    """Wrap one page of ``items``, deriving the page counters."""
    if page_number < 1 or page_size < 1:
        raise ValueError("page_number and page_size must be positive.")

    total_pages = math.ceil(total_count / page_size) if total_count else 0
    envelope = PaginatedResponse[Any](
        success=True,
        message=message,
        data=_to_primitive(list(items)),
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        has_next_page=page_number < total_pages,
        has_previous_page=page_number > 1,
    )
    return Response(envelope.to_payload(), status=http_status.HTTP_200_OK)
