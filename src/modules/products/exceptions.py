"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
envelope responses.
"""

from __future__ import annotations

from typing import Dict, List

from modules.core.exceptions import NotFoundError, ValidationFailed


class ProductNotFound(NotFoundError):
    """The requested product does not exist or has been soft-deleted."""

    def __init__(self, product_id: object) -> None:
        super().__init__(f"Product with ID {product_id} not found.")
        self.product_id = product_id


class ProductValidationError(ValidationFailed):
    """Create/update input failed field validation."""

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        super().__init__(errors)
