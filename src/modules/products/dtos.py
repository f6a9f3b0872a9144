"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for full product updates (same fields).
- ``ProductOutputDTO``: read shape with all product fields.

Translation to and from the ``Product`` model is written out field by
field (``to_entity``, ``apply_to``, ``from_entity``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from modules.products.exceptions import ProductValidationError
from modules.products.models import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    Product,
)

if TYPE_CHECKING:
    from typing import Self

NON_FIELD_ERRORS = "non_field_errors"

# Largest amount that fits DecimalField(max_digits=18, decimal_places=2).
_MAX_PRICE = Decimal("1e16")
_CENT = Decimal("0.01")
# Largest value PositiveIntegerField holds on every supported backend.
_MAX_QUANTITY = 2_147_483_647


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


def _collect_errors(exc: PydanticValidationError) -> Dict[str, List[str]]:
    """Turn pydantic's error list into a ``field -> [messages]`` map."""
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or NON_FIELD_ERRORS
        if err["type"] == "value_error":
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.setdefault(field, []).append(message)
    return errors


class ProductInputDTO(BaseModel):
    """Fields shared by the create and update shapes.

    Validates:
    - ``name`` is non-blank, at most 100 characters.
    - ``description`` at most 500 characters (``null`` is read as empty).
    - ``price`` is a non-negative amount with at most 2 decimal places.
    - ``quantity`` is a non-negative integer that fits the column.
    - ``category`` is non-blank, at most 50 characters.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    price: Decimal
    quantity: int
    category: str

    @classmethod
    def from_payload(cls, payload: Any) -> Self:
        """Validate a raw request body.

        Raises:
            ProductValidationError: with the field -> messages map.
        """
        if not isinstance(payload, Mapping):
            raise ProductValidationError(
                {NON_FIELD_ERRORS: ["Expected a JSON object."]}
            )
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as exc:
            raise ProductValidationError(_collect_errors(exc)) from exc

    @field_validator("name")
    @classmethod
    def name_must_be_valid(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required.")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters.")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("description")
    @classmethod
    def description_must_fit(cls, v: str) -> str:
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters."
            )
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_from_float_repr(cls, v: Any) -> Any:
        # JSON numbers arrive as floats; 9.99 must stay 9.99.
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_valid(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Price must be a finite number.")
        if v < 0:
            raise ValueError("Price cannot be negative.")
        if v >= _MAX_PRICE:
            raise ValueError("Price is too large.")
        if v != v.quantize(_CENT):
            raise ValueError("Price must have at most 2 decimal places.")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_rejects_booleans(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Quantity must be an integer.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_in_range(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity cannot be negative.")
        if v > _MAX_QUANTITY:
            raise ValueError("Quantity is too large.")
        return v

    @field_validator("category")
    @classmethod
    def category_must_be_valid(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Category is required.")
        if len(v) > CATEGORY_MAX_LENGTH:
            raise ValueError(
                f"Category must be at most {CATEGORY_MAX_LENGTH} characters."
            )
        return v


class CreateProductDTO(ProductInputDTO):
    """Immutable DTO for product creation requests."""

    def to_entity(self) -> Product:
        """Build an unsaved, active ``Product`` from this input."""
        return Product(
            name=self.name,
            description=self.description,
            price=self.price,
            quantity=self.quantity,
            category=self.category,
            is_active=True,
        )


class UpdateProductDTO(ProductInputDTO):
    """Immutable DTO for product update requests.

    Carries every mutable field; applying it overwrites all of them.
    """

    def apply_to(self, product: Product) -> Product:
        """Overwrite the mutable fields of ``product`` in place."""
        product.name = self.name
        product.description = self.description
        product.price = self.price
        product.quantity = self.quantity
        product.category = self.category
        return product


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses (camelCase on the wire)."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    description: str
    price: Decimal
    quantity: int
    category: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            category=product.category,
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
