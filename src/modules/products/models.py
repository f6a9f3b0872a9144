"""Product model.

Business rules implemented:
- ``name`` and ``category`` are required; ``description`` may be empty.
- ``price`` is a non-negative currency amount (application + DB constraint).
- ``quantity`` cannot be negative (PositiveIntegerField).
- Soft delete via ``is_active`` (inherited from ActivatableModel).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import ActivatableModel

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 50


class Product(ActivatableModel):
    """Catalog product.

    ``id``, ``created_at`` and ``updated_at`` are assigned by the store;
    everything else is overwritten as a whole on update.
    """

    name = models.CharField(max_length=NAME_MAX_LENGTH)
    description = models.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, blank=True, default=""
    )
    price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=CATEGORY_MAX_LENGTH)

    class Meta:
        db_table = "products"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": "Name must not be blank."})
        if self.category is not None and not self.category.strip():
            raise ValidationError({"category": "Category must not be blank."})
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
