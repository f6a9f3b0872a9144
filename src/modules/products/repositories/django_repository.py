"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
or ``False`` instead of raising for missing rows; the Service Layer
decides how to translate absence into an API response.

Every read path applies ``.active()`` explicitly. Database failures are
re-raised as ``StorageError`` so callers never depend on Django's
exception types.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, List, Optional, TypeVar

import structlog
from django.db import DatabaseError, transaction

from modules.core.exceptions import StorageError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

R = TypeVar("R")


def _storage_guard(method: Callable[..., R]) -> Callable[..., R]:
    """Run ``method`` atomically and translate DB failures to ``StorageError``."""

    @wraps(method)
    def wrapper(*args, **kwargs) -> R:
        try:
            with transaction.atomic():
                return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(
                "product.storage_error",
                operation=method.__name__,
                error=str(exc),
            )
            raise StorageError(f"Product storage failed during {method.__name__}.") from exc

    return wrapper


def _coerce_id(id: object) -> Optional[int]:
    try:
        return int(id)
    except (TypeError, ValueError):
        return None


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Reads (active records only)
    # ------------------------------------------------------------------

    @_storage_guard
    def list(self) -> List[Product]:
        """All active products ordered by name ascending."""
        return list(Product.objects.active().order_by("name", "id"))

    @_storage_guard
    def list_active(self) -> List[Product]:
        return list(Product.objects.active().order_by("name", "id"))

    @_storage_guard
    def list_by_category(self, category: str) -> List[Product]:
        """Exact, case-sensitive category match."""
        return list(
            Product.objects.active().filter(category=category).order_by("name", "id")
        )

    @_storage_guard
    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve an active product by primary key.

        Returns ``None`` for non-existent, inactive or non-integer IDs.
        """
        pk = _coerce_id(id)
        if pk is None:
            return None
        return Product.objects.active().filter(id=pk).first()

    @_storage_guard
    def exists(self, id: int) -> bool:
        pk = _coerce_id(id)
        if pk is None:
            return False
        return Product.objects.active().filter(id=pk).exists()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @_storage_guard
    def create(self, entity: Product) -> Product:
        """Insert a new product; the DB assigns id and timestamps."""
        entity.is_active = True
        entity.save(force_insert=True)
        entity.refresh_from_db()
        logger.info("product.saved", product_id=entity.id, created=True)
        return entity

    @_storage_guard
    def update(self, entity: Product) -> Product:
        """Overwrite every mutable column and refresh ``updated_at``."""
        entity.save(
            update_fields=["name", "description", "price", "quantity", "category"]
        )
        entity.refresh_from_db()
        logger.info("product.saved", product_id=entity.id, created=False)
        return entity

    @_storage_guard
    def delete(self, id: int) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if an active product was flipped to inactive,
        ``False`` if it is absent or already inactive.
        """
        pk = _coerce_id(id)
        if pk is None:
            return False
        product = Product.objects.filter(id=pk).first()
        if product is None:
            return False
        return product.deactivate()
