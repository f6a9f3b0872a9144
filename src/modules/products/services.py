"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Rules enforced here:
- Input is validated before any storage call.
- Update and delete check for an active record before mutating.
- Soft-deleted products are invisible: reading, updating or deleting
  them again reports "not found".
- ``StorageError`` from the repository propagates unchanged; no retries.

The service holds no state besides its repository, so one instance can
serve concurrent requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

import structlog

from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound, ProductValidationError

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, payload: Any) -> ProductOutputDTO:
        """Validate ``payload`` and persist a new active product.

        Raises:
            ProductValidationError: with a field -> messages map.
        """
        dto = self._validate(CreateProductDTO, payload)
        product = self._repo.create(dto.to_entity())
        logger.info("product.created", product_id=product.id)
        return ProductOutputDTO.from_entity(product)

    def update_product(self, id: int, payload: Any) -> ProductOutputDTO:
        """Overwrite every mutable field of an active product.

        Raises:
            ProductValidationError: if ``payload`` is invalid (checked first).
            ProductNotFound: if no active product has this ``id``.
        """
        dto = self._validate(UpdateProductDTO, payload)

        product = self._repo.get_by_id(id)
        if product is None:
            raise ProductNotFound(id)

        product = self._repo.update(dto.apply_to(product))
        logger.info("product.updated", product_id=product.id)
        return ProductOutputDTO.from_entity(product)

    def delete_product(self, id: int) -> None:
        """Soft-delete an active product.

        Raises:
            ProductNotFound: if no active product has this ``id``; this
                includes a second delete of the same product.
        """
        if not self._repo.exists(id):
            raise ProductNotFound(id)
        if not self._repo.delete(id):
            # Deactivated by someone else between the check and the write.
            raise ProductNotFound(id)
        logger.info("product.soft_deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[ProductOutputDTO]:
        """All active products, name ascending."""
        return [ProductOutputDTO.from_entity(p) for p in self._repo.list()]

    def list_by_category(self, category: str) -> List[ProductOutputDTO]:
        """Active products in ``category`` (exact, case-sensitive match)."""
        return [
            ProductOutputDTO.from_entity(p)
            for p in self._repo.list_by_category(category)
        ]

    def list_active(self) -> List[ProductOutputDTO]:
        return [ProductOutputDTO.from_entity(p) for p in self._repo.list_active()]

    def get_product(self, id: int) -> Optional[ProductOutputDTO]:
        """Return the active product with ``id``, or ``None``.

        Absence is not an error here; callers decide how to surface it.
        """
        product = self._repo.get_by_id(id)
        if product is None:
            return None
        return ProductOutputDTO.from_entity(product)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(dto_cls, payload: Any):
        try:
            return dto_cls.from_payload(payload)
        except ProductValidationError as exc:
            logger.info("product.validation_failed", fields=sorted(exc.errors))
            raise
