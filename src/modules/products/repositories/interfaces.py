"""Product repository interface.

Extends ``IRepository[Product]`` with the filtered listings the catalog
exposes (by category, active only).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list_by_category(self, category: str) -> List["Product"]:
        """Active products whose category equals ``category`` (case-sensitive)."""

    @abstractmethod
    def list_active(self) -> List["Product"]:
        """All active products, name ascending."""
