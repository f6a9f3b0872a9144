"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Every read method only sees *active* records; soft-deleted rows stay in
the table but are invisible through this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def list(self) -> List[T]:
        """List all active entities in the repository's natural order."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an active entity by its primary key, or ``None``."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Persist a new entity; the store assigns id and timestamps."""

    @abstractmethod
    def update(self, entity: T) -> T:
        """Overwrite all fields of an existing entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Soft-delete an entity.

        Returns ``False`` instead of raising when there is nothing active
        to delete.
        """

    @abstractmethod
    def exists(self, id: int) -> bool:
        """``True`` only if an active entity with ``id`` exists."""
