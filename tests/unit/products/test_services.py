"""Unit tests for ProductService.

Covers:
- create_product: happy path, validation before storage.
- update_product: happy path, not found, validation checked first.
- delete_product: happy path, not found, already deleted.
- get_product / list queries: delegation to repository.
- StorageError propagation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.core.exceptions import StorageError
from modules.products.dtos import ProductOutputDTO
from modules.products.exceptions import ProductNotFound, ProductValidationError
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


def _product(id: int = 1, **overrides) -> Product:
    """Unsaved Product that looks persisted (no DB access needed)."""
    defaults = {
        "name": "Widget",
        "description": "",
        "price": Decimal("9.99"),
        "quantity": 5,
        "category": "Tools",
        "is_active": True,
    }
    defaults.update(overrides)
    product = Product(id=id, **defaults)
    product.created_at = NOW
    product.updated_at = NOW
    return product


def _payload(**overrides) -> dict:
    data = {
        "name": "Widget",
        "description": "",
        "price": "9.99",
        "quantity": 5,
        "category": "Tools",
    }
    data.update(overrides)
    return data


def _persist(entity: Product) -> Product:
    entity.id = 1
    entity.created_at = NOW
    entity.updated_at = NOW
    return entity


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_success(self, service, mock_repo):
        mock_repo.create.side_effect = _persist

        result = service.create_product(_payload())

        assert isinstance(result, ProductOutputDTO)
        assert result.id == 1
        assert result.name == "Widget"
        assert result.price == Decimal("9.99")
        assert result.is_active is True
        mock_repo.create.assert_called_once()

    def test_passes_unsaved_active_entity(self, service, mock_repo):
        mock_repo.create.side_effect = _persist

        service.create_product(_payload(category="Books"))

        entity = mock_repo.create.call_args.args[0]
        assert isinstance(entity, Product)
        assert entity.category == "Books"
        assert entity.is_active is True

    def test_invalid_payload_never_touches_storage(self, service, mock_repo):
        with pytest.raises(ProductValidationError) as exc_info:
            service.create_product(_payload(name=""))

        assert "name" in exc_info.value.errors
        mock_repo.create.assert_not_called()

    def test_storage_error_propagates(self, service, mock_repo):
        mock_repo.create.side_effect = StorageError("down")

        with pytest.raises(StorageError):
            service.create_product(_payload())


# ===========================================================================
# update_product
# ===========================================================================


class TestUpdateProduct:
    def test_success_overwrites_fields(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _product(id=7)
        mock_repo.update.side_effect = lambda p: p

        result = service.update_product(
            7, _payload(name="Gadget", price="12.50", quantity=0, category="Toys")
        )

        assert result.id == 7
        assert result.name == "Gadget"
        assert result.price == Decimal("12.50")
        assert result.quantity == 0
        assert result.category == "Toys"
        mock_repo.get_by_id.assert_called_once_with(7)

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound) as exc_info:
            service.update_product(999, _payload())

        assert str(exc_info.value) == "Product with ID 999 not found."
        mock_repo.update.assert_not_called()

    def test_validation_checked_before_existence(self, service, mock_repo):
        with pytest.raises(ProductValidationError):
            service.update_product(999, _payload(price="-1"))

        mock_repo.get_by_id.assert_not_called()


# ===========================================================================
# delete_product
# ===========================================================================


class TestDeleteProduct:
    def test_success(self, service, mock_repo):
        mock_repo.exists.return_value = True
        mock_repo.delete.return_value = True

        assert service.delete_product(3) is None
        mock_repo.delete.assert_called_once_with(3)

    def test_not_found(self, service, mock_repo):
        mock_repo.exists.return_value = False

        with pytest.raises(ProductNotFound):
            service.delete_product(3)

        mock_repo.delete.assert_not_called()

    def test_lost_race_reports_not_found(self, service, mock_repo):
        mock_repo.exists.return_value = True
        mock_repo.delete.return_value = False

        with pytest.raises(ProductNotFound):
            service.delete_product(3)


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_product(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _product(id=4)

        result = service.get_product(4)

        assert result is not None
        assert result.id == 4

    def test_get_product_missing_returns_none(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        assert service.get_product(4) is None

    def test_list_products(self, service, mock_repo):
        mock_repo.list.return_value = [_product(id=1), _product(id=2, name="Zed")]

        result = service.list_products()

        assert [p.id for p in result] == [1, 2]
        assert all(isinstance(p, ProductOutputDTO) for p in result)

    def test_list_by_category(self, service, mock_repo):
        mock_repo.list_by_category.return_value = [_product(category="Books")]

        result = service.list_by_category("Books")

        assert result[0].category == "Books"
        mock_repo.list_by_category.assert_called_once_with("Books")

    def test_list_active(self, service, mock_repo):
        mock_repo.list_active.return_value = []

        assert service.list_active() == []
        mock_repo.list_active.assert_called_once_with()
