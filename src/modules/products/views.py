"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet. Each action
is one service call followed by one envelope builder call; domain
exceptions are caught and translated into envelope responses.
``StorageError`` is turned into a 500 envelope in ``handle_exception``;
anything else propagates to Django untouched.
"""

from __future__ import annotations

import structlog
from django.apps import apps
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import StorageError
from modules.core.responses import error, success, validation_error
from modules.products.exceptions import ProductNotFound, ProductValidationError

logger = structlog.get_logger(__name__)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    The ``ProductService`` instance is built once at startup by
    ``ProductsConfig.ready`` and shared by every request.
    """

    permission_classes = [AllowAny]
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = apps.get_app_config("products").service

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, StorageError):
            logger.error(
                "product.storage_error",
                path=self.request.get_full_path(),
                cause=repr(exc.__cause__),
            )
            return error("Storage error", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return super().handle_exception(exc)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products"""
        products = self._service.list_products()
        return success(products, "Products retrieved successfully")

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}"""
        product = self._service.get_product(int(pk))
        if product is None:
            return error(str(ProductNotFound(pk)), status.HTTP_404_NOT_FOUND)
        return success(product, "Product retrieved successfully")

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/]+)")
    def by_category(self, request: Request, category: str | None = None) -> Response:
        """GET /api/v1/products/category/{category}"""
        products = self._service.list_by_category(category)
        return success(
            products, f"Products in category '{category}' retrieved successfully"
        )

    @action(detail=False, methods=["get"], url_path="active")
    def active(self, request: Request) -> Response:
        """GET /api/v1/products/active"""
        products = self._service.list_active()
        return success(products, "Active products retrieved successfully")

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products"""
        try:
            product = self._service.create_product(request.data)
        except ProductValidationError as exc:
            return validation_error(exc.errors)

        location = reverse("product-detail", kwargs={"pk": product.id})
        return success(
            product,
            "Product created successfully",
            status=status.HTTP_201_CREATED,
            headers={"Location": location},
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}"""
        try:
            product = self._service.update_product(int(pk), request.data)
        except ProductValidationError as exc:
            return validation_error(exc.errors)
        except ProductNotFound as exc:
            return error(str(exc), status.HTTP_404_NOT_FOUND)
        return success(product, "Product updated successfully")

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except ProductNotFound as exc:
            return error(str(exc), status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
