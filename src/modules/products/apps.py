from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.products"
    label = "products"

    def ready(self) -> None:
        from modules.products.repositories.django_repository import (
            ProductDjangoRepository,
        )
        from modules.products.services import ProductService

        # Built once at startup; views read it from the app config.
        self.service = ProductService(repository=ProductDjangoRepository())
