from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.products.models import Product

SAMPLE_PRODUCTS = [
    {
        "name": "Sample Product 1",
        "description": "This is a sample product for demonstration",
        "price": Decimal("29.99"),
        "quantity": 100,
        "category": "Electronics",
    },
    {
        "name": "Sample Product 2",
        "description": "Another sample product",
        "price": Decimal("49.99"),
        "quantity": 50,
        "category": "Books",
    },
]


class Command(BaseCommand):
    help = "Seed the database with a demo user and the sample catalog."

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-user",
            action="store_true",
            help="Only seed products.",
        )

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = 0 if options["skip_user"] else self._seed_users()
        products_created = self._seed_products()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={products_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_products(self) -> int:
        created = 0
        for sample in SAMPLE_PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=sample["name"],
                defaults={key: value for key, value in sample.items() if key != "name"},
            )
            created += int(was_created)
        return created
