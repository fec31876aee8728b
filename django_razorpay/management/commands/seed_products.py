import json
import logging
from enum import Enum
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from django_razorpay.models import Product
from django_razorpay.utils import parse_price

__all__ = ["Command", "SeedResult"]

logger = logging.getLogger(__name__)


class SeedResult(str, Enum):
    """Result of seeding a single product."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "errors"


class Command(BaseCommand):
    help = "Load catalog products (id, name, price) from a JSON file"

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="JSON file with a list of products")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report changes without modifying database",
        )

    def handle(self, *args, **options):
        path = Path(options["path"])
        dry_run = options["dry_run"]

        try:
            products = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise CommandError(f"Could not read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(products, list):
            raise CommandError("Expected a JSON list of products")

        mode = "(DRY RUN)" if dry_run else ""
        self.stdout.write(f"Product seeding {mode}")
        self.stdout.write("=" * 40)
        self.stdout.write(f"Found {len(products)} products to seed")

        stats = dict.fromkeys(SeedResult, 0)
        error_details = []

        for item in products:
            product_id = str(item.get("id", "")) if isinstance(item, dict) else ""
            if not product_id:
                stats[SeedResult.ERROR] += 1
                error_details.append("Product missing id")
                continue

            try:
                result = self._seed_product(product_id, item, dry_run)
                stats[result] += 1
            except ValueError as e:
                stats[SeedResult.ERROR] += 1
                error_details.append(f"{product_id}: {e}")
                logger.warning("[django-razorpay] Could not seed %s: %s", product_id, e)

        self.stdout.write("")
        if dry_run:
            self.stdout.write(f"Would create: {stats[SeedResult.CREATED]} products")
            self.stdout.write(f"Would update: {stats[SeedResult.UPDATED]} products")
        else:
            self.stdout.write(f"Created: {stats[SeedResult.CREATED]}")
            self.stdout.write(f"Updated: {stats[SeedResult.UPDATED]}")

        self.stdout.write(f"Skipped: {stats[SeedResult.SKIPPED]}")
        self.stdout.write(f"Errors: {stats[SeedResult.ERROR]}")

        for detail in error_details:
            self.stderr.write(f"  - {detail}")

        if stats[SeedResult.ERROR] > 0:
            self.stdout.write(self.style.WARNING("Seeding completed with errors."))
        else:
            self.stdout.write(self.style.SUCCESS("Seeding completed successfully."))

    def _seed_product(self, product_id: str, item: dict, dry_run: bool) -> SeedResult:
        price = str(item.get("price", "")).strip()
        if not parse_price(price):
            raise ValueError(f"invalid price {price!r}")

        doc_id = str(item.get("docId") or product_id)
        fields = {
            "catalog_id": product_id,
            "name": item.get("name") or "",
            "price": price,
        }

        product = Product.objects.filter(doc_id=doc_id).first()
        if product is None:
            if not dry_run:
                Product.objects.create(doc_id=doc_id, **fields)
            return SeedResult.CREATED

        if all(getattr(product, name) == value for name, value in fields.items()):
            return SeedResult.SKIPPED

        if not dry_run:
            with transaction.atomic():
                for name, value in fields.items():
                    setattr(product, name, value)
                product.save()

        return SeedResult.UPDATED
