"""
PATH: products/management/commands/import_products.py

Load a marketplace product feed (JSON array) into the platform catalog.

Each record needs at least: title, initial_price (or final_price).
Records are upserted by asin, so re-running the same feed is safe.

Usage:
    python manage.py import_products feed.json
    python manage.py import_products feed.json --store <store-uuid>
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from products.models import Product
from stores.models import Store

FEED_FIELDS = (
    "title",
    "brand",
    "description",
    "discount",
    "currency",
    "categories",
    "image_url",
    "images",
    "reviews_count",
)


def _decimal(value):
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


class Command(BaseCommand):
    help = "Import a JSON product feed into the catalog (upsert by asin)."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to a JSON file containing a list of products")
        parser.add_argument("--store", default=None, help="Attach products to this store id")

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")

        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON: {exc}") from exc

        if not isinstance(records, list):
            raise CommandError("Feed must be a JSON array")

        store = None
        if options.get("store"):
            store = Store.objects.filter(pk=options["store"]).first()
            if store is None:
                raise CommandError(f"Store not found: {options['store']}")

        created = updated = skipped = 0

        for idx, rec in enumerate(records):
            initial = _decimal(rec.get("initial_price")) or _decimal(rec.get("final_price"))
            if not rec.get("title") or initial is None:
                skipped += 1
                continue

            values = {k: rec[k] for k in FEED_FIELDS if rec.get(k) is not None}
            values["initial_price"] = initial
            values["final_price"] = _decimal(rec.get("final_price"))
            values["rating"] = _decimal(rec.get("rating")) or Decimal("0.00")
            values["store"] = store
            if "availability" in rec:
                values["is_available"] = "unavailable" not in str(rec["availability"]).lower()

            asin = (rec.get("asin") or "").strip().upper() or None

            try:
                with transaction.atomic():
                    product = Product.objects.filter(asin=asin).first() if asin else None
                    if product is None:
                        Product.objects.create(asin=asin, **values)
                        created += 1
                    else:
                        for key, val in values.items():
                            setattr(product, key, val)
                        product.save()
                        updated += 1
            except ValidationError as exc:
                skipped += 1
                self.stdout.write(self.style.WARNING(f"Record {idx} skipped: {exc.messages}"))

        self.stdout.write(
            self.style.SUCCESS(
                f"Products imported: {created} created, {updated} updated, {skipped} skipped."
            )
        )
