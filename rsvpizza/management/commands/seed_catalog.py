"""
Management command to seed the catalog tables with the standard toppings and beverages.

Usage:
    python manage.py seed_catalog

Wipes the Topping and Beverage tables (cascading to guest preferences and
party offers) and inserts the engine's default catalog.
"""

from django.core.management.base import BaseCommand

from rsvpizza.engine.catalog import BEVERAGES, TOPPINGS
from rsvpizza.models import Beverage, Topping


class Command(BaseCommand):
    help = "Wipe the topping and beverage tables and seed the standard catalog."

    def handle(self, *args, **options):
        Topping.objects.all().delete()
        Beverage.objects.all().delete()
        self.stdout.write("  Wiped toppings, beverages and related preferences.")

        Topping.objects.bulk_create(
            [Topping(slug=t.id, name=t.name, category=t.type) for t in TOPPINGS])
        Beverage.objects.bulk_create(
            [Beverage(slug=b.id, name=b.name, category=b.type) for b in BEVERAGES])
        self.stdout.write(self.style.SUCCESS(
            f"  Created {len(TOPPINGS)} toppings and {len(BEVERAGES)} beverages."))
