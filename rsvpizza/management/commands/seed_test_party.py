"""
Management command to create a party full of randomly generated RSVPs.

Usage:
    python manage.py seed_test_party --expected 30 --responding 18 --style new-york

Every catalog topping and beverage is offered. About 15% of guests carry one
dietary restriction, and nobody likes a topping their restriction forbids.
Pass --seed for a reproducible party. The catalog is seeded first if empty.
"""

import random

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from rsvpizza.engine.catalog import DietaryRestriction, PizzaStyle
from rsvpizza.models import (
    Beverage, Guest, GuestBeveragePreference, GuestToppingPreference, Party, Topping,
)
from rsvpizza.planning import build_catalog

NAMES = [
    "Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Henry", "Ivy", "Jack",
    "Kate", "Leo", "Mia", "Noah", "Olivia", "Pete", "Quinn", "Rose", "Sam", "Tina",
    "Uma", "Victor", "Wendy", "Xavier", "Yara", "Zack",
]

DIETARY_CHANCE = 0.15


class Command(BaseCommand):
    help = "Create a test party with random guest preferences."

    def add_arguments(self, parser):
        parser.add_argument('--name', default="Test Party")
        parser.add_argument('--expected', type=int, default=20)
        parser.add_argument('--responding', type=int, default=12)
        parser.add_argument('--style', default=PizzaStyle.NEW_YORK, choices=PizzaStyle.values)
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        if options['responding'] > options['expected']:
            raise CommandError("--responding cannot exceed --expected.")
        if not Topping.objects.exists():
            call_command('seed_catalog', stdout=self.stdout)

        rng = random.Random(options['seed'])
        party = Party.objects.create(
            name=options['name'],
            host_name="Test Host",
            pizza_style=options['style'],
            expected_guest_count=options['expected'],
        )
        party.available_toppings.set(Topping.objects.all())
        party.available_beverages.set(Beverage.objects.all())

        catalog = build_catalog()
        toppings = {t.slug: t for t in Topping.objects.all()}
        beverages = list(Beverage.objects.all())
        for i in range(options['responding']):
            self._create_guest(party, self._guest_name(i), rng, catalog, toppings, beverages)

        self.stdout.write(self.style.SUCCESS(
            f"  Created party #{party.pk} '{party.name}' with "
            f"{options['responding']} of {options['expected']} guests responding."))

    @staticmethod
    def _guest_name(i):
        name = NAMES[i % len(NAMES)]
        return name if i < len(NAMES) else f"{name} {i // len(NAMES) + 1}"

    def _create_guest(self, party, name, rng, catalog, toppings, beverages):
        restrictions = []
        if rng.random() < DIETARY_CHANCE:
            restrictions = [rng.choice(DietaryRestriction.values)]
        guest = Guest.objects.create(party=party, name=name, dietary_restrictions=restrictions)

        excluded = catalog.exclusions_for(DietaryRestriction(r) for r in restrictions)
        allowed = sorted(slug for slug in toppings if slug not in excluded)
        liked = rng.sample(allowed, min(len(allowed), rng.randint(1, 4)))
        remaining = [slug for slug in allowed if slug not in liked]
        disliked = rng.sample(remaining, min(len(remaining), rng.randint(0, 2)))

        PREF = GuestToppingPreference
        PREF.objects.bulk_create(
            [PREF(guest=guest, topping=toppings[s], preference=PREF.LIKE) for s in liked]
            + [PREF(guest=guest, topping=toppings[s], preference=PREF.DISLIKE) for s in disliked]
        )
        GuestBeveragePreference.objects.bulk_create([
            GuestBeveragePreference(guest=guest, beverage=b, preference=GuestBeveragePreference.LIKE)
            for b in rng.sample(beverages, min(len(beverages), rng.randint(0, 2)))
        ])
