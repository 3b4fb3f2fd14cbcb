"""
Management command to print the recommended order for a party.

Usage:
    python manage.py recommend <party_id> [--waves]
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from rsvpizza.models import Party
from rsvpizza.planning import recommend_for_party, waves_for_party
from rsvpizza.utils import compute_pizza_scores


def _toppings(toppings):
    return ", ".join(t.name for t in toppings) or "plain"


class Command(BaseCommand):
    help = "Print the recommended pizza and beverage order for a party."

    def add_arguments(self, parser):
        parser.add_argument('party_id', type=int)
        parser.add_argument('--waves', action='store_true', help="Split the order into delivery waves")

    def handle(self, *args, **options):
        try:
            party = Party.objects.get(pk=options['party_id'])
        except Party.DoesNotExist:
            raise CommandError(f"Party {options['party_id']} does not exist.")

        try:
            if options['waves']:
                for wave in waves_for_party(party):
                    arrival = wave.wave.arrival_time
                    when = f"{arrival:%Y-%m-%d %H:%M}" if arrival else "unscheduled"
                    self.stdout.write(self.style.MIGRATE_HEADING(
                        f"{wave.wave.label} - {when} ({wave.wave.guest_allocation} guests)"))
                    self._print_result(wave.result)
            else:
                self._print_result(recommend_for_party(party))
        except ValidationError as e:
            raise CommandError("; ".join(e.messages))

    def _print_result(self, result):
        scores = compute_pizza_scores(result.pizzas)
        for pizza in result.pizzas:
            if pizza.is_half_and_half:
                description = (f"half {_toppings(pizza.left_half.toppings)} / "
                               f"half {_toppings(pizza.right_half.toppings)}")
            else:
                description = _toppings(pizza.toppings)
            notes = []
            if pizza.dietary_restrictions:
                notes.append(", ".join(pizza.dietary_restrictions))
            if pizza.is_for_non_respondents:
                notes.append("non-respondents")
            suffix = f" [{'; '.join(notes)}]" if notes else ""
            self.stdout.write(
                f"  {pizza.quantity} x {pizza.size.diameter}\" {pizza.size.name}: {description}"
                f" - {pizza.guest_count} guests, score {scores[pizza.id]}{suffix}")
        for beverage in result.beverages:
            self.stdout.write(f"  {beverage.quantity} x {beverage.beverage.name}")
        self.stdout.write(self.style.SUCCESS(
            f"  {result.total_pizzas} pizzas, {result.total_beverages} beverages."))
