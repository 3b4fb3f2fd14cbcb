"""Preference normalization: clip each guest's RSVP to the host's catalog."""

import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError

from .catalog import DietaryRestriction, PizzaStyle

logger = logging.getLogger(__name__)

_NO_RESTRICTION = {'', 'none'}


@dataclass(frozen=True)
class NormalizedGuest:
    """A guest whose preferences only name available items and never overlap."""

    index: int
    guest: object
    restrictions: frozenset
    exclusions: frozenset
    liked_toppings: frozenset
    disliked_toppings: frozenset
    liked_beverages: frozenset
    disliked_beverages: frozenset

    @property
    def name(self):
        return self.guest.name


def parse_restrictions(values):
    """Map restriction tags (enum members or strings, any case) to DietaryRestriction."""
    by_value = {r.value.lower(): r for r in DietaryRestriction}
    restrictions = set()
    for value in values or ():
        key = str(value).strip().lower()
        if key in _NO_RESTRICTION:
            continue
        if key not in by_value:
            logger.warning("Dropping unknown dietary restriction %r", value)
            continue
        restrictions.add(by_value[key])
    return frozenset(restrictions)


def resolve_style(style):
    """
    Resolve a style id or label ('new-york', 'New York') to a PizzaStyle.

    Raises:
        ValidationError: If the style is not one the engine can size.
    """
    for choice in PizzaStyle:
        if str(style).strip().lower() in (choice.value, choice.label.lower()):
            return choice
    raise ValidationError(
        "Unknown pizza style %(style)r.", code='unknown_style', params={'style': style},
    )


def normalize_guests(guests, available_topping_ids, available_beverage_ids, catalog):
    """
    Normalize every guest against the host's available catalog.

    Preferences for unavailable items are dropped silently. A topping or
    beverage that is both liked and disliked counts as disliked.

    Returns a list of NormalizedGuest in input order.

    Raises:
        ValidationError: If a guest has no name.
    """
    toppings = catalog.known_toppings(available_topping_ids)
    beverages = catalog.known_beverages(available_beverage_ids)

    normalized = []
    for index, guest in enumerate(guests):
        if not (guest.name or '').strip():
            raise ValidationError(
                "Guest #%(position)s is missing a name.",
                code='missing_name',
                params={'position': index + 1},
            )
        restrictions = parse_restrictions(guest.dietary_restrictions)
        disliked_toppings = frozenset(guest.disliked_toppings) & toppings
        disliked_beverages = frozenset(guest.disliked_beverages) & beverages
        normalized.append(NormalizedGuest(
            index=index,
            guest=guest,
            restrictions=restrictions,
            exclusions=catalog.exclusions_for(restrictions),
            liked_toppings=(frozenset(guest.liked_toppings) & toppings) - disliked_toppings,
            disliked_toppings=disliked_toppings,
            liked_beverages=(frozenset(guest.liked_beverages) & beverages) - disliked_beverages,
            disliked_beverages=disliked_beverages,
        ))
    return normalized
