"""
Default pizzas and beverages for expected guests who have not RSVP'd.

Non-respondent pizzas are bought on spec. The non-respondents are split
40/40/10/10 between cheese, pepperoni, mushroom and veggie, and each type
gets enough standard pizzas to feed its share. One vegan and one gluten-free
pizza per ten non-respondents come on top as extra pies, so synthesized guest
counts always add up to the number of non-respondents.
"""

import logging
import math
from dataclasses import dataclass

from .catalog import DietaryRestriction
from .records import BeverageRecommendation, PizzaRecommendation
from . import sizing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultPizza:
    label: str
    topping_ids: tuple
    dietary_restrictions: tuple = ()


CHEESE = DefaultPizza('Cheese', ('extra-cheese',))
PEPPERONI = DefaultPizza('Pepperoni', ('pepperoni', 'extra-cheese'))
MUSHROOM = DefaultPizza('Mushroom', ('mushrooms', 'extra-cheese'), (DietaryRestriction.VEGETARIAN,))
VEGGIE = DefaultPizza('Veggie', ('mushrooms', 'bell-peppers', 'onions'), (DietaryRestriction.VEGETARIAN,))
VEGAN = DefaultPizza('Vegan', ('mushrooms', 'bell-peppers', 'onions'), (DietaryRestriction.VEGAN,))
GLUTEN_FREE = DefaultPizza('Gluten-Free Cheese', ('extra-cheese',), (DietaryRestriction.GLUTEN_FREE,))

REGULAR_MENU = (CHEESE, PEPPERONI, MUSHROOM, VEGGIE)


def round_half_up(value):
    return math.floor(value + 0.5)


def apportion(total, weights):
    """
    Split the integer `total` in proportion to `weights` (largest remainder).

    The parts always sum to `total`; leftover units go to the largest
    fractional parts, earlier entries first on ties.
    """
    weight_sum = sum(weights)
    if total <= 0 or weight_sum <= 0:
        return [0] * len(weights)
    # rounded so that shares like 0.4 of 10 floor to 4, not 3
    exact = [round(total * w / weight_sum, 9) for w in weights]
    parts = [math.floor(x) for x in exact]
    by_remainder = sorted(range(len(weights)), key=lambda i: -(exact[i] - parts[i]))
    for i in by_remainder[:total - sum(parts)]:
        parts[i] += 1
    return parts


def _toppings_for(default, available_topping_ids, catalog):
    excluded = catalog.exclusions_for(default.dietary_restrictions)
    return tuple(
        catalog.topping(t) for t in default.topping_ids
        if t in available_topping_ids and t in catalog.toppings and t not in excluded
    )


def synthesize_pizzas(non_respondents, style, available_topping_ids, catalog, config):
    """Return non-respondent PizzaRecommendations, one per default pizza with a nonzero quantity."""
    if non_respondents <= 0:
        return []

    size, guests_per_pizza = sizing.default_pizza(style)
    regular_guests = apportion(non_respondents, config.default_mix)
    special = max(0, round_half_up(non_respondents / config.guests_per_special_pizza))

    # (default, quantity, guests); the special pizzas feed no one not already counted
    lines = [
        (default, math.ceil(guests / guests_per_pizza), guests)
        for default, guests in zip(REGULAR_MENU, regular_guests)
    ]
    lines += [(VEGAN, special, 0), (GLUTEN_FREE, special, 0)]
    available = frozenset(available_topping_ids)

    pizzas = []
    for default, quantity, guest_count in lines:
        if quantity <= 0:
            continue
        pizzas.append(PizzaRecommendation(
            id=f"default-{default.label.lower().replace(' ', '-')}",
            toppings=_toppings_for(default, available, catalog),
            size=size,
            style=style,
            dietary_restrictions=tuple(r.value for r in default.dietary_restrictions),
            guest_count=guest_count,
            quantity=quantity,
            is_for_non_respondents=True,
            non_respondent_count=guest_count,
            label=default.label,
        ))
    logger.debug("Synthesized %d pizzas for %d non-respondents",
                 sum(p.quantity for p in pizzas), non_respondents)
    return pizzas


def synthesize_beverages(non_respondents, beverages, config):
    """
    Spread `non_respondents * beverages_per_person` units over the offered
    beverages, water weighted above the rest. Each share is rounded up.
    """
    if non_respondents <= 0:
        return []

    total_units = non_respondents * config.beverages_per_person
    weights = [config.water_weight if b.type == 'water' else 1.0 for b in beverages]
    total_weight = sum(weights)

    result = []
    for beverage, weight in zip(beverages, weights):
        quantity = math.ceil(weight * total_units / total_weight)
        if quantity > 0:
            result.append(BeverageRecommendation(
                id=f"bev-default-{beverage.id}",
                beverage=beverage,
                quantity=quantity,
                guest_count=non_respondents,
                is_for_non_respondents=True,
                label=beverage.name,
            ))
    return result
