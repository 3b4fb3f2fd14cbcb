"""
Pizza sizing.

New York and Detroit pizzas come from a ladder of round sizes; a group gets
the smallest size whose surface-area servings cover it. Groups too big for
the largest size need several of it. Neapolitan pizzas are personal-sized
and ordered at a fixed ratio of one per 1.5 guests, counted over the whole
party rather than per group.
"""

import math

from .catalog import PizzaStyle
from .records import PizzaSize

SIZE_LADDER = (
    PizzaSize(10, 'Personal'),
    PizzaSize(12, 'Small'),
    PizzaSize(14, 'Medium'),
    PizzaSize(16, 'Large'),
    PizzaSize(18, 'Extra Large'),
    PizzaSize(20, 'Family'),
)

PERSONAL = SIZE_LADDER[0]
# what a synthesized New York or Detroit pizza is expected to feed
STANDARD = SIZE_LADDER[4]

NEAPOLITAN_GUESTS_PER_PIZZA = 1.5


def uses_fixed_ratio(style):
    return style == PizzaStyle.NEAPOLITAN


def ratio_quantity(guest_count):
    return math.ceil(guest_count / NEAPOLITAN_GUESTS_PER_PIZZA)


def ratio_quantities(group_sizes):
    """
    Split ceil(total guests / 1.5) personal pies over groups sharing one party.

    Every group gets at least one pie, even when dietary buckets leave more
    groups than the ratio asks for. Remaining pies go one at a time to the
    group with the most guests per pie, earlier groups first on ties.
    """
    quantities = [1] * len(group_sizes)
    for _ in range(ratio_quantity(sum(group_sizes)) - len(group_sizes)):
        best = max(range(len(group_sizes)), key=lambda i: group_sizes[i] / quantities[i])
        quantities[best] += 1
    return quantities


def size_for(guest_count, style):
    """Return (size, quantity) of the pizzas needed to feed `guest_count` guests."""
    if uses_fixed_ratio(style):
        return PERSONAL, ratio_quantity(guest_count)
    for size in SIZE_LADDER:
        if size.servings >= guest_count:
            return size, 1
    largest = SIZE_LADDER[-1]
    return largest, math.ceil(guest_count / largest.servings)


def default_pizza(style):
    """Return (size, guests fed per pizza) for pizzas ordered on spec for non-respondents."""
    if uses_fixed_ratio(style):
        return PERSONAL, NEAPOLITAN_GUESTS_PER_PIZZA
    return STANDARD, STANDARD.servings
