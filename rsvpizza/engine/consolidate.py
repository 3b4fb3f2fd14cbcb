"""
Consolidation of structurally identical pizzas into quantity-bearing lines.

Two pizzas are identical when they share toppings (per half, for half-and-half
pizzas), dietary restrictions and size. Respondent and non-respondent pizzas
merge alike, and quantities add up; any party-wide ratio has already been
applied to the per-group quantities.
"""

from dataclasses import replace


def _topping_key(toppings):
    return tuple(sorted(t.id for t in toppings))


def consolidation_key(pizza):
    if pizza.is_half_and_half:
        halves = sorted([_topping_key(pizza.left_half.toppings),
                         _topping_key(pizza.right_half.toppings)])
        toppings = ('half',) + tuple(halves)
    else:
        toppings = ('whole',) + _topping_key(pizza.toppings)
    return toppings, tuple(sorted(pizza.dietary_restrictions)), pizza.size.diameter


def _merge_halves(left, right, other):
    other_left, other_right = other.left_half, other.right_half
    if _topping_key(other_left.toppings) != _topping_key(left.toppings):
        other_left, other_right = other_right, other_left
    return (
        replace(left, guests=left.guests + other_left.guests),
        replace(right, guests=right.guests + other_right.guests),
    )


def _merge(bucket):
    first = bucket[0]
    left, right = first.left_half, first.right_half
    if first.is_half_and_half:
        for pizza in bucket[1:]:
            left, right = _merge_halves(left, right, pizza)

    return replace(
        first,
        guests=tuple(g for p in bucket for g in p.guests),
        left_half=left,
        right_half=right,
        quantity=sum(p.quantity for p in bucket),
        guest_count=sum(p.guest_count for p in bucket),
        non_respondent_count=sum(p.non_respondent_count for p in bucket),
        is_for_non_respondents=all(p.is_for_non_respondents for p in bucket),
        label=next((p.label for p in bucket if p.label), None),
    )


def consolidate(pizzas):
    """
    Merge identical pizzas and order the lines by descending quantity.

    Ties keep first-appearance order; ids are reassigned as pizza-1, pizza-2, ...
    """
    buckets = {}
    for pizza in pizzas:
        buckets.setdefault(consolidation_key(pizza), []).append(pizza)

    merged = [_merge(bucket) for bucket in buckets.values()]
    merged.sort(key=lambda p: -p.quantity)
    return [replace(p, id=f"pizza-{i}") for i, p in enumerate(merged, start=1)]
