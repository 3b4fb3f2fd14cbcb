"""
Beverage recommendations.

Responded guests drive one line per offered beverage somebody likes: water
always gets one unit per two guests plus extra for every fan, other drinks get
beverages_per_person units per fan with a floor of min_liked_beverage_units.
Drinks nobody likes are left off. Defaults for non-respondents are folded
into the same lines by beverage id.
"""

import math

from .defaults import synthesize_beverages
from .records import BeverageRecommendation


def recommend_beverages(guests, beverages, expected_guest_count, config):
    """
    Args:
        guests: NormalizedGuest list of responded guests.
        beverages: CatalogItem list of the beverages the host offers, in host order.
        expected_guest_count: Total guests expected, or None to use the respondents.
        config: RecommendationConfig.

    Returns:
        A list of BeverageRecommendation sorted by descending quantity.
    """
    responded = len(guests)
    total_guests = expected_guest_count or responded

    lines = {}
    for beverage in beverages:
        likes = sum(1 for g in guests if beverage.id in g.liked_beverages)
        if beverage.type == 'water':
            quantity = math.ceil(total_guests / 2) + likes * config.beverages_per_person
        elif likes > 0:
            quantity = max(config.min_liked_beverage_units, likes * config.beverages_per_person)
        else:
            continue
        if quantity > 0:
            lines[beverage.id] = BeverageRecommendation(
                id=f"bev-{beverage.id}",
                beverage=beverage,
                quantity=quantity,
                guest_count=likes,
                label=beverage.name,
            )

    non_respondents = max(0, (expected_guest_count or 0) - responded)
    for default in synthesize_beverages(non_respondents, beverages, config):
        existing = lines.get(default.beverage.id)
        if existing is None:
            lines[default.beverage.id] = default
        else:
            lines[default.beverage.id] = BeverageRecommendation(
                id=existing.id,
                beverage=existing.beverage,
                quantity=existing.quantity + default.quantity,
                guest_count=existing.guest_count + default.guest_count,
                label=existing.label,
            )

    order = {b.id: i for i, b in enumerate(beverages)}
    return sorted(lines.values(), key=lambda r: (-r.quantity, order[r.beverage.id]))
