"""
Guest-to-pizza recommendation.

Pipeline, each stage a pure function of the previous one's output:

  normalize -> group -> (split) -> top -> size -> consolidate

with pizzas synthesized for non-respondents joining before consolidation.

Hard constraints:
  - No pizza (or half) carries a topping excluded by the dietary
    restrictions of a guest assigned to it.
  - No pizza (or half) carries a topping any of its guests dislikes.

The same input, in the same order, always produces the same output.
"""

import logging
from dataclasses import replace

from .beverages import recommend_beverages
from .catalog import DEFAULT_CATALOG, EmptyCatalogError
from .consolidate import consolidate
from .defaults import synthesize_pizzas
from .grouping import dietary_label, group_guests
from .normalize import normalize_guests, resolve_style
from .records import PizzaHalf, PizzaRecommendation, RecommendationConfig, RecommendationResult
from .sizing import ratio_quantities, size_for, uses_fixed_ratio
from .splitting import bisect, should_split
from .toppings import select_toppings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = RecommendationConfig()


def _half(members, exclusions, catalog, config):
    return PizzaHalf(
        toppings=select_toppings(members, exclusions, catalog, config.max_toppings),
        guests=tuple(m.guest for m in members),
        dietary_restrictions=dietary_label(members),
    )


def _pizza_for_group(index, group, style, catalog, config):
    size, quantity = size_for(len(group), style)
    pizza = PizzaRecommendation(
        id=f"pizza-{index}",
        toppings=(),
        size=size,
        style=style,
        dietary_restrictions=group.dietary_restrictions,
        guest_count=len(group),
        guests=tuple(m.guest for m in group.members),
        quantity=quantity,
    )
    if should_split(group.members):
        left, right = bisect(group.members)
        return replace(
            pizza,
            is_half_and_half=True,
            left_half=_half(left, group.exclusions, catalog, config),
            right_half=_half(right, group.exclusions, catalog, config),
        )
    toppings = select_toppings(group.members, group.exclusions, catalog, config.max_toppings)
    return replace(pizza, toppings=toppings)


def recommend_pizzas(guests, toppings, style, non_respondents, catalog, config):
    """Plan pizzas for normalized `guests` plus `non_respondents` unknown guests."""
    groups = group_guests(guests, style)
    pizzas = [
        _pizza_for_group(i, group, style, catalog, config)
        for i, group in enumerate(groups, start=1)
    ]
    if uses_fixed_ratio(style):
        quantities = ratio_quantities([len(group) for group in groups])
        pizzas = [replace(p, quantity=q) for p, q in zip(pizzas, quantities)]
    pizzas.extend(synthesize_pizzas(
        non_respondents, style, [t.id for t in toppings], catalog, config,
    ))
    return consolidate(pizzas)


def generate_recommendations(guests, available_topping_ids, available_beverage_ids, style,
                             expected_guest_count=None, catalog=DEFAULT_CATALOG,
                             config=DEFAULT_CONFIG):
    """
    Recommend a pizza and beverage order for a party.

    Args:
        guests: GuestPreference records of everyone who responded.
        available_topping_ids: Topping ids the host offers.
        available_beverage_ids: Beverage ids the host offers.
        style: A PizzaStyle, or its id or label.
        expected_guest_count: Total guests expected; when larger than the number
            of respondents, default pizzas and beverages cover the difference.
        catalog: Catalog naming and typing every topping and beverage id.
        config: RecommendationConfig tunables.

    Returns:
        A RecommendationResult. An empty topping or beverage offer yields an
        empty pizza or beverage list rather than an error.

    Raises:
        ValidationError: If a guest has no name or the style is unknown.
    """
    style = resolve_style(style)
    normalized = normalize_guests(guests, available_topping_ids, available_beverage_ids, catalog)
    non_respondents = max(0, (expected_guest_count or 0) - len(normalized))
    logger.debug("Recommending %s pizzas for %d respondents and %d non-respondents",
                 style.label, len(normalized), non_respondents)

    try:
        toppings = catalog.offered_toppings(available_topping_ids)
    except EmptyCatalogError as e:
        logger.warning("%s Skipping pizzas.", e)
        pizzas = []
    else:
        pizzas = recommend_pizzas(normalized, toppings, style, non_respondents, catalog, config)

    try:
        beverages = catalog.offered_beverages(available_beverage_ids)
    except EmptyCatalogError as e:
        logger.warning("%s Skipping beverages.", e)
        beverages = []
    else:
        beverages = recommend_beverages(normalized, beverages, expected_guest_count, config)

    return RecommendationResult(pizzas=tuple(pizzas), beverages=tuple(beverages))
