"""
Bridge between stored parties and the recommendation engine.

Loads a Party's guests and preferences with a handful of bulk queries, turns
them into engine GuestPreference records, and runs the engine with the
party's catalog, style and expected guest count. Tunables come from
django-constance so admins can adjust them without a deploy.

Input:
  - A saved Party with guests, preferences and available toppings/beverages.

Output:
  - An engine RecommendationResult (or one WaveRecommendation per delivery
    wave). Nothing is written back to the database.
"""

from collections import defaultdict

from constance import config

from .engine import (
    Catalog, CatalogItem, GuestPreference, RecommendationConfig,
    generate_recommendations, generate_wave_recommendations,
)
from .models import Beverage, GuestBeveragePreference, GuestToppingPreference, Topping


def _collect_prefs(pref_qs, item_field):
    """Return {guest_id: (liked slugs, disliked slugs)} from a preference queryset."""
    liked = defaultdict(set)
    disliked = defaultdict(set)
    for guest_id, slug, pref in pref_qs.values_list('guest_id', f'{item_field}__slug', 'preference'):
        if pref == GuestToppingPreference.LIKE:
            liked[guest_id].add(slug)
        else:
            disliked[guest_id].add(slug)
    return liked, disliked


def guest_preferences(party):
    """Build engine GuestPreference records for every guest of `party`, in RSVP order."""
    guests = list(party.guests.all())
    liked_t, disliked_t = _collect_prefs(
        GuestToppingPreference.objects.filter(guest__party=party), 'topping')
    liked_b, disliked_b = _collect_prefs(
        GuestBeveragePreference.objects.filter(guest__party=party), 'beverage')

    return [
        GuestPreference(
            id=str(guest.pk),
            name=guest.name,
            dietary_restrictions=frozenset(guest.dietary_restrictions or ()),
            liked_toppings=frozenset(liked_t[guest.pk]),
            disliked_toppings=frozenset(disliked_t[guest.pk]),
            liked_beverages=frozenset(liked_b[guest.pk]),
            disliked_beverages=frozenset(disliked_b[guest.pk]),
        )
        for guest in guests
    ]


def build_catalog():
    return Catalog(
        [CatalogItem(t.slug, t.name, t.category) for t in Topping.objects.all()],
        [CatalogItem(b.slug, b.name, b.category) for b in Beverage.objects.all()],
    )


def build_config():
    return RecommendationConfig(
        max_toppings=config.MAX_TOPPINGS_PER_PIZZA,
        beverages_per_person=config.BEVERAGES_PER_PERSON,
        water_weight=config.WATER_BEVERAGE_WEIGHT,
        min_liked_beverage_units=config.MIN_LIKED_BEVERAGE_UNITS,
        guests_per_special_pizza=config.GUESTS_PER_SPECIAL_PIZZA,
    )


def _party_args(party):
    return (
        guest_preferences(party),
        list(party.available_toppings.order_by('name').values_list('slug', flat=True)),
        list(party.available_beverages.order_by('name').values_list('slug', flat=True)),
        party.pizza_style,
    )


def recommend_for_party(party):
    """
    Run the recommendation engine for `party`.

    Raises:
        ValidationError: If a stored guest has no name.
    """
    return generate_recommendations(
        *_party_args(party),
        expected_guest_count=party.expected_guest_count,
        catalog=build_catalog(),
        config=build_config(),
    )


def waves_for_party(party):
    """Like recommend_for_party(), but one order per delivery wave."""
    return generate_wave_recommendations(
        *_party_args(party),
        expected_guest_count=party.expected_guest_count,
        start=party.starts_at,
        duration_hours=party.duration_hours,
        catalog=build_catalog(),
        config=build_config(),
    )
