from datetime import datetime, timedelta, timezone
from io import StringIO

from constance.test import override_config
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client, SimpleTestCase, TestCase
from django.urls import reverse

from .engine import (
    DEFAULT_CATALOG, DietaryRestriction, GuestPreference, PizzaHalf, PizzaRecommendation, PizzaStyle,
    RecommendationConfig, calculate_waves, generate_recommendations, generate_wave_recommendations,
)
from .engine.beverages import recommend_beverages
from .engine.catalog import BEVERAGES, TOPPINGS
from .engine.consolidate import consolidate
from .engine.defaults import apportion, synthesize_pizzas
from .engine.grouping import (
    MAX_GUESTS_PER_PIZZA, cluster, compatibility_score, group_guests, partition_by_profile,
)
from .engine.normalize import normalize_guests, parse_restrictions, resolve_style
from .engine.sizing import SIZE_LADDER, ratio_quantities, size_for
from .engine.splitting import bisect, conflict_score, should_split
from .engine.toppings import select_toppings
from .models import (
    Beverage, Guest, GuestBeveragePreference, GuestToppingPreference, Party, Topping,
)
from .planning import guest_preferences, recommend_for_party
from .utils import compute_pizza_scores

ALL_TOPPINGS = [t.id for t in TOPPINGS]
ALL_BEVERAGES = [b.id for b in BEVERAGES]
CONFIG = RecommendationConfig()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def guest(name, likes=(), dislikes=(), diet=(), drinks=(), no_drinks=()):
    return GuestPreference(
        name=name,
        id=name.lower(),
        dietary_restrictions=frozenset(diet),
        liked_toppings=frozenset(likes),
        disliked_toppings=frozenset(dislikes),
        liked_beverages=frozenset(drinks),
        disliked_beverages=frozenset(no_drinks),
    )


def normalized(*guests, toppings=ALL_TOPPINGS, beverages=ALL_BEVERAGES):
    return normalize_guests(guests, toppings, beverages, DEFAULT_CATALOG)


def recommend(guests, style=PizzaStyle.NEW_YORK, expected=None,
              toppings=ALL_TOPPINGS, beverages=ALL_BEVERAGES):
    return generate_recommendations(guests, toppings, beverages, style, expected)


def topping_ids(toppings):
    return [t.id for t in toppings]


def mixed_party():
    """Twenty guests with overlapping likes, dislikes and restrictions, built deterministically."""
    diets = [(), (), ('Vegetarian',), (), ('Vegan',), (), ('Gluten-Free',), ('Dairy-Free',), (), ()]
    guests = []
    for i in range(20):
        likes = {ALL_TOPPINGS[(i * 3) % 16], ALL_TOPPINGS[(i * 5 + 1) % 16]}
        dislikes = {ALL_TOPPINGS[(i * 7 + 2) % 16]} - likes
        guests.append(guest(f"Guest{i:02d}", likes=likes, dislikes=dislikes, diet=diets[i % 10],
                            drinks={ALL_BEVERAGES[i % 5]}))
    return guests


def portions(pizza):
    """(guests, toppings) for each independently topped part of a pizza."""
    if pizza.is_half_and_half:
        return [(pizza.left_half.guests, pizza.left_half.toppings),
                (pizza.right_half.guests, pizza.right_half.toppings)]
    return [(pizza.guests, pizza.toppings)]


# ---------------------------------------------------------------------------
# Preference normalization
# ---------------------------------------------------------------------------

class NormalizeTests(SimpleTestCase):
    def test_unavailable_preferences_are_dropped(self):
        alice, = normalized(
            guest("Alice", likes={'pepperoni', 'truffle'}, dislikes={'anchovies'}, drinks={'coke', 'mead'}),
            toppings=['pepperoni', 'mushrooms'],
        )
        self.assertEqual(alice.liked_toppings, {'pepperoni'})
        self.assertEqual(alice.disliked_toppings, frozenset())
        self.assertEqual(alice.liked_beverages, {'coke'})

    def test_dislike_wins_over_like(self):
        alice, = normalized(guest("Alice", likes={'pepperoni', 'olives'}, dislikes={'olives'}))
        self.assertEqual(alice.liked_toppings, {'pepperoni'})
        self.assertEqual(alice.disliked_toppings, {'olives'})

    def test_missing_name_raises_validation_error(self):
        for name in ("", "   ", None):
            with self.subTest(name=name):
                with self.assertRaises(ValidationError) as ctx:
                    normalized(guest("Alice"), GuestPreference(name=name))
                self.assertEqual(ctx.exception.code, 'missing_name')

    def test_multiple_restrictions_take_union_of_exclusions(self):
        both, vegan = normalized(
            guest("Both", diet=['Vegetarian', 'Dairy-Free']),
            guest("Vegan", diet=['Vegan']),
        )
        self.assertEqual(both.exclusions, vegan.exclusions)
        self.assertIn('pepperoni', both.exclusions)
        self.assertIn('feta', both.exclusions)
        self.assertNotIn('mushrooms', both.exclusions)

    def test_gluten_free_excludes_no_toppings(self):
        gf, = normalized(guest("Gina", diet=['Gluten-Free']))
        self.assertEqual(gf.exclusions, frozenset())

    def test_restriction_parsing(self):
        self.assertEqual(
            parse_restrictions(['vegan', 'None', '', DietaryRestriction.GLUTEN_FREE, 'Keto']),
            {DietaryRestriction.VEGAN, DietaryRestriction.GLUTEN_FREE},
        )

    def test_resolve_style(self):
        self.assertEqual(resolve_style('New York'), PizzaStyle.NEW_YORK)
        self.assertEqual(resolve_style('detroit'), PizzaStyle.DETROIT)
        with self.assertRaises(ValidationError):
            resolve_style('chicago')


# ---------------------------------------------------------------------------
# Compatibility and grouping
# ---------------------------------------------------------------------------

class CompatibilityTests(SimpleTestCase):
    def test_score_formula(self):
        a, b = normalized(
            guest("A", likes={'pepperoni', 'mushrooms', 'olives'}, dislikes={'onions'}),
            guest("B", likes={'pepperoni', 'olives', 'onions'}, dislikes={'mushrooms'}),
        )
        # 2 shared likes, mushrooms and onions conflict
        self.assertEqual(compatibility_score(a, b), 2 * 2 - 1 - 1)

    def test_score_is_symmetric(self):
        a, b = normalized(
            guest("A", likes={'pepperoni'}, dislikes={'ham', 'olives'}),
            guest("B", likes={'ham', 'olives'}, dislikes={'spinach'}),
        )
        self.assertEqual(compatibility_score(a, b), compatibility_score(b, a))
        self.assertEqual(compatibility_score(a, b), -2)


class GroupingTests(SimpleTestCase):
    def test_partition_by_exact_exclusion_set(self):
        guests = normalized(
            guest("Veg", diet=['Vegetarian']),
            guest("Vegan", diet=['Vegan']),
            guest("Plain"),
            guest("VegDF", diet=['Vegetarian', 'Dairy-Free']),
            guest("GF", diet=['Gluten-Free']),
        )
        buckets = [[g.name for g in b] for b in partition_by_profile(guests)]
        self.assertEqual(buckets, [["Veg"], ["Vegan", "VegDF"], ["Plain", "GF"]])

    def test_groups_never_exceed_max_size(self):
        guests = normalized(*[guest(f"G{i}") for i in range(12)])
        for style in PizzaStyle:
            for group in group_guests(guests, style):
                self.assertLessEqual(len(group), MAX_GUESTS_PER_PIZZA[style])

    def test_small_bucket_is_one_group(self):
        guests = normalized(*[guest(f"G{i}") for i in range(5)])
        self.assertEqual(len(cluster(guests, 5)), 1)

    def test_greedy_clustering_picks_most_compatible(self):
        guests = normalized(
            guest("A", likes={'pepperoni'}),
            guest("B", likes={'mushrooms'}),
            guest("C", likes={'pepperoni'}),
        )
        groups = group_guests(guests, PizzaStyle.NEAPOLITAN)
        self.assertEqual([[g.name for g in grp.members] for grp in groups], [["A", "C"], ["B"]])

    def test_clustering_ties_go_by_input_order(self):
        guests = normalized(*[guest(f"G{i}") for i in range(7)])
        groups = cluster(guests, 5)
        self.assertEqual([g.name for g in groups[0].members], ["G0", "G1", "G2", "G3", "G4"])
        self.assertEqual([g.name for g in groups[1].members], ["G5", "G6"])

    def test_group_dietary_label_is_union_of_tags(self):
        guests = normalized(guest("Plain"), guest("GF", diet=['Gluten-Free']))
        group, = group_guests(guests, PizzaStyle.NEW_YORK)
        self.assertEqual(group.dietary_restrictions, ('Gluten-Free',))


# ---------------------------------------------------------------------------
# Conflict splitting
# ---------------------------------------------------------------------------

class SplittingTests(SimpleTestCase):
    def test_conflict_score(self):
        members = normalized(
            guest("Alice", likes={'pepperoni'}, dislikes={'mushrooms'}),
            guest("Bob", likes={'mushrooms'}, dislikes={'pepperoni'}),
        )
        self.assertEqual(conflict_score(members), 2)
        self.assertTrue(should_split(members))

    def test_single_guest_never_splits(self):
        members = normalized(guest("Alice", likes={'pepperoni'}, dislikes={'mushrooms'}))
        self.assertFalse(should_split(members))

    def test_below_threshold_does_not_split(self):
        members = normalized(
            guest("A", likes={'pepperoni'}),
            guest("B", dislikes={'pepperoni'}),
            guest("C"),
        )
        self.assertEqual(conflict_score(members), 1)
        self.assertFalse(should_split(members))

    def test_bisect_seeds_with_least_compatible_pair(self):
        members = normalized(
            guest("A", likes={'pepperoni', 'ham'}),
            guest("B", likes={'pepperoni'}, dislikes={'mushrooms'}),
            guest("C", likes={'mushrooms'}, dislikes={'pepperoni', 'ham'}),
        )
        left, right = bisect(members)
        self.assertEqual([m.name for m in left], ["A", "B"])
        self.assertEqual([m.name for m in right], ["C"])

    def test_bisect_ties_go_to_smaller_half(self):
        members = normalized(*[guest(f"G{i}") for i in range(4)])
        left, right = bisect(members)
        self.assertEqual([m.name for m in left], ["G0", "G2"])
        self.assertEqual([m.name for m in right], ["G1", "G3"])


# ---------------------------------------------------------------------------
# Topping selection
# ---------------------------------------------------------------------------

class ToppingSelectionTests(SimpleTestCase):
    def test_any_dislike_vetoes(self):
        members = normalized(
            guest("A", likes={'pepperoni', 'olives'}),
            guest("B", likes={'pepperoni'}, dislikes={'olives'}),
        )
        self.assertEqual(topping_ids(select_toppings(members, frozenset(), DEFAULT_CATALOG)), ['pepperoni'])

    def test_ranked_by_likes_then_name_and_capped(self):
        members = normalized(
            guest("A", likes={'spinach', 'bacon', 'olives', 'ham'}),
            guest("B", likes={'spinach', 'ham'}),
        )
        chosen = select_toppings(members, frozenset(), DEFAULT_CATALOG, limit=3)
        self.assertEqual(topping_ids(chosen), ['ham', 'spinach', 'bacon'])

    def test_exclusions_are_respected(self):
        members = normalized(guest("V", likes={'pepperoni', 'mushrooms'}, diet=['Vegetarian']))
        chosen = select_toppings(members, members[0].exclusions, DEFAULT_CATALOG)
        self.assertEqual(topping_ids(chosen), ['mushrooms'])

    def test_nothing_eligible_is_plain(self):
        members = normalized(guest("A", likes={'pepperoni'}), guest("B", dislikes={'pepperoni'}))
        self.assertEqual(select_toppings(members, frozenset(), DEFAULT_CATALOG), ())


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------

class SizingTests(SimpleTestCase):
    def test_smallest_size_that_serves_group(self):
        expected = {1: 10, 2: 14, 3: 16, 4: 18}
        for guests, diameter in expected.items():
            with self.subTest(guests=guests):
                size, quantity = size_for(guests, PizzaStyle.NEW_YORK)
                self.assertEqual(size.diameter, diameter)
                self.assertEqual(quantity, 1)

    def test_oversized_group_needs_several_of_largest(self):
        size, quantity = size_for(5, PizzaStyle.DETROIT)
        self.assertEqual(size.diameter, 20)
        self.assertEqual(quantity, 2)

    def test_neapolitan_fixed_ratio(self):
        size, quantity = size_for(9, PizzaStyle.NEAPOLITAN)
        self.assertEqual(size.name, 'Personal')
        self.assertEqual(quantity, 6)

    def test_ratio_spread_over_party(self):
        self.assertEqual(ratio_quantities([2, 2, 2, 2, 1]), [2, 1, 1, 1, 1])
        self.assertEqual(ratio_quantities([2, 2, 2]), [2, 1, 1])
        self.assertEqual(ratio_quantities([1, 2]), [1, 1])
        self.assertEqual(ratio_quantities([]), [])

    def test_ratio_never_below_one_pie_per_group(self):
        # three single guests in different dietary buckets
        self.assertEqual(ratio_quantities([1, 1, 1]), [1, 1, 1])

    def test_servings_formula(self):
        size, _ = size_for(4, PizzaStyle.NEW_YORK)
        self.assertEqual(size.servings, 4)


# ---------------------------------------------------------------------------
# Consolidation
# ---------------------------------------------------------------------------

class ConsolidationTests(SimpleTestCase):
    def test_identical_pizzas_merge(self):
        guests = [guest(f"G{i}", likes={'pepperoni'}) for i in range(10)]
        result = recommend(guests)
        self.assertEqual(len(result.pizzas), 1)
        pizza = result.pizzas[0]
        # two groups of five, each needing two family pizzas
        self.assertEqual(pizza.quantity, 4)
        self.assertEqual(pizza.guest_count, 10)
        self.assertEqual(len(pizza.guests), 10)
        self.assertEqual(pizza.id, 'pizza-1')

    def test_sorted_by_quantity_with_fresh_ids(self):
        pizzas = recommend([guest("Solo", likes={'mushrooms'}, diet=['Vegetarian'])]
                           + [guest(f"G{i}") for i in range(10)]).pizzas
        self.assertEqual([p.quantity for p in pizzas], [4, 1])
        self.assertEqual([p.id for p in pizzas], ['pizza-1', 'pizza-2'])
        self.assertEqual(topping_ids(pizzas[1].toppings), ['mushrooms'])

    def test_different_sizes_stay_apart(self):
        guests = [guest(f"G{i}") for i in range(6)]
        pizzas = recommend(guests).pizzas
        self.assertEqual(sorted(p.size.diameter for p in pizzas), [10, 20])

    def test_real_and_default_pizzas_merge(self):
        real = recommend([guest(f"Cheesy{i}", likes={'extra-cheese'}) for i in range(4)], expected=44)
        cheese = next(p for p in real.pizzas if p.label == 'Cheese')
        self.assertFalse(cheese.is_for_non_respondents)
        self.assertEqual(cheese.guest_count - cheese.non_respondent_count, 4)
        self.assertEqual(cheese.quantity, 5)

        data = cheese.as_dict()
        self.assertNotIn('isForNonRespondents', data)
        self.assertEqual(data['nonRespondentCount'], 16)
        self.assertEqual(data['guestCount'], 20)

    def test_half_and_half_lines_merge_by_halves(self):
        pepperoni = DEFAULT_CATALOG.topping('pepperoni')
        mushrooms = DEFAULT_CATALOG.topping('mushrooms')
        alice, bob, cara, dan = (guest(n) for n in ("Alice", "Bob", "Cara", "Dan"))

        def half_and_half(left, right):
            return PizzaRecommendation(
                id='x', toppings=(), size=SIZE_LADDER[2], style=PizzaStyle.NEW_YORK,
                dietary_restrictions=(), guest_count=2, guests=left.guests + right.guests,
                is_half_and_half=True, left_half=left, right_half=right,
            )

        first = half_and_half(PizzaHalf((pepperoni,), (alice,)), PizzaHalf((mushrooms,), (bob,)))
        second = half_and_half(PizzaHalf((mushrooms,), (dan,)), PizzaHalf((pepperoni,), (cara,)))
        pizza, = consolidate([first, second])
        self.assertEqual(pizza.quantity, 2)
        self.assertEqual(pizza.guest_count, 4)
        self.assertEqual(pizza.left_half.guests, (alice, cara))
        self.assertEqual(pizza.right_half.guests, (bob, dan))


# ---------------------------------------------------------------------------
# Non-respondent defaults
# ---------------------------------------------------------------------------

class DefaultsTests(SimpleTestCase):
    def test_apportion_sums_to_total(self):
        self.assertEqual(apportion(10, [0.4, 0.4, 0.1, 0.1]), [4, 4, 1, 1])
        self.assertEqual(apportion(3, [0.4, 0.4, 0.1, 0.1]), [1, 1, 1, 0])
        self.assertEqual(apportion(0, [1, 1]), [0, 0])

    def test_forty_non_respondents(self):
        pizzas = synthesize_pizzas(40, PizzaStyle.NEW_YORK, ALL_TOPPINGS, DEFAULT_CATALOG, CONFIG)
        quantities = {p.label: p.quantity for p in pizzas}
        self.assertEqual(quantities, {
            'Cheese': 4, 'Pepperoni': 4, 'Mushroom': 1, 'Veggie': 1,
            'Vegan': 4, 'Gluten-Free Cheese': 4,
        })
        guests = {p.label: p.guest_count for p in pizzas}
        self.assertEqual(guests, {
            'Cheese': 16, 'Pepperoni': 16, 'Mushroom': 4, 'Veggie': 4,
            'Vegan': 0, 'Gluten-Free Cheese': 0,
        })
        for pizza in pizzas:
            self.assertEqual(pizza.size.diameter, 18)

    def test_mix_split_before_sizing(self):
        pizzas = synthesize_pizzas(10, PizzaStyle.NEW_YORK, ALL_TOPPINGS, DEFAULT_CATALOG, CONFIG)
        self.assertEqual(
            [(p.label, p.quantity, p.guest_count) for p in pizzas],
            [('Cheese', 1, 4), ('Pepperoni', 1, 4), ('Mushroom', 1, 1), ('Veggie', 1, 1),
             ('Vegan', 1, 0), ('Gluten-Free Cheese', 1, 0)],
        )

    def test_neapolitan_defaults_use_fixed_ratio(self):
        pizzas = synthesize_pizzas(10, PizzaStyle.NEAPOLITAN, ALL_TOPPINGS, DEFAULT_CATALOG, CONFIG)
        quantities = {p.label: p.quantity for p in pizzas}
        self.assertEqual(quantities, {
            'Cheese': 3, 'Pepperoni': 3, 'Mushroom': 1, 'Veggie': 1,
            'Vegan': 1, 'Gluten-Free Cheese': 1,
        })
        for pizza in pizzas:
            self.assertEqual(pizza.size.name, 'Personal')

    def test_default_toppings_limited_to_available(self):
        pizzas = synthesize_pizzas(10, PizzaStyle.NEW_YORK, ['extra-cheese'], DEFAULT_CATALOG, CONFIG)
        pepperoni = next(p for p in pizzas if p.label == 'Pepperoni')
        self.assertEqual(topping_ids(pepperoni.toppings), ['extra-cheese'])
        vegan = next(p for p in pizzas if p.label == 'Vegan')
        self.assertEqual(vegan.toppings, ())

    def test_no_non_respondents(self):
        self.assertEqual(synthesize_pizzas(0, PizzaStyle.NEW_YORK, ALL_TOPPINGS, DEFAULT_CATALOG, CONFIG), [])


# ---------------------------------------------------------------------------
# Beverages
# ---------------------------------------------------------------------------

class BeverageTests(SimpleTestCase):
    def _offered(self, *ids):
        return DEFAULT_CATALOG.offered_beverages(ids)

    def test_respondent_quantities(self):
        guests = normalized(
            guest("A", drinks={'water', 'coke'}),
            guest("B", drinks={'water'}),
            guest("C", no_drinks={'beer'}),
            guest("D"),
        )
        lines = recommend_beverages(guests, self._offered('water', 'coke', 'beer'), None, CONFIG)
        self.assertEqual([(b.beverage.id, b.quantity) for b in lines], [('water', 6), ('coke', 4)])

    def test_non_respondent_defaults_weight_water(self):
        lines = recommend_beverages([], self._offered('water', 'coke'), 5, CONFIG)
        water, coke = lines
        self.assertEqual(water.quantity, 3 + 6)
        self.assertEqual(water.guest_count, 5)
        self.assertFalse(water.is_for_non_respondents)
        self.assertEqual(coke.quantity, 4)
        self.assertTrue(coke.is_for_non_respondents)


# ---------------------------------------------------------------------------
# End-to-end recommendation
# ---------------------------------------------------------------------------

class RecommendationTests(SimpleTestCase):
    def test_simple_split(self):
        alice = guest("Alice", likes={'pepperoni'}, dislikes={'mushrooms'})
        bob = guest("Bob", likes={'mushrooms'}, dislikes={'pepperoni'})
        result = recommend([alice, bob], expected=0)

        self.assertEqual(len(result.pizzas), 1)
        pizza = result.pizzas[0]
        self.assertTrue(pizza.is_half_and_half)
        self.assertEqual(topping_ids(pizza.left_half.toppings), ['pepperoni'])
        self.assertEqual(pizza.left_half.guests, (alice,))
        self.assertEqual(topping_ids(pizza.right_half.toppings), ['mushrooms'])
        self.assertEqual(pizza.right_half.guests, (bob,))
        self.assertEqual(pizza.guest_count, 2)

    def test_plain_fallback(self):
        result = recommend([
            guest("A", likes={'pepperoni'}),
            guest("B", dislikes={'pepperoni'}),
            guest("C"),
        ])
        pizza, = result.pizzas
        self.assertFalse(pizza.is_half_and_half)
        self.assertEqual(pizza.toppings, ())
        self.assertEqual(pizza.guest_count, 3)

    def test_mutual_dislikes_leave_one_half_plain(self):
        result = recommend([
            guest("A", likes={'pepperoni'}, dislikes={'mushrooms', 'onions'}),
            guest("B", likes={'mushrooms'}, dislikes={'pepperoni', 'onions'}),
            guest("C", likes={'onions'}, dislikes={'pepperoni', 'mushrooms'}),
        ])
        pizza, = result.pizzas
        self.assertTrue(pizza.is_half_and_half)
        self.assertEqual([g.name for g in pizza.left_half.guests], ["A", "C"])
        self.assertEqual(pizza.left_half.toppings, ())
        self.assertEqual(topping_ids(pizza.right_half.toppings), ['mushrooms'])

    def test_non_respondents_only(self):
        result = recommend([], expected=10)
        self.assertTrue(result.pizzas)
        guests = {p.label: p.guest_count for p in result.pizzas}
        self.assertEqual(guests, {
            'Cheese': 4, 'Pepperoni': 4, 'Mushroom': 1, 'Veggie': 1,
            'Vegan': 0, 'Gluten-Free Cheese': 0,
        })
        self.assertEqual(result.total_pizzas, 6)
        for pizza in result.pizzas:
            self.assertTrue(pizza.is_for_non_respondents)
            self.assertFalse(pizza.is_half_and_half)
        self.assertEqual(sum(p.guest_count for p in result.pizzas), 10)

    def test_neapolitan_sizing(self):
        result = recommend([guest(f"G{i}") for i in range(9)], style=PizzaStyle.NEAPOLITAN)
        self.assertEqual(result.total_pizzas, 6)
        for pizza in result.pizzas:
            self.assertEqual(pizza.size.name, 'Personal')

    def test_neapolitan_ratio_applies_across_groups(self):
        likes = ['mushrooms', 'onions', 'olives', 'spinach', 'tomatoes',
                 'pineapple', 'jalapenos', 'bell-peppers', 'feta']
        result = recommend([guest(f"G{i}", likes={t}) for i, t in enumerate(likes)],
                           style=PizzaStyle.NEAPOLITAN)
        self.assertEqual(len(result.pizzas), 5)
        self.assertEqual(result.total_pizzas, 6)
        self.assertEqual(sum(p.guest_count for p in result.pizzas), 9)

    def test_dietary_safety_and_veto(self):
        for style in PizzaStyle:
            with self.subTest(style=style):
                result = recommend(mixed_party(), style=style, expected=30)
                for pizza in result.pizzas:
                    for guests, toppings in portions(pizza):
                        ids = set(topping_ids(toppings))
                        self.assertLessEqual(len(ids), 3)
                        for g in guests:
                            restrictions = parse_restrictions(g.dietary_restrictions)
                            self.assertFalse(ids & DEFAULT_CATALOG.exclusions_for(restrictions))
                            self.assertFalse(ids & g.disliked_toppings)

    def test_conservation(self):
        guests = mixed_party()
        result = recommend(guests, expected=33)
        respondents = sum(p.guest_count - p.non_respondent_count for p in result.pizzas)
        synthetic = sum(p.non_respondent_count for p in result.pizzas)
        self.assertEqual(respondents, len(guests))
        self.assertEqual(synthetic, 13)

    def test_every_guest_served_once(self):
        guests = mixed_party()
        served = [g for p in recommend(guests).pizzas for g in p.guests]
        self.assertCountEqual(served, guests)

    def test_idempotent(self):
        first = recommend(mixed_party(), expected=25).as_dict()
        second = recommend(mixed_party(), expected=25).as_dict()
        self.assertEqual(first, second)

    def test_expected_below_responded_adds_nothing(self):
        result = recommend([guest("A"), guest("B")], expected=1)
        self.assertFalse(any(p.is_for_non_respondents for p in result.pizzas))

    def test_empty_topping_catalog_returns_no_pizzas(self):
        result = recommend([guest("A", drinks={'coke'})], toppings=[], beverages=['coke'])
        self.assertEqual(result.pizzas, ())
        self.assertEqual(len(result.beverages), 1)

    def test_empty_beverage_catalog_returns_no_beverages(self):
        result = recommend([guest("A")], beverages=[])
        self.assertEqual(result.beverages, ())
        self.assertEqual(len(result.pizzas), 1)

    def test_max_toppings_config(self):
        result = generate_recommendations(
            [guest("A", likes={'ham', 'olives', 'spinach'})], ALL_TOPPINGS, [], 'new-york',
            config=RecommendationConfig(max_toppings=1),
        )
        self.assertEqual(topping_ids(result.pizzas[0].toppings), ['ham'])


# ---------------------------------------------------------------------------
# Delivery waves
# ---------------------------------------------------------------------------

class WaveTests(SimpleTestCase):
    START = datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc)

    def test_short_party_single_wave(self):
        wave, = calculate_waves(self.START, 1.0, 12)
        self.assertEqual(wave.guest_allocation, 12)
        self.assertEqual(wave.weight, 1.0)
        self.assertEqual(wave.arrival_time, self.START - timedelta(minutes=5))

    def test_long_party_waves(self):
        waves = calculate_waves(self.START, 3, 30)
        self.assertEqual(len(waves), 4)
        self.assertEqual(waves[0].weight, 1.25)
        self.assertEqual([w.guest_allocation for w in waves], [9, 7, 7, 7])
        last_offset = waves[-1].arrival_time - self.START
        self.assertAlmostEqual(last_offset.total_seconds(), 135 * 60, delta=1)

    def test_allocations_always_sum_to_total(self):
        for hours in (1.5, 2, 2.75, 4, 6):
            for total in (1, 7, 23, 50):
                with self.subTest(hours=hours, total=total):
                    waves = calculate_waves(self.START, hours, total)
                    self.assertEqual(sum(w.guest_allocation for w in waves), total)

    def test_without_schedule_one_wave(self):
        waves = generate_wave_recommendations(
            [guest("A", likes={'ham'})], ALL_TOPPINGS, ALL_BEVERAGES, 'detroit', expected_guest_count=6,
        )
        self.assertEqual(len(waves), 1)
        self.assertEqual(waves[0].wave.label, 'All Pizzas')
        self.assertEqual(waves[0].wave.guest_allocation, 6)
        self.assertIsNone(waves[0].wave.arrival_time)

    def test_unscheduled_wave_is_repeatable(self):
        def plan():
            return [w.as_dict() for w in generate_wave_recommendations(
                [guest("A")], ALL_TOPPINGS, ALL_BEVERAGES, 'new-york', expected_guest_count=3)]

        first = plan()
        self.assertIsNone(first[0]['wave']['arrivalTime'])
        self.assertEqual(first, plan())

    def test_start_without_duration_arrives_at_start(self):
        wave, = generate_wave_recommendations(
            [guest("A")], ALL_TOPPINGS, ALL_BEVERAGES, 'new-york', start=self.START)
        self.assertEqual(wave.wave.arrival_time, self.START)


# ---------------------------------------------------------------------------
# Model and planning tests
# ---------------------------------------------------------------------------

def make_catalog():
    toppings = {t.id: Topping.objects.create(slug=t.id, name=t.name, category=t.type) for t in TOPPINGS}
    beverages = {b.id: Beverage.objects.create(slug=b.id, name=b.name, category=b.type) for b in BEVERAGES}
    return toppings, beverages


def make_party(toppings, beverages, **kwargs):
    party = Party.objects.create(name=kwargs.pop('name', "Test Party"), **kwargs)
    party.available_toppings.set(toppings.values())
    party.available_beverages.set(beverages.values())
    return party


def make_guest(party, name, likes=(), dislikes=(), diet=(), drinks=(), toppings=None, beverages=None):
    g = Guest.objects.create(party=party, name=name, dietary_restrictions=list(diet))
    for slug in likes:
        GuestToppingPreference.objects.create(guest=g, topping=toppings[slug], preference=GuestToppingPreference.LIKE)
    for slug in dislikes:
        GuestToppingPreference.objects.create(guest=g, topping=toppings[slug], preference=GuestToppingPreference.DISLIKE)
    for slug in drinks:
        GuestBeveragePreference.objects.create(guest=g, beverage=beverages[slug], preference=GuestBeveragePreference.LIKE)
    return g


class ModelTests(TestCase):
    def test_preference_values(self):
        self.assertEqual(GuestToppingPreference.LIKE, 1)
        self.assertEqual(GuestToppingPreference.DISLIKE, -1)

    def test_str(self):
        party = Party.objects.create(name="Launch Party")
        self.assertEqual(str(party), "Launch Party")
        self.assertEqual(party.pizza_style, PizzaStyle.NEW_YORK)
        nameless = Guest.objects.create(party=party)
        self.assertIn(str(nameless.pk), str(nameless))


class PlanningTests(TestCase):
    def setUp(self):
        self.toppings, self.beverages = make_catalog()
        self.party = make_party(self.toppings, self.beverages)

    def _guest(self, name, **kwargs):
        return make_guest(self.party, name, toppings=self.toppings, beverages=self.beverages, **kwargs)

    def test_guest_preferences_built_from_rows(self):
        self._guest("Alice", likes=['pepperoni'], dislikes=['olives'], diet=['Gluten-Free'], drinks=['coke'])
        self._guest("Bob")
        alice, bob = guest_preferences(self.party)
        self.assertEqual(alice.name, "Alice")
        self.assertEqual(alice.liked_toppings, {'pepperoni'})
        self.assertEqual(alice.disliked_toppings, {'olives'})
        self.assertEqual(alice.dietary_restrictions, {'Gluten-Free'})
        self.assertEqual(alice.liked_beverages, {'coke'})
        self.assertEqual(bob.liked_toppings, frozenset())

    def test_recommend_for_party(self):
        self._guest("Alice", likes=['pepperoni'], dislikes=['mushrooms'])
        self._guest("Bob", likes=['mushrooms'], dislikes=['pepperoni'])
        pizza, = recommend_for_party(self.party).pizzas
        self.assertTrue(pizza.is_half_and_half)
        self.assertEqual([g.name for g in pizza.left_half.guests], ["Alice"])

    def test_only_offered_toppings_are_used(self):
        self.party.available_toppings.set([self.toppings['mushrooms']])
        self._guest("Alice", likes=['pepperoni', 'mushrooms'])
        pizza, = recommend_for_party(self.party).pizzas
        self.assertEqual(topping_ids(pizza.toppings), ['mushrooms'])

    @override_config(MAX_TOPPINGS_PER_PIZZA=1)
    def test_constance_tunables_apply(self):
        self._guest("Alice", likes=['ham', 'olives', 'spinach'])
        pizza, = recommend_for_party(self.party).pizzas
        self.assertEqual(len(pizza.toppings), 1)

    def test_expected_guests_add_defaults(self):
        self.party.expected_guest_count = 12
        self.party.save()
        self._guest("Alice")
        result = recommend_for_party(self.party)
        self.assertEqual(sum(p.non_respondent_count for p in result.pizzas), 11)


class UtilsTests(SimpleTestCase):
    def test_compute_pizza_scores(self):
        result = recommend([
            guest("Alice", likes={'pepperoni'}, dislikes={'mushrooms'}),
            guest("Bob", likes={'mushrooms'}, dislikes={'pepperoni'}),
            guest("Cara", likes={'olives', 'spinach'}, diet=['Vegetarian']),
        ])
        scores = compute_pizza_scores(result.pizzas)
        self.assertEqual(set(scores.values()), {2})


# ---------------------------------------------------------------------------
# View integration tests
# ---------------------------------------------------------------------------

class RecommendationViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.toppings, self.beverages = make_catalog()
        self.party = make_party(self.toppings, self.beverages, expected_guest_count=4)
        make_guest(self.party, "Alice", likes=['pepperoni'], drinks=['coke'],
                   toppings=self.toppings, beverages=self.beverages)

    def _url(self, name='party_recommendations', party_id=None):
        return reverse(name, args=[party_id or self.party.pk])

    def test_returns_json_order(self):
        response = self.client.get(self._url())
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertIn('pizzas', data)
        self.assertIn('beverages', data)
        self.assertEqual(data['totalPizzas'], sum(p['quantity'] for p in data['pizzas']))
        self.assertNotIn('scores', data)

    def test_staff_see_scores(self):
        staff = get_user_model().objects.create_user(username='host', password='pw', is_staff=True)
        self.client.force_login(staff)
        data = self.client.get(self._url()).json()
        self.assertEqual(set(data['scores']), {p['id'] for p in data['pizzas']})

    def test_missing_party_404(self):
        response = self.client.get(self._url(party_id=9999))
        self.assertEqual(response.status_code, 404)

    def test_nameless_guest_400(self):
        Guest.objects.create(party=self.party, name="")
        response = self.client.get(self._url())
        self.assertEqual(response.status_code, 400)
        self.assertIn('errors', response.json())

    def test_post_not_allowed(self):
        response = self.client.post(self._url())
        self.assertEqual(response.status_code, 405)

    def test_waves(self):
        self.party.starts_at = datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc)
        self.party.duration_hours = 3
        self.party.save()
        response = self.client.get(self._url('party_waves'))
        self.assertEqual(response.status_code, 200)
        waves = response.json()['waves']
        self.assertEqual(len(waves), 4)
        self.assertEqual(sum(w['wave']['guestAllocation'] for w in waves), 4)


# ---------------------------------------------------------------------------
# Management command tests
# ---------------------------------------------------------------------------

class CommandTests(TestCase):
    def test_seed_catalog(self):
        out = StringIO()
        call_command('seed_catalog', stdout=out)
        self.assertEqual(Topping.objects.count(), len(TOPPINGS))
        self.assertEqual(Beverage.objects.count(), len(BEVERAGES))
        self.assertIn("Created", out.getvalue())

    def test_seed_test_party_respects_restrictions(self):
        call_command('seed_test_party', '--expected', '30', '--responding', '26', '--seed', '7', stdout=StringIO())
        party = Party.objects.get()
        self.assertEqual(party.guests.count(), 26)
        for prefs in guest_preferences(party):
            restrictions = parse_restrictions(prefs.dietary_restrictions)
            self.assertFalse(prefs.liked_toppings & DEFAULT_CATALOG.exclusions_for(restrictions))

    def test_seed_test_party_rejects_more_responding_than_expected(self):
        with self.assertRaises(CommandError):
            call_command('seed_test_party', '--expected', '2', '--responding', '3', stdout=StringIO())

    def test_recommend_prints_order(self):
        call_command('seed_test_party', '--seed', '1', stdout=StringIO())
        party = Party.objects.get()
        out = StringIO()
        call_command('recommend', str(party.pk), stdout=out)
        self.assertIn("pizzas", out.getvalue())

    def test_recommend_waves_without_schedule(self):
        call_command('seed_test_party', '--seed', '2', stdout=StringIO())
        party = Party.objects.get()
        out = StringIO()
        call_command('recommend', str(party.pk), '--waves', stdout=out)
        self.assertIn("All Pizzas - unscheduled", out.getvalue())

    def test_recommend_unknown_party(self):
        with self.assertRaises(CommandError):
            call_command('recommend', '9999', stdout=StringIO())
