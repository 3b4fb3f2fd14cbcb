"""
Topping and beverage catalog.

The catalog is reference data supplied by the host: it names every topping
and beverage the engine may see and gives each one a type. Dietary
restrictions are resolved against topping types, so a restriction excludes
every catalog topping of a forbidden type:

  - Vegetarian:  meat
  - Vegan:       meat, cheese
  - Dairy-Free:  cheese
  - Gluten-Free: nothing (handled at the crust, not the toppings)

A Catalog is passed explicitly into every stage that needs a lookup; there
is no module-level lookup other than the DEFAULT_CATALOG constant callers
may choose to pass in.
"""

import logging
from dataclasses import dataclass

from django.db import models

logger = logging.getLogger(__name__)


class PizzaStyle(models.TextChoices):
    NEAPOLITAN = 'neapolitan', 'Neapolitan'
    NEW_YORK = 'new-york', 'New York'
    DETROIT = 'detroit', 'Detroit'


class DietaryRestriction(models.TextChoices):
    VEGETARIAN = 'Vegetarian', 'Vegetarian'
    VEGAN = 'Vegan', 'Vegan'
    GLUTEN_FREE = 'Gluten-Free', 'Gluten-Free'
    DAIRY_FREE = 'Dairy-Free', 'Dairy-Free'


DIETARY_EXCLUDED_TYPES = {
    DietaryRestriction.VEGETARIAN: frozenset({'meat'}),
    DietaryRestriction.VEGAN: frozenset({'meat', 'cheese'}),
    DietaryRestriction.DAIRY_FREE: frozenset({'cheese'}),
    DietaryRestriction.GLUTEN_FREE: frozenset(),
}


class EmptyCatalogError(ValueError):
    """The host offers nothing in a catalog category (toppings or beverages)."""

    def __init__(self, category):
        super().__init__(f"No {category} are available for this party.")
        self.category = category


@dataclass(frozen=True)
class CatalogItem:
    """A topping or beverage. `type` is e.g. meat, vegetable, cheese, fruit, water, soda."""

    id: str
    name: str
    type: str

    def as_dict(self):
        return {'id': self.id, 'name': self.name, 'type': self.type}


class Catalog:
    """Lookup of topping and beverage catalog items by id."""

    def __init__(self, toppings, beverages=()):
        self.toppings = {item.id: item for item in toppings}
        self.beverages = {item.id: item for item in beverages}

    def topping(self, topping_id):
        return self.toppings[topping_id]

    def beverage(self, beverage_id):
        return self.beverages[beverage_id]

    def known_toppings(self, topping_ids):
        return frozenset(t for t in topping_ids if t in self.toppings)

    def known_beverages(self, beverage_ids):
        return frozenset(b for b in beverage_ids if b in self.beverages)

    def exclusions_for(self, restrictions):
        """Return the ids of every catalog topping forbidden by any of `restrictions`."""
        excluded_types = set()
        for restriction in restrictions:
            excluded_types |= DIETARY_EXCLUDED_TYPES[restriction]
        return frozenset(
            item.id for item in self.toppings.values() if item.type in excluded_types
        )

    def offered_toppings(self, topping_ids):
        """
        Resolve the host's available topping ids to catalog items, in host order.

        Raises:
            EmptyCatalogError: If none of the ids name a catalog topping.
        """
        return self._offered(topping_ids, self.toppings, 'toppings')

    def offered_beverages(self, beverage_ids):
        """Like offered_toppings(), for beverages."""
        return self._offered(beverage_ids, self.beverages, 'beverages')

    @staticmethod
    def _offered(ids, items, category):
        offered = []
        for item_id in dict.fromkeys(ids):
            if item_id in items:
                offered.append(items[item_id])
            else:
                logger.warning("Ignoring unknown %s id %r", category, item_id)
        if not offered:
            raise EmptyCatalogError(category)
        return offered


TOPPINGS = [
    CatalogItem('pepperoni', 'Pepperoni', 'meat'),
    CatalogItem('sausage', 'Sausage', 'meat'),
    CatalogItem('bacon', 'Bacon', 'meat'),
    CatalogItem('ham', 'Ham', 'meat'),
    CatalogItem('chicken', 'Chicken', 'meat'),
    CatalogItem('anchovies', 'Anchovies', 'meat'),
    CatalogItem('mushrooms', 'Mushrooms', 'vegetable'),
    CatalogItem('onions', 'Onions', 'vegetable'),
    CatalogItem('bell-peppers', 'Bell Peppers', 'vegetable'),
    CatalogItem('olives', 'Olives', 'vegetable'),
    CatalogItem('spinach', 'Spinach', 'vegetable'),
    CatalogItem('jalapenos', 'Jalapeños', 'vegetable'),
    CatalogItem('tomatoes', 'Tomatoes', 'vegetable'),
    CatalogItem('pineapple', 'Pineapple', 'fruit'),
    CatalogItem('extra-cheese', 'Extra Cheese', 'cheese'),
    CatalogItem('feta', 'Feta', 'cheese'),
]

BEVERAGES = [
    CatalogItem('water', 'Water', 'water'),
    CatalogItem('sparkling-water', 'Sparkling Water', 'water'),
    CatalogItem('coke', 'Coca-Cola', 'soda'),
    CatalogItem('diet-coke', 'Diet Coke', 'soda'),
    CatalogItem('sprite', 'Sprite', 'soda'),
    CatalogItem('fanta', 'Fanta', 'soda'),
    CatalogItem('pepsi', 'Pepsi', 'soda'),
    CatalogItem('mountain-dew', 'Mountain Dew', 'soda'),
    CatalogItem('dr-pepper', 'Dr Pepper', 'soda'),
    CatalogItem('orange-juice', 'Orange Juice', 'juice'),
    CatalogItem('apple-juice', 'Apple Juice', 'juice'),
    CatalogItem('lemonade', 'Lemonade', 'juice'),
    CatalogItem('iced-tea', 'Iced Tea', 'other'),
    CatalogItem('beer', 'Beer', 'alcohol'),
    CatalogItem('wine', 'Wine', 'alcohol'),
]

DEFAULT_CATALOG = Catalog(TOPPINGS, BEVERAGES)
