"""Value types passed into and out of the recommendation engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecommendationConfig:
    """Tunables for one recommendation run."""

    max_toppings: int = 3
    beverages_per_person: int = 2
    water_weight: float = 1.5
    min_liked_beverage_units: int = 4
    # one extra vegan and one extra gluten-free pizza per this many non-respondents
    guests_per_special_pizza: int = 10
    # cheese, pepperoni, mushroom, veggie
    default_mix: tuple = (0.4, 0.4, 0.1, 0.1)


@dataclass(frozen=True)
class GuestPreference:
    """One guest's RSVP. Sets may be given as any iterable of ids."""

    name: str
    id: str | None = None
    dietary_restrictions: frozenset = frozenset()
    liked_toppings: frozenset = frozenset()
    disliked_toppings: frozenset = frozenset()
    liked_beverages: frozenset = frozenset()
    disliked_beverages: frozenset = frozenset()

    def as_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'dietaryRestrictions': sorted(str(r) for r in self.dietary_restrictions),
        }


@dataclass(frozen=True)
class PizzaSize:
    diameter: int
    name: str

    @property
    def servings(self):
        """Guests served, by surface area relative to an 18" pie feeding four."""
        return (self.diameter / 18) ** 2 * 4

    def as_dict(self):
        return {'diameter': self.diameter, 'name': self.name, 'servings': round(self.servings, 2)}


@dataclass(frozen=True)
class PizzaHalf:
    toppings: tuple = ()
    guests: tuple = ()
    dietary_restrictions: tuple = ()

    def as_dict(self):
        return {
            'toppings': [t.as_dict() for t in self.toppings],
            'guests': [g.as_dict() for g in self.guests],
            'dietaryRestrictions': list(self.dietary_restrictions),
        }


@dataclass(frozen=True)
class PizzaRecommendation:
    """
    A line item of the pizza order.

    `guest_count` covers respondents and non-respondents alike;
    `non_respondent_count` is the share of it that was synthesized.
    """

    id: str
    toppings: tuple
    size: PizzaSize
    style: str
    dietary_restrictions: tuple
    guest_count: int
    guests: tuple = ()
    quantity: int = 1
    is_half_and_half: bool = False
    left_half: PizzaHalf | None = None
    right_half: PizzaHalf | None = None
    is_for_non_respondents: bool = False
    non_respondent_count: int = 0
    label: str | None = None

    def as_dict(self):
        data = {
            'id': self.id,
            'toppings': [t.as_dict() for t in self.toppings],
            'size': self.size.as_dict(),
            'style': str(self.style),
            'dietaryRestrictions': list(self.dietary_restrictions),
            'guestCount': self.guest_count,
            'guests': [g.as_dict() for g in self.guests],
            'quantity': self.quantity,
        }
        if self.is_half_and_half:
            data['isHalfAndHalf'] = True
            data['leftHalf'] = self.left_half.as_dict()
            data['rightHalf'] = self.right_half.as_dict()
        if self.is_for_non_respondents:
            data['isForNonRespondents'] = True
        if self.non_respondent_count:
            data['nonRespondentCount'] = self.non_respondent_count
        if self.label:
            data['label'] = self.label
        return data


@dataclass(frozen=True)
class BeverageRecommendation:
    id: str
    beverage: object
    quantity: int
    guest_count: int
    is_for_non_respondents: bool = False
    label: str | None = None

    def as_dict(self):
        data = {
            'id': self.id,
            'beverage': self.beverage.as_dict(),
            'quantity': self.quantity,
            'guestCount': self.guest_count,
            'label': self.label,
        }
        if self.is_for_non_respondents:
            data['isForNonRespondents'] = True
        return data


@dataclass(frozen=True)
class RecommendationResult:
    pizzas: tuple = ()
    beverages: tuple = ()

    @property
    def total_pizzas(self):
        return sum(p.quantity for p in self.pizzas)

    @property
    def total_beverages(self):
        return sum(b.quantity for b in self.beverages)

    def as_dict(self):
        return {
            'pizzas': [p.as_dict() for p in self.pizzas],
            'beverages': [b.as_dict() for b in self.beverages],
            'totalPizzas': self.total_pizzas,
            'totalBeverages': self.total_beverages,
        }


@dataclass(frozen=True)
class Wave:
    id: str
    arrival_time: object  # None for an unscheduled party
    guest_allocation: int
    weight: float
    label: str

    def as_dict(self):
        return {
            'id': self.id,
            'arrivalTime': self.arrival_time.isoformat() if self.arrival_time else None,
            'guestAllocation': self.guest_allocation,
            'weight': self.weight,
            'label': self.label,
        }


@dataclass(frozen=True)
class WaveRecommendation:
    wave: Wave
    result: RecommendationResult = field(default_factory=RecommendationResult)

    def as_dict(self):
        data = self.result.as_dict()
        data['wave'] = self.wave.as_dict()
        return data
