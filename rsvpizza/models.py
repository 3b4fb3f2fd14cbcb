from django.db import models

from .engine.catalog import DietaryRestriction, PizzaStyle


class Topping(models.Model):
    """Represents a pizza topping."""
    CATEGORY_CHOICES = [
        ('meat', 'Meat'),
        ('vegetable', 'Vegetable'),
        ('cheese', 'Cheese'),
        ('fruit', 'Fruit'),
    ]

    slug = models.SlugField(max_length=50, unique=True)
    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(
        max_length=20, choices=CATEGORY_CHOICES,
        help_text="Dietary restrictions exclude toppings by category (e.g. Vegan excludes meat and cheese)"
    )

    def __str__(self):
        return self.name


class Beverage(models.Model):
    """Represents a drink a host can offer."""
    CATEGORY_CHOICES = [
        ('water', 'Water'),
        ('soda', 'Soda'),
        ('juice', 'Juice'),
        ('alcohol', 'Alcohol'),
        ('other', 'Other'),
    ]

    slug = models.SlugField(max_length=50, unique=True)
    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)

    def __str__(self):
        return self.name


class Party(models.Model):
    """An event whose guests RSVP with their food preferences."""
    name = models.CharField(max_length=200)
    host_name = models.CharField(max_length=200, blank=True)
    pizza_style = models.CharField(
        max_length=20, choices=PizzaStyle.choices, default=PizzaStyle.NEW_YORK,
    )
    expected_guest_count = models.PositiveIntegerField(
        null=True, blank=True,
        help_text="Guests expected in total; non-respondents get default pizzas and drinks"
    )
    available_toppings = models.ManyToManyField(Topping, related_name='parties', blank=True)
    available_beverages = models.ManyToManyField(Beverage, related_name='parties', blank=True)
    starts_at = models.DateTimeField(null=True, blank=True)
    duration_hours = models.FloatField(
        null=True, blank=True,
        help_text="With a start time, long parties get pizza delivered in waves"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Parties"

    def __str__(self):
        return self.name


class Guest(models.Model):
    """One RSVP to a party."""
    party = models.ForeignKey(Party, on_delete=models.CASCADE, related_name='guests')
    name = models.CharField(max_length=200, blank=True)
    dietary_restrictions = models.JSONField(
        default=list, blank=True,
        help_text=f"Any of: {', '.join(DietaryRestriction.values)}"
    )
    toppings = models.ManyToManyField(Topping, through='GuestToppingPreference', related_name='guests')
    beverages = models.ManyToManyField(Beverage, through='GuestBeveragePreference', related_name='guests')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name or f"Guest #{self.pk}"


class Preference(models.IntegerChoices):
    DISLIKE = -1, 'Dislike'
    LIKE = 1, 'Like'


class GuestToppingPreference(models.Model):
    """Through model for guest-topping likes and dislikes."""
    LIKE = Preference.LIKE
    DISLIKE = Preference.DISLIKE

    guest = models.ForeignKey(Guest, on_delete=models.CASCADE, related_name='topping_preferences')
    topping = models.ForeignKey(Topping, on_delete=models.CASCADE, related_name='guest_preferences')
    preference = models.IntegerField(choices=Preference.choices)

    class Meta:
        unique_together = [['guest', 'topping']]

    def __str__(self):
        return f"{self.guest} - {self.topping.name} ({self.get_preference_display()})"


class GuestBeveragePreference(models.Model):
    """Through model for guest-beverage likes and dislikes."""
    LIKE = Preference.LIKE
    DISLIKE = Preference.DISLIKE

    guest = models.ForeignKey(Guest, on_delete=models.CASCADE, related_name='beverage_preferences')
    beverage = models.ForeignKey(Beverage, on_delete=models.CASCADE, related_name='guest_preferences')
    preference = models.IntegerField(choices=Preference.choices)

    class Meta:
        unique_together = [['guest', 'beverage']]

    def __str__(self):
        return f"{self.guest} - {self.beverage.name} ({self.get_preference_display()})"
