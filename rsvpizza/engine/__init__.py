from .catalog import (
    DEFAULT_CATALOG, Catalog, CatalogItem, DietaryRestriction, EmptyCatalogError, PizzaStyle,
)
from .records import (
    BeverageRecommendation, GuestPreference, PizzaHalf, PizzaRecommendation, PizzaSize,
    RecommendationConfig, RecommendationResult, Wave, WaveRecommendation,
)
from .recommend import DEFAULT_CONFIG, generate_recommendations
from .waves import calculate_waves, generate_wave_recommendations
