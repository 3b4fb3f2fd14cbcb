"""
Delivery waves.

Long parties get pizza in several deliveries rather than one. The first wave
lands five minutes before the start and is over-weighted by 25%; later waves
are spaced 45-60 minutes apart, and nothing arrives within 45 minutes of the
end. Parties under 1.5 hours get a single wave.
"""

import math
from datetime import timedelta

from .defaults import round_half_up
from .recommend import DEFAULT_CONFIG, generate_recommendations
from .catalog import DEFAULT_CATALOG
from .records import Wave, WaveRecommendation

FIRST_WAVE_OFFSET = timedelta(minutes=-5)
FIRST_WAVE_WEIGHT = 1.25
MIN_TIME_BEFORE_END = timedelta(minutes=45)
WAVE_SPACING_MIN = 45
WAVE_SPACING_MAX = 60
SHORT_PARTY_HOURS = 1.5


def calculate_waves(start, duration_hours, total_guests):
    """Return the delivery Waves for a party; allocations sum to `total_guests`."""
    first_arrival = start + FIRST_WAVE_OFFSET
    if duration_hours < SHORT_PARTY_HOURS:
        return [Wave('wave-1', first_arrival, total_guests, 1.0, 'Single Wave')]

    last_arrival = start + timedelta(hours=duration_hours) - MIN_TIME_BEFORE_END
    window = (last_arrival - first_arrival).total_seconds() / 60

    target_spacing = (WAVE_SPACING_MIN + WAVE_SPACING_MAX) / 2
    max_waves = math.floor(window / WAVE_SPACING_MIN) + 1
    wave_count = min(max_waves, max(2, round_half_up(window / target_spacing) + 1))
    spacing = window / (wave_count - 1)
    total_weight = FIRST_WAVE_WEIGHT + (wave_count - 1)

    waves = []
    for i in range(wave_count):
        weight = FIRST_WAVE_WEIGHT if i == 0 else 1.0
        waves.append(Wave(
            id=f"wave-{i + 1}",
            arrival_time=first_arrival + timedelta(minutes=i * spacing),
            guest_allocation=round_half_up(weight / total_weight * total_guests),
            weight=weight,
            label='Wave 1 (Party Start)' if i == 0 else f"Wave {i + 1}",
        ))

    drift = total_guests - sum(w.guest_allocation for w in waves)
    last = waves[-1]
    waves[-1] = Wave(last.id, last.arrival_time, last.guest_allocation + drift, last.weight, last.label)
    return waves


def generate_wave_recommendations(guests, available_topping_ids, available_beverage_ids, style,
                                  expected_guest_count=None, start=None, duration_hours=None,
                                  catalog=DEFAULT_CATALOG, config=DEFAULT_CONFIG):
    """
    Recommend one order per delivery wave.

    Each wave is a full recommendation run over every respondent, with the
    wave's guest allocation standing in for the expected guest count. Without
    a start time and duration the whole party is one "All Pizzas" wave
    arriving at `start`, or with no arrival time when there is none.
    """
    total_guests = expected_guest_count or len(guests)
    if start is None or not duration_hours:
        waves = [Wave('wave-1', start, total_guests, 1.0, 'All Pizzas')]
        allocations = [expected_guest_count]
    else:
        waves = calculate_waves(start, duration_hours, total_guests)
        allocations = [w.guest_allocation for w in waves]

    return [
        WaveRecommendation(wave, generate_recommendations(
            guests, available_topping_ids, available_beverage_ids, style,
            expected_guest_count=allocation, catalog=catalog, config=config,
        ))
        for wave, allocation in zip(waves, allocations)
    ]
