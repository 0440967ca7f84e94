# Airindex: air quality index calculations
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Synthetic pollutant readings with a daily cycle.

Produces plausible sample readings for demos, seeding and tests. Values
follow a simple diurnal shape (morning and evening traffic peaks, a quiet
night) with noise and optional random gaps. This is not a statistical model
of real air quality.

Example:
    >>> import numpy as np
    >>> from airindex.synthetic import generate_synthetic
    >>>
    >>> rng = np.random.default_rng(42)
    >>> readings = generate_synthetic(hour=8, random=rng.random)
"""

from datetime import datetime
from typing import NamedTuple

import numpy as np

from .metrics.base import FIELD_NAMES, POLLUTANTS, Readings, round_half_up
from .types import RandomSource


class PollutantProfile(NamedTuple):
    """Shape of one pollutant's synthetic values."""

    base: float  # Value when the pollution factor is 0
    spread: float  # Added at a pollution factor of 1
    noise_range: float  # Noise is +/- 10% of this


class HourRegime(NamedTuple):
    """Range of the pollution factor for a set of hours."""

    name: str
    hours: frozenset[int]
    low: float
    high: float


SYNTHETIC_PROFILES: dict[str, PollutantProfile] = {
    "PM2.5": PollutantProfile(base=20, spread=80, noise_range=145),
    "PM10": PollutantProfile(base=50, spread=150, noise_range=290),
    "NO2": PollutantProfile(base=50, spread=200, noise_range=390),
    "SO2": PollutantProfile(base=20, spread=100, noise_range=195),
    "O3": PollutantProfile(base=40, spread=120, noise_range=240),
}

HOUR_REGIMES: tuple[HourRegime, ...] = (
    HourRegime("morning peak", frozenset(range(7, 10)), 0.8, 1.0),
    HourRegime("evening peak", frozenset(range(17, 20)), 0.7, 1.0),
    HourRegime("night", frozenset({23, 0, 1, 2, 3, 4, 5}), 0.3, 0.5),
)

DAYTIME = HourRegime("daytime", frozenset(), 0.5, 0.8)

DEFAULT_MISSING_PROBABILITY = 0.2

# Fraction of noise_range spanned by the noise
NOISE_SCALE = 0.2

# Decimal places kept in generated values
VALUE_PRECISION = 1


def hour_regime(hour: int) -> HourRegime:
    """Return the regime an hour of the day belongs to."""
    for regime in HOUR_REGIMES:
        if hour in regime.hours:
            return regime
    return DAYTIME


def max_value(pollutant: str) -> float:
    """Return the largest value generate_synthetic can produce for a pollutant."""
    profile = SYNTHETIC_PROFILES[pollutant]
    return profile.base + profile.spread + profile.noise_range * NOISE_SCALE / 2


def generate_synthetic(
    hour: int | None = None,
    include_missing: bool = True,
    missing_probability: float = DEFAULT_MISSING_PROBABILITY,
    random: RandomSource | None = None,
) -> Readings:
    """
    Generate one set of synthetic pollutant readings.

    A pollution factor is drawn once for the hour's regime (morning peak
    7-9: 0.8-1.0, evening peak 17-19: 0.7-1.0, night 23-5: 0.3-0.5,
    otherwise 0.5-0.8). Each pollutant is then base + factor * spread plus
    symmetric noise, clamped at zero and rounded to 1 decimal place.

    Args:
        hour: Whole hour of the day (0-23). Defaults to the current local
              hour.
        include_missing: Randomly drop readings to simulate gaps
        missing_probability: Chance each pollutant is dropped, drawn
                             independently per pollutant
        random: Source of uniform floats in [0, 1). Defaults to a fresh
                numpy Generator. Draws are consumed in a fixed order: the
                pollution factor, then for each pollutant its noise followed
                by its missing-value draw (only when include_missing is set).

    Returns:
        Readings with None for dropped pollutants

    Raises:
        ValueError: If hour is not a whole number between 0 and 23, or
                    missing_probability is outside [0, 1]
    """
    if hour is None:
        hour = datetime.now().hour

    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be between 0 and 23, got {hour}")

    if int(hour) != hour:
        raise ValueError(f"hour must be a whole number, got {hour}")

    if not 0 <= missing_probability <= 1:
        raise ValueError(
            f"missing_probability must be between 0 and 1, got {missing_probability}"
        )

    if random is None:
        random = np.random.default_rng().random

    regime = hour_regime(hour)
    factor = regime.low + random() * (regime.high - regime.low)

    values = {}
    for pollutant in POLLUTANTS:
        profile = SYNTHETIC_PROFILES[pollutant]
        value = profile.base + factor * profile.spread
        noise = (random() - 0.5) * profile.noise_range * NOISE_SCALE
        value = max(0.0, value + noise)

        if include_missing and random() < missing_probability:
            values[FIELD_NAMES[pollutant]] = None
        else:
            values[FIELD_NAMES[pollutant]] = round_half_up(value, VALUE_PRECISION)

    return Readings(**values)
