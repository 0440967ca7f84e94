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
Limit-ratio air quality index.

Each pollutant's sub-index is its concentration as a percentage of a
reference limit:

    sub_index = (concentration / limit) * 100

The aggregate index is the highest sub-index (the worst pollutant governs),
rounded to 2 decimal places, and is classified into one of six categories
from "good" to "hazardous".

Default limits (µg/m³): PM2.5 50, PM10 300, NO2 400, SO2 200, O3 150.
Any limit can be overridden per call.
"""

from types import MappingProxyType
from typing import Mapping

from .base import (
    CATEGORIES,
    DEFAULT_LIMITS,
    POLLUTANTS,
    AggregateResult,
    Category,
    IndexInfo,
    InsufficientDataError,
    InvalidLimitError,
    Readings,
    is_missing,
    require_pollutant,
    round_half_up,
)

# =============================================================================
# Index Metadata
# =============================================================================

INDEX_INFO: IndexInfo = {
    "name": "Limit-Ratio Air Quality Index",
    "short_name": "LRAQI",
    "scale_min": 0,
    "pollutants": list(POLLUTANTS),
    "description": (
        "Each pollutant is scored as a percentage of its reference limit. "
        "The overall index is the highest pollutant score, on an open-ended "
        "scale from 0 where 100 means a pollutant has reached its limit."
    ),
}

# Decimal places reported for the aggregate index
INDEX_PRECISION = 2


# =============================================================================
# Calculation Functions
# =============================================================================


def compute_sub_index(
    concentration: float | None,
    limit: float,
    pollutant: str | None = None,
) -> float | None:
    """
    Calculate the sub-index for a single pollutant concentration.

    Args:
        concentration: Pollutant concentration in µg/m³, or None if missing
        limit: Reference concentration that maps to a sub-index of 100
        pollutant: Pollutant name, used only to label errors

    Returns:
        The sub-index (not clamped, may exceed 100), or None if the
        concentration is missing, NaN, or infinite

    Raises:
        InvalidLimitError: If limit is not strictly positive
    """
    if not limit > 0:
        raise InvalidLimitError(limit, pollutant)

    if is_missing(concentration):
        return None

    return (concentration / limit) * 100


def classify(index: float) -> Category:
    """
    Find the category for an aggregate index value.

    Args:
        index: Non-negative aggregate index

    Returns:
        Category dict with name, label, color and band bounds

    Example:
        >>> classify(150)["name"]
        'unhealthy-sensitive'
        >>> classify(150.5)["name"]
        'unhealthy'
    """
    for category in CATEGORIES:
        if index <= category["max"]:
            return category

    # Only reachable for NaN
    return CATEGORIES[-1]


def merge_limits(
    overrides: Mapping[str, float] | None = None,
) -> Mapping[str, float]:
    """
    Merge per-call limit overrides with the default limits.

    Args:
        overrides: Mapping of pollutant name (any recognised alias) to limit.
                   Pollutants not present keep their default.

    Returns:
        Read-only mapping with a limit for every pollutant

    Raises:
        ValueError: If an override names an unknown pollutant
        InvalidLimitError: If an override is not strictly positive
    """
    limits = dict(DEFAULT_LIMITS)

    for key, value in (overrides or {}).items():
        pollutant = require_pollutant(key)
        if not value > 0:
            raise InvalidLimitError(value, pollutant)
        limits[pollutant] = value

    return MappingProxyType(limits)


def compute_aggregate(
    readings: Readings | Mapping[str, float | None],
    limits: Mapping[str, float] | None = None,
) -> AggregateResult:
    """
    Calculate the aggregate index for a set of pollutant readings.

    Every pollutant is scored, not only those present in the input; missing
    readings get a sub-index of None and are left out of the aggregate.

    Args:
        readings: Readings record, or a mapping of pollutant name to
                  concentration (µg/m³, None if missing)
        limits: Optional limit overrides, merged over DEFAULT_LIMITS

    Returns:
        AggregateResult with sub-indices, rounded index and category

    Raises:
        InvalidLimitError: If a limit override is not strictly positive
        InsufficientDataError: If no pollutant has a usable reading
        ValueError: If a mapping key is not a recognised pollutant

    Example:
        >>> result = compute_aggregate(
        ...     {"PM2.5": 75, "PM10": 60, "NO2": 80, "SO2": 40, "O3": 30}
        ... )
        >>> result.index, result.category
        (150.0, 'unhealthy-sensitive')
    """
    if not isinstance(readings, Readings):
        readings = Readings.from_mapping(readings)

    effective_limits = merge_limits(limits)

    sub_indices = {}
    valid = []
    for pollutant in POLLUTANTS:
        sub_index = compute_sub_index(
            readings.get(pollutant), effective_limits[pollutant], pollutant
        )
        sub_indices[pollutant] = sub_index
        if sub_index is not None:
            valid.append((sub_index, pollutant))

    if not valid:
        raise InsufficientDataError()

    # Ties go to the pollutant listed first
    worst, dominant = max(valid, key=lambda item: item[0])

    # Category comes from the unrounded value
    category = classify(worst)

    return AggregateResult(
        sub_indices=MappingProxyType(sub_indices),
        index=round_half_up(worst, INDEX_PRECISION),
        category=category["name"],
        category_label=category["label"],
        color=category["color"],
        limits=effective_limits,
        valid_measurements=len(valid),
        total_pollutants=len(POLLUTANTS),
        dominant_pollutant=dominant,
    )
