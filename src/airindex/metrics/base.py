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
Base types, constants, and utilities for air quality index calculations.

This module provides the foundation for the index engine: the fixed
pollutant enumeration, pollutant name standardisation, the default limit
table, the category table, the reading and result records, and the errors
raised for bad limits or unusable readings.
"""

import math
from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Mapping, TypedDict

# =============================================================================
# Types
# =============================================================================


class Category(TypedDict):
    """A single category band of the aggregate index."""

    name: str  # Machine name (e.g., "good", "unhealthy-sensitive")
    label: str  # Display label
    color: str  # Hex color code for display
    min: float  # Low index bound (inclusive)
    max: float  # High index bound (inclusive)


class IndexInfo(TypedDict):
    """Metadata about the air quality index."""

    name: str  # Full name of the index
    short_name: str  # Abbreviated name
    scale_min: int  # Minimum possible value
    pollutants: list[str]  # Supported pollutants
    description: str  # Brief description


# =============================================================================
# Errors
# =============================================================================


class AirIndexError(ValueError):
    """Base class for index calculation errors."""


class InvalidLimitError(AirIndexError):
    """A limit is zero, negative, or not a number."""

    def __init__(self, limit: float, pollutant: str | None = None) -> None:
        self.limit = limit
        self.pollutant = pollutant
        if pollutant is None:
            message = f"Limit must be positive, got {limit}"
        else:
            message = f"Limit for {pollutant} must be positive, got {limit}"
        super().__init__(message)


class InsufficientDataError(AirIndexError):
    """No pollutant in a reading set has a usable concentration."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "At least one valid pollutant measurement is required"
        )


# =============================================================================
# Pollutant Standardisation
# =============================================================================

# Fixed pollutant enumeration, in reporting order
POLLUTANTS = ("PM2.5", "PM10", "NO2", "SO2", "O3")

# Map common pollutant names to standard forms
POLLUTANT_ALIASES = {
    # PM2.5 variants
    "pm2.5": "PM2.5",
    "pm25": "PM2.5",
    "PM25": "PM2.5",
    "pm 2.5": "PM2.5",
    "PM 2.5": "PM2.5",
    "pm2_5": "PM2.5",
    "fine particulate": "PM2.5",
    # PM10 variants
    "pm10": "PM10",
    "PM 10": "PM10",
    "pm 10": "PM10",
    "coarse particulate": "PM10",
    # Ozone variants
    "o3": "O3",
    "ozone": "O3",
    "Ozone": "O3",
    # Nitrogen dioxide variants
    "no2": "NO2",
    "nitrogen dioxide": "NO2",
    "nitrogen_dioxide": "NO2",
    # Sulphur dioxide variants
    "so2": "SO2",
    "sulfur dioxide": "SO2",
    "sulphur dioxide": "SO2",
    "sulfur_dioxide": "SO2",
    "sulphur_dioxide": "SO2",
}

# Column / attribute name for each pollutant
FIELD_NAMES = {
    "PM2.5": "pm25",
    "PM10": "pm10",
    "NO2": "no2",
    "SO2": "so2",
    "O3": "o3",
}


def standardise_pollutant(pollutant: str) -> str | None:
    """
    Standardise a pollutant name to its canonical form.

    Args:
        pollutant: Pollutant name in any common format

    Returns:
        Standardised pollutant name, or None if not recognised
    """
    if pollutant in POLLUTANTS:
        return pollutant

    return POLLUTANT_ALIASES.get(pollutant)


def require_pollutant(pollutant: str) -> str:
    """Standardise a pollutant name, raising ValueError if unknown."""
    standard = standardise_pollutant(pollutant)
    if standard is None:
        raise ValueError(
            f"Unknown pollutant '{pollutant}'. Supported: {list(POLLUTANTS)}"
        )
    return standard


# =============================================================================
# Limits and Categories
# =============================================================================

# Reference concentrations (µg/m³) that map to a sub-index of 100
DEFAULT_LIMITS: Mapping[str, float] = MappingProxyType(
    {
        "PM2.5": 50.0,  # 24-hour mean
        "PM10": 300.0,  # 24-hour mean
        "NO2": 400.0,  # 1-hour mean
        "SO2": 200.0,  # 24-hour mean
        "O3": 150.0,  # 8-hour mean
    }
)

# Ordered by ascending severity. Matching is on the upper bound, so
# fractional values between two bands fall into the higher one.
CATEGORIES: tuple[Category, ...] = (
    Category(name="good", label="Добре", color="#00E400", min=0, max=50),
    Category(name="moderate", label="Помірно", color="#FFFF00", min=51, max=100),
    Category(
        name="unhealthy-sensitive",
        label="Погано для чутливих",
        color="#FF7E00",
        min=101,
        max=150,
    ),
    Category(name="unhealthy", label="Погано", color="#FF0000", min=151, max=200),
    Category(
        name="very-unhealthy", label="Дуже погано", color="#8F3F97", min=201, max=300
    ),
    Category(
        name="hazardous", label="Небезпечно", color="#7E0023", min=301, max=math.inf
    ),
)

CATEGORY_NAMES = tuple(category["name"] for category in CATEGORIES)


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Readings:
    """
    Pollutant concentrations in µg/m³ for one point in time.

    A field set to None means the pollutant was not measured, which is
    distinct from a measured concentration of zero.
    """

    pm25: float | None = None
    pm10: float | None = None
    no2: float | None = None
    so2: float | None = None
    o3: float | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float | None]) -> "Readings":
        """
        Build readings from a mapping keyed by pollutant name.

        Any recognised alias is accepted as a key (e.g. "PM25", "pm2.5").
        Pollutants absent from the mapping are treated as missing.

        Raises:
            ValueError: If a key is not a recognised pollutant, or two keys
                        name the same pollutant
        """
        values = {}
        for key, value in mapping.items():
            pollutant = require_pollutant(key)
            if FIELD_NAMES[pollutant] in values:
                raise ValueError(f"More than one key holds {pollutant}")
            values[FIELD_NAMES[pollutant]] = value
        return cls(**values)

    def get(self, pollutant: str) -> float | None:
        """Return the concentration for a pollutant, or None if missing."""
        return getattr(self, FIELD_NAMES[require_pollutant(pollutant)])

    def as_dict(self) -> dict[str, float | None]:
        """Return concentrations keyed by canonical pollutant code."""
        return {
            pollutant: getattr(self, FIELD_NAMES[pollutant]) for pollutant in POLLUTANTS
        }


@dataclass(frozen=True)
class AggregateResult:
    """Result of an aggregate index calculation for one reading set."""

    sub_indices: Mapping[str, float | None]  # One entry per pollutant
    index: float  # Aggregate index, rounded to 2 decimal places
    category: str  # Category name
    category_label: str  # Category display label
    color: str  # Hex color code
    limits: Mapping[str, float]  # Effective limits after overrides
    valid_measurements: int  # Number of usable readings
    total_pollutants: int  # Size of the pollutant enumeration
    dominant_pollutant: str  # Pollutant with the highest sub-index

    def as_dict(self) -> dict:
        """Return the result as a plain, JSON-friendly dict."""
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["sub_indices"] = dict(self.sub_indices)
        result["limits"] = dict(self.limits)
        return result

    def as_row(self) -> dict:
        """Return the result as flat columns for a record DataFrame."""
        row = {
            f"{FIELD_NAMES[pollutant]}_sub_index": self.sub_indices[pollutant]
            for pollutant in POLLUTANTS
        }
        row.update(
            index=self.index,
            category=self.category,
            category_label=self.category_label,
            color=self.color,
            dominant_pollutant=self.dominant_pollutant,
            valid_measurements=self.valid_measurements,
        )
        return row


# =============================================================================
# Numeric Helpers
# =============================================================================


def is_missing(value: float | None) -> bool:
    """Return True if a concentration is absent or not a finite number."""
    if value is None:
        return True
    try:
        return not math.isfinite(value)
    except TypeError:
        return True


def round_half_up(value: float, places: int) -> float:
    """
    Round a value to a number of decimal places, halves away from zero.

    Rounds the shortest decimal representation of the float, so
    round_half_up(91.25, 1) == 91.3 where round() would give 91.2.
    Float subclasses such as numpy.float64 are rounded the same way.
    """
    # Floats this large have no fractional digits left to round
    if not math.isfinite(value) or abs(value) >= 1e15:
        return value

    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)
