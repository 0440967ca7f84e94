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
Core type definitions for Airindex.

This module defines the record schema and type aliases shared by the
DataFrame layer, the synthetic data generator and the seed generator.
"""

from datetime import datetime
from typing import Callable, TypeAlias, TypedDict

import pandas as pd


class IndexRecord(TypedDict, total=False):
    """
    Standard schema for a computed air quality index record.

    Required fields:
        station_id: Identifier of the monitoring station
        date_time: Timestamp of the readings
        index: Aggregate index, rounded to 2 decimal places
        category: Category name (e.g., "good", "hazardous")

    Optional fields:
        pm25, pm10, no2, so2, o3: Concentrations in µg/m³ (None if missing)
        pm25_sub_index ... o3_sub_index: Sub-indices (None if missing)
        category_label: Category display label
        color: Hex color code of the category
        dominant_pollutant: Pollutant with the highest sub-index
        valid_measurements: Number of usable readings
    """
    # Required fields
    station_id: str
    date_time: datetime
    index: float
    category: str

    # Optional fields
    pm25: float | None
    pm10: float | None
    no2: float | None
    so2: float | None
    o3: float | None
    pm25_sub_index: float | None
    pm10_sub_index: float | None
    no2_sub_index: float | None
    so2_sub_index: float | None
    o3_sub_index: float | None
    category_label: str
    color: str
    dominant_pollutant: str
    valid_measurements: int


RandomSource: TypeAlias = Callable[[], float]
"""
A zero-argument callable returning a uniform float in [0, 1).

Any object with that shape works, e.g. ``numpy.random.default_rng(42).random``
or ``random.Random(42).random``.
"""

Transformer: TypeAlias = Callable[[pd.DataFrame], pd.DataFrame]
"""
A function that transforms a DataFrame (e.g., adding or selecting columns).

Args:
    df: Input DataFrame

Returns:
    pd.DataFrame: Transformed DataFrame
"""


# Standard column names - for reference and validation
READING_COLUMNS = ["pm25", "pm10", "no2", "so2", "o3"]

SUB_INDEX_COLUMNS = [f"{column}_sub_index" for column in READING_COLUMNS]

RESULT_COLUMNS = [
    *SUB_INDEX_COLUMNS,
    "index",
    "category",
    "category_label",
    "color",
    "dominant_pollutant",
    "valid_measurements",
]

RECORD_COLUMNS = [
    "station_id",
    "date_time",
    *READING_COLUMNS,
    *RESULT_COLUMNS,
]
