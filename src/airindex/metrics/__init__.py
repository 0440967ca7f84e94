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
Air quality index calculations and metrics.

This module provides the index engine for single reading sets and a
DataFrame layer for batches of readings and computed records.

Quick Start:
    >>> from airindex import metrics
    >>>
    >>> # One reading set
    >>> result = metrics.compute_aggregate(
    ...     {"PM2.5": 75, "PM10": 60, "NO2": 80, "SO2": 40, "O3": 30}
    ... )
    >>> result.index, result.category
    (150.0, 'unhealthy-sensitive')
    >>>
    >>> # A table of readings, one row per observation
    >>> records = metrics.index_frame(readings_df)
    >>>
    >>> # Statistics per station
    >>> summary = metrics.index_summary(records, by="station_id")
"""

import warnings
from typing import Mapping

import numpy as np
import pandas as pd

from .base import (
    CATEGORIES,
    CATEGORY_NAMES,
    DEFAULT_LIMITS,
    POLLUTANTS,
    AggregateResult,
    AirIndexError,
    Category,
    IndexInfo,
    InsufficientDataError,
    InvalidLimitError,
    Readings,
    is_missing,
    standardise_pollutant,
)
from .index import (
    INDEX_INFO,
    classify,
    compute_aggregate,
    compute_sub_index,
    merge_limits,
)
from ..transforms import compose, drop_columns, standardise_pollutant_columns
from ..types import READING_COLUMNS, RESULT_COLUMNS

# Re-export key types
__all__ = [
    # Index engine
    "compute_sub_index",
    "classify",
    "compute_aggregate",
    "merge_limits",
    # DataFrame layer
    "index_frame",
    "index_summary",
    "category_counts",
    # Constants
    "POLLUTANTS",
    "DEFAULT_LIMITS",
    "CATEGORIES",
    "INDEX_INFO",
    # Types
    "Readings",
    "AggregateResult",
    "Category",
    "IndexInfo",
    # Errors
    "AirIndexError",
    "InvalidLimitError",
    "InsufficientDataError",
    "standardise_pollutant",
]

SUMMARY_COLUMNS = ["count", "mean_index", "min_index", "max_index", "worst_category"]

# Rank of each category, 0 = least severe
_SEVERITY = {name: rank for rank, name in enumerate(CATEGORY_NAMES)}


# =============================================================================
# Public API
# =============================================================================


def index_frame(
    data: pd.DataFrame,
    limits: Mapping[str, float] | None = None,
) -> pd.DataFrame:
    """
    Calculate the aggregate index for every row of a readings DataFrame.

    Args:
        data: DataFrame with one row per reading set and one column per
              pollutant. Column names may be any recognised alias
              ("PM2.5", "PM25", "pm25", "ozone", ...). Pollutant columns
              that are absent are treated as missing, as are NaN cells.
              Other columns (station, timestamp, ...) are carried through.
        limits: Optional limit overrides, merged over DEFAULT_LIMITS

    Returns:
        Copy of the data with pollutant columns renamed to field names
        (pm25, pm10, no2, so2, o3) and these columns added:
            pm25_sub_index ... o3_sub_index, index, category,
            category_label, color, dominant_pollutant, valid_measurements

        Rows with no usable reading get NaN/None in the result columns and
        valid_measurements of 0.

    Raises:
        InvalidLimitError: If a limit override is not strictly positive
        ValueError: If a limit override names an unknown pollutant, or two
                    columns hold the same pollutant

    Example:
        >>> df = pd.DataFrame({"PM2.5": [25.0, 75.0], "NO2": [None, 80.0]})
        >>> metrics.index_frame(df)[["index", "category"]]
           index             category
        0   50.0                 good
        1  150.0  unhealthy-sensitive
    """
    # Fail on bad overrides before touching any rows
    effective_limits = merge_limits(limits)

    prepare = compose(
        standardise_pollutant_columns(),
        drop_columns(*RESULT_COLUMNS),
    )
    df = prepare(data)
    columns = {
        column: df[column].tolist() for column in READING_COLUMNS if column in df
    }

    rows = []
    skipped = 0
    for position in range(len(df)):
        readings = Readings(
            **{
                column: _concentration(values[position])
                for column, values in columns.items()
            }
        )
        try:
            result = compute_aggregate(readings, effective_limits)
        except InsufficientDataError:
            rows.append(_empty_row())
            skipped += 1
            continue
        rows.append(result.as_row())

    if skipped:
        warnings.warn(
            f"{skipped} row(s) have no usable pollutant readings. "
            f"Their index is NaN.",
            UserWarning,
            stacklevel=2,
        )

    results = pd.DataFrame(rows, index=df.index, columns=RESULT_COLUMNS)
    results["valid_measurements"] = results["valid_measurements"].astype("int64")
    return pd.concat([df, results], axis=1)


def index_summary(
    records: pd.DataFrame,
    by: str | list[str] | None = None,
) -> pd.DataFrame:
    """
    Summarise computed index records.

    Args:
        records: DataFrame with at least "index" and "category" columns,
                 e.g. from index_frame() or generate_seed_records().
                 Rows with a NaN index are ignored.
        by: Column(s) to group by (e.g. "station_id"). None summarises
            all records as one group.

    Returns:
        DataFrame with columns:
            [by columns], count, mean_index, min_index, max_index,
            worst_category

        worst_category is the most severe category among the records,
        taken from their "category" column.

    Example:
        >>> summary = metrics.index_summary(records, by="station_id")
        >>> print(summary[["station_id", "max_index", "worst_category"]])
    """
    group_columns = [by] if isinstance(by, str) else list(by or [])
    _validate_records(records, {"index", "category", *group_columns})

    valid = records[records["index"].notna()]

    results = []
    if group_columns:
        for keys, group in valid.groupby(group_columns):
            keys = keys if isinstance(keys, tuple) else (keys,)
            results.append({**dict(zip(group_columns, keys)), **_summarise(group)})
    else:
        results.append(_summarise(valid))

    return pd.DataFrame(results, columns=[*group_columns, *SUMMARY_COLUMNS])


def category_counts(records: pd.DataFrame) -> pd.Series:
    """
    Count records per category.

    Args:
        records: DataFrame with a "category" column

    Returns:
        Series named "count", indexed by category name in ascending
        severity order. Categories with no records are reported as 0.

    Example:
        >>> metrics.category_counts(records)
        category
        good                   12
        moderate               20
        unhealthy-sensitive    11
        unhealthy               5
        very-unhealthy          2
        hazardous               0
        Name: count, dtype: int64
    """
    _validate_records(records, {"category"})

    counts = records["category"].value_counts()
    return (
        counts.reindex(list(CATEGORY_NAMES), fill_value=0)
        .astype("int64")
        .rename_axis("category")
        .rename("count")
    )


# =============================================================================
# Internal Helpers
# =============================================================================


def _concentration(value) -> float | None:
    """Convert a DataFrame cell to a concentration, or None if missing."""
    return None if is_missing(value) else float(value)


def _empty_row() -> dict:
    """Result columns for a row with no usable readings."""
    row = {column: None for column in RESULT_COLUMNS}
    row["index"] = np.nan
    row["valid_measurements"] = 0
    return row


def _summarise(group: pd.DataFrame) -> dict:
    """Statistics for one group of records."""
    ranks = group["category"].map(_SEVERITY).dropna()
    worst = CATEGORY_NAMES[int(ranks.max())] if not ranks.empty else None

    return {
        "count": len(group),
        "mean_index": group["index"].mean(),
        "min_index": group["index"].min(),
        "max_index": group["index"].max(),
        "worst_category": worst,
    }


def _validate_records(df: pd.DataFrame, required_columns: set[str]) -> None:
    """
    Validate that a DataFrame has the columns a summary needs.

    Raises:
        ValueError: If required columns are missing
    """
    missing = required_columns - set(df.columns)

    if missing:
        raise ValueError(
            f"DataFrame missing required columns: {missing}. "
            f"Expected records from index_frame() or generate_seed_records()."
        )
