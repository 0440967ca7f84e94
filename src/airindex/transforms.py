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
Composable DataFrame transformation functions.

This module provides small, pure functions that transform DataFrames in
predictable ways. Functions can be composed together using `pipe()` or
`compose()` to build processing pipelines for reading and record frames.

All transformer functions follow the pattern:
    - Take configuration as arguments
    - Return a function that transforms a DataFrame
    - Are pure (no side effects)
    - Are composable

Example:
    >>> # Readings ready for scoring, as index_frame() prepares them
    >>> prepare = compose(
    ...     standardise_pollutant_columns(),
    ...     drop_columns(*RESULT_COLUMNS),
    ... )
    >>> df_ready = prepare(df_raw)
"""

from functools import reduce

import pandas as pd

from .metrics.base import FIELD_NAMES, standardise_pollutant
from .types import Transformer


def pipe(df: pd.DataFrame, *functions: Transformer) -> pd.DataFrame:
    """
    Apply a series of transformation functions to a DataFrame in sequence.

    Args:
        df: Input DataFrame
        *functions: Variable number of transformer functions to apply

    Returns:
        pd.DataFrame: Transformed DataFrame after all functions applied

    Example:
        >>> result = pipe(
        ...     records,
        ...     sort_values(["station_id", "date_time"], [True, False]),
        ...     reset_index(),
        ... )
    """
    return reduce(lambda data, func: func(data), functions, df)


def compose(*functions: Transformer) -> Transformer:
    """
    Compose multiple transformer functions into a single function.

    Args:
        *functions: Variable number of transformer functions to compose

    Returns:
        Transformer: A new function that applies all transformations
    """

    def composed(df: pd.DataFrame) -> pd.DataFrame:
        return pipe(df, *functions)

    return composed


def standardise_pollutant_columns() -> Transformer:
    """
    Return a function that renames pollutant columns to their field names.

    Any recognised pollutant alias ("PM2.5", "PM25", "ozone", ...) becomes
    the matching field name ("pm25", "o3", ...). Other columns are left
    alone.

    Raises:
        ValueError: If two columns name the same pollutant

    Example:
        >>> df = pd.DataFrame({"PM25": [10.0], "Ozone": [40.0], "site": ["A"]})
        >>> standardise_pollutant_columns()(df).columns.tolist()
        ['pm25', 'o3', 'site']
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        mapping = {}
        for column in df.columns:
            if column in FIELD_NAMES.values():
                pollutant = column
            else:
                standard = standardise_pollutant(column)
                if standard is None:
                    continue
                pollutant = FIELD_NAMES[standard]

            if pollutant in mapping.values():
                raise ValueError(f"More than one column holds {pollutant}")
            mapping[column] = pollutant

        return df.rename(columns=mapping)

    return transform


def sort_values(
    by: str | list[str], ascending: bool | list[bool] = True
) -> Transformer:
    """
    Return a function that sorts a DataFrame by specified column(s).

    Args:
        by: Column name or list of column names to sort by
        ascending: Sort order, or one order per column in `by`

    Returns:
        Transformer: Function that sorts the DataFrame

    Example:
        >>> # Newest record first within each station
        >>> transform = sort_values(["station_id", "date_time"], [True, False])
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.sort_values(by=by, ascending=ascending)

    return transform


def reset_index(drop: bool = True) -> Transformer:
    """Return a function that resets the DataFrame index."""

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.reset_index(drop=drop)

    return transform


def select_columns(*columns: str) -> Transformer:
    """
    Return a function that selects only specified columns from a DataFrame.

    Only selects columns that exist in the DataFrame - silently ignores
    columns that don't exist.

    Args:
        *columns: Variable number of column names to select

    Returns:
        Transformer: Function that selects the specified columns
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        cols_to_select = [col for col in columns if col in df.columns]
        return df[cols_to_select]

    return transform


def drop_columns(*columns: str) -> Transformer:
    """
    Return a function that removes the specified columns from a DataFrame.

    Columns that don't exist are ignored.

    Example:
        >>> transform = drop_columns("index", "category")
    """

    def transform(df: pd.DataFrame) -> pd.DataFrame:
        return df.drop(columns=[col for col in columns if col in df.columns])

    return transform
