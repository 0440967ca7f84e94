"""
Tests for the airindex.transforms module.
"""

import pandas as pd
import pytest

from airindex.transforms import (
    compose,
    drop_columns,
    pipe,
    reset_index,
    select_columns,
    sort_values,
    standardise_pollutant_columns,
)

# ============================================================================
# Tests for pipe() and compose()
# ============================================================================


def test_pipe_applies_functions_in_order():
    """Test that pipe applies functions in the correct order."""
    df = pd.DataFrame({"pm25": [10.0, 20.0, 30.0]})

    result = pipe(
        df,
        lambda d: d.assign(pm25_sub_index=d["pm25"] * 2),
        lambda d: d.assign(doubled=d["pm25_sub_index"] * 2),
    )

    assert result["doubled"].tolist() == [40.0, 80.0, 120.0]


def test_pipe_with_empty_functions_returns_unchanged():
    """Test that pipe with no functions returns the original DataFrame."""
    df = pd.DataFrame({"pm25": [1.0, 2.0]})
    result = pipe(df)

    pd.testing.assert_frame_equal(result, df)


def test_compose_creates_reusable_pipeline():
    """Test that compose creates a reusable transformation pipeline."""
    prepare = compose(
        standardise_pollutant_columns(),
        drop_columns("index", "category"),
    )

    first = prepare(pd.DataFrame({"PM2.5": [12.0], "index": [24.0]}))
    second = prepare(pd.DataFrame({"ozone": [40.0], "category": ["good"]}))

    assert first.columns.tolist() == ["pm25"]
    assert second.columns.tolist() == ["o3"]


# ============================================================================
# Tests for standardise_pollutant_columns()
# ============================================================================


def test_standardise_renames_aliases():
    """Test pollutant aliases become field names."""
    df = pd.DataFrame(
        {"PM25": [1.0], "PM10": [2.0], "nitrogen dioxide": [3.0], "ozone": [4.0]}
    )

    result = standardise_pollutant_columns()(df)

    assert result.columns.tolist() == ["pm25", "pm10", "no2", "o3"]


def test_standardise_leaves_other_columns():
    """Test non-pollutant columns are untouched."""
    df = pd.DataFrame(
        {"station_id": ["a"], "date_time": ["2024-01-01"], "so2": [1.0]}
    )

    result = standardise_pollutant_columns()(df)

    assert result.columns.tolist() == ["station_id", "date_time", "so2"]


def test_standardise_rejects_duplicates():
    """Test two columns for the same pollutant are rejected."""
    df = pd.DataFrame({"PM2.5": [1.0], "PM25": [2.0]})

    with pytest.raises(ValueError, match="More than one column holds pm25"):
        standardise_pollutant_columns()(df)


# ============================================================================
# Tests for row and column helpers
# ============================================================================


def test_drop_columns_ignores_missing():
    """Test dropping columns that do not exist is silently ignored."""
    df = pd.DataFrame({"pm25": [10.0], "index": [20.0]})

    result = drop_columns("index", "color")(df)

    assert result.columns.tolist() == ["pm25"]
    assert df.columns.tolist() == ["pm25", "index"]


def test_sort_values_mixed_order():
    """Test sorting with a different order per column."""
    df = pd.DataFrame({"station_id": ["b", "a", "a"], "hour": [1, 1, 2]})

    result = pipe(
        df,
        sort_values(["station_id", "hour"], [True, False]),
        reset_index(),
    )

    assert result["station_id"].tolist() == ["a", "a", "b"]
    assert result["hour"].tolist() == [2, 1, 1]
    assert result.index.tolist() == [0, 1, 2]


def test_select_columns_ignores_missing():
    """Test selecting columns that do not exist is silently ignored."""
    df = pd.DataFrame({"index": [1.0], "category": ["good"]})

    result = select_columns("category", "color")(df)

    assert result.columns.tolist() == ["category"]
