"""
Pytest configuration and shared fixtures.

This module provides common fixtures and utilities used across all tests.
"""

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

# ============================================================================
# Random Source Fixtures
# ============================================================================


@pytest.fixture
def fixed_random():
    """
    Return a factory for deterministic random sources.

    The returned callable yields the given values in order and fails the
    test if more values are drawn than were supplied.
    """

    def factory(*values):
        remaining = list(values)

        def draw():
            if not remaining:
                pytest.fail("Random source drew more values than supplied")
            return remaining.pop(0)

        draw.remaining = remaining
        return draw

    return factory


@pytest.fixture
def seeded_random():
    """A seeded numpy random source for tests that need many draws."""
    return np.random.default_rng(20231015).random


# ============================================================================
# Reading Fixtures
# ============================================================================


@pytest.fixture
def example_readings():
    """Readings with PM2.5 well above its limit and everything else low."""
    return {"PM2.5": 75, "PM10": 60, "NO2": 80, "SO2": 40, "O3": 30}


@pytest.fixture
def readings_at_limits():
    """Readings where every pollutant sits exactly at its default limit."""
    return {"PM2.5": 50, "PM10": 300, "NO2": 400, "SO2": 200, "O3": 150}


@pytest.fixture
def readings_with_gaps():
    """Readings with PM10 and NO2 not measured."""
    return {"PM2.5": 25, "PM10": None, "NO2": None, "SO2": 100, "O3": 75}


@pytest.fixture
def all_missing_readings():
    """Readings with nothing measured."""
    return {"PM2.5": None, "PM10": None, "NO2": None, "SO2": None, "O3": None}


# ============================================================================
# Sample DataFrames
# ============================================================================


@pytest.fixture
def sample_readings_df():
    """
    Sample readings in wide format (one row per station and timestamp).

    Column names use the spellings found in the lab payloads (PM25) and in
    exported spreadsheets (PM2.5, ozone). The third row has no readings.
    """
    return pd.DataFrame(
        {
            "station_id": ["station-001", "station-001", "station-002", "station-002"],
            "date_time": pd.to_datetime(
                [
                    "2024-03-01 08:00",
                    "2024-03-01 10:00",
                    "2024-03-01 08:00",
                    "2024-03-01 10:00",
                ]
            ),
            "PM25": [25.0, 75.0, None, 10.0],
            "PM10": [150.0, 60.0, None, np.nan],
            "NO2": [200.0, 80.0, None, 50.0],
            "SO2": [100.0, 40.0, None, 25.0],
            "ozone": [75.0, 30.0, None, 30.0],
        }
    )


@pytest.fixture
def sample_records_df():
    """Computed records for two stations, one row with no usable readings."""
    return pd.DataFrame(
        {
            "station_id": [
                "station-001",
                "station-001",
                "station-001",
                "station-002",
                "station-002",
            ],
            "date_time": [
                datetime(2024, 3, 1, 8),
                datetime(2024, 3, 1, 10),
                datetime(2024, 3, 1, 12),
                datetime(2024, 3, 1, 8),
                datetime(2024, 3, 1, 10),
            ],
            "index": [40.0, 150.0, np.nan, 20.0, 320.5],
            "category": ["good", "unhealthy-sensitive", None, "good", "hazardous"],
        }
    )
