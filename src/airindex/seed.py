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
Sample index records for demos and development databases.

Builds a table of computed records for a handful of stations, going back in
time from now, using synthetic readings with a daily cycle and random gaps.

Example:
    >>> import numpy as np
    >>> from airindex.seed import generate_seed_records
    >>>
    >>> records = generate_seed_records(random=np.random.default_rng(1).random)
    >>> records.groupby("category").size()
"""

import logging
from dataclasses import asdict
from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from .decorators import with_logging
from .metrics import InsufficientDataError, compute_aggregate
from .synthetic import generate_synthetic
from .transforms import pipe, reset_index, select_columns, sort_values
from .types import RECORD_COLUMNS, RandomSource

logger = logging.getLogger(__name__)

DEFAULT_STATIONS = (
    "station-001",
    "station-002",
    "station-003",
    "station-004",
    "station-005",
)

DEFAULT_RECORDS_PER_STATION = 10
DEFAULT_INTERVAL_HOURS = 2
DEFAULT_SEED_MISSING_PROBABILITY = 0.15


@with_logging("airindex.seed")
def generate_seed_records(
    stations: tuple[str, ...] | list[str] = DEFAULT_STATIONS,
    records_per_station: int = DEFAULT_RECORDS_PER_STATION,
    interval_hours: float = DEFAULT_INTERVAL_HOURS,
    missing_probability: float = DEFAULT_SEED_MISSING_PROBABILITY,
    now: datetime | None = None,
    random: RandomSource | None = None,
) -> pd.DataFrame:
    """
    Generate computed index records for a set of stations.

    Each station gets `records_per_station` timestamps, the first at `now`
    and each earlier one `interval_hours` before the last. Readings for a
    timestamp come from generate_synthetic() with that timestamp's hour and
    gaps enabled. Records whose readings are all missing are skipped and
    logged at WARNING.

    Args:
        stations: Station identifiers
        records_per_station: Number of timestamps per station
        interval_hours: Hours between consecutive timestamps
        missing_probability: Chance each pollutant reading is dropped
        now: Timestamp of the newest record. Defaults to the current time,
             truncated to the minute.
        random: Source of uniform floats in [0, 1), passed to
                generate_synthetic()

    Returns:
        DataFrame with columns:
            station_id, date_time, pm25, pm10, no2, so2, o3,
            pm25_sub_index ... o3_sub_index, index, category,
            category_label, color, dominant_pollutant, valid_measurements

        Sorted by station, newest record first.

    Raises:
        ValueError: If records_per_station is negative, interval_hours is
                    not positive, or missing_probability is outside [0, 1]
    """
    if records_per_station < 0:
        raise ValueError(
            f"records_per_station must not be negative, got {records_per_station}"
        )

    if not interval_hours > 0:
        raise ValueError(f"interval_hours must be positive, got {interval_hours}")

    if not 0 <= missing_probability <= 1:
        raise ValueError(
            f"missing_probability must be between 0 and 1, got {missing_probability}"
        )

    if now is None:
        now = datetime.now().replace(second=0, microsecond=0)

    if random is None:
        random = np.random.default_rng().random

    rows = []
    for station_id in stations:
        for step in range(records_per_station):
            date_time = now - timedelta(hours=interval_hours * step)
            readings = generate_synthetic(
                hour=date_time.hour,
                include_missing=True,
                missing_probability=missing_probability,
                random=random,
            )

            try:
                result = compute_aggregate(readings)
            except InsufficientDataError as e:
                logger.warning(
                    f"Skipping {station_id} at {date_time:%Y-%m-%d %H:%M}: {e}"
                )
                continue

            rows.append(
                {
                    "station_id": station_id,
                    "date_time": date_time,
                    **asdict(readings),
                    **result.as_row(),
                }
            )

    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)

    return pipe(
        pd.DataFrame(rows),
        sort_values(["station_id", "date_time"], ascending=[True, False]),
        reset_index(),
        select_columns(*RECORD_COLUMNS),
    )
