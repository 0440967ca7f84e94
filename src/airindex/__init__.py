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

"""Air quality index calculations and synthetic readings"""

from .metrics import (
    CATEGORIES,
    DEFAULT_LIMITS,
    POLLUTANTS,
    AggregateResult,
    AirIndexError,
    InsufficientDataError,
    InvalidLimitError,
    Readings,
    category_counts,
    classify,
    compute_aggregate,
    compute_sub_index,
    index_frame,
    index_summary,
)
from .seed import generate_seed_records
from .synthetic import generate_synthetic

__version__ = "0.1.0"
