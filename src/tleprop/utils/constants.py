from __future__ import annotations

"""Fixed constants for TLE ingestion and SGP4 propagation.

Earth parameters are WGS-84. SGP4 keeps its own copy of the gravity model
in each ``Satrec``; these are only used for derived quantities.
"""

# --- TLE record layout ---
TLE_LINE_LENGTH: int = 69
"""Fixed NORAD record length of each element line, in characters."""

TLE_LINE_COUNT: int = 2
"""Number of element lines in a record (an optional name line may precede them)."""

# --- Time units ---
SECONDS_PER_MINUTE: float = 60.0
MINUTES_PER_DAY: float = 1440.0

# --- SGP4 run configuration ---
RUN_MODE_VERIFICATION: str = "v"
"""SGP4 run mode that reads the record as a verification/catalog entry."""

OPERATION_MODE_IMPROVED: str = "i"
"""SGP4 'improved' operation mode (modern GSTIME and deep-space handling)."""

# --- Earth parameters (WGS-84) ---
EARTH_RADIUS_KM: float = 6378.137
"""Equatorial radius of Earth in km."""
