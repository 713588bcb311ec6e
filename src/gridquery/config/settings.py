"""Global configuration and constants for the grid querying core."""

from __future__ import annotations

import os
from typing import Final

LOGGER_NAME: Final = "gridquery"

# Ring buffer size of the diagnostics channel
DIAGNOSTICS_CAPACITY: Final = int(os.environ.get("GRIDQUERY_DIAGNOSTICS_CAPACITY", "200"))

# When several columns declare a sorting order, name every ignored column in the
# conflict warning. Disabled: stop scanning at the first conflicting column.
REPORT_ALL_SORTING_CONFLICTS: Final = os.environ.get(
    "GRIDQUERY_REPORT_ALL_SORTING_CONFLICTS", "1"
).strip().lower() not in ("0", "false", "no", "off")

COLUMN_OPTIONS_FILENAME: Final = "column_options.json"
