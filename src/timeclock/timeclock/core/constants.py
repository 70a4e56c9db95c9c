"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_HISTORY_LIMIT = 20
HOURS_QUANTUM = Decimal("0.01")
MONEY_QUANTUM = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)
STORAGE_FAILURE_MESSAGE = "The datastore is unavailable, please try again later"

# Column limits in database/schema.sql
MAX_RATE = Decimal("99999999.99")  # DECIMAL(10,2)
NAME_MAX_LENGTH = 120  # VARCHAR(120)
