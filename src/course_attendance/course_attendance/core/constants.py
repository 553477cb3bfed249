"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
STREAM_BATCH_SIZE = 200
PERCENTAGE_DECIMALS = 2
