"""Weather configuration constants."""

SNOW_MIN_DURATION = 8000.0  # ms of snow before it may stop
SNOW_START_CHANCE = 0.00001  # per ms while clear
SNOW_STOP_CHANCE = 0.002  # per ms once past the minimum duration

# Garden days
DAY_LENGTH_MS = 30000
