"""Grass, snow and water particle configuration constants."""

# Grass
GRASS_SPAWN_INTERVAL = 4000.0  # ms between new blades
MAX_GRASS_BLADES = 220
INITIAL_GRASS_BLADES = 80
GRASS_HEIGHT_RANGE = (6.0, 14.0)
GRASS_COLORS = (
    (75, 139, 59),
    (106, 163, 66),
    (140, 179, 86),
    (161, 196, 106),
    (112, 132, 71),
)

# Snowflakes
SNOWFLAKE_SPAWN_CHANCE = 0.4  # per tick while snowing
SNOWFLAKE_SPAWN_Y = -10.0
SNOWFLAKE_SPEED_RANGE = (20.0, 45.0)  # px per second
SNOWFLAKE_AMPLITUDE_RANGE = (10.0, 20.0)
SNOWFLAKE_SIZE_RANGE = (2.0, 4.0)
SNOW_DRIFT_FREQUENCY = 0.002  # radians per ms of snowfall
SNOW_DRIFT_SPEED_FACTOR = 2.0  # drift px/s per unit of amplitude
SNOW_BOUNDS_MARGIN = 20.0
SNOW_GROUND_OFFSET = 5.0

# Snow sticking to plants
PLANT_SNOW_HALF_WIDTH = 25.0
PLANT_SNOW_BAND_TOP = 200.0  # px above the plant base
PLANT_SNOW_BAND_BOTTOM = 20.0
PLANT_DEPOSIT_SPREAD = 10.0
PLANT_DEPOSIT_HEIGHT_RANGE = (20.0, 140.0)
PLANT_DEPOSIT_LIFE_RANGE = (5000.0, 9000.0)

# Snow on the ground
GROUND_DEPOSIT_LIFE_RANGE = (8000.0, 12000.0)
GROUND_DEPOSIT_HEIGHT_RANGE = (6.0, 10.0)
MAX_SNOW_DEPOSITS = 120
DEPOSIT_FULL_OPACITY_LIFE = 8000.0

# Water particles (per 60fps frame values are scaled by delta)
WATER_COLORS = ((135, 206, 235), (176, 224, 230))
CELEBRATION_COLORS = ((135, 206, 235), (176, 224, 230), (173, 216, 230), (224, 246, 255))
WATER_BURST_COUNT = 10
CELEBRATION_BURST_COUNT = 15
PLANTING_BURST_COUNT = 5
WATER_FADE_PER_FRAME = 0.015
WATER_SHRINK_PER_FRAME = 0.99
WATER_BURST_LIFT = 20.0  # px above the click
CELEBRATION_BURST_LIFT = 30.0
WATER_SPREAD = 20.0
CELEBRATION_SPREAD = 30.0
