"""Plant lifecycle configuration constants."""

from types import MappingProxyType

# Water needed for each transition: seed->sprout->medium->bud->flower
SPECIES_WATER_THRESHOLDS = MappingProxyType(
    {
        "lily": (2, 3, 4, 5),
        "tulip": (2, 3, 4, 5),
        "orchid": (2, 3, 4, 5),
    }
)

SPECIES_DISPLAY_NAMES = MappingProxyType(
    {
        "lily": "Lily",
        "tulip": "Tulip",
        "orchid": "Orchid",
    }
)

# Click hit-test radius around a plant's base (pixels)
PLANT_HITBOX_RADIUS = 80.0

# Aging
FLOWER_MAX_LIFESPAN = 48000.0  # ms in bloom before wilting

# Cold stress (only applies to flowers)
COLD_STRESS_SNOW_DURATION = 10000.0  # ms of continuous snow before flowers suffer
FREEZE_CHECK_INTERVAL = 1500.0  # ms of exposure between death rolls
FREEZE_DEATH_CHANCE = 0.3

# Cosmetic animation timers
WATER_BOUNCE_DURATION = 0.3
EVOLUTION_FLASH_DURATION = 1.0
BOUNCE_DECAY_PER_MS = 0.05 / (1000.0 / 60.0)  # 0.05 per 60fps frame
FLASH_DECAY_PER_MS = 0.1 / (1000.0 / 60.0)  # 0.1 per 60fps frame

# Wind sway (initialized when a seed first sprouts)
WIND_SPEED_RANGE = (2.0, 3.0)  # degrees
WIND_PERIOD_RANGE = (3.0, 4.0)  # seconds
WIND_STAGE_MULTIPLIERS = MappingProxyType({"flower": 1.5, "bud": 1.2})
WIND_POSITION_PHASE = 0.1  # per px of x + y, so neighbours sway out of step
