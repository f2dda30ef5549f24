"""Dataclass configuration bundles for the garden.

Each bundle defaults to the module-level constants so a bare
``GardenConfig()`` reproduces the stock garden. Tests and the CLI build
variants with ``with_overrides``.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Tuple

from garden.config.decorations import (
    GRASS_SPAWN_INTERVAL,
    INITIAL_GRASS_BLADES,
    MAX_GRASS_BLADES,
    MAX_SNOW_DEPOSITS,
    SNOWFLAKE_SPAWN_CHANCE,
)
from garden.config.display import CANVAS_HEIGHT, CANVAS_WIDTH, FRAME_RATE
from garden.config.plants import (
    COLD_STRESS_SNOW_DURATION,
    FLOWER_MAX_LIFESPAN,
    FREEZE_CHECK_INTERVAL,
    FREEZE_DEATH_CHANCE,
    PLANT_HITBOX_RADIUS,
    SPECIES_WATER_THRESHOLDS,
)
from garden.config.weather import (
    DAY_LENGTH_MS,
    SNOW_MIN_DURATION,
    SNOW_START_CHANCE,
    SNOW_STOP_CHANCE,
)
from garden.exceptions import ConfigurationError

GROWTH_TRANSITION_COUNT = 4


@dataclass
class DisplayConfig:
    """Canvas geometry shared by the simulation and the renderer."""

    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    frame_rate: int = FRAME_RATE


@dataclass
class PlantConfig:
    """Plant lifecycle tuning.

    Attributes:
        hitbox_radius: Click radius used to find a plant
        flower_max_lifespan: ms a plant may stay in bloom
        cold_stress_snow_duration: ms of snowfall before flowers feel the cold
        freeze_check_interval: ms of exposure between freeze death rolls
        freeze_death_chance: Probability of dying at each freeze check
        species_thresholds: Species key -> water needed per transition
    """

    hitbox_radius: float = PLANT_HITBOX_RADIUS
    flower_max_lifespan: float = FLOWER_MAX_LIFESPAN
    cold_stress_snow_duration: float = COLD_STRESS_SNOW_DURATION
    freeze_check_interval: float = FREEZE_CHECK_INTERVAL
    freeze_death_chance: float = FREEZE_DEATH_CHANCE
    species_thresholds: Dict[str, Tuple[int, ...]] = field(
        default_factory=lambda: dict(SPECIES_WATER_THRESHOLDS)
    )

    def thresholds_for(self, species_key: str) -> Tuple[int, ...]:
        """Return a fresh copy of the thresholds for a species."""
        return tuple(self.species_thresholds[species_key])


@dataclass
class WeatherConfig:
    """Snow start/stop tuning and day length."""

    snow_min_duration: float = SNOW_MIN_DURATION
    snow_start_chance: float = SNOW_START_CHANCE
    snow_stop_chance: float = SNOW_STOP_CHANCE
    day_length_ms: int = DAY_LENGTH_MS


@dataclass
class DecorationConfig:
    """Grass and snow population tuning."""

    grass_spawn_interval: float = GRASS_SPAWN_INTERVAL
    max_grass_blades: int = MAX_GRASS_BLADES
    initial_grass_blades: int = INITIAL_GRASS_BLADES
    snowflake_spawn_chance: float = SNOWFLAKE_SPAWN_CHANCE
    max_snow_deposits: int = MAX_SNOW_DEPOSITS


@dataclass
class GardenConfig:
    """Aggregate configuration for a garden run."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    plants: PlantConfig = field(default_factory=PlantConfig)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    decorations: DecorationConfig = field(default_factory=DecorationConfig)

    def with_overrides(self, **overrides: Any) -> "GardenConfig":
        """Return a copy with whole sub-configs replaced.

        Example:
            config.with_overrides(weather=WeatherConfig(snow_start_chance=0.0))
        """
        unknown = set(overrides) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown config sections: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a JSON-friendly dictionary."""
        return asdict(self)

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameters are invalid
        """
        if self.display.canvas_width <= 0 or self.display.canvas_height <= 0:
            raise ConfigurationError("Canvas dimensions must be positive")
        if self.display.frame_rate <= 0:
            raise ConfigurationError("frame_rate must be positive")

        plants = self.plants
        if plants.hitbox_radius <= 0:
            raise ConfigurationError("hitbox_radius must be positive")
        if plants.flower_max_lifespan <= 0:
            raise ConfigurationError("flower_max_lifespan must be positive")
        if plants.freeze_check_interval <= 0:
            raise ConfigurationError("freeze_check_interval must be positive")
        if not 0.0 <= plants.freeze_death_chance <= 1.0:
            raise ConfigurationError("freeze_death_chance must be in [0, 1]")
        if not plants.species_thresholds:
            raise ConfigurationError("At least one species must be configured")
        missing = sorted(set(SPECIES_WATER_THRESHOLDS) - set(plants.species_thresholds))
        if missing:
            raise ConfigurationError(f"Missing water thresholds for species: {missing}")
        for species_key, thresholds in plants.species_thresholds.items():
            if len(thresholds) != GROWTH_TRANSITION_COUNT:
                raise ConfigurationError(
                    f"{species_key} needs {GROWTH_TRANSITION_COUNT} water thresholds, "
                    f"got {len(thresholds)}"
                )
            if any(t < 1 for t in thresholds):
                raise ConfigurationError(f"{species_key} thresholds must be >= 1")

        weather = self.weather
        if weather.snow_min_duration < 0:
            raise ConfigurationError("snow_min_duration must be non-negative")
        if weather.snow_start_chance < 0 or weather.snow_stop_chance < 0:
            raise ConfigurationError("Snow chances must be non-negative")
        if weather.day_length_ms <= 0:
            raise ConfigurationError("day_length_ms must be positive")

        decorations = self.decorations
        if decorations.grass_spawn_interval <= 0:
            raise ConfigurationError("grass_spawn_interval must be positive")
        if decorations.max_grass_blades < 1:
            raise ConfigurationError("max_grass_blades must be >= 1")
        if decorations.initial_grass_blades < 0:
            raise ConfigurationError("initial_grass_blades must be non-negative")
        if not 0.0 <= decorations.snowflake_spawn_chance <= 1.0:
            raise ConfigurationError("snowflake_spawn_chance must be in [0, 1]")
        if decorations.max_snow_deposits < 0:
            raise ConfigurationError("max_snow_deposits must be non-negative")
