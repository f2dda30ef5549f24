"""Shared garden state passed to every system.

The garden has exactly one weather instance, one plant list and one set of
decoration populations. Instead of module globals they live on a
``GardenContext`` that the engine owns and hands to each system update, so
tests can build a context, poke at it, and run a single system against it.
"""

from __future__ import annotations

import random
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Tuple

from garden.config.garden_config import GardenConfig
from garden.entities.decorations import GrassBlade, SnowDeposit, Snowflake, WaterParticle
from garden.entities.plant import DeathCause, Plant
from garden.systems.weather import Weather


def resolve_rng(
    rng: Optional[random.Random] = None, seed: Optional[int] = None
) -> Tuple[random.Random, Optional[int]]:
    """Return a deterministic RNG based on supplied values.

    Prefers an explicit rng, then a seed, then a fresh unseeded generator.
    """
    if rng is not None:
        return rng, None
    if seed is not None:
        return random.Random(seed), seed
    return random.Random(), None


@dataclass
class GardenContext:
    """Container for all mutable garden state.

    Attributes:
        rng: The single random source for the whole simulation
        config: Configuration the garden was built with
        weather: Global weather state
        plants: Plants in planting order
        grass: Grass blades, oldest first; GrassSystem caps the count
        snowflakes: Falling flakes
        snow_deposits: Melting snow on plants and the ground
        water_particles: Droplets from the watering can
        frame_count: Update steps run so far
        elapsed_ms: Simulated milliseconds so far
        day_count: Current garden day (starts at 1)
        water_count: Successful waterings so far
        deaths: Plant deaths by cause
    """

    rng: random.Random
    config: GardenConfig
    weather: Weather = field(default_factory=Weather)
    plants: List[Plant] = field(default_factory=list)
    grass: Deque[GrassBlade] = field(default_factory=deque)
    snowflakes: List[Snowflake] = field(default_factory=list)
    snow_deposits: List[SnowDeposit] = field(default_factory=list)
    water_particles: List[WaterParticle] = field(default_factory=list)
    frame_count: int = 0
    elapsed_ms: float = 0.0
    day_count: int = 1
    water_count: int = 0
    deaths: Counter = field(default_factory=Counter)
    _next_plant_id: int = 1

    def allocate_plant_id(self) -> int:
        plant_id = self._next_plant_id
        self._next_plant_id += 1
        return plant_id

    def living_plants(self) -> List[Plant]:
        return [plant for plant in self.plants if not plant.is_dead]

    def record_death(self, cause: DeathCause) -> None:
        self.deaths[cause] += 1


def create_context(
    config: Optional[GardenConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> GardenContext:
    """Build a validated, empty garden context.

    Args:
        config: Garden configuration (defaults if not provided)
        rng: Shared random number generator for deterministic runs
        seed: Optional seed (used if rng is not provided)

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    resolved_config = config if config is not None else GardenConfig()
    resolved_config.validate()
    resolved_rng, _ = resolve_rng(rng, seed)
    return GardenContext(
        rng=resolved_rng,
        config=resolved_config,
    )
