"""Garden simulation engine - the slim orchestrator.

The engine owns the ``GardenContext`` and the systems, runs one update step
per frame, and exposes the small mutation surface used by clicks
(``plant_seed``, ``water_at``, ``clear_dead_at``). It has no pygame
dependency, so the same engine drives the window and headless runs.

Design Decisions:
-----------------
1. The engine is a COORDINATOR, not a DOER. Weather, decorations, plant
   aging and animation each live in a system; the lifecycle rules live in
   ``garden.lifecycle``.

2. Systems declare their phase with ``@runs_in_phase`` and the engine runs
   them through a ``PhaseRunner``, so phase order is data, not code.

3. Interactions return ``Ok``/``Err`` values. Clicking on empty soil with
   the watering can is a normal thing to do and never raises.
"""

import logging
import random
import time
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from garden.clock import FrameClock, PeriodicTimer
from garden.config.decorations import (
    CELEBRATION_BURST_COUNT,
    CELEBRATION_BURST_LIFT,
    PLANTING_BURST_COUNT,
    WATER_BURST_COUNT,
    WATER_BURST_LIFT,
)
from garden.config.display import REFERENCE_FRAME_MS, SEPARATOR_WIDTH
from garden.config.garden_config import GardenConfig
from garden.entities.plant import DeathCause, Plant, Species
from garden.interaction import InteractionRejection, WateringOutcome
from garden.lifecycle import apply_water
from garden.math_utils import Point
from garden.result import Err, Ok, Result
from garden.simulation import diagnostics
from garden.simulation.context import GardenContext, create_context
from garden.state_machine import GrowthStage
from garden.systems.animation import AnimationSystem, spawn_water_burst
from garden.systems.base import BaseSystem, SystemResult
from garden.systems.grass import GrassSystem
from garden.systems.plant_lifecycle import PlantLifecycleSystem
from garden.systems.snow import SnowSystem
from garden.systems.weather import Weather, WeatherSystem
from garden.update_phases import PHASE_DESCRIPTIONS, PhaseRunner, UpdatePhase

logger = logging.getLogger(__name__)

# Headless demo: water every growing plant this often (simulated ms)
DEMO_WATERING_INTERVAL_MS = 2000.0


class GardenEngine:
    """A headless garden simulation.

    Architecture:
        GardenEngine (coordinator)
        ├── GardenContext (plants, weather, decorations, counters)
        ├── PhaseRunner (system order)
        └── Systems (Weather, Grass, Snow, PlantLifecycle, Animation)

    Attributes:
        context: All mutable garden state
        config: Garden configuration
        clock: Converts frame timestamps into deltas
        paused: Whether update steps are skipped
    """

    def __init__(
        self,
        config: Optional[GardenConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the garden engine.

        Args:
            config: Garden configuration (defaults if not provided)
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.context: GardenContext = create_context(config, rng=rng, seed=seed)
        self.config: GardenConfig = self.context.config
        self.seed = seed if rng is None else None
        self.paused: bool = False
        self.clock = FrameClock()
        self.start_time: float = time.time()
        self._is_setup = False

        self.weather_system = WeatherSystem()
        self.grass_system = GrassSystem()
        self.snow_system = SnowSystem()
        self.lifecycle_system = PlantLifecycleSystem()
        self.animation_system = AnimationSystem()

        self._runner = PhaseRunner()
        for system in (
            self.weather_system,
            self.grass_system,
            self.snow_system,
            self.lifecycle_system,
            self.animation_system,
        ):
            self._runner.register(system)

    # =========================================================================
    # Convenience accessors
    # =========================================================================

    @property
    def plants(self) -> List[Plant]:
        return self.context.plants

    @property
    def weather(self) -> Weather:
        return self.context.weather

    @property
    def rng(self) -> random.Random:
        return self.context.rng

    @property
    def frame_count(self) -> int:
        return self.context.frame_count

    @property
    def day_count(self) -> int:
        return self.context.day_count

    # =========================================================================
    # Setup
    # =========================================================================

    def setup(self) -> None:
        """Scatter the starting grass. Safe to call more than once."""
        if self._is_setup:
            return
        self.grass_system.seed_initial(self.context)
        self._is_setup = True
        logger.info("Garden ready: %d grass blades", len(self.context.grass))

    # =========================================================================
    # System Management
    # =========================================================================

    def get_systems(self) -> List[BaseSystem]:
        """All systems in execution order."""
        return self._runner.get_all()

    def get_system(self, name: str) -> Optional[BaseSystem]:
        return self._runner.get(name)

    def get_systems_debug_info(self) -> Dict[str, Any]:
        return self._runner.get_debug_info()

    def set_system_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name. Returns False if unknown."""
        return self._runner.set_enabled(name, enabled)

    def get_current_phase(self) -> Optional[UpdatePhase]:
        return self._runner.current_phase

    def get_phase_description(self, phase: Optional[UpdatePhase] = None) -> str:
        phase = phase or self._runner.current_phase
        if phase is None:
            return "Idle"
        return PHASE_DESCRIPTIONS[phase]

    # =========================================================================
    # Main Update Loop
    # =========================================================================

    def update(self, delta: float) -> Dict[str, SystemResult]:
        """Run one update step of ``delta`` milliseconds.

        Phase Order:
            1. FRAME_START: Count the frame, accumulate simulated time
            2. ENVIRONMENT: Weather
            3. DECORATION: Grass and snow
            4. LIFECYCLE: Plant aging and death
            5. ANIMATION: Cosmetic timers and water particles
            6. FRAME_END: Nothing registered by default

        Returns:
            System results keyed by system name (empty while paused)
        """
        if self.paused:
            return {}
        delta = max(0.0, delta)

        self.context.frame_count += 1
        self.context.elapsed_ms += delta
        return self._runner.run_all(self.context, delta)

    def tick(self, timestamp_ms: float) -> Dict[str, SystemResult]:
        """Run one update step from a frame timestamp."""
        return self.update(self.clock.tick(timestamp_ms))

    def pause(self) -> None:
        self.paused = True
        logger.info("Garden paused")

    def resume(self) -> None:
        """Resume updates; the first frame after resuming has delta 0."""
        self.paused = False
        self.clock.reset()
        logger.info("Garden resumed")

    def toggle_pause(self) -> bool:
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def advance_day(self) -> int:
        """Move the garden to the next day. Returns the new day number."""
        self.context.day_count += 1
        logger.info("Day %d begins", self.context.day_count)
        return self.context.day_count

    # =========================================================================
    # Interactions
    # =========================================================================

    def find_plant_at(self, position: Tuple[float, float]) -> Optional[Plant]:
        """Return the first plant (dead or alive) within the hitbox radius."""
        point = Point(float(position[0]), float(position[1]))
        radius = self.config.plants.hitbox_radius
        for plant in self.context.plants:
            if plant.position.distance_to(point) < radius:
                return plant
        return None

    def plant_seed(
        self, position: Tuple[float, float], species: Species
    ) -> Result[Plant, InteractionRejection]:
        """Plant a new seed, unless another plant is too close."""
        if self.find_plant_at(position) is not None:
            return Err(InteractionRejection.OCCUPIED)

        plant = Plant(
            position,
            species,
            self.config.plants.thresholds_for(species.value),
            plant_id=self.context.allocate_plant_id(),
        )
        self.context.plants.append(plant)
        spawn_water_burst(self.context, plant.x, plant.y, PLANTING_BURST_COUNT)
        logger.info("Planted %s #%d at (%.0f, %.0f)", species.value, plant.plant_id, plant.x, plant.y)
        return Ok(plant)

    def water_at(self, position: Tuple[float, float]) -> Result[WateringOutcome, InteractionRejection]:
        """Water the plant under the cursor."""
        plant = self.find_plant_at(position)
        if plant is None:
            return Err(InteractionRejection.NO_PLANT)
        if plant.is_dead:
            return Err(InteractionRejection.PLANT_DEAD)

        evolved = apply_water(plant, self.context.rng)
        self.context.water_count += 1

        x, y = float(position[0]), float(position[1])
        spawn_water_burst(self.context, x, y - WATER_BURST_LIFT, WATER_BURST_COUNT)
        if evolved:
            spawn_water_burst(
                self.context, x, y - CELEBRATION_BURST_LIFT, CELEBRATION_BURST_COUNT, celebration=True
            )
        return Ok(WateringOutcome(plant=plant, evolved=evolved, stage=plant.growth_stage))

    def clear_dead_at(self, position: Tuple[float, float]) -> Result[Plant, InteractionRejection]:
        """Remove the dead plant under the cursor."""
        plant = self.find_plant_at(position)
        if plant is None:
            return Err(InteractionRejection.NO_PLANT)
        if not plant.is_dead:
            return Err(InteractionRejection.PLANT_ALIVE)

        self.context.plants.remove(plant)
        logger.info("Cleared dead %s #%d", plant.species.value, plant.plant_id)
        return Ok(plant)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_summary_stats(self) -> Dict[str, Any]:
        """Snapshot of the garden as plain JSON-friendly values."""
        context = self.context
        by_stage = Counter(plant.growth_stage for plant in context.plants)
        by_species = Counter(plant.species for plant in context.plants)
        return {
            "frame": context.frame_count,
            "elapsed_ms": context.elapsed_ms,
            "day": context.day_count,
            "water_count": context.water_count,
            "paused": self.paused,
            "weather": context.weather.state.value,
            "snow_duration": context.weather.snow_duration,
            "plants": len(context.plants),
            "plants_by_stage": {stage.value: by_stage[stage] for stage in GrowthStage},
            "plants_by_species": {species.value: by_species[species] for species in Species},
            "deaths": {cause.value: context.deaths[cause] for cause in DeathCause},
            "grass": len(context.grass),
            "snowflakes": len(context.snowflakes),
            "snow_deposits": len(context.snow_deposits),
            "water_particles": len(context.water_particles),
        }

    def log_stats(self) -> None:
        diagnostics.log_summary_stats(self, self.start_time)

    def export_stats_json(self, filename: str) -> bool:
        return diagnostics.export_stats_json(self, filename, self.start_time)

    # =========================================================================
    # Run Methods
    # =========================================================================

    def plant_demo_garden(self) -> List[Plant]:
        """Plant one seed of each species evenly across the canvas."""
        width = self.config.display.canvas_width
        ground = self.config.display.canvas_height - 60
        species_list = list(Species)
        planted = []
        for index, species in enumerate(species_list):
            x = width * (index + 1) / (len(species_list) + 1)
            result = self.plant_seed((x, ground), species)
            if result.is_ok():
                planted.append(result.unwrap())
        return planted

    def _tend_demo_garden(self, demo_plants: List[Plant]) -> None:
        """Water growing plants; replace dead ones with a fresh seed."""
        for index, plant in enumerate(demo_plants):
            if plant.is_dead:
                self.clear_dead_at(plant.position)
                replanted = self.plant_seed(plant.position, plant.species)
                if replanted.is_ok():
                    demo_plants[index] = replanted.unwrap()
            elif plant.growth_stage is not GrowthStage.FLOWER:
                self.water_at(plant.position)

    def run_headless(
        self,
        max_frames: int = 10000,
        frame_ms: float = REFERENCE_FRAME_MS,
        stats_interval: int = 600,
        export_json: Optional[str] = None,
        demo: bool = True,
    ) -> Dict[str, Any]:
        """Run the garden without a display using fixed-size frames.

        Args:
            max_frames: Number of update steps to run
            frame_ms: Simulated milliseconds per step
            stats_interval: Log stats every N frames (0 disables)
            export_json: Optional path for a JSON stats export
            demo: Plant and tend one seed of each species

        Returns:
            Final summary statistics
        """
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("HEADLESS PIXEL GARDEN")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info(
            "Running for %d frames of %.2fms (%.1f seconds of sim time)",
            max_frames,
            frame_ms,
            max_frames * frame_ms / 1000.0,
        )

        self.setup()
        demo_plants = self.plant_demo_garden() if demo else []
        days = PeriodicTimer(self.config.weather.day_length_ms)
        watering = PeriodicTimer(DEMO_WATERING_INTERVAL_MS)

        for frame in range(1, max_frames + 1):
            self.update(frame_ms)
            for _ in range(days.advance(frame_ms)):
                self.advance_day()
            if demo_plants and watering.advance(frame_ms):
                self._tend_demo_garden(demo_plants)
            if stats_interval > 0 and frame % stats_interval == 0:
                self.log_stats()

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("SIMULATION COMPLETE - Final Statistics")
        logger.info("=" * SEPARATOR_WIDTH)
        self.log_stats()
        if export_json:
            self.export_stats_json(export_json)
        return self.get_summary_stats()
