"""Snow system: falling flakes and melting deposits.

Architecture Notes:
- Runs in UpdatePhase.DECORATION, after the weather has been updated
- Flakes only spawn while it is snowing; flakes already in the air keep
  falling after the snow stops
- Each flake is tested in a fixed order every frame: caught by a living
  plant, landed on the ground, or blown out of bounds
- Deposits are capped; a flake that lands with the cap full still vanishes
"""

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from garden.config.decorations import (
    GROUND_DEPOSIT_HEIGHT_RANGE,
    GROUND_DEPOSIT_LIFE_RANGE,
    PLANT_DEPOSIT_HEIGHT_RANGE,
    PLANT_DEPOSIT_LIFE_RANGE,
    PLANT_DEPOSIT_SPREAD,
    PLANT_SNOW_BAND_BOTTOM,
    PLANT_SNOW_BAND_TOP,
    PLANT_SNOW_HALF_WIDTH,
    SNOW_BOUNDS_MARGIN,
    SNOW_DRIFT_FREQUENCY,
    SNOW_DRIFT_SPEED_FACTOR,
    SNOW_GROUND_OFFSET,
    SNOWFLAKE_AMPLITUDE_RANGE,
    SNOWFLAKE_SIZE_RANGE,
    SNOWFLAKE_SPAWN_Y,
    SNOWFLAKE_SPEED_RANGE,
)
from garden.config.garden_config import DecorationConfig
from garden.entities.decorations import SnowDeposit, Snowflake
from garden.entities.plant import Plant
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)


def catches_snow(plant: Plant, flake: Snowflake) -> bool:
    """True if the flake is inside the plant's catch zone."""
    return (
        abs(flake.x - plant.x) < PLANT_SNOW_HALF_WIDTH
        and plant.y - PLANT_SNOW_BAND_TOP < flake.y < plant.y - PLANT_SNOW_BAND_BOTTOM
    )


@runs_in_phase(UpdatePhase.DECORATION)
class SnowSystem(BaseSystem):
    """Spawns, moves and settles snowflakes, and melts deposits."""

    def __init__(self, config: Optional[DecorationConfig] = None) -> None:
        super().__init__("Snow")
        self.config = config
        self._plant_deposits: int = 0
        self._ground_deposits: int = 0
        self._dropped_at_cap: int = 0

    def spawn_flake(self, context: "GardenContext") -> Snowflake:
        rng = context.rng
        flake = Snowflake(
            x=rng.random() * context.config.display.canvas_width,
            y=SNOWFLAKE_SPAWN_Y,
            speed=rng.uniform(*SNOWFLAKE_SPEED_RANGE),
            amplitude=rng.uniform(*SNOWFLAKE_AMPLITUDE_RANGE),
            phase=rng.random() * math.pi * 2,
            size=rng.uniform(*SNOWFLAKE_SIZE_RANGE),
        )
        context.snowflakes.append(flake)
        return flake

    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        config = self.config if self.config is not None else context.config.decorations
        weather = context.weather
        rng = context.rng

        spawned = 0
        if weather.is_snowing and rng.random() < config.snowflake_spawn_chance:
            self.spawn_flake(context)
            spawned = 1

        # Snow only sticks to plants while it is actually snowing
        catchers = context.living_plants() if weather.is_snowing else []
        width = context.config.display.canvas_width
        ground = context.config.display.canvas_height - SNOW_GROUND_OFFSET
        seconds = delta / 1000.0

        remaining: List[Snowflake] = []
        removed = 0
        for flake in context.snowflakes:
            flake.y += flake.speed * seconds
            flake.x += (
                math.sin((weather.time_in_state + flake.phase) * SNOW_DRIFT_FREQUENCY)
                * flake.amplitude
                * SNOW_DRIFT_SPEED_FACTOR
                * seconds
            )

            catcher = next((plant for plant in catchers if catches_snow(plant, flake)), None)
            if catcher is not None:
                deposit = SnowDeposit(
                    x=catcher.x + rng.uniform(-PLANT_DEPOSIT_SPREAD, PLANT_DEPOSIT_SPREAD),
                    y=catcher.y - rng.uniform(*PLANT_DEPOSIT_HEIGHT_RANGE),
                    life=rng.uniform(*PLANT_DEPOSIT_LIFE_RANGE),
                )
                if self._add_deposit(context, deposit, config.max_snow_deposits):
                    self._plant_deposits += 1
                removed += 1
            elif flake.y > ground:
                deposit = SnowDeposit(
                    x=flake.x,
                    y=context.config.display.canvas_height
                    - rng.uniform(*GROUND_DEPOSIT_HEIGHT_RANGE),
                    life=rng.uniform(*GROUND_DEPOSIT_LIFE_RANGE),
                )
                if self._add_deposit(context, deposit, config.max_snow_deposits):
                    self._ground_deposits += 1
                removed += 1
            elif flake.x < -SNOW_BOUNDS_MARGIN or flake.x > width + SNOW_BOUNDS_MARGIN:
                removed += 1
            else:
                remaining.append(flake)
        context.snowflakes[:] = remaining

        melted = self._melt(context, delta)
        return SystemResult(
            entities_affected=len(remaining),
            entities_spawned=spawned,
            entities_removed=removed + melted,
            details={"flakes": len(remaining), "deposits": len(context.snow_deposits)},
        )

    def _add_deposit(self, context: "GardenContext", deposit: SnowDeposit, cap: int) -> bool:
        if len(context.snow_deposits) >= cap:
            self._dropped_at_cap += 1
            return False
        context.snow_deposits.append(deposit)
        return True

    def _melt(self, context: "GardenContext", delta: float) -> int:
        for deposit in context.snow_deposits:
            deposit.life -= delta
        before = len(context.snow_deposits)
        context.snow_deposits[:] = [d for d in context.snow_deposits if d.life > 0]
        return before - len(context.snow_deposits)

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(
            {
                "plant_deposits": self._plant_deposits,
                "ground_deposits": self._ground_deposits,
                "dropped_at_cap": self._dropped_at_cap,
            }
        )
        return info
