"""Animation system: cosmetic timers and water particles.

Everything here is cosmetic. Bounce and flash timers are decayed in the
update step so that drawing stays read-only; rates are defined per 60fps
frame in the config and scaled by the real delta.
"""

import logging
import math
from typing import TYPE_CHECKING, Any, Dict

from garden.config.decorations import (
    CELEBRATION_COLORS,
    CELEBRATION_SPREAD,
    WATER_COLORS,
    WATER_FADE_PER_FRAME,
    WATER_SHRINK_PER_FRAME,
    WATER_SPREAD,
)
from garden.config.display import REFERENCE_FRAME_MS
from garden.config.plants import (
    BOUNCE_DECAY_PER_MS,
    FLASH_DECAY_PER_MS,
    WIND_POSITION_PHASE,
    WIND_STAGE_MULTIPLIERS,
)
from garden.entities.decorations import WaterParticle
from garden.entities.plant import Plant
from garden.state_machine import GrowthStage
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)


def wind_angle(plant: Plant, time_ms: float) -> float:
    """Sway angle in degrees for a plant at a point in time.

    Seeds, dead plants and plants whose wind was never initialized stand
    still. Buds and flowers sway more than leafy stages.
    """
    stage = plant.growth_stage
    if stage in (GrowthStage.SEED, GrowthStage.DEAD):
        return 0.0
    if plant.wind_speed is None or plant.wind_period is None:
        return 0.0
    multiplier = WIND_STAGE_MULTIPLIERS.get(stage.value, 1.0)
    phase = time_ms * 0.001 + (plant.x + plant.y) * WIND_POSITION_PHASE
    return math.sin(phase * (2 * math.pi) / plant.wind_period) * plant.wind_speed * multiplier


def spawn_water_burst(
    context: "GardenContext",
    x: float,
    y: float,
    count: int,
    celebration: bool = False,
) -> int:
    """Add a burst of droplets around (x, y). Celebrations are bigger."""
    rng = context.rng
    colors = CELEBRATION_COLORS if celebration else WATER_COLORS
    spread = CELEBRATION_SPREAD if celebration else WATER_SPREAD
    for _ in range(count):
        if celebration:
            velocity = 1.5 + rng.random() * 3
            size = 6 + rng.random() * 6
        else:
            velocity = 2 + rng.random() * 2
            size = 4 + rng.random() * 4
        context.water_particles.append(
            WaterParticle(
                x=x + (rng.random() - 0.5) * spread,
                y=y - 10 + rng.random() * 10,
                velocity=velocity,
                horizontal_velocity=(rng.random() - 0.5) * 0.5,
                opacity=0.7 + rng.random() * 0.3,
                size=size,
                color=rng.choice(colors),
            )
        )
    return count


@runs_in_phase(UpdatePhase.ANIMATION)
class AnimationSystem(BaseSystem):
    """Decays bounce/flash timers and moves water particles."""

    def __init__(self) -> None:
        super().__init__("Animation")
        self._particles_expired: int = 0

    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        animated = 0
        for plant in context.plants:
            if plant.bounce_time > 0 or plant.evolution_flash > 0:
                animated += 1
            if plant.bounce_time > 0:
                plant.bounce_time = max(0.0, plant.bounce_time - BOUNCE_DECAY_PER_MS * delta)
            if plant.evolution_flash > 0:
                plant.evolution_flash = max(0.0, plant.evolution_flash - FLASH_DECAY_PER_MS * delta)

        expired = self._move_particles(context, delta)
        self._particles_expired += expired
        return SystemResult(
            entities_affected=animated,
            entities_removed=expired,
            details={"particles": len(context.water_particles)},
        )

    def _move_particles(self, context: "GardenContext", delta: float) -> int:
        frames = delta / REFERENCE_FRAME_MS
        shrink = WATER_SHRINK_PER_FRAME ** frames
        floor = context.config.display.canvas_height
        alive = []
        for particle in context.water_particles:
            particle.y += particle.velocity * frames
            particle.x += particle.horizontal_velocity * frames
            particle.opacity -= WATER_FADE_PER_FRAME * frames
            particle.size *= shrink
            if particle.opacity <= 0 or particle.y > floor or particle.size < 1:
                continue
            alive.append(particle)
        expired = len(context.water_particles) - len(alive)
        context.water_particles[:] = alive
        return expired

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info["particles_expired"] = self._particles_expired
        return info
