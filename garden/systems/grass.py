"""Grass system: blades accumulating along the bottom of the canvas.

Grass is purely decorative. A new blade appears every
``grass_spawn_interval`` ms; the population is a bounded FIFO so the
oldest blade disappears once the cap is reached.
"""

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, Optional

from garden.config.decorations import GRASS_COLORS, GRASS_HEIGHT_RANGE
from garden.config.garden_config import DecorationConfig
from garden.entities.decorations import GrassBlade
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.DECORATION)
class GrassSystem(BaseSystem):
    """Spawns grass blades on a fixed interval.

    The spawn timer restarts from zero after a spawn. A long frame spanning
    several intervals spawns one blade per whole interval and drops the
    leftover time.
    """

    def __init__(self, config: Optional[DecorationConfig] = None) -> None:
        super().__init__("Grass")
        self.config = config
        self._timer: float = 0.0
        self._total_spawned: int = 0
        self._total_evicted: int = 0

    @property
    def timer(self) -> float:
        """ms accumulated toward the next blade."""
        return self._timer

    def _config_for(self, context: "GardenContext") -> DecorationConfig:
        return self.config if self.config is not None else context.config.decorations

    def seed_initial(self, context: "GardenContext") -> int:
        """Scatter the starting lawn. Returns the number of blades added."""
        count = self._config_for(context).initial_grass_blades
        for _ in range(count):
            self.spawn_blade(context)
        logger.debug("Seeded %d grass blades", count)
        return count

    def spawn_blade(self, context: "GardenContext") -> bool:
        """Add one random blade, evicting the oldest if at capacity.

        Returns:
            True if a blade was evicted to make room
        """
        rng = context.rng
        cap = self._config_for(context).max_grass_blades
        evicted = False
        while len(context.grass) >= cap:
            context.grass.popleft()
            evicted = True
        context.grass.append(
            GrassBlade(
                x=rng.random() * context.config.display.canvas_width,
                height=rng.uniform(*GRASS_HEIGHT_RANGE),
                color=rng.choice(GRASS_COLORS),
                sway=rng.random() * math.pi * 2,
            )
        )
        self._total_spawned += 1
        if evicted:
            self._total_evicted += 1
        return evicted

    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        interval = self._config_for(context).grass_spawn_interval
        self._timer += delta
        spawned = 0
        evicted = 0
        if self._timer >= interval:
            for _ in range(int(self._timer // interval)):
                if self.spawn_blade(context):
                    evicted += 1
                spawned += 1
            self._timer = 0.0
        return SystemResult(entities_spawned=spawned, entities_removed=evicted)

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(
            {
                "timer": self._timer,
                "total_spawned": self._total_spawned,
                "total_evicted": self._total_evicted,
            }
        )
        return info
