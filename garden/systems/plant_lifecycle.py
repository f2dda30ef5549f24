"""Plant lifecycle system: ages every living plant once per frame.

The rules themselves live in ``garden.lifecycle``; this system applies them
to the whole garden in the LIFECYCLE phase, after the weather for the frame
is known, and tallies deaths on the context.
"""

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict, Optional

from garden.config.garden_config import PlantConfig
from garden.lifecycle import advance_time
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.LIFECYCLE)
class PlantLifecycleSystem(BaseSystem):
    """Advances plant age, bloom time and cold exposure."""

    def __init__(self, config: Optional[PlantConfig] = None) -> None:
        super().__init__("PlantLifecycle")
        self.config = config
        self._deaths: Counter = Counter()

    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        config = self.config if self.config is not None else context.config.plants
        aged = 0
        deaths: Counter = Counter()

        for plant in context.plants:
            if plant.is_dead:
                continue
            aged += 1
            cause = advance_time(plant, delta, context.weather, context.rng, config)
            if cause is not None:
                context.record_death(cause)
                deaths[cause.value] += 1

        self._deaths.update(deaths)
        return SystemResult(
            entities_affected=aged,
            details={"deaths": sum(deaths.values()), **deaths},
        )

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info["deaths"] = dict(self._deaths)
        return info
