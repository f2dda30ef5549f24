"""Weather system: clear skies and snowfall.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.ENVIRONMENT, before decorations and plants read it
- Transition chances scale with the frame delta, approximating a constant
  hazard rate per millisecond; scaled chances are clamped to [0, 1]
- Listeners are notified on every CLEAR <-> SNOWING change so that
  collaborators (renderer tint, HUD) can react
"""

import logging
import random
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from garden.config.garden_config import WeatherConfig
from garden.math_utils import clamp_probability
from garden.state_machine import WeatherState, create_weather_state_machine
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)

WeatherListener = Callable[[WeatherState, WeatherState], None]


class Weather:
    """The garden's single weather instance.

    Attributes:
        time_in_state: ms since the current state began
        snow_duration: ms since snow started (0 while clear)
        transitions: Number of state changes so far
    """

    def __init__(self) -> None:
        self._machine = create_weather_state_machine()
        self.time_in_state: float = 0.0
        self.snow_duration: float = 0.0
        self.transitions: int = 0

    @property
    def state(self) -> WeatherState:
        return self._machine.state

    @property
    def is_snowing(self) -> bool:
        return self._machine.state is WeatherState.SNOWING

    def cold_stress_active(self, snow_duration_threshold: float) -> bool:
        """True once it has been snowing for longer than the threshold."""
        return self.is_snowing and self.snow_duration > snow_duration_threshold

    def start_snow(self) -> None:
        self._enter(WeatherState.SNOWING)

    def stop_snow(self) -> None:
        self._enter(WeatherState.CLEAR)

    def _enter(self, state: WeatherState) -> None:
        self._machine.transition(state)
        self.time_in_state = 0.0
        self.snow_duration = 0.0
        self.transitions += 1

    def __repr__(self) -> str:
        return (
            f"Weather({self.state.name}, time_in_state={self.time_in_state:.0f}, "
            f"snow_duration={self.snow_duration:.0f})"
        )


@runs_in_phase(UpdatePhase.ENVIRONMENT)
class WeatherSystem(BaseSystem):
    """Advances the weather state machine each frame.

    Attributes:
        config: Optional WeatherConfig override for the snow chances
    """

    def __init__(
        self,
        config: Optional[WeatherConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the weather system.

        Args:
            config: Weather tuning (uses the context config if not provided)
            rng: Random number generator (uses the context's rng if not provided)
        """
        super().__init__("Weather")
        self.config = config
        self._rng = rng
        self._listeners: List[WeatherListener] = []
        self._snowfalls: int = 0

    def add_listener(self, listener: WeatherListener) -> None:
        """Register a callback invoked as ``listener(old_state, new_state)``."""
        self._listeners.append(listener)

    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        weather = context.weather
        config = self.config if self.config is not None else context.config.weather
        rng = self._rng if self._rng is not None else context.rng
        old_state = weather.state

        delta = max(0.0, delta)
        weather.time_in_state += delta
        if weather.state is WeatherState.CLEAR:
            if rng.random() < clamp_probability(config.snow_start_chance * delta):
                weather.start_snow()
                self._snowfalls += 1
        else:
            weather.snow_duration += delta
            if weather.time_in_state > config.snow_min_duration and rng.random() < clamp_probability(
                config.snow_stop_chance * delta
            ):
                weather.stop_snow()

        changed = weather.state is not old_state
        if changed:
            logger.info("Weather changed: %s -> %s", old_state.name, weather.state.name)
            for listener in self._listeners:
                listener(old_state, weather.state)

        return SystemResult(details={"weather": weather.state.value, "changed": changed})

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info["snowfalls"] = self._snowfalls
        info["listeners"] = len(self._listeners)
        return info
