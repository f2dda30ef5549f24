"""Update phase definitions for explicit execution ordering.

Every frame runs the same phases in the same order, so that plants always
see this frame's weather and decorations always see this frame's plants:

    FRAME_START -> ENVIRONMENT -> DECORATION -> LIFECYCLE
    -> ANIMATION -> FRAME_END

Systems declare their phase with ``@runs_in_phase`` and are registered with
a ``PhaseRunner``; registration order only matters within a phase.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

__all__ = [
    "UpdatePhase",
    "PhaseRunner",
    "PHASE_DESCRIPTIONS",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext
    from garden.systems.base import BaseSystem, SystemResult

logger = logging.getLogger(__name__)


class UpdatePhase(Enum):
    """Phases of a garden update tick, in execution order."""

    FRAME_START = auto()  # Frame counter, per-frame bookkeeping
    ENVIRONMENT = auto()  # Weather
    DECORATION = auto()  # Grass and snow particles
    LIFECYCLE = auto()  # Plant aging and death
    ANIMATION = auto()  # Cosmetic timers and water particles
    FRAME_END = auto()  # Statistics


PHASE_DESCRIPTIONS: Dict[UpdatePhase, str] = {
    UpdatePhase.FRAME_START: "Starting frame",
    UpdatePhase.ENVIRONMENT: "Updating weather",
    UpdatePhase.DECORATION: "Updating grass and snow",
    UpdatePhase.LIFECYCLE: "Aging plants",
    UpdatePhase.ANIMATION: "Decaying cosmetic effects",
    UpdatePhase.FRAME_END: "Recording statistics",
}


@dataclass
class PhaseRunner:
    """Executes systems in their designated phases.

    Example:
        runner = PhaseRunner()
        runner.register(plant_lifecycle_system)  # LIFECYCLE
        runner.register(weather_system)          # ENVIRONMENT
        runner.run_all(context, delta=16.7)      # weather runs first
    """

    _systems_by_phase: Dict[UpdatePhase, List["BaseSystem"]] = field(
        default_factory=lambda: {phase: [] for phase in UpdatePhase}
    )
    _debug_mode: bool = False
    _current_phase: Optional[UpdatePhase] = None
    _phase_timings: Dict[UpdatePhase, float] = field(default_factory=dict)

    def register(self, system: "BaseSystem", phase: Optional[UpdatePhase] = None) -> None:
        """Register a system, defaulting to the phase it declares.

        Raises:
            ValueError: If no phase is given and the system declares none
        """
        resolved = phase if phase is not None else get_system_phase(system)
        if resolved is None:
            raise ValueError(f"System {system.name} does not declare an update phase")
        self._systems_by_phase[resolved].append(system)
        logger.debug("Registered system %s in %s", system.name, resolved.name)

    def get(self, name: str) -> Optional["BaseSystem"]:
        """Get a registered system by name."""
        for systems in self._systems_by_phase.values():
            for system in systems:
                if system.name == name:
                    return system
        return None

    def get_all(self) -> List["BaseSystem"]:
        """All registered systems in execution order."""
        return [system for phase in UpdatePhase for system in self._systems_by_phase[phase]]

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name.

        Returns:
            True if the system was found
        """
        system = self.get(name)
        if system is None:
            return False
        system.enabled = enabled
        logger.debug("System %s enabled=%s", name, enabled)
        return True

    def run_all(self, context: "GardenContext", delta: float) -> Dict[str, "SystemResult"]:
        """Run all phases in order.

        Returns:
            Results keyed by system name
        """
        results: Dict[str, "SystemResult"] = {}
        for phase in UpdatePhase:
            results.update(self.run_phase(phase, context, delta))
        return results

    def run_phase(
        self, phase: UpdatePhase, context: "GardenContext", delta: float
    ) -> Dict[str, "SystemResult"]:
        """Run all systems registered for a specific phase."""
        self._current_phase = phase
        start_time = time.perf_counter() if self._debug_mode else 0.0

        results = {system.name: system.update(context, delta) for system in self._systems_by_phase[phase]}

        if self._debug_mode:
            self._phase_timings[phase] = time.perf_counter() - start_time
        self._current_phase = None
        return results

    @property
    def current_phase(self) -> Optional[UpdatePhase]:
        """Get the currently executing phase, or None if not in update."""
        return self._current_phase

    def get_systems_in_phase(self, phase: UpdatePhase) -> List["BaseSystem"]:
        return self._systems_by_phase[phase].copy()

    def enable_debug(self, enabled: bool = True) -> None:
        """Enable debug mode (tracks timing per phase)."""
        self._debug_mode = enabled

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "current_phase": self._current_phase.name if self._current_phase else None,
            "systems": {system.name: system.get_debug_info() for system in self.get_all()},
            "timings": (
                {phase.name: f"{timing * 1000:.2f}ms" for phase, timing in self._phase_timings.items()}
                if self._debug_mode
                else {}
            ),
        }


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.LIFECYCLE)
        class PlantLifecycleSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)
