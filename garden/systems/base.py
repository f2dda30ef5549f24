"""Common base for the garden's per-frame systems.

Each system owns one slice of the frame (weather, grass, snow, plant aging,
animation). The engine hands every system the same ``GardenContext`` and the
frame delta; a system mutates the part of the context it owns and reports
what it did in a ``SystemResult``.

A system can be switched off by name through the engine, which is how tests
and the debug HUD freeze, say, the grass while everything else keeps going.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

__all__ = [
    "BaseSystem",
    "SystemResult",
]

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext
    from garden.update_phases import UpdatePhase


@dataclass
class SystemResult:
    """What one system did during one frame.

    Attributes:
        entities_affected: Plants or particles touched this frame
        entities_spawned: Blades, flakes or droplets created
        entities_removed: Blades evicted, flakes settled, droplets faded
        skipped: True when the system is disabled
        details: Per-system extras, e.g. {"weather": "snow", "changed": True}
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def skipped_result(cls) -> "SystemResult":
        return cls(skipped=True)

    @property
    def changed_population(self) -> bool:
        """True if anything was spawned or removed."""
        return bool(self.entities_spawned or self.entities_removed)


class BaseSystem(ABC):
    """A named, switchable unit of per-frame garden logic.

    Subclasses implement ``_do_update`` and declare their phase with
    ``@runs_in_phase``:

        @runs_in_phase(UpdatePhase.DECORATION)
        class LeafSystem(BaseSystem):
            def __init__(self) -> None:
                super().__init__("Leaves")

            def _do_update(self, context, delta) -> SystemResult:
                ...
    """

    # Filled in by @runs_in_phase
    _phase: Optional["UpdatePhase"] = None

    def __init__(self, name: str) -> None:
        self._name = name
        self._enabled = True
        self._update_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @property
    def update_count(self) -> int:
        """Frames this system actually ran (disabled frames excluded)."""
        return self._update_count

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        return self._phase

    def update(self, context: "GardenContext", delta: float) -> SystemResult:
        """Run one frame unless disabled.

        Args:
            context: The garden being simulated
            delta: Frame length in milliseconds
        """
        if not self._enabled:
            return SystemResult.skipped_result()
        result = self._do_update(context, delta)
        self._update_count += 1
        return result

    @abstractmethod
    def _do_update(self, context: "GardenContext", delta: float) -> SystemResult:
        """Advance this system's slice of the garden by ``delta`` ms."""

    def get_debug_info(self) -> Dict[str, Any]:
        """State shown in the debug dump. Subclasses add their own counters."""
        return {
            "name": self._name,
            "enabled": self._enabled,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }

    def __repr__(self) -> str:
        phase = self._phase.name if self._phase else "unphased"
        return f"<{self.__class__.__name__} {self._name!r} {phase} enabled={self._enabled}>"
