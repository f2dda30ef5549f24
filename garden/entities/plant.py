"""Plant entity.

A plant is planted as a seed, grows one stage each time it has received
enough water, blooms, and eventually dies of old age or cold. This module
holds the plant's state and the two primitive moves (grow one stage, die);
the rules deciding *when* those happen live in ``garden.lifecycle``.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from garden.config.plants import SPECIES_DISPLAY_NAMES
from garden.math_utils import Point
from garden.state_machine import (
    WATERED_STAGES,
    GrowthStage,
    StateTransition,
    create_growth_state_machine,
    next_growth_stage,
)

logger = logging.getLogger(__name__)


class Species(Enum):
    """Plantable flower species."""

    LILY = "lily"
    TULIP = "tulip"
    ORCHID = "orchid"

    @property
    def display_name(self) -> str:
        return SPECIES_DISPLAY_NAMES[self.value]


class DeathCause(Enum):
    """Why a plant died."""

    OLD_AGE = "old"
    COLD = "cold"


class Plant:
    """A single plant in the garden.

    Attributes:
        plant_id: Identifier assigned by the engine at planting time
        water_level: Water received since the last stage change
        age: ms alive since planting
        time_in_flower: ms spent in bloom (0 before blooming)
        freeze_exposure: ms of active cold stress since the last freeze check
        bounce_time: Cosmetic bounce remaining after watering
        evolution_flash: Cosmetic flash remaining after growing a stage
        wind_speed: Sway amplitude in degrees (None until first sprouting)
        wind_period: Sway period in seconds (None until first sprouting)
    """

    def __init__(
        self,
        position: Tuple[float, float],
        species: Species,
        water_thresholds: Iterable[int],
        plant_id: int = 0,
    ) -> None:
        """Create a new seed.

        Args:
            position: Canvas position of the plant's base
            species: Flower species
            water_thresholds: Water needed for each of the four transitions
            plant_id: Engine-assigned identifier

        Raises:
            ValueError: If the thresholds are not exactly four values
        """
        thresholds = tuple(int(t) for t in water_thresholds)
        if len(thresholds) != len(WATERED_STAGES):
            raise ValueError(
                f"Expected {len(WATERED_STAGES)} water thresholds, got {len(thresholds)}"
            )

        self.plant_id = plant_id
        self._position = Point(float(position[0]), float(position[1]))
        self._species = species
        self._water_thresholds = thresholds
        self._stages = create_growth_state_machine()
        self._death_cause: Optional[DeathCause] = None

        self.water_level: int = 0
        self.age: float = 0.0
        self.time_in_flower: float = 0.0
        self.freeze_exposure: float = 0.0

        self.bounce_time: float = 0.0
        self.evolution_flash: float = 0.0
        self.wind_speed: Optional[float] = None
        self.wind_period: Optional[float] = None

    @property
    def position(self) -> Point:
        return self._position

    @property
    def x(self) -> float:
        return self._position.x

    @property
    def y(self) -> float:
        return self._position.y

    @property
    def species(self) -> Species:
        return self._species

    @property
    def water_thresholds(self) -> Tuple[int, ...]:
        return self._water_thresholds

    @property
    def growth_stage(self) -> GrowthStage:
        return self._stages.state

    @property
    def death_cause(self) -> Optional[DeathCause]:
        return self._death_cause

    @property
    def is_dead(self) -> bool:
        return self._stages.state is GrowthStage.DEAD

    @property
    def stage_history(self) -> List[StateTransition[GrowthStage]]:
        """Every stage change since planting, oldest first."""
        return self._stages.history

    def current_threshold(self) -> Optional[int]:
        """Water needed to leave the current stage, or None if it cannot grow."""
        stage = self._stages.state
        if stage not in WATERED_STAGES:
            return None
        return self._water_thresholds[WATERED_STAGES.index(stage)]

    def water_progress(self) -> Optional[float]:
        """Fraction of the current threshold already received (0.0-1.0)."""
        threshold = self.current_threshold()
        if threshold is None:
            return None
        return min(1.0, self.water_level / threshold)

    def grow(self) -> GrowthStage:
        """Advance exactly one stage and reset the per-stage counters.

        Raises:
            ValueError: If the plant is in bloom or dead
        """
        target = next_growth_stage(self._stages.state)
        self._stages.transition(target, at_ms=self.age, reason="watered")
        self.water_level = 0
        if target is GrowthStage.FLOWER:
            self.time_in_flower = 0.0
        return target

    def die(self, cause: DeathCause) -> bool:
        """Move to DEAD, recording the cause.

        Returns:
            False if the plant was already dead (the first cause is kept)
        """
        if self.is_dead:
            return False
        self._stages.transition(GrowthStage.DEAD, at_ms=self.age, reason=cause.value)
        self._death_cause = cause
        self.bounce_time = 0.0
        self.evolution_flash = 0.0
        return True

    def __repr__(self) -> str:
        return (
            f"Plant(id={self.plant_id}, {self._species.value}, {self.growth_stage.name}, "
            f"pos=({self.x:.0f}, {self.y:.0f}))"
        )
