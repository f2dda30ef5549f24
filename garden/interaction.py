"""Turns clicks and the active tool into garden mutations.

The handler owns only UI state (selected seed, watering can on/off). Every
change to the garden goes through the engine's ``plant_seed``,
``water_at`` and ``clear_dead_at``, which return ``Ok``/``Err`` values;
a rejected click is ordinary play, not an error.

Routing:
    watering can active -> water the plant under the cursor
    otherwise, dead plant under the cursor -> clear it
    otherwise -> plant the selected seed (refused if the spot is taken)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Tuple

from garden.entities.plant import Plant, Species
from garden.math_utils import Point
from garden.result import Result
from garden.state_machine import GrowthStage

if TYPE_CHECKING:
    from garden.simulation.engine import GardenEngine

logger = logging.getLogger(__name__)


class InteractionRejection(Enum):
    """Why a click did nothing."""

    OCCUPIED = "occupied"  # another plant is within the hitbox radius
    NO_PLANT = "no_plant"  # nothing under the cursor
    PLANT_DEAD = "plant_dead"  # dead plants can't be watered
    PLANT_ALIVE = "plant_alive"  # only dead plants can be cleared


class InteractionKind(Enum):
    PLANT = "plant"
    WATER = "water"
    CLEAR = "clear"


@dataclass(frozen=True)
class WateringOutcome:
    """What a successful watering did."""

    plant: Plant
    evolved: bool
    stage: GrowthStage


@dataclass(frozen=True)
class ClickOutcome:
    """Result of routing one click.

    Attributes:
        kind: Which engine operation the click was routed to
        result: The engine operation's result
        needs_render: True if visible state changed and the caller should
            draw immediately instead of waiting for the next frame
    """

    kind: InteractionKind
    result: Result[Any, InteractionRejection]

    @property
    def needs_render(self) -> bool:
        return self.result.is_ok()


class InteractionHandler:
    """Holds the toolbar state and routes clicks onto the engine."""

    def __init__(self, engine: "GardenEngine", selected_seed: Species = Species.LILY) -> None:
        self.engine = engine
        self.selected_seed = selected_seed
        self.watering_can_active = False

    def select_seed(self, species: Species) -> None:
        """Choose the seed to plant; this puts the watering can away."""
        self.selected_seed = species
        self.watering_can_active = False

    def toggle_watering_can(self) -> bool:
        """Flip the watering can on or off. Returns the new state."""
        self.watering_can_active = not self.watering_can_active
        return self.watering_can_active

    @property
    def active_tool(self) -> str:
        return "watering_can" if self.watering_can_active else self.selected_seed.value

    def handle_click(self, position: Tuple[float, float]) -> ClickOutcome:
        point = Point(float(position[0]), float(position[1]))

        if self.watering_can_active:
            return ClickOutcome(InteractionKind.WATER, self.engine.water_at(point))

        existing: Optional[Plant] = self.engine.find_plant_at(point)
        if existing is not None and existing.is_dead:
            return ClickOutcome(InteractionKind.CLEAR, self.engine.clear_dead_at(point))
        return ClickOutcome(InteractionKind.PLANT, self.engine.plant_seed(point, self.selected_seed))
