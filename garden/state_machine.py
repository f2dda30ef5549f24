"""Validating state machines for plant growth and weather.

Both the plant stages and the weather are small enums with a fixed set of
allowed moves. Keeping the moves in a table means a bug such as BUD -> SEED,
or a dead plant coming back to life, fails loudly at the point it happens:

    stages = create_growth_state_machine()
    stages.transition(GrowthStage.SPROUT)  # fine
    stages.transition(GrowthStage.SEED)    # ValueError
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, Generic, List, TypeVar

from garden.result import Err, Ok, Result

S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """One recorded move.

    Attributes:
        from_state: State left
        to_state: State entered
        at_ms: Owner-relative time (a plant's age, for plants)
        reason: Free-form cause, e.g. "watered" or "cold"
    """

    from_state: S
    to_state: S
    at_ms: float
    reason: str = ""


class StateMachine(Generic[S]):
    """Holds one enum state and only moves along the allowed table.

    Args:
        initial_state: Starting state; must be a key of ``valid_transitions``
        valid_transitions: state -> states reachable from it
        track_history: Keep a bounded log of moves
        max_history: Oldest moves are dropped past this many
    """

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        if initial_state not in valid_transitions:
            raise ValueError(f"{initial_state!r} has no entry in the transition table")
        self._state = initial_state
        self._table = valid_transitions
        self._history: Deque[StateTransition[S]] = deque(maxlen=max_history if track_history else 0)

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Recorded moves, oldest first (always empty without tracking)."""
        return list(self._history)

    def get_valid_transitions(self) -> List[S]:
        return list(self._table.get(self._state, ()))

    def can_transition(self, target: S) -> bool:
        return target in self._table.get(self._state, ())

    def try_transition(self, target: S, at_ms: float = 0.0, reason: str = "") -> Result[S, str]:
        """Move to ``target`` if allowed; otherwise return Err with a message."""
        if not self.can_transition(target):
            allowed = ", ".join(s.name for s in self.get_valid_transitions()) or "none"
            return Err(f"Invalid transition: {self._state.name} -> {target.name} (allowed: {allowed})")
        self._history.append(StateTransition(self._state, target, at_ms, reason))
        self._state = target
        return Ok(target)

    def transition(self, target: S, at_ms: float = 0.0, reason: str = "") -> S:
        """Like ``try_transition`` but raises ValueError when not allowed."""
        result = self.try_transition(target, at_ms, reason)
        if result.is_err():
            raise ValueError(result.error)
        return target

    def __repr__(self) -> str:
        return f"<StateMachine {self._state.name}>"

# ============================================================================
# Plant Growth State Machine
# ============================================================================


class GrowthStage(Enum):
    """Growth stages of a garden plant, in order."""

    SEED = "seed"
    SPROUT = "sprout"
    MEDIUM = "medium"
    BUD = "bud"
    FLOWER = "flower"
    DEAD = "dead"


# Stages that consume water, in the order their thresholds are stored
WATERED_STAGES: List[GrowthStage] = [
    GrowthStage.SEED,
    GrowthStage.SPROUT,
    GrowthStage.MEDIUM,
    GrowthStage.BUD,
]

# Plants only grow forward; any living stage can die; DEAD is terminal
GROWTH_TRANSITIONS: Dict[GrowthStage, List[GrowthStage]] = {
    GrowthStage.SEED: [GrowthStage.SPROUT, GrowthStage.DEAD],
    GrowthStage.SPROUT: [GrowthStage.MEDIUM, GrowthStage.DEAD],
    GrowthStage.MEDIUM: [GrowthStage.BUD, GrowthStage.DEAD],
    GrowthStage.BUD: [GrowthStage.FLOWER, GrowthStage.DEAD],
    GrowthStage.FLOWER: [GrowthStage.DEAD],
    GrowthStage.DEAD: [],
}


def next_growth_stage(stage: GrowthStage) -> GrowthStage:
    """Return the stage that watering leads to from ``stage``.

    Raises:
        ValueError: For FLOWER and DEAD, which do not grow any further
    """
    if stage not in WATERED_STAGES:
        raise ValueError(f"{stage.name} does not grow any further")
    return GROWTH_TRANSITIONS[stage][0]


def create_growth_state_machine(track_history: bool = True) -> StateMachine[GrowthStage]:
    """Create a state machine for a plant's growth stages."""
    return StateMachine(
        initial_state=GrowthStage.SEED,
        valid_transitions=GROWTH_TRANSITIONS,
        track_history=track_history,
        max_history=len(GROWTH_TRANSITIONS),
    )


# ============================================================================
# Weather State Machine
# ============================================================================


class WeatherState(Enum):
    """Global weather states."""

    CLEAR = "clear"
    SNOWING = "snow"


WEATHER_TRANSITIONS: Dict[WeatherState, List[WeatherState]] = {
    WeatherState.CLEAR: [WeatherState.SNOWING],
    WeatherState.SNOWING: [WeatherState.CLEAR],
}


def create_weather_state_machine(track_history: bool = False) -> StateMachine[WeatherState]:
    """Create a state machine for the weather."""
    return StateMachine(
        initial_state=WeatherState.CLEAR,
        valid_transitions=WEATHER_TRANSITIONS,
        track_history=track_history,
    )
