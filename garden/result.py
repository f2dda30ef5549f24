"""Ok/Err values for clicks that may legitimately do nothing.

Watering bare soil or planting on top of another plant is ordinary play, so
the engine's interaction methods return a value instead of raising:

    result = engine.water_at((120, 300))
    if result.is_ok():
        outcome = result.unwrap()
    else:
        reason = result.error   # InteractionRejection.NO_PLANT

    match engine.plant_seed((120, 300), Species.TULIP):
        case Ok(plant):
            ...
        case Err(InteractionRejection.OCCUPIED):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The interaction happened; ``value`` is what it produced."""

    value: T

    @property
    def error(self) -> None:
        return None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> "Ok[U]":
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], U]) -> "Ok[T]":
        return self


@dataclass(frozen=True)
class Err(Generic[E]):
    """The interaction was refused; ``error`` says why."""

    error: E

    @property
    def value(self) -> None:
        return None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raises ValueError; check ``is_ok()`` first."""
        raise ValueError(f"unwrap() on Err({self.error!r})")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> "Err[E]":
        return self

    def map_err(self, f: Callable[[E], U]) -> "Err[U]":
        return Err(f(self.error))


Result = Union[Ok[T], Err[E]]

__all__ = ["Ok", "Err", "Result"]
