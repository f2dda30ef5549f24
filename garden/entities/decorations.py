"""Decorative particle entities.

None of these affect plant survival. They are stateful over time, though,
so the decoration systems own their spawning and expiry.
"""

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class GrassBlade:
    """A blade of grass growing from the bottom edge of the canvas."""

    x: float
    height: float
    color: Color
    sway: float  # phase offset in radians


@dataclass
class Snowflake:
    """A falling snowflake.

    Attributes:
        x, y: Canvas position
        speed: Fall speed in px per second
        amplitude: Horizontal drift strength
        phase: Drift phase offset
        size: Side length in px
    """

    x: float
    y: float
    speed: float
    amplitude: float
    phase: float
    size: float


@dataclass
class SnowDeposit:
    """Snow that landed on a plant or the ground and is melting."""

    x: float
    y: float
    life: float  # ms remaining


@dataclass
class WaterParticle:
    """A water droplet from the watering can."""

    x: float
    y: float
    velocity: float  # px per reference frame, downward
    horizontal_velocity: float
    opacity: float
    size: float
    color: Color
