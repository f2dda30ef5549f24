"""Garden simulation package.

- ``GardenEngine``: runs the systems and exposes the interaction surface
- ``GardenContext``: the mutable state every system receives
"""

from garden.simulation.context import GardenContext, create_context, resolve_rng
from garden.simulation.engine import GardenEngine

__all__ = [
    "GardenContext",
    "GardenEngine",
    "create_context",
    "resolve_rng",
]
