"""Core garden simulation engine and systems.

This package contains the pure simulation logic for the pixel garden,
with no UI dependencies. Key modules include:

- simulation: Engine and per-run context (garden.simulation.engine)
- lifecycle: Plant growth, watering, aging and death rules
- systems: Weather, grass, snow, plant lifecycle and animation systems
- entities: Plants and decorative particles
- interaction: Click/tool routing onto the engine's mutation surface
- config: Constants and dataclass configuration bundles

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from subpackages for internal helpers.
"""

from . import entities as entities
from . import interaction as interaction
from . import lifecycle as lifecycle
from . import simulation as simulation

__all__ = [
    "entities",
    "interaction",
    "lifecycle",
    "simulation",
]
