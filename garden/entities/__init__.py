"""Entity package exposing garden plants and decorative particles."""

from garden.entities.decorations import GrassBlade, SnowDeposit, Snowflake, WaterParticle
from garden.entities.plant import DeathCause, Plant, Species
from garden.state_machine import GrowthStage

__all__ = [
    "DeathCause",
    "GrassBlade",
    "GrowthStage",
    "Plant",
    "SnowDeposit",
    "Snowflake",
    "Species",
    "WaterParticle",
]
