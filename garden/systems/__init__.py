"""Garden systems, one responsibility each, run by the engine in phase order."""

from garden.systems.animation import AnimationSystem, spawn_water_burst, wind_angle
from garden.systems.base import BaseSystem, SystemResult
from garden.systems.grass import GrassSystem
from garden.systems.plant_lifecycle import PlantLifecycleSystem
from garden.systems.snow import SnowSystem
from garden.systems.weather import Weather, WeatherSystem

__all__ = [
    "AnimationSystem",
    "BaseSystem",
    "GrassSystem",
    "PlantLifecycleSystem",
    "SnowSystem",
    "SystemResult",
    "Weather",
    "WeatherSystem",
    "spawn_water_burst",
    "wind_angle",
]
