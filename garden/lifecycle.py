"""Plant lifecycle rules: watering, growth, aging and death.

These functions hold every rule about *when* a plant changes stage. The
``Plant`` entity only knows how to take one step forward or die; the
``PlantLifecycleSystem`` calls ``advance_time`` once per frame and the
engine calls ``apply_water`` on clicks.

Timing model:
    ``age`` always increases while the plant is alive. Bloom and freeze
    exposure are separate accumulators that only exist in FLOWER, so aging
    and death rules attach to the bloom without touching earlier stages.
    Freeze checks happen once per ``freeze_check_interval`` ms of exposure;
    a long frame that spans several intervals rolls once per interval, which
    keeps the death rate per millisecond independent of the frame rate.
"""

import logging
import random
from typing import TYPE_CHECKING, Optional

from garden.config.garden_config import PlantConfig
from garden.config.plants import (
    EVOLUTION_FLASH_DURATION,
    WATER_BOUNCE_DURATION,
    WIND_PERIOD_RANGE,
    WIND_SPEED_RANGE,
)
from garden.entities.plant import DeathCause, Plant
from garden.state_machine import GrowthStage

if TYPE_CHECKING:
    from garden.systems.weather import Weather

logger = logging.getLogger(__name__)

_DEFAULT_PLANT_CONFIG = PlantConfig()


def apply_water(plant: Plant, rng: Optional[random.Random] = None) -> bool:
    """Give a plant one unit of water and let it grow if it has enough.

    Dead plants ignore water.

    Args:
        plant: The plant being watered
        rng: Random source for the wind parameters picked on first sprouting

    Returns:
        True if the plant grew a stage
    """
    if plant.is_dead:
        return False
    plant.water_level += 1
    plant.bounce_time = WATER_BOUNCE_DURATION
    return try_evolve(plant, rng)


def try_evolve(plant: Plant, rng: Optional[random.Random] = None) -> bool:
    """Advance one stage if the current stage's water threshold is met.

    Returns:
        False for FLOWER, DEAD, or an unmet threshold
    """
    threshold = plant.current_threshold()
    if threshold is None or plant.water_level < threshold:
        return False

    previous = plant.growth_stage
    new_stage = plant.grow()
    plant.evolution_flash = EVOLUTION_FLASH_DURATION

    if previous is GrowthStage.SEED and plant.wind_speed is None:
        _init_wind(plant, rng)

    logger.debug("Plant %d grew %s -> %s", plant.plant_id, previous.name, new_stage.name)
    return True


def advance_time(
    plant: Plant,
    delta: float,
    weather: "Weather",
    rng: random.Random,
    config: Optional[PlantConfig] = None,
) -> Optional[DeathCause]:
    """Age a plant by ``delta`` ms and apply the bloom death rules.

    Args:
        plant: Plant to age (dead plants are left untouched)
        delta: Milliseconds since the previous frame
        weather: Current weather, read for cold stress
        rng: Random source for freeze death rolls
        config: Plant tuning (defaults if not provided)

    Returns:
        The cause of death if the plant died during this call
    """
    if plant.is_dead:
        return None
    cfg = config if config is not None else _DEFAULT_PLANT_CONFIG

    plant.age += delta
    if plant.growth_stage is not GrowthStage.FLOWER:
        return None

    plant.time_in_flower += delta
    if plant.time_in_flower > cfg.flower_max_lifespan:
        mark_dead(plant, DeathCause.OLD_AGE)
        return DeathCause.OLD_AGE

    if not weather.cold_stress_active(cfg.cold_stress_snow_duration):
        plant.freeze_exposure = 0.0
        return None

    plant.freeze_exposure += delta
    while plant.freeze_exposure > cfg.freeze_check_interval:
        plant.freeze_exposure -= cfg.freeze_check_interval
        if rng.random() < cfg.freeze_death_chance:
            mark_dead(plant, DeathCause.COLD)
            return DeathCause.COLD
    return None


def mark_dead(plant: Plant, cause: DeathCause) -> bool:
    """Kill a plant. The first recorded cause wins.

    Returns:
        True if the plant was alive before this call
    """
    if not plant.die(cause):
        return False
    logger.info(
        "Plant %d (%s) died: %s after %.1fs",
        plant.plant_id,
        plant.species.value,
        cause.name,
        plant.age / 1000.0,
    )
    return True


def _init_wind(plant: Plant, rng: Optional[random.Random]) -> None:
    if rng is None:
        plant.wind_speed = sum(WIND_SPEED_RANGE) / 2
        plant.wind_period = sum(WIND_PERIOD_RANGE) / 2
        return
    plant.wind_speed = rng.uniform(*WIND_SPEED_RANGE)
    plant.wind_period = rng.uniform(*WIND_PERIOD_RANGE)
