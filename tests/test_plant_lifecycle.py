"""Tests for the plant growth, aging and death rules."""

import random

import pytest

from garden.config.garden_config import PlantConfig
from garden.entities.plant import DeathCause
from garden.lifecycle import advance_time, apply_water, mark_dead, try_evolve
from garden.state_machine import GrowthStage
from garden.systems.weather import Weather

STAGE_ORDER = [
    GrowthStage.SEED,
    GrowthStage.SPROUT,
    GrowthStage.MEDIUM,
    GrowthStage.BUD,
    GrowthStage.FLOWER,
]


def _grow_to_flower(plant):
    for _ in range(sum(plant.water_thresholds)):
        apply_water(plant)
    assert plant.growth_stage is GrowthStage.FLOWER
    return plant


def _snowing_for(ms):
    weather = Weather()
    weather.start_snow()
    weather.snow_duration = ms
    weather.time_in_state = ms
    return weather


class _AlwaysRoll:
    """RNG stub that always returns the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


class TestWatering:
    """Watering and stage advancement."""

    def test_thresholds_2_3_4_5_walk_through_every_stage(self, make_plant):
        """2 waters -> SPROUT, 3 -> MEDIUM, 4 -> BUD, 5 -> FLOWER."""
        plant = make_plant()
        for threshold, expected in zip((2, 3, 4, 5), STAGE_ORDER[1:]):
            for _ in range(threshold - 1):
                assert apply_water(plant) is False
            assert apply_water(plant) is True
            assert plant.growth_stage is expected
            assert plant.water_level == 0

    def test_below_threshold_never_evolves(self, make_plant):
        plant = make_plant(thresholds=(3, 3, 3, 3))
        apply_water(plant)
        apply_water(plant)
        assert plant.growth_stage is GrowthStage.SEED
        assert plant.water_level == 2

    def test_water_sets_bounce(self, make_plant):
        plant = make_plant()
        apply_water(plant)
        assert plant.bounce_time == pytest.approx(0.3)

    def test_evolution_sets_flash(self, make_plant):
        plant = make_plant()
        apply_water(plant)
        apply_water(plant)
        assert plant.evolution_flash == pytest.approx(1.0)

    def test_watering_flower_does_not_advance(self, make_plant):
        plant = _grow_to_flower(make_plant())
        assert apply_water(plant) is False
        assert plant.growth_stage is GrowthStage.FLOWER
        assert plant.water_level == 1

    def test_dead_plant_ignores_water(self, make_plant):
        plant = make_plant()
        mark_dead(plant, DeathCause.COLD)
        assert apply_water(plant) is False
        assert plant.water_level == 0
        assert plant.bounce_time == 0

    def test_try_evolve_is_noop_below_threshold(self, make_plant):
        plant = make_plant()
        assert try_evolve(plant) is False
        assert plant.growth_stage is GrowthStage.SEED

    def test_wind_initialized_on_first_sprout(self, make_plant, seeded_rng):
        plant = make_plant()
        assert plant.wind_speed is None
        apply_water(plant, seeded_rng)
        apply_water(plant, seeded_rng)
        assert 2.0 <= plant.wind_speed <= 3.0
        assert 3.0 <= plant.wind_period <= 4.0

    def test_wind_without_rng_uses_midpoints(self, make_plant):
        plant = make_plant()
        apply_water(plant)
        apply_water(plant)
        assert plant.wind_speed == pytest.approx(2.5)
        assert plant.wind_period == pytest.approx(3.5)

    def test_thresholds_are_per_plant(self, make_plant):
        a = make_plant(thresholds=[2, 3, 4, 5])
        b = make_plant(thresholds=[1, 1, 1, 1])
        assert a.water_thresholds == (2, 3, 4, 5)
        assert b.water_thresholds == (1, 1, 1, 1)

    def test_wrong_threshold_count_rejected(self, make_plant):
        with pytest.raises(ValueError):
            make_plant(thresholds=(2, 3, 4))


class TestAging:
    """advance_time outside of bloom and the old-age rule."""

    def test_non_flower_stages_only_age(self, make_plant, seeded_rng):
        plant = make_plant()
        weather = _snowing_for(60000)
        advance_time(plant, 100000, weather, seeded_rng)
        assert plant.age == 100000
        assert plant.time_in_flower == 0
        assert plant.freeze_exposure == 0
        assert not plant.is_dead

    def test_flower_accumulates_bloom_time(self, make_plant, seeded_rng):
        plant = _grow_to_flower(make_plant())
        advance_time(plant, 1000, Weather(), seeded_rng)
        assert plant.time_in_flower == 1000

    def test_flower_dies_of_old_age_just_past_lifespan(self, make_plant, seeded_rng):
        """FLOWER at 47999 ms + delta 2 -> DEAD/OLD_AGE."""
        plant = _grow_to_flower(make_plant())
        plant.time_in_flower = 47999
        cause = advance_time(plant, 2, Weather(), seeded_rng)
        assert cause is DeathCause.OLD_AGE
        assert plant.is_dead
        assert plant.death_cause is DeathCause.OLD_AGE

    def test_exactly_at_lifespan_survives(self, make_plant, seeded_rng):
        plant = _grow_to_flower(make_plant())
        plant.time_in_flower = 47000
        assert advance_time(plant, 1000, Weather(), seeded_rng) is None
        assert not plant.is_dead

    def test_old_age_wins_regardless_of_weather(self, make_plant):
        plant = _grow_to_flower(make_plant())
        plant.time_in_flower = 48001
        rng = _AlwaysRoll(0.0)
        assert advance_time(plant, 1, _snowing_for(20000), rng) is DeathCause.OLD_AGE
        assert rng.calls == 0

    def test_dead_plants_do_not_age(self, make_plant, seeded_rng):
        plant = make_plant()
        mark_dead(plant, DeathCause.OLD_AGE)
        advance_time(plant, 5000, Weather(), seeded_rng)
        assert plant.age == 0


class TestColdStress:
    """Freeze exposure and cold deaths for flowers."""

    def test_no_exposure_while_clear(self, make_plant):
        plant = _grow_to_flower(make_plant())
        rng = _AlwaysRoll(0.0)
        for _ in range(100):
            advance_time(plant, 100, Weather(), rng)
        assert plant.freeze_exposure == 0
        assert not plant.is_dead
        assert rng.calls == 0

    def test_no_exposure_before_cold_threshold(self, make_plant):
        plant = _grow_to_flower(make_plant())
        rng = _AlwaysRoll(0.0)
        advance_time(plant, 5000, _snowing_for(10000), rng)
        assert plant.freeze_exposure == 0
        assert not plant.is_dead

    def test_exposure_accumulates_under_cold_stress(self, make_plant):
        plant = _grow_to_flower(make_plant())
        advance_time(plant, 1000, _snowing_for(10001), _AlwaysRoll(0.99))
        assert plant.freeze_exposure == 1000

    def test_exposure_resets_when_stress_ends(self, make_plant):
        plant = _grow_to_flower(make_plant())
        advance_time(plant, 1000, _snowing_for(10001), _AlwaysRoll(0.99))
        advance_time(plant, 16, Weather(), _AlwaysRoll(0.99))
        assert plant.freeze_exposure == 0

    def test_failed_roll_keeps_plant_alive_and_carries_remainder(self, make_plant):
        plant = _grow_to_flower(make_plant())
        rng = _AlwaysRoll(0.99)
        advance_time(plant, 1600, _snowing_for(20000), rng)
        assert rng.calls == 1
        assert plant.freeze_exposure == pytest.approx(100)
        assert not plant.is_dead

    def test_large_delta_rolls_once_per_interval(self, make_plant):
        plant = _grow_to_flower(make_plant())
        rng = _AlwaysRoll(0.99)
        advance_time(plant, 4600, _snowing_for(20000), rng)
        assert rng.calls == 3

    def test_successful_roll_kills_with_cold(self, make_plant):
        plant = _grow_to_flower(make_plant())
        cause = advance_time(plant, 1501, _snowing_for(20000), _AlwaysRoll(0.1))
        assert cause is DeathCause.COLD
        assert plant.death_cause is DeathCause.COLD

    def test_cold_death_rate_is_roughly_thirty_percent(self, make_plant):
        rng = random.Random(7)
        deaths = 0
        trials = 2000
        for _ in range(trials):
            plant = _grow_to_flower(make_plant())
            if advance_time(plant, 1501, _snowing_for(20000), rng) is DeathCause.COLD:
                deaths += 1
        assert 0.25 < deaths / trials < 0.35

    def test_custom_config_is_respected(self, make_plant):
        plant = _grow_to_flower(make_plant())
        config = PlantConfig(freeze_death_chance=0.0)
        advance_time(plant, 10000, _snowing_for(20000), _AlwaysRoll(0.0), config)
        assert not plant.is_dead


class TestMarkDead:
    def test_first_cause_wins(self, make_plant):
        plant = make_plant()
        assert mark_dead(plant, DeathCause.COLD) is True
        assert mark_dead(plant, DeathCause.OLD_AGE) is False
        assert plant.death_cause is DeathCause.COLD

    def test_zeroes_cosmetic_timers(self, make_plant):
        plant = make_plant()
        apply_water(plant)
        apply_water(plant)
        mark_dead(plant, DeathCause.COLD)
        assert plant.bounce_time == 0
        assert plant.evolution_flash == 0


class TestStageSequence:
    def test_observed_stages_are_a_prefix_of_the_lifecycle(self, make_plant):
        """Random watering and aging only ever walks forward, maybe ending in DEAD."""
        rng = random.Random(3)
        weather = _snowing_for(20000)
        for _ in range(50):
            plant = make_plant()
            for _ in range(200):
                if rng.random() < 0.3:
                    apply_water(plant, rng)
                advance_time(plant, rng.uniform(0, 3000), weather, rng)

            observed = [GrowthStage.SEED] + [t.to_state for t in plant.stage_history]
            if observed[-1] is GrowthStage.DEAD:
                observed = observed[:-1]
            assert observed == STAGE_ORDER[: len(observed)]
