"""Tests for the generic state machine and the garden's two instances of it."""

import pytest

from garden.result import Err, Ok
from garden.state_machine import (
    GROWTH_TRANSITIONS,
    GrowthStage,
    StateMachine,
    WeatherState,
    create_growth_state_machine,
    create_weather_state_machine,
    next_growth_stage,
)


class TestGrowthStateMachine:
    def test_starts_as_seed(self):
        assert create_growth_state_machine().state is GrowthStage.SEED

    def test_forward_transitions(self):
        sm = create_growth_state_machine()
        for stage in (GrowthStage.SPROUT, GrowthStage.MEDIUM, GrowthStage.BUD, GrowthStage.FLOWER):
            sm.transition(stage)
        assert sm.state is GrowthStage.FLOWER

    def test_cannot_skip_or_go_back(self):
        sm = create_growth_state_machine()
        with pytest.raises(ValueError):
            sm.transition(GrowthStage.BUD)
        sm.transition(GrowthStage.SPROUT)
        with pytest.raises(ValueError):
            sm.transition(GrowthStage.SEED)

    @pytest.mark.parametrize("stage", [s for s in GrowthStage if s is not GrowthStage.DEAD])
    def test_every_living_stage_can_die(self, stage):
        assert GrowthStage.DEAD in GROWTH_TRANSITIONS[stage]

    def test_dead_is_terminal(self):
        assert GROWTH_TRANSITIONS[GrowthStage.DEAD] == []

    def test_try_transition_returns_err(self):
        sm = create_growth_state_machine()
        result = sm.try_transition(GrowthStage.FLOWER)
        assert isinstance(result, Err)
        assert "SEED -> FLOWER" in result.error
        assert sm.state is GrowthStage.SEED

    def test_history_records_transitions(self):
        sm = create_growth_state_machine()
        sm.transition(GrowthStage.SPROUT, at_ms=1500, reason="watered")
        (entry,) = sm.history
        assert entry.from_state is GrowthStage.SEED
        assert entry.to_state is GrowthStage.SPROUT
        assert entry.at_ms == 1500
        assert entry.reason == "watered"

    def test_next_growth_stage(self):
        assert next_growth_stage(GrowthStage.BUD) is GrowthStage.FLOWER
        with pytest.raises(ValueError):
            next_growth_stage(GrowthStage.FLOWER)


class TestWeatherStateMachine:
    def test_alternates(self):
        sm = create_weather_state_machine()
        assert isinstance(sm.try_transition(WeatherState.SNOWING), Ok)
        assert sm.try_transition(WeatherState.SNOWING).is_err()
        assert sm.try_transition(WeatherState.CLEAR).is_ok()

    def test_history_off_by_default(self):
        sm = create_weather_state_machine()
        sm.transition(WeatherState.SNOWING)
        assert sm.history == []


def test_initial_state_must_be_known():
    with pytest.raises(ValueError):
        StateMachine(WeatherState.CLEAR, {WeatherState.SNOWING: []})


def test_history_is_bounded():
    sm = StateMachine(
        WeatherState.CLEAR,
        {WeatherState.CLEAR: [WeatherState.SNOWING], WeatherState.SNOWING: [WeatherState.CLEAR]},
        track_history=True,
        max_history=3,
    )
    for _ in range(5):
        sm.transition(WeatherState.SNOWING)
        sm.transition(WeatherState.CLEAR)
    assert len(sm.history) == 3
