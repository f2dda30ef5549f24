"""Tests for Result, SystemResult, the phase runner and configuration."""

import pytest

from garden.config.garden_config import DecorationConfig, GardenConfig, PlantConfig
from garden.exceptions import ConfigurationError, GardenError
from garden.result import Err, Ok
from garden.systems.base import BaseSystem, SystemResult
from garden.update_phases import PhaseRunner, UpdatePhase, get_system_phase, runs_in_phase

_STOCK_THRESHOLDS = {"lily": (2, 3, 4, 5), "tulip": (2, 3, 4, 5), "orchid": (2, 3, 4, 5)}


class TestResult:
    def test_ok(self):
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        assert result.map(lambda v: v * 2) == Ok(6)
        assert result.error is None

    def test_err(self):
        result = Err("occupied")
        assert result.is_err()
        assert result.unwrap_or(0) == 0
        assert result.map(lambda v: v * 2) is result
        assert result.map_err(str.upper) == Err("OCCUPIED")
        with pytest.raises(ValueError):
            result.unwrap()

    def test_pattern_matching(self):
        match Err("no_plant"):
            case Ok(value):
                matched = ("ok", value)
            case Err(reason):
                matched = ("err", reason)
        assert matched == ("err", "no_plant")


class TestSystemResult:
    def test_defaults_report_nothing(self):
        result = SystemResult()
        assert not result.skipped
        assert not result.changed_population

    def test_population_change(self):
        assert SystemResult(entities_removed=2).changed_population
        assert SystemResult.skipped_result().skipped


@runs_in_phase(UpdatePhase.FRAME_END)
class _RecordingSystem(BaseSystem):
    def __init__(self, name, log):
        super().__init__(name)
        self.log = log

    def _do_update(self, context, delta):
        self.log.append(self.name)
        return SystemResult()


class TestPhaseRunner:
    def test_runs_by_phase_not_registration_order(self):
        log = []
        runner = PhaseRunner()
        late = _RecordingSystem("late", log)
        early = _RecordingSystem("early", log)
        runner.register(late)
        runner.register(early, phase=UpdatePhase.FRAME_START)

        runner.run_all(context=None, delta=16)
        assert log == ["early", "late"]

    def test_undeclared_phase_rejected(self):
        class Bare(BaseSystem):
            def _do_update(self, context, delta):
                return SystemResult()

        with pytest.raises(ValueError):
            PhaseRunner().register(Bare("bare"))

    def test_decorator_sets_phase(self):
        assert get_system_phase(_RecordingSystem("x", [])) is UpdatePhase.FRAME_END

    def test_disabled_system_skips(self):
        log = []
        runner = PhaseRunner()
        runner.register(_RecordingSystem("quiet", log))
        runner.set_enabled("quiet", False)
        results = runner.run_all(context=None, delta=16)
        assert results["quiet"].skipped
        assert log == []

    def test_debug_timings(self):
        runner = PhaseRunner()
        runner.register(_RecordingSystem("timed", []))
        runner.enable_debug()
        runner.run_all(context=None, delta=16)
        assert "FRAME_END" in runner.get_debug_info()["timings"]


class TestGardenConfig:
    def test_defaults_are_valid(self):
        GardenConfig().validate()

    def test_with_overrides_replaces_section(self):
        config = GardenConfig().with_overrides(decorations=DecorationConfig(max_grass_blades=10))
        assert config.decorations.max_grass_blades == 10
        assert GardenConfig().decorations.max_grass_blades == 220

    def test_unknown_section_rejected(self):
        with pytest.raises(ConfigurationError):
            GardenConfig().with_overrides(soil=None)

    @pytest.mark.parametrize(
        "plants",
        [
            PlantConfig(freeze_death_chance=1.5),
            PlantConfig(hitbox_radius=0),
            PlantConfig(species_thresholds={**_STOCK_THRESHOLDS, "lily": (2, 3, 4)}),
            PlantConfig(species_thresholds={**_STOCK_THRESHOLDS, "lily": (0, 3, 4, 5)}),
        ],
    )
    def test_invalid_plant_config(self, plants):
        with pytest.raises(ConfigurationError):
            GardenConfig(plants=plants).validate()

    def test_every_species_needs_thresholds(self):
        plants = PlantConfig(species_thresholds={"lily": (2, 3, 4, 5)})
        with pytest.raises(ConfigurationError, match="orchid"):
            GardenConfig(plants=plants).validate()

    def test_engine_refuses_partial_species_table(self):
        from garden.simulation.engine import GardenEngine

        config = GardenConfig().with_overrides(
            plants=PlantConfig(species_thresholds={"lily": (2, 3, 4, 5)})
        )
        with pytest.raises(ConfigurationError):
            GardenEngine(config, seed=1)

    def test_configuration_error_is_garden_error(self):
        assert issubclass(ConfigurationError, GardenError)

    def test_thresholds_are_copied(self):
        config = PlantConfig()
        assert config.thresholds_for("tulip") == (2, 3, 4, 5)
        assert config.thresholds_for("tulip") is not config.species_thresholds

    def test_to_dict(self):
        data = GardenConfig().to_dict()
        assert data["weather"]["snow_min_duration"] == 8000.0
