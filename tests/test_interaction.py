"""Tests for click routing and the toolbar state."""

from garden.entities.plant import DeathCause, Species
from garden.interaction import InteractionHandler, InteractionKind, InteractionRejection
from garden.lifecycle import mark_dead
from garden.state_machine import GrowthStage


def _handler(engine, **kwargs):
    return InteractionHandler(engine, **kwargs)


class TestToolbarState:
    def test_defaults_to_lily_seed(self, engine):
        handler = _handler(engine)
        assert handler.selected_seed is Species.LILY
        assert not handler.watering_can_active
        assert handler.active_tool == "lily"

    def test_toggle_watering_can(self, engine):
        handler = _handler(engine)
        assert handler.toggle_watering_can() is True
        assert handler.active_tool == "watering_can"
        assert handler.toggle_watering_can() is False

    def test_selecting_seed_puts_can_away(self, engine):
        handler = _handler(engine)
        handler.toggle_watering_can()
        handler.select_seed(Species.ORCHID)
        assert not handler.watering_can_active
        assert handler.active_tool == "orchid"


class TestClickRouting:
    def test_click_on_empty_soil_plants_selected_seed(self, engine):
        handler = _handler(engine, selected_seed=Species.TULIP)
        outcome = handler.handle_click((200, 300))

        assert outcome.kind is InteractionKind.PLANT
        assert outcome.needs_render
        plant = outcome.result.unwrap()
        assert plant.species is Species.TULIP
        assert plant.growth_stage is GrowthStage.SEED
        assert engine.plants == [plant]

    def test_click_near_living_plant_is_rejected(self, engine):
        handler = _handler(engine)
        handler.handle_click((200, 300))
        outcome = handler.handle_click((250, 300))

        assert outcome.kind is InteractionKind.PLANT
        assert outcome.result.error is InteractionRejection.OCCUPIED
        assert not outcome.needs_render
        assert len(engine.plants) == 1

    def test_click_far_enough_away_plants_again(self, engine):
        handler = _handler(engine)
        handler.handle_click((100, 300))
        handler.handle_click((180, 300))
        assert len(engine.plants) == 2

    def test_watering_can_waters_plant_under_cursor(self, engine):
        handler = _handler(engine)
        plant = handler.handle_click((200, 300)).result.unwrap()
        handler.toggle_watering_can()

        first = handler.handle_click((210, 290))
        assert first.kind is InteractionKind.WATER
        assert first.result.unwrap().evolved is False
        second = handler.handle_click((200, 300))
        assert second.result.unwrap().evolved is True
        assert plant.growth_stage is GrowthStage.SPROUT
        assert engine.context.water_count == 2

    def test_watering_empty_soil_is_a_no_op(self, engine):
        handler = _handler(engine)
        handler.toggle_watering_can()
        outcome = handler.handle_click((500, 100))
        assert outcome.result.error is InteractionRejection.NO_PLANT
        assert not outcome.needs_render
        assert engine.plants == []
        assert engine.context.water_count == 0

    def test_watering_can_never_plants(self, engine):
        handler = _handler(engine)
        handler.toggle_watering_can()
        handler.handle_click((300, 300))
        assert engine.plants == []

    def test_click_on_dead_plant_clears_it(self, engine):
        handler = _handler(engine)
        plant = handler.handle_click((200, 300)).result.unwrap()
        mark_dead(plant, DeathCause.COLD)

        outcome = handler.handle_click((205, 300))
        assert outcome.kind is InteractionKind.CLEAR
        assert outcome.result.unwrap() is plant
        assert engine.plants == []

        replant = handler.handle_click((205, 300))
        assert replant.kind is InteractionKind.PLANT
        assert replant.result.is_ok()

    def test_watering_dead_plant_is_rejected(self, engine):
        handler = _handler(engine)
        plant = handler.handle_click((200, 300)).result.unwrap()
        mark_dead(plant, DeathCause.OLD_AGE)
        handler.toggle_watering_can()

        outcome = handler.handle_click((200, 300))
        assert outcome.result.error is InteractionRejection.PLANT_DEAD
        assert plant in engine.plants
