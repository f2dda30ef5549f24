"""Tests for procedural sprites and the garden renderer."""

import os

import pytest

from garden.entities.plant import Species
from garden.lifecycle import apply_water
from garden.state_machine import GrowthStage
from rendering.sprites import (
    SPECIES_PALETTES,
    generate_soil_pattern,
    get_plant_sprite,
    hex_to_rgb,
    sprite_size,
    stage_scale,
)

EXPECTED_SIZES = {
    GrowthStage.SEED: (8, 8),
    GrowthStage.SPROUT: (16, 32),
    GrowthStage.MEDIUM: (32, 64),
    GrowthStage.BUD: (48, 80),
    GrowthStage.FLOWER: (64, 128),
    GrowthStage.DEAD: (48, 96),
}


def test_hex_to_rgb():
    assert hex_to_rgb("#FF8C00") == (255, 140, 0)


@pytest.mark.parametrize("species", list(Species))
@pytest.mark.parametrize("stage", list(GrowthStage))
def test_sprite_dimensions(species, stage):
    sprite = get_plant_sprite(species, stage)
    assert sprite_size(sprite) == EXPECTED_SIZES[stage]
    assert any(pixel is not None for row in sprite for pixel in row)


def test_sprites_are_cached():
    assert get_plant_sprite(Species.LILY, GrowthStage.FLOWER) is get_plant_sprite(
        Species.LILY, GrowthStage.FLOWER
    )


def test_flowers_use_species_palette():
    for species in Species:
        sprite = get_plant_sprite(species, GrowthStage.FLOWER)
        colors = {pixel for row in sprite for pixel in row if pixel is not None}
        assert colors & set(SPECIES_PALETTES[species].values())


def test_flowers_differ_by_species():
    flowers = {get_plant_sprite(species, GrowthStage.FLOWER) for species in Species}
    assert len(flowers) == len(Species)


def test_stage_scale_grows_until_bloom():
    order = [GrowthStage.SEED, GrowthStage.SPROUT, GrowthStage.MEDIUM, GrowthStage.BUD, GrowthStage.FLOWER]
    scales = [stage_scale(stage) for stage in order]
    assert scales == sorted(scales)


def test_soil_pattern_is_deterministic():
    first = generate_soil_pattern(60, 40, 12345, 0.3)
    assert first == generate_soil_pattern(60, 40, 12345, 0.3)
    assert len(first) == 40 and len(first[0]) == 60
    cells = [cell for row in first for cell in row]
    assert set(cells) <= {0, 1, 2}
    shaded = sum(1 for cell in cells if cell) / len(cells)
    assert 0.2 < shaded < 0.4


def test_soil_pattern_does_not_touch_simulation_rng(seeded_rng):
    before = seeded_rng.getstate()
    generate_soil_pattern(10, 10, 1, 0.5)
    assert seeded_rng.getstate() == before


class TestGardenRenderer:
    @pytest.fixture(autouse=True)
    def _pygame(self):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame = pytest.importorskip("pygame")
        pygame.init()
        yield pygame
        from rendering.image_loader import ImageLoader

        ImageLoader.clear()
        pygame.quit()

    def test_render_every_stage_and_weather(self, _pygame, engine):
        from rendering.garden_renderer import GardenRenderer

        surface = _pygame.Surface((600, 400))
        renderer = GardenRenderer(surface)
        for index, species in enumerate(Species):
            plant = engine.plant_seed((100 + index * 200, 340), species).unwrap()
            for _ in range(index * 3):
                apply_water(plant, engine.rng)
        engine.weather.start_snow()
        for _ in range(30):
            engine.update(16)
            renderer.render(engine.context, engine.context.elapsed_ms)
        assert surface.get_at((5, 5))[:3] != (0, 0, 0)

    def test_render_does_not_mutate_state(self, _pygame, engine):
        from rendering.garden_renderer import GardenRenderer

        plant = engine.plant_seed((300, 340), Species.LILY).unwrap()
        apply_water(plant)
        before = (plant.bounce_time, len(engine.context.water_particles))
        renderer = GardenRenderer(_pygame.Surface((600, 400)))
        renderer.render(engine.context, 1000)
        renderer.render(engine.context, 1000)
        assert (plant.bounce_time, len(engine.context.water_particles)) == before

    def test_toolbar_hit_testing_and_drawing(self, _pygame, engine):
        from garden.interaction import InteractionHandler
        from rendering.ui_renderer import WATERING_CAN, UIRenderer

        screen = _pygame.Surface((600, 456))
        ui = UIRenderer(screen, _pygame.font.Font(None, 22), canvas_height=400)
        buttons = dict(ui.toolbar_buttons())
        assert ui.tool_at(buttons[Species.TULIP].center) is Species.TULIP
        assert ui.tool_at(buttons[WATERING_CAN].center) == WATERING_CAN
        assert ui.tool_at((300, 100)) is None

        handler = InteractionHandler(engine)
        ui.draw_toolbar(handler)
        ui.draw_stats_panel(engine.get_summary_stats())
