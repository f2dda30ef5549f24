"""Garden rendering: soil, grass, plants, particles and snow.

The renderer only reads the garden context. Every cosmetic timer it uses
(bounce, flash, particle fade) has already been advanced by the engine's
update step, so drawing the same state twice gives the same picture.

Draw order, back to front:
    soil -> grass -> plants (+ progress bars) -> water particles -> snow
"""

import logging
import math
from typing import TYPE_CHECKING, Optional

import pygame
from pygame.math import Vector2

from garden.config.display import (
    PIXEL_SIZE,
    PROGRESS_BAR_COLOR,
    PROGRESS_BAR_HEIGHT,
    PROGRESS_BAR_WIDTH,
    REFERENCE_FRAME_MS,
    SNOW_TINT,
    SOIL_BASE_COLOR,
    SOIL_SEED,
    SOIL_SHADE_CHANCE,
    SOIL_SHADES,
)
from garden.config.decorations import DEPOSIT_FULL_OPACITY_LIFE
from garden.entities.plant import Plant
from garden.state_machine import GrowthStage
from garden.systems.animation import wind_angle
from rendering.image_loader import ImageLoader
from rendering.sprites import generate_soil_pattern, get_plant_sprite, stage_scale

if TYPE_CHECKING:
    from garden.simulation.context import GardenContext

logger = logging.getLogger(__name__)

GRASS_SWAY_PER_FRAME = 0.05
GRASS_SEGMENT_SIZE = 2
PROGRESS_BAR_LIFT = 60
SNOW_DEPOSIT_SIZE = (4, 2)
SNOW_COLOR = (255, 255, 255)


class GardenRenderer:
    """Draws the garden canvas.

    Attributes:
        surface: Target surface, sized to the canvas
    """

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.width = surface.get_width()
        self.height = surface.get_height()
        self._soil: Optional[pygame.Surface] = None
        self._tint = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self._tint.fill(SNOW_TINT)

    def _build_soil(self) -> pygame.Surface:
        soil = pygame.Surface((self.width, self.height))
        soil.fill(SOIL_BASE_COLOR)
        pattern = generate_soil_pattern(
            math.ceil(self.width / PIXEL_SIZE),
            math.ceil(self.height / PIXEL_SIZE),
            SOIL_SEED,
            SOIL_SHADE_CHANCE,
        )
        for grid_y, row in enumerate(pattern):
            for grid_x, shade in enumerate(row):
                if shade:
                    rect = (grid_x * PIXEL_SIZE, grid_y * PIXEL_SIZE, PIXEL_SIZE, PIXEL_SIZE)
                    soil.fill(SOIL_SHADES[shade - 1], rect)
        logger.debug("Soil buffer built (%dx%d)", self.width, self.height)
        return soil

    def render(self, context: "GardenContext", time_ms: float) -> None:
        """Draw one frame of the garden.

        Args:
            context: Garden state (read-only)
            time_ms: Animation clock for wind and grass sway
        """
        if self._soil is None:
            self._soil = self._build_soil()
        self.surface.blit(self._soil, (0, 0))

        self.draw_grass(context, time_ms)
        for plant in context.plants:
            self.draw_plant(plant, time_ms)
        self.draw_water_particles(context)
        self.draw_snow(context)

    def draw_grass(self, context: "GardenContext", time_ms: float) -> None:
        frame = time_ms / REFERENCE_FRAME_MS
        for blade in context.grass:
            sway = math.sin(frame * GRASS_SWAY_PER_FRAME + blade.sway)
            for i in range(int(blade.height)):
                x = blade.x + sway * (i * 0.05)
                y = self.height - i * GRASS_SEGMENT_SIZE
                self.surface.fill(blade.color, (int(x), int(y), GRASS_SEGMENT_SIZE, GRASS_SEGMENT_SIZE))

    def draw_plant(self, plant: Plant, time_ms: float) -> None:
        stage = plant.growth_stage
        alive = not plant.is_dead
        image = ImageLoader.load_sprite(
            (plant.species, stage), get_plant_sprite(plant.species, stage), stage_scale(stage)
        )

        if alive and plant.bounce_time > 0:
            bounce = 1 + math.sin(plant.bounce_time * 20) * 0.1
            image = pygame.transform.scale(
                image,
                (max(1, round(image.get_width() * bounce)), max(1, round(image.get_height() * bounce))),
            )
        pivot = Vector2(plant.x, plant.y)
        offset = Vector2(0, -image.get_height() / 2)

        angle = wind_angle(plant, time_ms) if alive else 0.0
        if angle:
            # pygame rotates counterclockwise for positive angles
            image = pygame.transform.rotate(image, -angle)
            offset = offset.rotate(angle)

        if alive and plant.evolution_flash > 0:
            flash = abs(math.sin(plant.evolution_flash * 10))
            image = image.copy()
            image.set_alpha(int(255 * (0.5 + flash * 0.5)))

        center = pivot + offset
        rect = image.get_rect(center=(round(center.x), round(center.y)))
        self.surface.blit(image, rect)

        if alive and stage is not GrowthStage.FLOWER:
            self.draw_progress_bar(plant)

    def draw_progress_bar(self, plant: Plant) -> None:
        progress = plant.water_progress()
        if progress is None or progress >= 1.0:
            return
        bar_x = int(plant.x - PROGRESS_BAR_WIDTH / 2)
        bar_y = int(plant.y - PROGRESS_BAR_LIFT)

        background = pygame.Surface((PROGRESS_BAR_WIDTH, PROGRESS_BAR_HEIGHT), pygame.SRCALPHA)
        background.fill((0, 0, 0, 128))
        self.surface.blit(background, (bar_x, bar_y))

        filled_width = int(PROGRESS_BAR_WIDTH * progress)
        if filled_width > 0:
            pygame.draw.rect(
                self.surface, PROGRESS_BAR_COLOR, (bar_x, bar_y, filled_width, PROGRESS_BAR_HEIGHT)
            )
        pygame.draw.rect(
            self.surface, (255, 255, 255), (bar_x, bar_y, PROGRESS_BAR_WIDTH, PROGRESS_BAR_HEIGHT), 1
        )

    def draw_water_particles(self, context: "GardenContext") -> None:
        for particle in context.water_particles:
            # Even pixel sizes keep the droplets blocky
            size = max(2, int(particle.size // 2) * 2)
            droplet = pygame.Surface((size, size), pygame.SRCALPHA)
            droplet.fill((*particle.color, int(255 * max(0.0, min(1.0, particle.opacity)))))
            self.surface.blit(droplet, (int(particle.x - size / 2), int(particle.y - size / 2)))

    def draw_snow(self, context: "GardenContext") -> None:
        weather = context.weather
        if not weather.is_snowing and not context.snowflakes and not context.snow_deposits:
            return

        if weather.is_snowing:
            self.surface.blit(self._tint, (0, 0))

        for flake in context.snowflakes:
            size = max(1, int(flake.size))
            self.surface.fill(SNOW_COLOR, (int(flake.x), int(flake.y), size, size))

        deposit_surface = pygame.Surface(SNOW_DEPOSIT_SIZE, pygame.SRCALPHA)
        for deposit in context.snow_deposits:
            alpha = max(0.1, min(1.0, deposit.life / DEPOSIT_FULL_OPACITY_LIFE))
            deposit_surface.fill((*SNOW_COLOR, int(255 * alpha)))
            self.surface.blit(deposit_surface, (int(deposit.x), int(deposit.y)))
