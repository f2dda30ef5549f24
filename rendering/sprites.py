"""Procedural pixel-art sprites for plants.

Every sprite is a pure function of (species, stage) that returns a
``SpriteMatrix``: rows of RGB tuples, with ``None`` for transparent pixels.
Nothing here touches pygame, so sprites can be tested without a display;
``rendering.image_loader`` turns matrices into surfaces.

Sprites are drawn centred horizontally on the plant's x and standing on its
y, scaled per stage by ``stage_scale``.
"""

import math
import random
from functools import lru_cache
from types import MappingProxyType
from typing import List, Optional, Tuple

from garden.config.display import SPRITE_SCALE
from garden.entities.plant import Species
from garden.state_machine import GrowthStage

Color = Tuple[int, int, int]
SpriteMatrix = Tuple[Tuple[Optional[Color], ...], ...]


def hex_to_rgb(value: str) -> Color:
    """Convert '#RRGGBB' to an (r, g, b) tuple."""
    value = value.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


SEED_COLOR = hex_to_rgb("#654321")
SEED_SPOT_COLOR = hex_to_rgb("#3D2817")
LEAF_STEM_COLOR = hex_to_rgb("#228B22")
LEAF_COLOR = hex_to_rgb("#90EE90")
WHITE = hex_to_rgb("#FFFFFF")
DEAD_STEM_COLOR = hex_to_rgb("#5A463A")
DEAD_ACCENT_COLOR = hex_to_rgb("#7B6758")
DEAD_HEAD_COLORS = (hex_to_rgb("#6B4F3B"), hex_to_rgb("#8A6E53"))

SPECIES_PALETTES = MappingProxyType(
    {
        Species.LILY: MappingProxyType(
            {
                "petal_light": hex_to_rgb("#FFB6C1"),
                "petal_dark": hex_to_rgb("#FF69B4"),
                "stamen": hex_to_rgb("#FFA500"),
                "pistil": hex_to_rgb("#FFD700"),
                "stem": hex_to_rgb("#228B22"),
                "stem_light": hex_to_rgb("#32CD32"),
            }
        ),
        Species.TULIP: MappingProxyType(
            {
                "petal_base": hex_to_rgb("#FFD700"),
                "petal_mid": hex_to_rgb("#FF8C00"),
                "petal_top": hex_to_rgb("#FF4500"),
                "petal_dark": hex_to_rgb("#DC143C"),
                "stem": hex_to_rgb("#A5D688"),
                "stem_light": hex_to_rgb("#C4E6A8"),
            }
        ),
        Species.ORCHID: MappingProxyType(
            {
                "petal_light": hex_to_rgb("#DDA0DD"),
                "petal_mid": hex_to_rgb("#9370DB"),
                "petal_dark": hex_to_rgb("#663399"),
                "labelo": hex_to_rgb("#FF69B4"),
                "labelo_center": hex_to_rgb("#FFD700"),
                "stem": hex_to_rgb("#228B22"),
                "stem_light": hex_to_rgb("#32CD32"),
            }
        ),
    }
)

# Flowers are drawn large; earlier stages are fractions of the base scale
_STAGE_SCALES = MappingProxyType(
    {
        GrowthStage.SEED: SPRITE_SCALE * 0.25,
        GrowthStage.SPROUT: SPRITE_SCALE * 0.5,
        GrowthStage.MEDIUM: SPRITE_SCALE * 0.8,
        GrowthStage.BUD: SPRITE_SCALE * 1.2,
        GrowthStage.FLOWER: 2.0,
        GrowthStage.DEAD: SPRITE_SCALE * 0.9,
    }
)


class _Canvas:
    """Mutable pixel grid used while building a sprite."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.rows: List[List[Optional[Color]]] = [[None] * width for _ in range(height)]

    def set(self, x: int, y: int, color: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.rows[y][x] = color

    def get(self, x: int, y: int) -> Optional[Color]:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.rows[y][x]
        return None

    def freeze(self) -> SpriteMatrix:
        return tuple(tuple(row) for row in self.rows)


def stage_scale(stage: GrowthStage) -> float:
    """Render scale for a growth stage."""
    return _STAGE_SCALES[stage]


def sprite_size(sprite: SpriteMatrix) -> Tuple[int, int]:
    """(width, height) of a sprite matrix."""
    height = len(sprite)
    width = len(sprite[0]) if height else 0
    return width, height


@lru_cache(maxsize=None)
def seed_sprite() -> SpriteMatrix:
    canvas = _Canvas(8, 8)
    for y in range(2, 6):
        for x in range(2, 6):
            if (x - 3.5) ** 2 / 4 + (y - 3.5) ** 2 / 2 < 1:
                canvas.set(x, y, SEED_COLOR)
    canvas.set(3, 3, SEED_SPOT_COLOR)
    canvas.set(4, 4, SEED_SPOT_COLOR)
    return canvas.freeze()


@lru_cache(maxsize=None)
def sprout_sprite() -> SpriteMatrix:
    canvas = _Canvas(16, 32)
    for y in range(20, 32):
        canvas.set(7, y, LEAF_STEM_COLOR)
        canvas.set(8, y, LEAF_STEM_COLOR)
    for y in range(18, 22):
        for x in range(4, 12):
            if abs(x - 8) + abs(y - 20) < 3:
                canvas.set(x, y, LEAF_COLOR)
    return canvas.freeze()


@lru_cache(maxsize=None)
def medium_sprite() -> SpriteMatrix:
    canvas = _Canvas(32, 64)
    for y in range(40, 64):
        for x in range(14, 18):
            canvas.set(x, y, LEAF_STEM_COLOR)
    # A ring-shaped leaf either side of the stem
    for leaf_x, x_range in ((10, range(4, 16)), (22, range(16, 28))):
        for y in range(30, 45):
            for x in x_range:
                dist = math.hypot(x - leaf_x, y - 37)
                if 2 < dist < 8:
                    canvas.set(x, y, LEAF_COLOR)
    return canvas.freeze()


@lru_cache(maxsize=None)
def bud_sprite(species: Species) -> SpriteMatrix:
    palette = SPECIES_PALETTES[species]
    canvas = _Canvas(48, 80)
    bud_color = palette["petal_base"] if species is Species.TULIP else palette["petal_light"]

    for y in range(50, 80):
        for x in range(20, 28):
            canvas.set(x, y, palette["stem"])
    for y in range(20, 50):
        for x in range(12, 36):
            dx = (x - 24) / 12
            dy = (y - 35) / 15
            if dx * dx + dy * dy < 1:
                canvas.set(x, y, bud_color)
    seam = palette["petal_mid"] if species is Species.TULIP else bud_color
    for y in range(25, 45):
        canvas.set(24, y, seam)
    return canvas.freeze()


def _tulip_flower() -> SpriteMatrix:
    palette = SPECIES_PALETTES[Species.TULIP]
    canvas = _Canvas(64, 128)
    center_x, cup_top, cup_base = 32, 18, 86
    gradient = (
        palette["petal_dark"],
        palette["petal_mid"],
        hex_to_rgb("#FF6A2E"),
        hex_to_rgb("#FF9440"),
        palette["petal_base"],
    )

    for y in range(cup_base, 128):
        for x in range(29, 36):
            canvas.set(x, y, palette["stem"])
        canvas.set(30, y, palette["stem_light"])

    for y in range(cup_top, cup_base):
        progress = (y - cup_top) / (cup_base - cup_top)
        width = 18 + (1 - (progress - 0.3) ** 2) * 30
        left = max(4, round(center_x - width / 2))
        right = min(60, round(center_x + width / 2))
        for x in range(left, right + 1):
            across = (x - left) / max(1, right - left)
            color = gradient[min(len(gradient) - 1, math.floor(across * len(gradient)))]
            if across < 0.15 or across > 0.85:
                color = palette["petal_dark"]
            if 0.45 < across < 0.55:
                color = palette["petal_base"]
            canvas.set(x, y, color)
        if progress < 0.2:
            canvas.set(left, y, palette["petal_dark"])
            canvas.set(right, y, palette["petal_dark"])

    for x in range(18, 46):
        if canvas.get(x, cup_top) is not None:
            canvas.set(x, cup_top - 1, palette["petal_top"])

    for y in range(cup_base - 4, cup_base + 2):
        for x in range(center_x - 12, center_x + 13):
            if canvas.get(x, y) is None:
                canvas.set(x, y, palette["petal_base"])
    return canvas.freeze()


def _lily_flower() -> SpriteMatrix:
    palette = SPECIES_PALETTES[Species.LILY]
    canvas = _Canvas(64, 128)
    center_x, center_y = 32, 50
    petal_length, petal_width = 25, 8

    for y in range(90, 128):
        for x in range(28, 36):
            canvas.set(x, y, palette["stem"])

    # Six recurved petals with tiger spots
    for petal in range(6):
        angle = petal / 6 * math.pi * 2
        for dist in range(5, petal_length):
            local_angle = angle + dist * 0.3 / 20
            for w in range(-petal_width // 2, petal_width // 2):
                x = round(center_x + math.cos(local_angle) * dist + math.cos(local_angle + math.pi / 2) * w)
                y = round(center_y + math.sin(local_angle) * dist + math.sin(local_angle + math.pi / 2) * w)
                color = palette["petal_light"] if dist < petal_length * 0.7 else palette["petal_dark"]
                if (x + y) % 8 < 2:
                    color = palette["petal_dark"]
                canvas.set(x, y, color)

    stamen_length = 12
    for stamen in range(6):
        angle = stamen / 6 * math.pi * 2
        for d in range(stamen_length):
            x = round(center_x + math.cos(angle) * d)
            y = round(center_y + math.sin(angle) * d)
            canvas.set(x, y, WHITE if d < stamen_length - 2 else palette["stamen"])

    for y in range(45, 55):
        for x in range(30, 34):
            if math.hypot(x - 32, y - 50) < 3:
                canvas.set(x, y, palette["pistil"])
    return canvas.freeze()


def _orchid_flower() -> SpriteMatrix:
    palette = SPECIES_PALETTES[Species.ORCHID]
    canvas = _Canvas(64, 128)
    base_x, base_y = 18, 120

    # Arched stem sampled at 101 points
    stem_points = []
    for step in range(101):
        t = step / 100
        x = base_x + t * 30 + t ** 1.5 * 10
        y = base_y - t * 75 - math.sin(t * math.pi) * 5
        stem_points.append((round(x), round(y)))
    for px, py in stem_points:
        for dx in range(-1, 3):
            for dy in range(-1, 2):
                canvas.set(px + dx, py + dy, palette["stem"] if dx == -1 else palette["stem_light"])

    def draw_bloom(cx: int, cy: int, scale: float) -> None:
        size = math.floor(6 * scale)
        reach = math.floor(size * 1.4)
        for y in range(-size, size + 1):
            for x in range(-reach, reach + 1):
                dist = math.hypot(x * 0.7, y * 1.2)
                if dist <= size:
                    canvas.set(
                        cx + x, cy + y, palette["petal_mid"] if dist < size * 0.6 else palette["petal_light"]
                    )
        for y in range(-size - 3, -size + 1):
            for x in range(-2, 3):
                canvas.set(cx + x, cy + y, palette["petal_mid"])
        half = math.floor(size / 2)
        for y in range(0, math.floor(size / 1.5) + 1):
            for x in range(-half, half + 1):
                dist = math.hypot(x * 1.3, y * 0.8)
                if dist < size / 1.6:
                    canvas.set(
                        cx + x, cy + y, palette["labelo_center"] if dist < size / 3 else palette["labelo"]
                    )

    for t, scale in ((0.2, 0.9), (0.4, 1.0), (0.6, 1.1), (0.8, 0.95)):
        px, py = stem_points[math.floor(t * (len(stem_points) - 1))]
        draw_bloom(px + 8, py + 6, scale)
    return canvas.freeze()


_FLOWER_BUILDERS = {
    Species.LILY: _lily_flower,
    Species.TULIP: _tulip_flower,
    Species.ORCHID: _orchid_flower,
}


@lru_cache(maxsize=None)
def flower_sprite(species: Species) -> SpriteMatrix:
    return _FLOWER_BUILDERS[species]()


@lru_cache(maxsize=None)
def dead_sprite() -> SpriteMatrix:
    canvas = _Canvas(48, 96)
    center_x = 24
    for y in range(60, 96):
        for x in range(22, 26):
            canvas.set(x, y, DEAD_STEM_COLOR)
    # Drooping neck
    for y in range(40, 60):
        offset = (60 - y) // 4
        for x in range(center_x - offset, center_x - offset + 3):
            canvas.set(x, y, DEAD_ACCENT_COLOR)
    for y in range(30, 50):
        for x in range(10, 28):
            if math.hypot(x - 16, y - 40) < 10:
                canvas.set(x, y, DEAD_HEAD_COLORS[y % 2])
    return canvas.freeze()


def get_plant_sprite(species: Species, stage: GrowthStage) -> SpriteMatrix:
    """Return the sprite for a plant of this species at this stage."""
    if stage is GrowthStage.SEED:
        return seed_sprite()
    if stage is GrowthStage.SPROUT:
        return sprout_sprite()
    if stage is GrowthStage.MEDIUM:
        return medium_sprite()
    if stage is GrowthStage.BUD:
        return bud_sprite(species)
    if stage is GrowthStage.FLOWER:
        return flower_sprite(species)
    return dead_sprite()


def generate_soil_pattern(
    grid_width: int, grid_height: int, seed: int, shade_chance: float
) -> Tuple[Tuple[int, ...], ...]:
    """Deterministic soil shading: 0 = base colour, 1/2 = darker/lighter shade.

    The pattern comes from its own seeded generator, so it is identical on
    every run and never consumes the simulation's random numbers.
    """
    rng = random.Random(seed)
    rows = []
    for _ in range(grid_height):
        row = []
        for _ in range(grid_width):
            if rng.random() < shade_chance:
                row.append(1 if rng.random() < 0.5 else 2)
            else:
                row.append(0)
        rows.append(tuple(row))
    return tuple(rows)
