import pygame

from rendering.sprites import SpriteMatrix, sprite_size


class ImageLoader:
    """Class responsible for building and caching sprite surfaces."""
    cache = {}

    @staticmethod
    def load_sprite(key, sprite: SpriteMatrix, scale: float) -> pygame.Surface:
        """Return a scaled surface for a sprite matrix, cached by (key, scale)."""
        cache_key = (key, round(scale, 3))
        if cache_key in ImageLoader.cache:
            return ImageLoader.cache[cache_key]

        width, height = sprite_size(sprite)
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        for y, row in enumerate(sprite):
            for x, color in enumerate(row):
                if color is not None:
                    surface.set_at((x, y), color)

        scaled_size = (max(1, round(width * scale)), max(1, round(height * scale)))
        image = pygame.transform.scale(surface, scaled_size)
        ImageLoader.cache[cache_key] = image
        return image

    @staticmethod
    def clear():
        ImageLoader.cache.clear()
