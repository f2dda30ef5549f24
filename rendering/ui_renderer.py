"""UI rendering for the pixel garden.

This module draws the stats panel over the canvas and the toolbar below it
(seed buttons and the watering can).
"""

import pygame
from typing import Any, Dict, List, Optional, Tuple, Union

from garden.config.display import (
    HUD_PANEL_COLOR,
    HUD_TEXT_COLOR,
    TOOLBAR_ACTIVE_COLOR,
    TOOLBAR_HEIGHT,
)
from garden.entities.plant import Species
from garden.interaction import InteractionHandler
from rendering.sprites import SPECIES_PALETTES

WATERING_CAN = "watering_can"
Tool = Union[Species, str]

_BUTTON_WIDTH = 110
_BUTTON_MARGIN = 10
_TOOLBAR_BACKGROUND = (60, 40, 24)
_BUTTON_COLOR = (96, 68, 40)
_WATERING_CAN_COLOR = (135, 206, 235)
_PAUSED_COLOR = (255, 200, 100)


class UIRenderer:
    """Renders the stats panel and toolbar.

    Attributes:
        screen: Pygame surface to render to (canvas plus toolbar)
        stats_font: Font for rendering statistics and labels
        canvas_height: y where the toolbar starts
    """

    def __init__(self, screen: pygame.Surface, stats_font: pygame.font.Font, canvas_height: int) -> None:
        """Initialize the UI renderer.

        Args:
            screen: Pygame surface to render to
            stats_font: Font for rendering statistics
            canvas_height: Height of the garden canvas above the toolbar
        """
        self.screen = screen
        self.stats_font = stats_font
        self.canvas_height = canvas_height

    def toolbar_buttons(self) -> List[Tuple[Tool, pygame.Rect]]:
        """Button rectangles in screen coordinates, left to right."""
        tools: List[Tool] = [*Species, WATERING_CAN]
        top = self.canvas_height + _BUTTON_MARGIN
        height = TOOLBAR_HEIGHT - 2 * _BUTTON_MARGIN
        return [
            (tool, pygame.Rect(_BUTTON_MARGIN + i * (_BUTTON_WIDTH + _BUTTON_MARGIN), top, _BUTTON_WIDTH, height))
            for i, tool in enumerate(tools)
        ]

    def tool_at(self, position: Tuple[int, int]) -> Optional[Tool]:
        """The toolbar button under a screen position, if any."""
        for tool, rect in self.toolbar_buttons():
            if rect.collidepoint(position):
                return tool
        return None

    def draw_toolbar(self, handler: InteractionHandler) -> None:
        """Draw seed and watering-can buttons, highlighting the active tool."""
        self.screen.fill(
            _TOOLBAR_BACKGROUND, (0, self.canvas_height, self.screen.get_width(), TOOLBAR_HEIGHT)
        )
        for tool, rect in self.toolbar_buttons():
            if tool == WATERING_CAN:
                label = "Watering can"
                swatch = _WATERING_CAN_COLOR
                active = handler.watering_can_active
            else:
                label = tool.display_name
                palette = SPECIES_PALETTES[tool]
                swatch = palette.get("petal_light", palette.get("petal_mid"))
                active = not handler.watering_can_active and handler.selected_seed is tool

            pygame.draw.rect(self.screen, _BUTTON_COLOR, rect)
            pygame.draw.rect(self.screen, swatch, (rect.x + 6, rect.centery - 6, 12, 12))
            text_surface = self.stats_font.render(label, True, HUD_TEXT_COLOR)
            self.screen.blit(text_surface, (rect.x + 24, rect.centery - text_surface.get_height() // 2))
            if active:
                pygame.draw.rect(self.screen, TOOLBAR_ACTIVE_COLOR, rect, 2)

    def draw_stats_panel(self, stats: Dict[str, Any]) -> None:
        """Draw the garden statistics panel.

        Args:
            stats: Output of ``GardenEngine.get_summary_stats()``
        """
        lines = [
            f"Day {stats['day']}  |  {stats['weather'].capitalize()}",
            f"Waterings: {stats['water_count']}",
            f"Plants: {stats['plants']}",
        ]
        for stage, count in stats["plants_by_stage"].items():
            if count:
                lines.append(f"  {stage}: {count}")
        deaths = stats["deaths"]
        if any(deaths.values()):
            lines.append("Deaths: " + ", ".join(f"{cause} {count}" for cause, count in deaths.items()))

        line_height = self.stats_font.get_linesize()
        panel_surface = pygame.Surface((200, line_height * len(lines) + 10))
        panel_surface.set_alpha(200)
        panel_surface.fill(HUD_PANEL_COLOR)
        self.screen.blit(panel_surface, (10, 10))

        y_offset = 15
        for line in lines:
            text_surface = self.stats_font.render(line, True, HUD_TEXT_COLOR)
            self.screen.blit(text_surface, (16, y_offset))
            y_offset += line_height

        if stats["paused"]:
            pause_text = self.stats_font.render("PAUSED", True, _PAUSED_COLOR)
            self.screen.blit(pause_text, (self.screen.get_width() // 2 - pause_text.get_width() // 2, 10))
