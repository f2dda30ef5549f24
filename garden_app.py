import logging
from typing import Optional

import pygame

from garden.config.display import TOOLBAR_HEIGHT
from garden.entities.plant import Species
from garden.interaction import InteractionHandler
from garden.simulation import GardenEngine
from rendering.garden_renderer import GardenRenderer
from rendering.ui_renderer import WATERING_CAN, UIRenderer

logger = logging.getLogger(__name__)

DAY_EVENT = pygame.USEREVENT + 1

SEED_KEYS = {
    pygame.K_1: Species.LILY,
    pygame.K_2: Species.TULIP,
    pygame.K_3: Species.ORCHID,
}


class GardenApp:
    """The interactive pixel garden window.

    Attributes:
        engine: Headless garden engine being displayed
        handler: Toolbar state and click routing
        screen: Pygame display surface (canvas plus toolbar)
        clock: Pygame clock for frame rate
        show_stats_hud: Whether the stats panel is drawn
    """

    def __init__(self, engine: Optional[GardenEngine] = None, seed: Optional[int] = None) -> None:
        self.engine = engine if engine is not None else GardenEngine(seed=seed)
        self.handler = InteractionHandler(self.engine)
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.screen: Optional[pygame.Surface] = None
        self.canvas: Optional[pygame.Surface] = None
        self.stats_font: Optional[pygame.font.Font] = None
        self.garden_renderer: Optional[GardenRenderer] = None
        self.ui_renderer: Optional[UIRenderer] = None
        self.show_stats_hud: bool = True

    def setup_game(self) -> bool:
        """Open the window and prepare the garden. Returns False on failure."""
        display = self.engine.config.display
        try:
            self.screen = pygame.display.set_mode(
                (display.canvas_width, display.canvas_height + TOOLBAR_HEIGHT)
            )
            pygame.display.set_caption("Pixel Garden")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        self.canvas = self.screen.subsurface((0, 0, display.canvas_width, display.canvas_height))
        self.stats_font = pygame.font.Font(None, 22)
        self.garden_renderer = GardenRenderer(self.canvas)
        self.ui_renderer = UIRenderer(self.screen, self.stats_font, display.canvas_height)

        self.engine.setup()
        pygame.time.set_timer(DAY_EVENT, self.engine.config.weather.day_length_ms)
        return True

    def update(self) -> None:
        """Run one engine step from the pygame clock."""
        self.engine.tick(pygame.time.get_ticks())

    def render(self) -> None:
        """Render the current state of the garden to the screen."""
        if self.screen is None or self.garden_renderer is None or self.ui_renderer is None:
            return

        context = self.engine.context
        # Simulated time drives the sway, so pausing freezes the wind too
        self.garden_renderer.render(context, context.elapsed_ms)
        self.ui_renderer.draw_toolbar(self.handler)
        if self.show_stats_hud:
            self.ui_renderer.draw_stats_panel(self.engine.get_summary_stats())
        pygame.display.flip()

    def handle_click(self, position) -> None:
        if self.ui_renderer is None:
            return
        if position[1] >= self.ui_renderer.canvas_height:
            tool = self.ui_renderer.tool_at(position)
            if tool == WATERING_CAN:
                self.handler.toggle_watering_can()
            elif tool is not None:
                self.handler.select_seed(tool)
            return

        outcome = self.handler.handle_click(position)
        if outcome.result.is_err():
            logger.debug("Click ignored: %s", outcome.result.error.value)
        if outcome.needs_render:
            self.render()

    def handle_events(self) -> bool:
        """Handle user input and other events. Returns False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == DAY_EVENT:
                if not self.engine.paused:
                    self.engine.advance_day()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_click(event.pos)
            elif event.type == pygame.KEYDOWN:
                if event.key in SEED_KEYS:
                    self.handler.select_seed(SEED_KEYS[event.key])
                elif event.key == pygame.K_w:
                    self.handler.toggle_watering_can()
                elif event.key == pygame.K_p:
                    self.engine.toggle_pause()
                elif event.key == pygame.K_h:
                    self.show_stats_hud = not self.show_stats_hud
                elif event.key == pygame.K_ESCAPE:
                    return False
        return True

    def run(self) -> None:
        """Run the garden until the window is closed."""
        if not self.setup_game():
            return

        logger.info("=" * 60)
        logger.info("PIXEL GARDEN")
        logger.info("=" * 60)
        logger.info("Controls:")
        logger.info("  Click    - Plant the selected seed / water / clear a dead plant")
        logger.info("  1/2/3    - Select lily, tulip or orchid seeds")
        logger.info("  W        - Toggle the watering can")
        logger.info("  P        - Pause/Resume")
        logger.info("  H        - Toggle stats panel")
        logger.info("  ESC      - Quit")

        frame_rate = self.engine.config.display.frame_rate
        while self.handle_events():
            self.update()
            self.render()
            self.clock.tick(frame_rate)

        logger.info("SIMULATION ENDED - Final Statistics")
        self.engine.log_stats()


def main(seed: Optional[int] = None) -> None:
    """Entry point for the garden window."""
    pygame.init()
    app = GardenApp(seed=seed)
    try:
        app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    from garden.logging_config import configure_logging

    configure_logging()
    main()
