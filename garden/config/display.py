"""Display and UI configuration constants."""

# Canvas is a grid of chunky "pixels"
PIXEL_SIZE = 10
GRID_WIDTH = 60
GRID_HEIGHT = 40
CANVAS_WIDTH = GRID_WIDTH * PIXEL_SIZE
CANVAS_HEIGHT = GRID_HEIGHT * PIXEL_SIZE

# Extra room below the canvas for the toolbar
TOOLBAR_HEIGHT = 56

# The frame rate for the game loop, in frames per second
FRAME_RATE = 60

# Reference frame length used to convert per-frame rates into per-ms rates
REFERENCE_FRAME_MS = 1000.0 / 60.0

# Sprite rendering
SPRITE_SCALE = 0.8

# Soil texture
SOIL_SEED = 12345
SOIL_BASE_COLOR = (139, 69, 19)
SOIL_SHADES = ((101, 67, 33), (160, 82, 45))
SOIL_SHADE_CHANCE = 0.3

# Water progress bar drawn above growing plants
PROGRESS_BAR_WIDTH = 40
PROGRESS_BAR_HEIGHT = 6
PROGRESS_BAR_COLOR = (76, 175, 80)

# UI colors
HUD_TEXT_COLOR = (240, 240, 230)
HUD_PANEL_COLOR = (30, 24, 16)
TOOLBAR_ACTIVE_COLOR = (255, 215, 0)
SNOW_TINT = (20, 40, 60, 64)

# Console output
SEPARATOR_WIDTH = 60
