"""Pygame drawing for the pixel garden: sprites, the canvas and the toolbar."""
