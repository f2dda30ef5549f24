"""Configuration package for the garden simulation.

Module-level constants live in the topic modules (display, plants, weather,
decorations); ``garden_config`` bundles them into validated dataclasses.
"""
