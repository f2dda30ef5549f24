"""Pixel garden exception hierarchy.

Invalid user interactions are not exceptions; they are reported as ``Err``
values (see ``garden.result``). The classes here cover programming and
configuration mistakes only.
"""


class GardenError(Exception):
    """Root of all garden domain exceptions."""


class ConfigurationError(GardenError):
    """Invalid or missing configuration."""
