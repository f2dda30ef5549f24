"""Pytest configuration and fixtures for garden tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def context(seeded_rng):
    """Provide an empty garden context with default configuration."""
    from garden.simulation.context import create_context

    return create_context(rng=seeded_rng)


@pytest.fixture
def engine():
    """Setup a garden engine for testing with deterministic seed."""
    from garden.simulation.engine import GardenEngine

    engine = GardenEngine(seed=42)
    engine.setup()

    return engine


@pytest.fixture
def make_plant():
    """Factory for plants with the stock [2, 3, 4, 5] thresholds."""
    from garden.entities.plant import Plant, Species

    def _make(x=300.0, y=350.0, species=Species.LILY, thresholds=(2, 3, 4, 5), plant_id=1):
        return Plant((x, y), species, thresholds, plant_id=plant_id)

    return _make
