"""Shared test fixtures for level tests."""

import numpy as np
import pytest

from ascent.catalog import create_tutorial_level
from ascent.level import LevelDefinition, TerrainData, WeatherConditions
from ascent.terrain_types import TerrainType
from ascent.types import Position


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def tutorial_level() -> LevelDefinition:
    """Hand-authored 20x15 tutorial level."""
    return create_tutorial_level()


@pytest.fixture
def soil_tile() -> TerrainData:
    """Flat, stable, non-climbable tile."""
    return TerrainData(terrain_type=TerrainType.SOIL, slope=0.0, stability=1.0)


@pytest.fixture
def lava_tile() -> TerrainData:
    """Lava tile."""
    return TerrainData(terrain_type=TerrainType.LAVA, slope=0.1, stability=0.0)


@pytest.fixture
def make_level(soil_tile: TerrainData):
    """Factory for small levels with optional tile overrides.

    Overrides map (x, y) to a TerrainData.
    """

    def _make(
        width: int = 5,
        height: int = 4,
        overrides: dict[tuple[int, int], TerrainData] | None = None,
        start: tuple[int, int] = (0, 0),
        goal: tuple[int, int] = (4, 3),
    ) -> LevelDefinition:
        rows = [[soil_tile] * width for _ in range(height)]
        for (x, y), tile in (overrides or {}).items():
            rows[y][x] = tile
        return LevelDefinition(
            id="test_level",
            name="Test Level",
            description="Level built for tests",
            width=width,
            height=height,
            terrain=rows,
            start_position=Position(x=start[0], y=start[1]),
            goal_positions=[Position(x=goal[0], y=goal[1])],
            weather_conditions=WeatherConditions(
                base_temperature=0.0, wind_speed=0.0, weather_type="clear"
            ),
        )

    return _make
