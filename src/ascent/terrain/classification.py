"""Terrain classification: snow, rock, grass, soil, coast from elevation."""

import numpy as np
from numpy.typing import NDArray

from ..terrain_types import GearType, TerrainType
from .config import ClassificationConfig
from .layers import TerrainLayers, gear_mask, terrain_value

# Terrain types whose baseline tiles can be climbed when steep enough
_CLIMBABLE_BASELINE = frozenset({TerrainType.ROCK, TerrainType.SNOW})


def coast_distance_ratio(height: int, width: int) -> NDArray[np.float32]:
    """Distance to the southern coast as a fraction of the grid height.

    0.0 on the southern row, 1.0 on the northern row.
    """
    span = max(height - 1, 1)
    column = (height - 1 - np.arange(height, dtype=np.float32)) / span
    return np.repeat(column[:, np.newaxis], width, axis=1).astype(np.float32)


def classify_elevation(
    elevation: NDArray[np.float32],
    config: ClassificationConfig,
) -> NDArray[np.uint8]:
    """Assign a terrain type to each tile from ordered elevation bands.

    Bands are checked highest first; lowland between the coast and grass
    thresholds is coast near the southern edge and soil elsewhere.

    Args:
        elevation: Elevation field in [0, 1].
        config: Classification thresholds.

    Returns:
        2D array of terrain storage values.
    """
    height, width = elevation.shape
    near_coast = coast_distance_ratio(height, width) < config.coast_band

    terrain = np.full(
        (height, width), terrain_value(TerrainType.COAST), dtype=np.uint8
    )
    lowland = elevation > config.coast_threshold
    terrain[lowland & ~near_coast] = terrain_value(TerrainType.SOIL)
    terrain[elevation > config.grass_threshold] = terrain_value(TerrainType.GRASS)
    terrain[elevation > config.rock_threshold] = terrain_value(TerrainType.ROCK)
    terrain[elevation > config.snow_threshold] = terrain_value(TerrainType.SNOW)

    return terrain


def baseline_climbing(
    terrain_type: TerrainType,
    slope: float,
    config: ClassificationConfig,
) -> tuple[float | None, tuple[GearType, ...]]:
    """Climbing difficulty and gear for an unmodified tile.

    Returns:
        (difficulty, gear); difficulty is None for non-climbable tiles.
    """
    if terrain_type not in _CLIMBABLE_BASELINE or slope < config.climbable_slope:
        return None, ()

    difficulty = 1.0 + slope * 2.0
    if terrain_type == TerrainType.SNOW and difficulty > config.gear_difficulty:
        return difficulty, (GearType.CRAMPONS,)
    return difficulty, ()


def classify_terrain(
    elevation: NDArray[np.float32],
    config: ClassificationConfig,
    rng: np.random.Generator,
) -> TerrainLayers:
    """Build the baseline terrain layers before any feature pass.

    Args:
        elevation: Elevation field in [0, 1].
        config: Classification thresholds.
        rng: Random number generator for slope noise.

    Returns:
        TerrainLayers with type, slope, stability and baseline climbing.
    """
    height, width = elevation.shape
    layers = TerrainLayers.empty(width, height)
    layers.terrain = classify_elevation(elevation, config)

    noise = rng.uniform(-config.slope_noise, config.slope_noise, size=(height, width))
    layers.slope = np.clip(
        elevation * config.slope_gain + noise, 0.0, 1.0
    ).astype(np.float32)

    for terrain_type in TerrainType:
        is_type = layers.terrain == terrain_value(terrain_type)
        layers.stability[is_type] = terrain_type.base_stability

    # Baseline climbing is vectorized per (type, gear) outcome of baseline_climbing
    for terrain_type in _CLIMBABLE_BASELINE:
        steep = (layers.terrain == terrain_value(terrain_type)) & (
            layers.slope >= config.climbable_slope
        )
        difficulty = 1.0 + layers.slope * 2.0
        layers.climbable[steep] = True
        layers.difficulty[steep] = difficulty[steep]

        if terrain_type == TerrainType.SNOW:
            geared = steep & (difficulty > config.gear_difficulty)
            layers.gear[geared] = gear_mask([GearType.CRAMPONS])

    return layers
