"""Elevation synthesis: peak anchors, radial falloff, gradient and noise."""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidDimensionsError
from .config import MAX_GRID_SIZE, ElevationConfig
from .regions import random_point_in_band


def check_dimensions(width: int, height: int) -> None:
    """Fail fast on grids no theme can generate.

    Raises:
        InvalidDimensionsError: If either edge is < 1 or > MAX_GRID_SIZE.
    """
    if width < 1 or height < 1:
        raise InvalidDimensionsError(f"Grid must be at least 1x1, got {width}x{height}")
    if width > MAX_GRID_SIZE or height > MAX_GRID_SIZE:
        raise InvalidDimensionsError(
            f"Grid {width}x{height} exceeds maximum edge of {MAX_GRID_SIZE}"
        )


def choose_anchors(
    width: int,
    height: int,
    config: ElevationConfig,
    rng: np.random.Generator,
) -> list[tuple[int, int]]:
    """Choose peak anchor tiles.

    Fixed anchors (given as fractions of the grid) win over random ones.
    Either way the result is clamped inside the grid.

    Args:
        width: Grid width in tiles.
        height: Grid height in tiles.
        config: Elevation parameters.
        rng: Random number generator.

    Returns:
        List of (x, y) anchor coordinates, primary anchor first.
    """
    if config.fixed_anchors:
        return [
            (
                min(max(int(fx * width), 0), width - 1),
                min(max(int(fy * height), 0), height - 1),
            )
            for fx, fy in config.fixed_anchors
        ]

    count_max = max(config.anchor_count_max, config.anchor_count_min)
    count = int(rng.integers(config.anchor_count_min, count_max + 1))
    return [
        random_point_in_band(rng, config.anchor_band, width, height)
        for _ in range(count)
    ]


def radial_falloff(
    width: int,
    height: int,
    anchors: list[tuple[int, int]],
    steepness: float,
    sum_anchors: bool = True,
) -> NDArray[np.float32]:
    """Peak contribution max(0, 1 - k * d) around each anchor.

    Distances are normalized by the longer grid edge so a 1-wide grid
    never divides by zero.

    Args:
        width: Grid width.
        height: Grid height.
        anchors: Peak anchor coordinates.
        steepness: Falloff constant k.
        sum_anchors: Sum contributions (clamped to 1) instead of taking
            the nearest anchor's.

    Returns:
        2D array in [0, 1].
    """
    scale = float(max(width, height))

    y_coords = np.arange(height, dtype=np.float32)
    x_coords = np.arange(width, dtype=np.float32)
    xx, yy = np.meshgrid(x_coords, y_coords)

    result = np.zeros((height, width), dtype=np.float32)
    for ax, ay in anchors:
        dist = np.sqrt((xx - ax) ** 2 + (yy - ay) ** 2) / scale
        contribution = np.maximum(0.0, 1.0 - steepness * dist)
        if sum_anchors:
            result += contribution
        else:
            np.maximum(result, contribution, out=result)

    return np.clip(result, 0.0, 1.0).astype(np.float32)


def north_gradient(width: int, height: int, strength: float) -> NDArray[np.float32]:
    """Linear bias, `strength` on the northern row falling to 0 in the south."""
    if height == 1:
        column = np.full(1, strength, dtype=np.float32)
    else:
        column = strength * (1.0 - np.arange(height, dtype=np.float32) / (height - 1))
    return np.repeat(column[:, np.newaxis], width, axis=1).astype(np.float32)


def make_elevation(
    width: int,
    height: int,
    anchors: list[tuple[int, int]],
    config: ElevationConfig,
    rng: np.random.Generator,
) -> NDArray[np.float32]:
    """Generate the elevation field.

    Args:
        width: Grid width in tiles.
        height: Grid height in tiles.
        anchors: Peak anchors from `choose_anchors`.
        config: Elevation parameters.
        rng: Random number generator.

    Returns:
        2D float32 array of shape (height, width) in [0, 1].
    """
    check_dimensions(width, height)

    elevation = radial_falloff(
        width, height, anchors, config.steepness, config.sum_anchors
    )
    elevation += north_gradient(width, height, config.gradient_strength)

    amplitude = config.noise_amplitude
    elevation += rng.uniform(-amplitude, amplitude, size=(height, width)).astype(
        np.float32
    )

    return np.clip(elevation, 0.0, 1.0).astype(np.float32)
