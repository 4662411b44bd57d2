"""Bounds-safe region math shared by feature passes and population placement.

Every region is clipped to the grid with saturating arithmetic before any
array is indexed, so a region centred on an edge tile (or a 1x1 grid)
only ever touches valid cells.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .config import Band


@dataclass(frozen=True)
class RegionWindow:
    """A region clipped to the grid.

    `rows` and `cols` select the clipped bounding box; `mask` and
    `distance` are local to that box. `distance` is normalized so the
    region boundary sits at 1.0.
    """

    rows: slice
    cols: slice
    mask: NDArray[np.bool_]
    distance: NDArray[np.float32]

    @property
    def size(self) -> int:
        """Number of tiles inside the region."""
        return int(np.count_nonzero(self.mask))

    def tiles(self) -> list[tuple[int, int]]:
        """Absolute (x, y) coordinates of every tile in the region."""
        ys, xs = np.nonzero(self.mask)
        return [
            (int(x) + self.cols.start, int(y) + self.rows.start)
            for y, x in zip(ys, xs)
        ]


def clamp_box(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    width: int,
    height: int,
) -> tuple[int, int, int, int]:
    """Clip a half-open box [x0, x1) x [y0, y1) to the grid.

    Returns:
        Clipped (x0, y0, x1, y1); empty boxes come back with x0 == x1
        or y0 == y1.
    """
    cx0 = min(max(x0, 0), width)
    cy0 = min(max(y0, 0), height)
    cx1 = min(max(x1, cx0), width)
    cy1 = min(max(y1, cy0), height)
    return cx0, cy0, cx1, cy1


def band_bounds(band: Band, width: int, height: int) -> tuple[int, int, int, int]:
    """Convert a fractional band into a non-empty half-open tile box.

    Returns:
        (x_lo, y_lo, x_hi, y_hi) with x_lo < x_hi <= width and
        y_lo < y_hi <= height.
    """
    x_lo = min(int(band.x_min * width), width - 1)
    y_lo = min(int(band.y_min * height), height - 1)
    x_hi = min(max(math.ceil(band.x_max * width), x_lo + 1), width)
    y_hi = min(max(math.ceil(band.y_max * height), y_lo + 1), height)
    return x_lo, y_lo, x_hi, y_hi


def random_point_in_band(
    rng: np.random.Generator,
    band: Band,
    width: int,
    height: int,
) -> tuple[int, int]:
    """Draw a tile coordinate uniformly from a band."""
    x_lo, y_lo, x_hi, y_hi = band_bounds(band, width, height)
    x = int(rng.integers(x_lo, x_hi))
    y = int(rng.integers(y_lo, y_hi))
    return x, y


def circle_window(
    cx: int,
    cy: int,
    radius: int,
    width: int,
    height: int,
) -> RegionWindow:
    """Tiles within `radius` (Euclidean) of (cx, cy), clipped to the grid."""
    radius = max(radius, 0)
    x0, y0, x1, y1 = clamp_box(
        cx - radius, cy - radius, cx + radius + 1, cy + radius + 1, width, height
    )
    ys, xs = np.mgrid[y0:y1, x0:x1]
    dist = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2).astype(np.float32)

    mask = dist <= radius
    if radius > 0:
        dist /= radius

    return RegionWindow(rows=slice(y0, y1), cols=slice(x0, x1), mask=mask, distance=dist)


def rect_window(
    cx: int,
    cy: int,
    rect_width: int,
    rect_height: int,
    width: int,
    height: int,
) -> RegionWindow:
    """Rectangle of the given size centred on (cx, cy), clipped to the grid."""
    left = cx - rect_width // 2
    top = cy - rect_height // 2
    x0, y0, x1, y1 = clamp_box(
        left, top, left + rect_width, top + rect_height, width, height
    )
    ys, xs = np.mgrid[y0:y1, x0:x1]

    # Chebyshev distance scaled so the rectangle edge is 1.0
    half_w = max(rect_width / 2.0, 0.5)
    half_h = max(rect_height / 2.0, 0.5)
    dist = np.maximum(
        np.abs(xs - cx) / half_w, np.abs(ys - cy) / half_h
    ).astype(np.float32)

    mask = np.ones(dist.shape, dtype=bool)
    return RegionWindow(rows=slice(y0, y1), cols=slice(x0, x1), mask=mask, distance=dist)
