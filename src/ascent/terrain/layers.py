"""Array-backed working grid shared by classification and feature passes."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..level import TerrainData
from ..terrain_types import GearType, TerrainType
from .regions import RegionWindow

# TerrainType -> uint8 storage value
_TERRAIN_VALUES: dict[TerrainType, int] = {
    TerrainType.SOIL: 0,
    TerrainType.ROCK: 1,
    TerrainType.ICE: 2,
    TerrainType.SNOW: 3,
    TerrainType.GRASS: 4,
    TerrainType.GLACIER: 5,
    TerrainType.LAVA: 6,
    TerrainType.COAST: 7,
}
_VALUE_TERRAINS: dict[int, TerrainType] = {v: k for k, v in _TERRAIN_VALUES.items()}

# GearType -> bit in the per-tile gear mask, in canonical listing order
_GEAR_BITS: dict[GearType, int] = {
    GearType.ICE_AXE: 1 << 0,
    GearType.CRAMPONS: 1 << 1,
    GearType.ROPE: 1 << 2,
    GearType.HARNESS: 1 << 3,
}


def terrain_value(terrain_type: TerrainType) -> int:
    """Convert TerrainType to its uint8 storage value."""
    return _TERRAIN_VALUES[terrain_type]


def value_to_terrain(value: int) -> TerrainType:
    """Convert a uint8 storage value back to TerrainType."""
    return _VALUE_TERRAINS[int(value)]


def gear_mask(gear: Iterable[GearType]) -> int:
    """Pack gear into a bitmask."""
    mask = 0
    for item in gear:
        mask |= _GEAR_BITS[item]
    return mask


def mask_to_gear(mask: int) -> tuple[str, ...]:
    """Unpack a bitmask into gear identifiers."""
    return tuple(gear.value for gear, bit in _GEAR_BITS.items() if int(mask) & bit)


@dataclass
class TerrainLayers:
    """Mutable per-tile attribute arrays, all of shape (height, width).

    `difficulty` is NaN wherever a tile is not climbable and `gear` is a
    bitmask from `gear_mask`.
    """

    terrain: NDArray[np.uint8]
    slope: NDArray[np.float32]
    stability: NDArray[np.float32]
    climbable: NDArray[np.bool_]
    difficulty: NDArray[np.float32]
    gear: NDArray[np.uint8]

    @classmethod
    def empty(cls, width: int, height: int) -> "TerrainLayers":
        """Flat, stable soil everywhere."""
        shape = (height, width)
        return cls(
            terrain=np.full(shape, terrain_value(TerrainType.SOIL), dtype=np.uint8),
            slope=np.zeros(shape, dtype=np.float32),
            stability=np.ones(shape, dtype=np.float32),
            climbable=np.zeros(shape, dtype=bool),
            difficulty=np.full(shape, np.nan, dtype=np.float32),
            gear=np.zeros(shape, dtype=np.uint8),
        )

    @property
    def shape(self) -> tuple[int, int]:
        return self.terrain.shape

    def count(self, terrain_type: TerrainType) -> int:
        """Number of tiles of a terrain type."""
        return int(np.count_nonzero(self.terrain == terrain_value(terrain_type)))

    def paint(
        self,
        window: RegionWindow,
        selected: NDArray[np.bool_],
        terrain_type: TerrainType,
        slope: float | NDArray[np.float32],
        stability: float,
        difficulty: float | NDArray[np.float32] | None = None,
        gear: Iterable[GearType] = (),
    ) -> int:
        """Overwrite the selected tiles of a region window.

        A tile is climbable exactly when `difficulty` is given; gear is
        only recorded on climbable tiles.

        Args:
            window: Region produced by `regions.circle_window` / `rect_window`.
            selected: Local boolean mask, same shape as `window.mask`.
            terrain_type: Terrain to write.
            slope: Slope to write, scalar or local array.
            stability: Stability to write.
            difficulty: Climbing difficulty, scalar or local array, or
                None for non-climbable tiles.
            gear: Required gear for climbable tiles.

        Returns:
            Number of tiles written.
        """
        rows, cols = window.rows, window.cols
        climbable = difficulty is not None

        self.terrain[rows, cols][selected] = terrain_value(terrain_type)
        self.slope[rows, cols][selected] = _select(slope, selected)
        self.stability[rows, cols][selected] = stability
        self.climbable[rows, cols][selected] = climbable
        if climbable:
            self.difficulty[rows, cols][selected] = _select(difficulty, selected)
            self.gear[rows, cols][selected] = gear_mask(gear)
        else:
            self.difficulty[rows, cols][selected] = np.nan
            self.gear[rows, cols][selected] = 0

        return int(np.count_nonzero(selected))

    def tile(self, x: int, y: int) -> TerrainData:
        """Build the TerrainData record for one tile."""
        climbable = bool(self.climbable[y, x])
        return TerrainData(
            terrain_type=value_to_terrain(self.terrain[y, x]),
            slope=float(self.slope[y, x]),
            stability=float(self.stability[y, x]),
            climbable=climbable,
            climbing_difficulty=float(self.difficulty[y, x]) if climbable else None,
            required_gear=mask_to_gear(self.gear[y, x]) if climbable else (),
        )

    def to_rows(self) -> tuple[tuple[TerrainData, ...], ...]:
        """Convert the arrays into row-major TerrainData records."""
        height, width = self.shape
        return tuple(
            tuple(self.tile(x, y) for x in range(width)) for y in range(height)
        )


def _select(
    value: float | NDArray[np.float32],
    selected: NDArray[np.bool_],
) -> float | NDArray[np.float32]:
    if isinstance(value, np.ndarray):
        return value[selected]
    return value
