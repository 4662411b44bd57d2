"""Terrain and gear types and their properties."""

from enum import Enum


class TerrainType(str, Enum):
    """Terrain classes with baseline stability and hazard properties."""

    SOIL = "soil"
    ROCK = "rock"
    ICE = "ice"
    SNOW = "snow"
    GRASS = "grass"
    GLACIER = "glacier"
    LAVA = "lava"
    COAST = "coast"

    @property
    def base_stability(self) -> float:
        """Stability assigned by the classifier before any feature pass."""
        return _BASE_STABILITY[self]

    @property
    def hazardous(self) -> bool:
        """Whether standing on this terrain is dangerous without gear."""
        return self in _HAZARDOUS_TYPES


class GearType(str, Enum):
    """Climbing gear that can gate access to a tile."""

    ICE_AXE = "ice_axe"
    CRAMPONS = "crampons"
    ROPE = "rope"
    HARNESS = "harness"


# Rock and soil are the most stable; loose and frozen ground the least
_BASE_STABILITY: dict[TerrainType, float] = {
    TerrainType.SOIL: 1.0,
    TerrainType.ROCK: 0.9,
    TerrainType.GRASS: 0.85,
    TerrainType.COAST: 0.6,
    TerrainType.SNOW: 0.5,
    TerrainType.ICE: 0.4,
    TerrainType.GLACIER: 0.35,
    TerrainType.LAVA: 0.0,
}

_HAZARDOUS_TYPES = frozenset({
    TerrainType.ICE,
    TerrainType.GLACIER,
    TerrainType.LAVA,
})
