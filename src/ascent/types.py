"""Core coordinate types for level grids."""

from pydantic import BaseModel, Field

# World-space size of one grid tile, shared with the rendering layer
TILE_SIZE = 32.0

# Coordinate system: +X is East, +Y is South, row 0 is the northern edge
WorldPoint = tuple[float, float]


class Position(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int = Field(ge=0)
    y: int = Field(ge=0)

    def in_bounds(self, width: int, height: int) -> bool:
        """Whether the position lies inside a width x height grid."""
        return self.x < width and self.y < height

    def to_world(self, tile_size: float = TILE_SIZE) -> WorldPoint:
        """Return the world-space coordinate of the tile's corner."""
        return (self.x * tile_size, self.y * tile_size)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y})"
