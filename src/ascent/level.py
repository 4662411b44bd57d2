"""Level definition records produced by generation and hand-authoring."""

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, Field, model_validator

from .exceptions import InvalidDimensionsError
from .terrain_types import TerrainType
from .types import Position, WorldPoint

# Upper bound for climbing_difficulty across generated and authored tiles
MAX_DIFFICULTY = 5.0


class TerrainData(BaseModel, frozen=True):
    """Immutable per-tile terrain attributes."""

    terrain_type: TerrainType
    slope: float = Field(ge=0.0, le=1.0)  # 0.0 = flat, 1.0 = vertical
    stability: float = Field(ge=0.0, le=1.0)
    climbable: bool = False
    climbing_difficulty: float | None = Field(default=None, ge=0.0, le=MAX_DIFFICULTY)
    required_gear: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_climbing_gate(self) -> "TerrainData":
        if self.climbable and self.climbing_difficulty is None:
            raise ValueError("climbable tiles need a climbing_difficulty")
        if not self.climbable:
            if self.climbing_difficulty is not None:
                raise ValueError("non-climbable tiles cannot have a climbing_difficulty")
            if self.required_gear:
                raise ValueError("non-climbable tiles cannot require gear")
        return self

    def traversable_with(self, gear: Iterable[str]) -> bool:
        """Whether a climber carrying `gear` can cross this tile.

        Lava is never traversable. Non-climbable ground is plain walking
        terrain; climbable tiles need every piece of required gear.
        """
        if self.terrain_type == TerrainType.LAVA:
            return False
        if not self.climbable:
            return True
        return set(self.required_gear).issubset(gear)


class WeatherConditions(BaseModel, frozen=True):
    """Baseline weather for a level."""

    base_temperature: float  # degrees Celsius
    wind_speed: float = Field(ge=0.0)
    weather_type: str  # "clear", "snow", "blizzard", ...


class WildlifeSpawn(BaseModel, frozen=True):
    """Wildlife spawn record in world space."""

    species: str
    position: WorldPoint
    aggression: float = Field(ge=0.0, le=1.0)


class NPCSpawn(BaseModel, frozen=True):
    """Non-player character spawn record in world space."""

    name: str
    npc_type: str
    position: WorldPoint
    dialogue_file: str


class ItemSpawn(BaseModel, frozen=True):
    """Item pickup spawn record in world space."""

    item_id: str
    position: WorldPoint
    quantity: int = Field(default=1, ge=1)


class LevelDefinition(BaseModel, frozen=True):
    """Complete description of one playable level."""

    id: str = Field(min_length=1)
    name: str
    description: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    terrain: tuple[tuple[TerrainData, ...], ...]
    start_position: Position
    goal_positions: tuple[Position, ...] = Field(min_length=1)
    weather_conditions: WeatherConditions
    wildlife_spawns: tuple[WildlifeSpawn, ...] = ()
    npc_spawns: tuple[NPCSpawn, ...] = ()
    items: tuple[ItemSpawn, ...] = ()

    @model_validator(mode="after")
    def _check_dimensions(self) -> "LevelDefinition":
        if len(self.terrain) != self.height:
            raise InvalidDimensionsError(
                f"Level {self.id!r} has {len(self.terrain)} rows, expected {self.height}"
            )
        for y, row in enumerate(self.terrain):
            if len(row) != self.width:
                raise InvalidDimensionsError(
                    f"Level {self.id!r} row {y} has {len(row)} tiles, "
                    f"expected {self.width}"
                )
        for position in (self.start_position, *self.goal_positions):
            if not position.in_bounds(self.width, self.height):
                raise InvalidDimensionsError(
                    f"Level {self.id!r} position {position} is outside "
                    f"{self.width}x{self.height} grid"
                )
        return self

    def tile(self, x: int, y: int) -> TerrainData:
        """Get the terrain at a grid coordinate.

        Raises:
            IndexError: If the coordinate is outside the grid.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.terrain[y][x]

    def terrain_counts(self) -> Counter[TerrainType]:
        """Count tiles of each terrain type."""
        return Counter(tile.terrain_type for row in self.terrain for tile in row)
