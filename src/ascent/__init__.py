"""Level generation for a climbing-survival game."""

from .catalog import (
    create_iceland_glacier_level,
    create_tutorial_level,
    fallback_level,
    get_catalog_level,
    list_catalog,
    load_level_or_fallback,
    save_sample_levels,
)
from .exceptions import (
    InvalidDimensionsError,
    LevelError,
    LevelNotFoundError,
    LevelParseError,
    LevelWriteError,
    UnknownThemeError,
)
from .level import (
    ItemSpawn,
    LevelDefinition,
    NPCSpawn,
    TerrainData,
    WeatherConditions,
    WildlifeSpawn,
)
from .persistence import level_path, load_level, save_level
from .terrain import LevelConfig, generate_level
from .terrain_types import GearType, TerrainType
from .types import TILE_SIZE, Position

__all__ = [
    # Types
    "Position",
    "TILE_SIZE",
    "TerrainType",
    "GearType",
    # Level records
    "LevelDefinition",
    "TerrainData",
    "WeatherConditions",
    "WildlifeSpawn",
    "NPCSpawn",
    "ItemSpawn",
    # Generation
    "LevelConfig",
    "generate_level",
    # Catalog
    "create_tutorial_level",
    "create_iceland_glacier_level",
    "fallback_level",
    "get_catalog_level",
    "list_catalog",
    "save_sample_levels",
    "load_level_or_fallback",
    # Persistence
    "level_path",
    "load_level",
    "save_level",
    # Exceptions
    "LevelError",
    "LevelNotFoundError",
    "LevelParseError",
    "LevelWriteError",
    "InvalidDimensionsError",
    "UnknownThemeError",
]
