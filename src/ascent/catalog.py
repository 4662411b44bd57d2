"""Hand-authored levels and batch export of the level catalog."""

from collections.abc import Callable
from pathlib import Path

import structlog

from .config import CatalogConfig
from .exceptions import LevelError, LevelNotFoundError, LevelParseError
from .level import (
    ItemSpawn,
    LevelDefinition,
    NPCSpawn,
    TerrainData,
    WeatherConditions,
    WildlifeSpawn,
)
from .persistence import level_path, load_level, save_level
from .terrain.generator import generate_level
from .terrain_types import GearType, TerrainType
from .types import Position

logger = structlog.get_logger()


def _grid(width: int, height: int, fill: TerrainData) -> list[list[TerrainData]]:
    return [[fill] * width for _ in range(height)]


def _freeze(grid: list[list[TerrainData]]) -> tuple[tuple[TerrainData, ...], ...]:
    return tuple(tuple(row) for row in grid)


def create_tutorial_level() -> LevelDefinition:
    """First Steps: a short rock route with a strip of ice."""
    width, height = 20, 15
    terrain = _grid(
        width,
        height,
        TerrainData(terrain_type=TerrainType.SOIL, slope=0.0, stability=1.0),
    )

    # Simple climbing route
    route = TerrainData(
        terrain_type=TerrainType.ROCK,
        slope=0.6,
        stability=0.8,
        climbable=True,
        climbing_difficulty=1.0,
    )
    for y in range(5, 12):
        for x in range(8, 12):
            terrain[y][x] = route

    ice = TerrainData(
        terrain_type=TerrainType.ICE,
        slope=0.8,
        stability=0.6,
        climbable=True,
        climbing_difficulty=2.0,
        required_gear=(GearType.ICE_AXE.value,),
    )
    for x in range(10, 14):
        terrain[10][x] = ice

    return LevelDefinition(
        id="tutorial_01",
        name="First Steps",
        description="A gentle introduction to mountain climbing",
        width=width,
        height=height,
        terrain=_freeze(terrain),
        start_position=Position(x=2, y=2),
        goal_positions=(Position(x=15, y=12),),
        weather_conditions=WeatherConditions(
            base_temperature=10.0, wind_speed=5.0, weather_type="clear"
        ),
        wildlife_spawns=(
            WildlifeSpawn(species="sheep", position=(100.0, 150.0), aggression=0.0),
        ),
        npc_spawns=(
            NPCSpawn(
                name="Erik the Guide",
                npc_type="guide",
                position=(150.0, 100.0),
                dialogue_file="erik_guide.json",
            ),
        ),
        items=(ItemSpawn(item_id="rope", position=(200.0, 80.0), quantity=1),),
    )


def create_iceland_glacier_level() -> LevelDefinition:
    """Vatnajökull Challenge: a glacier crossing with a crevasse line."""
    width, height = 30, 25
    terrain = _grid(
        width,
        height,
        TerrainData(terrain_type=TerrainType.SNOW, slope=0.2, stability=0.7),
    )

    glacier = TerrainData(
        terrain_type=TerrainType.ICE,
        slope=0.9,
        stability=0.5,
        climbable=True,
        climbing_difficulty=4.0,
        required_gear=(GearType.ICE_AXE.value, GearType.CRAMPONS.value),
    )
    for y in range(10, 20):
        for x in range(5, 25):
            terrain[y][x] = glacier

    # Crevasses
    crevasse = TerrainData(
        terrain_type=TerrainType.ICE,
        slope=1.0,
        stability=0.1,
        climbable=True,
        climbing_difficulty=5.0,
        required_gear=(GearType.ROPE.value, GearType.HARNESS.value),
    )
    for x in range(12, 18):
        terrain[15][x] = crevasse

    return LevelDefinition(
        id="iceland_glacier_01",
        name="Vatnajökull Challenge",
        description=(
            "Scale the mighty Icelandic glacier with proper gear and Viking courage"
        ),
        width=width,
        height=height,
        terrain=_freeze(terrain),
        start_position=Position(x=2, y=5),
        goal_positions=(Position(x=25, y=22),),
        weather_conditions=WeatherConditions(
            base_temperature=-15.0, wind_speed=25.0, weather_type="blizzard"
        ),
        wildlife_spawns=(
            WildlifeSpawn(species="wolf", position=(300.0, 200.0), aggression=0.7),
            WildlifeSpawn(species="horse", position=(100.0, 100.0), aggression=0.0),
        ),
        npc_spawns=(
            NPCSpawn(
                name="Björn the Viking",
                npc_type="viking",
                position=(400.0, 150.0),
                dialogue_file="bjorn_viking.json",
            ),
            NPCSpawn(
                name="Freydis the Mage",
                npc_type="mage",
                position=(500.0, 300.0),
                dialogue_file="freydis_mage.json",
            ),
        ),
        items=(
            ItemSpawn(item_id="warm_cloak", position=(250.0, 180.0), quantity=1),
            ItemSpawn(item_id="rune_stone", position=(450.0, 250.0), quantity=1),
        ),
    )


def fallback_level() -> LevelDefinition:
    """Minimal built-in grid used when a level file can't be loaded."""
    width, height = 10, 10
    return LevelDefinition(
        id="fallback",
        name="Base Camp",
        description="Flat ground used when a level fails to load",
        width=width,
        height=height,
        terrain=_freeze(
            _grid(
                width,
                height,
                TerrainData(terrain_type=TerrainType.SOIL, slope=0.0, stability=1.0),
            )
        ),
        start_position=Position(x=1, y=1),
        goal_positions=(Position(x=8, y=8),),
        weather_conditions=WeatherConditions(
            base_temperature=10.0, wind_speed=0.0, weather_type="clear"
        ),
    )


CATALOG: dict[str, Callable[[], LevelDefinition]] = {
    "tutorial_01": create_tutorial_level,
    "iceland_glacier_01": create_iceland_glacier_level,
}


def list_catalog() -> list[str]:
    """Ids of the hand-authored levels."""
    return list(CATALOG)


def get_catalog_level(level_id: str) -> LevelDefinition:
    """Build a hand-authored level by id.

    Raises:
        KeyError: If no hand-authored level has that id.
    """
    if level_id not in CATALOG:
        raise KeyError(
            f"No hand-authored level {level_id!r}. Available: {list_catalog()}"
        )
    return CATALOG[level_id]()


def load_level_or_fallback(path: Path) -> LevelDefinition:
    """Load a level, falling back to the built-in grid on any load error."""
    try:
        return load_level(path)
    except LevelNotFoundError as e:
        logger.warning("level_missing_using_fallback", path=str(path), error=str(e))
    except LevelParseError as e:
        logger.warning("level_corrupt_using_fallback", path=str(path), error=str(e))
    return fallback_level()


def save_sample_levels(
    directory: Path,
    config: CatalogConfig | None = None,
) -> list[Path]:
    """Write the hand-authored catalog and configured procedural levels.

    Each level is generated independently with its own random generator.

    Args:
        directory: Output directory, created if missing.
        config: Batch configuration; defaults to CatalogConfig().

    Returns:
        Paths of the written level files, catalog levels first.

    Raises:
        LevelWriteError: If a level can't be written.
    """
    if config is None:
        config = CatalogConfig()

    written: list[Path] = []
    for level_id in list_catalog():
        path = level_path(directory, level_id)
        save_level(get_catalog_level(level_id), path)
        written.append(path)

    for level_config in config.levels:
        try:
            level = generate_level(level_config)
        except LevelError as e:
            logger.error(
                "level_generation_failed", theme=level_config.theme, error=str(e)
            )
            raise
        path = level_path(directory, level.id)
        save_level(level, path)
        written.append(path)

    logger.info("sample_levels_saved", directory=str(directory), count=len(written))
    return written
