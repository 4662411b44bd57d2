"""Main level generation orchestration."""

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from ..level import LevelDefinition
from ..terrain_types import TerrainType
from ..types import TILE_SIZE, Position
from .classification import classify_terrain
from .config import LevelConfig, ThemeConfig
from .elevation import check_dimensions, choose_anchors, make_elevation
from .features import FeaturePipeline, PassReport
from .layers import TerrainLayers, terrain_value
from .population import Population, populate
from .regions import random_point_in_band
from .themes import get_theme

logger = logging.getLogger(__name__)


class GenerationResult:
    """Result of level generation with all intermediate data."""

    def __init__(
        self,
        config: LevelConfig,
        theme: ThemeConfig,
        elevation: NDArray[np.float32],
        anchors: list[tuple[int, int]],
        layers: TerrainLayers,
        reports: list[PassReport],
        population: Population,
        start: Position,
        goal: Position,
    ):
        self.config = config
        self.theme = theme
        self.elevation = elevation
        self.anchors = anchors
        self.layers = layers
        self.reports = reports
        self.population = population
        self.start = start
        self.goal = goal


def generate_terrain(
    config: LevelConfig,
    rng: np.random.Generator | None = None,
    theme: ThemeConfig | None = None,
) -> GenerationResult:
    """Run the full generation pipeline.

    Args:
        config: Level generation configuration.
        rng: Random number generator; built from `config.seed` when None.
        theme: Theme to use instead of looking up `config.theme`.

    Returns:
        GenerationResult with terrain layers, spawns and start/goal.

    Raises:
        InvalidDimensionsError: If the grid size is unsupported.
        UnknownThemeError: If the theme is not registered.
    """
    width, height = config.width, config.height
    check_dimensions(width, height)
    if theme is None:
        theme = get_theme(config.theme)
    if rng is None:
        rng = np.random.default_rng(config.seed)

    logger.info(
        f"Generating {theme.name} level {width}x{height} with seed {config.seed}"
    )

    # Stage A: Elevation
    logger.info("Stage A: Synthesizing elevation...")
    anchors = choose_anchors(width, height, theme.elevation, rng)
    elevation = make_elevation(width, height, anchors, theme.elevation, rng)

    # Stage B: Classification
    logger.info("Stage B: Classifying terrain...")
    layers = classify_terrain(elevation, theme.classification, rng)

    # Stage C: Feature passes
    pipeline = FeaturePipeline(theme.passes)
    logger.info(f"Stage C: Compositing features {pipeline.pass_names()}...")
    reports = pipeline.apply(layers, rng)

    # Stage D: Population
    logger.info("Stage D: Populating...")
    population = populate(width, height, theme.population, rng, TILE_SIZE)
    logger.info(
        f"Spawned {len(population.wildlife)} wildlife, {len(population.npcs)} NPCs, "
        f"{len(population.items)} items"
    )

    start_x, start_y = random_point_in_band(rng, theme.start_band, width, height)
    start = Position(x=start_x, y=start_y)
    goal = _summit(elevation, anchors)

    _log_terrain_stats(layers)

    if config.debug_output_dir:
        _dump_debug_images(Path(config.debug_output_dir), elevation, layers)

    return GenerationResult(
        config=config,
        theme=theme,
        elevation=elevation,
        anchors=anchors,
        layers=layers,
        reports=reports,
        population=population,
        start=start,
        goal=goal,
    )


def _summit(
    elevation: NDArray[np.float32],
    anchors: list[tuple[int, int]],
) -> Position:
    """Goal position: the highest of the peak anchors."""
    best = max(anchors, key=lambda anchor: elevation[anchor[1], anchor[0]])
    return Position(x=best[0], y=best[1])


def assemble_level(result: GenerationResult) -> LevelDefinition:
    """Package a generation result as an immutable LevelDefinition."""
    config, theme = result.config, result.theme
    return LevelDefinition(
        id=config.resolve_level_id(theme.name),
        name=theme.display_name,
        description=theme.description,
        width=config.width,
        height=config.height,
        terrain=result.layers.to_rows(),
        start_position=result.start,
        goal_positions=(result.goal,),
        weather_conditions=theme.weather,
        wildlife_spawns=tuple(result.population.wildlife),
        npc_spawns=tuple(result.population.npcs),
        items=tuple(result.population.items),
    )


def generate_level(
    config: LevelConfig,
    rng: np.random.Generator | None = None,
    theme: ThemeConfig | None = None,
) -> LevelDefinition:
    """Generate a complete level definition.

    Args:
        config: Level generation configuration.
        rng: Random number generator; built from `config.seed` when None.
        theme: Theme to use instead of looking up `config.theme`.

    Returns:
        Immutable LevelDefinition.
    """
    return assemble_level(generate_terrain(config, rng, theme))


def _log_terrain_stats(layers: TerrainLayers) -> None:
    """Log terrain generation statistics."""
    total = layers.terrain.size

    logger.info(f"Terrain stats ({total:,} tiles):")
    for terrain_type in TerrainType:
        count = layers.count(terrain_type)
        pct = count / total * 100
        logger.info(f"  {terrain_type.value}: {count:,} ({pct:.1f}%)")

    climbable_pct = np.count_nonzero(layers.climbable) / total * 100
    logger.info(f"  Climbable: {climbable_pct:.1f}%")


# Debug image colour per terrain type, keyed by storage value order
_TERRAIN_COLORS: dict[TerrainType, str] = {
    TerrainType.SOIL: "peru",
    TerrainType.ROCK: "dimgray",
    TerrainType.ICE: "lightblue",
    TerrainType.SNOW: "white",
    TerrainType.GRASS: "forestgreen",
    TerrainType.GLACIER: "steelblue",
    TerrainType.LAVA: "orangered",
    TerrainType.COAST: "khaki",
}


def _dump_debug_images(
    output_dir: Path,
    elevation: NDArray[np.float32],
    layers: TerrainLayers,
) -> list[Path]:
    """Render elevation and terrain layers as PNGs for inspection.

    Writes elevation.png, terrain.png, slope.png, difficulty.png and
    gear.png into `output_dir`. Terrain uses one fixed colour per
    TerrainType; difficulty is blank on non-climbable tiles.

    Returns:
        Paths written, empty when matplotlib is not installed.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.colors import ListedColormap
        from matplotlib.patches import Patch
    except ImportError:
        logger.warning("matplotlib not available, skipping debug images")
        return []

    output_dir.mkdir(parents=True, exist_ok=True)

    ordered = sorted(TerrainType, key=terrain_value)
    terrain_cmap = ListedColormap([_TERRAIN_COLORS[t] for t in ordered])
    difficulty = np.ma.masked_invalid(layers.difficulty)

    # name -> (array, imshow kwargs)
    images = {
        "elevation": (elevation, {"cmap": "terrain"}),
        "terrain": (
            layers.terrain,
            {
                "cmap": terrain_cmap,
                "vmin": 0,
                "vmax": len(ordered) - 1,
                "interpolation": "nearest",
            },
        ),
        "slope": (layers.slope, {"cmap": "magma", "vmin": 0.0, "vmax": 1.0}),
        "difficulty": (difficulty, {"cmap": "viridis", "vmin": 0.0, "vmax": 5.0}),
        "gear": (
            layers.gear,
            {"cmap": "tab20", "vmin": 0, "vmax": 15, "interpolation": "nearest"},
        ),
    }

    written = []
    for name, (arr, kwargs) in images.items():
        fig, ax = plt.subplots(figsize=(10, 10))
        im = ax.imshow(arr, **kwargs)
        if name == "terrain":
            handles = [Patch(color=_TERRAIN_COLORS[t], label=t.value) for t in ordered]
            ax.legend(handles=handles, loc="upper right", fontsize="small")
        else:
            fig.colorbar(im, ax=ax, shrink=0.7)

        ax.set_title(f"{name} ({layers.shape[1]}x{layers.shape[0]})")
        ax.axis("off")

        path = output_dir / f"{name}.png"
        fig.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        written.append(path)

    logger.info(f"Debug images saved to {output_dir}")
    return written
