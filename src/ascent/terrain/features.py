"""Feature compositing: ordered overlay passes that rewrite classified tiles.

Each pass places a random number of regions inside its band and, inside
each region, overwrites tiles independently with the pass's fill
probability, producing ragged patches instead of perfect shapes. Passes
run in the order given, so later passes win where regions overlap.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..level import MAX_DIFFICULTY
from ..terrain_types import GearType, TerrainType
from .config import (
    CoastalCliffPass,
    FeaturePass,
    GlacierPass,
    LavaPass,
    RockFormationPass,
    VolcanicPeakPass,
)
from .layers import TerrainLayers
from .regions import RegionWindow, circle_window, random_point_in_band, rect_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassReport:
    """Outcome of one feature pass."""

    name: str
    kind: str
    regions: int
    tiles: int


def _draw_count(rng: np.random.Generator, low: int, high: int) -> int:
    return int(rng.integers(low, max(high, low) + 1))


def _draw_difficulty(
    rng: np.random.Generator,
    bounds: tuple[float, float],
    size: tuple[int, ...] | None = None,
) -> float | NDArray[np.float32]:
    """Uniform difficulty clipped to [0, MAX_DIFFICULTY]."""
    low, high = sorted(bounds)
    value = rng.uniform(low, high, size=size)
    if size is None:
        return float(min(max(value, 0.0), MAX_DIFFICULTY))
    return np.clip(value, 0.0, MAX_DIFFICULTY).astype(np.float32)


def _circle_regions(
    layers: TerrainLayers,
    feature_pass: GlacierPass | LavaPass | RockFormationPass | VolcanicPeakPass,
    rng: np.random.Generator,
) -> list[RegionWindow]:
    height, width = layers.shape
    windows = []
    for _ in range(_draw_count(rng, feature_pass.count_min, feature_pass.count_max)):
        cx, cy = random_point_in_band(rng, feature_pass.band, width, height)
        radius = _draw_count(rng, feature_pass.radius_min, feature_pass.radius_max)
        windows.append(circle_window(cx, cy, radius, width, height))
    return windows


def _fill(
    window: RegionWindow,
    probability: float,
    rng: np.random.Generator,
) -> NDArray[np.bool_]:
    """Tiles of the window that survive the per-tile fill roll."""
    return window.mask & (rng.random(window.mask.shape) < probability)


def apply_glacier(
    layers: TerrainLayers,
    feature_pass: GlacierPass,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Glacier core needing ice axe and crampons, icy ring needing an ice axe."""
    windows = _circle_regions(layers, feature_pass, rng)
    tiles = 0
    for window in windows:
        filled = _fill(window, feature_pass.fill_probability, rng)
        core = filled & (window.distance <= feature_pass.core_fraction)
        ring = filled & ~core

        tiles += layers.paint(
            window,
            core,
            TerrainType.GLACIER,
            slope=0.8,
            stability=TerrainType.GLACIER.base_stability,
            difficulty=_draw_difficulty(rng, feature_pass.core_difficulty),
            gear=(GearType.ICE_AXE, GearType.CRAMPONS),
        )
        tiles += layers.paint(
            window,
            ring,
            TerrainType.ICE,
            slope=0.6,
            stability=TerrainType.ICE.base_stability,
            difficulty=_draw_difficulty(rng, feature_pass.ring_difficulty),
            gear=(GearType.ICE_AXE,),
        )
    return len(windows), tiles


def apply_lava(
    layers: TerrainLayers,
    feature_pass: LavaPass,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Lava fields: never climbable, no gear."""
    windows = _circle_regions(layers, feature_pass, rng)
    tiles = 0
    for window in windows:
        filled = _fill(window, feature_pass.fill_probability, rng)
        tiles += layers.paint(
            window,
            filled,
            TerrainType.LAVA,
            slope=0.1,
            stability=TerrainType.LAVA.base_stability,
        )
    return len(windows), tiles


def apply_coastal_cliff(
    layers: TerrainLayers,
    feature_pass: CoastalCliffPass,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Rectangular rock bands needing rope, and a harness when hard."""
    height, width = layers.shape
    count = _draw_count(rng, feature_pass.count_min, feature_pass.count_max)
    tiles = 0
    for _ in range(count):
        cx, cy = random_point_in_band(rng, feature_pass.band, width, height)
        rect_width = _draw_count(rng, feature_pass.width_min, feature_pass.width_max)
        rect_height = _draw_count(rng, feature_pass.height_min, feature_pass.height_max)
        window = rect_window(cx, cy, rect_width, rect_height, width, height)

        difficulty = _draw_difficulty(rng, feature_pass.difficulty)
        gear = [GearType.ROPE]
        if difficulty > feature_pass.harness_above:
            gear.append(GearType.HARNESS)

        filled = _fill(window, feature_pass.fill_probability, rng)
        tiles += layers.paint(
            window,
            filled,
            TerrainType.ROCK,
            slope=0.9,
            stability=0.7,
            difficulty=difficulty,
            gear=gear,
        )
    return count, tiles


def apply_rock_formation(
    layers: TerrainLayers,
    feature_pass: RockFormationPass,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Rock outcrops with per-tile difficulty; harder tiles add a harness."""
    windows = _circle_regions(layers, feature_pass, rng)
    tiles = 0
    for window in windows:
        filled = _fill(window, feature_pass.fill_probability, rng)
        difficulty = _draw_difficulty(rng, feature_pass.difficulty, window.mask.shape)
        slope = np.clip(0.4 + difficulty / MAX_DIFFICULTY * 0.5, 0.0, 1.0)
        hard = difficulty > feature_pass.harness_above

        tiles += layers.paint(
            window,
            filled & ~hard,
            TerrainType.ROCK,
            slope=slope,
            stability=TerrainType.ROCK.base_stability,
            difficulty=difficulty,
            gear=(GearType.ROPE,),
        )
        tiles += layers.paint(
            window,
            filled & hard,
            TerrainType.ROCK,
            slope=slope,
            stability=TerrainType.ROCK.base_stability,
            difficulty=difficulty,
            gear=(GearType.ROPE, GearType.HARNESS),
        )
    return len(windows), tiles


def apply_volcanic_peak(
    layers: TerrainLayers,
    feature_pass: VolcanicPeakPass,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Lava crater ringed by steep rock flanks needing rope and harness."""
    windows = _circle_regions(layers, feature_pass, rng)
    tiles = 0
    for window in windows:
        filled = _fill(window, feature_pass.fill_probability, rng)
        crater = filled & (window.distance <= feature_pass.crater_fraction)
        flank = filled & ~crater

        tiles += layers.paint(
            window,
            crater,
            TerrainType.LAVA,
            slope=0.3,
            stability=TerrainType.LAVA.base_stability,
        )
        tiles += layers.paint(
            window,
            flank,
            TerrainType.ROCK,
            slope=0.85,
            stability=0.6,
            difficulty=_draw_difficulty(rng, feature_pass.flank_difficulty),
            gear=(GearType.ROPE, GearType.HARNESS),
        )
    return len(windows), tiles


_PASS_HANDLERS: dict[str, Callable[..., tuple[int, int]]] = {
    "glacier": apply_glacier,
    "lava": apply_lava,
    "coastal_cliff": apply_coastal_cliff,
    "rock_formation": apply_rock_formation,
    "volcanic_peak": apply_volcanic_peak,
}


def apply_feature_pass(
    layers: TerrainLayers,
    feature_pass: FeaturePass,
    rng: np.random.Generator,
) -> PassReport:
    """Run one overlay pass in place.

    Args:
        layers: Working terrain layers, modified in place.
        feature_pass: Pass configuration; its `kind` selects the rules.
        rng: Random number generator.

    Returns:
        PassReport with region and tile counts.
    """
    handler = _PASS_HANDLERS[feature_pass.kind]
    regions, tiles = handler(layers, feature_pass, rng)
    return PassReport(
        name=feature_pass.name, kind=feature_pass.kind, regions=regions, tiles=tiles
    )


class FeaturePipeline:
    """Ordered, named sequence of overlay passes for one theme."""

    def __init__(self, passes: Sequence[FeaturePass]):
        self.passes = list(passes)

    def pass_names(self) -> list[str]:
        """Names of the passes in execution order."""
        return [p.name for p in self.passes]

    def apply(
        self,
        layers: TerrainLayers,
        rng: np.random.Generator,
    ) -> list[PassReport]:
        """Run every pass in order, later passes overwriting earlier ones."""
        reports = []
        for feature_pass in self.passes:
            report = apply_feature_pass(layers, feature_pass, rng)
            logger.info(
                f"Pass {report.name} ({report.kind}): "
                f"{report.regions} regions, {report.tiles} tiles"
            )
            reports.append(report)
        return reports
