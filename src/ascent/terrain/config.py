"""Level generation configuration models."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from ..level import WeatherConditions

# Largest grid edge any theme is expected to generate
MAX_GRID_SIZE = 1024


class Band(BaseModel):
    """Rectangular sub-area of the grid, in fractions of width and height."""

    x_min: float = Field(default=0.0, ge=0.0, le=1.0)
    x_max: float = Field(default=1.0, ge=0.0, le=1.0)
    y_min: float = Field(default=0.0, ge=0.0, le=1.0)
    y_max: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_order(self) -> "Band":
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError("band minimum exceeds maximum")
        return self


class ElevationConfig(BaseModel):
    """Elevation field synthesis parameters."""

    steepness: float = Field(default=1.6, gt=0.0, description="Falloff constant k")
    anchor_count_min: int = Field(default=1, ge=1, description="Minimum peak anchors")
    anchor_count_max: int = Field(default=1, ge=1, description="Maximum peak anchors")
    anchor_band: Band = Field(
        default_factory=lambda: Band(x_min=0.35, x_max=0.65, y_min=0.04, y_max=0.2),
        description="Sub-area random anchors are drawn from",
    )
    fixed_anchors: list[tuple[float, float]] | None = Field(
        default=None, description="Anchor fractions (x, y); overrides random anchors"
    )
    sum_anchors: bool = Field(
        default=True, description="Sum anchor contributions instead of using the nearest"
    )
    gradient_strength: float = Field(
        default=0.25, ge=0.0, le=0.3, description="North edge bias"
    )
    noise_amplitude: float = Field(
        default=0.1, ge=0.0, description="Per-tile uniform noise half-width"
    )


class ClassificationConfig(BaseModel):
    """Terrain classification thresholds."""

    snow_threshold: float = Field(default=0.8, description="Elevation above this is snow")
    rock_threshold: float = Field(default=0.6, description="Elevation above this is rock")
    grass_threshold: float = Field(default=0.4, description="Elevation above this is grass")
    coast_threshold: float = Field(
        default=0.2, description="Elevation at or below this is always coast"
    )
    coast_band: float = Field(
        default=0.2, description="Distance-to-coast ratio below which lowland is coast"
    )
    slope_gain: float = Field(default=0.8, description="Slope per unit elevation")
    slope_noise: float = Field(default=0.05, ge=0.0, description="Slope noise half-width")
    climbable_slope: float = Field(
        default=0.5, description="Minimum slope for baseline rock/snow to be climbable"
    )
    gear_difficulty: float = Field(
        default=2.5, description="Baseline difficulty above which snow needs crampons"
    )


class _FeaturePassBase(BaseModel):
    """Parameters shared by every overlay pass."""

    name: str
    count_min: int = Field(default=1, ge=0, description="Minimum regions to place")
    count_max: int = Field(default=3, ge=0, description="Maximum regions to place")
    band: Band = Field(default_factory=Band, description="Where region centers may fall")
    fill_probability: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Per-tile chance of being overwritten"
    )


class _CircularPass(_FeaturePassBase):
    radius_min: int = Field(default=4, ge=0, description="Minimum region radius")
    radius_max: int = Field(default=10, ge=0, description="Maximum region radius")


class GlacierPass(_CircularPass):
    """Glacier cap with a hard core and an icy outer ring."""

    kind: Literal["glacier"] = "glacier"
    core_fraction: float = Field(default=0.55, ge=0.0, le=1.0)
    core_difficulty: tuple[float, float] = (4.0, 5.0)
    ring_difficulty: tuple[float, float] = (2.0, 3.0)


class LavaPass(_CircularPass):
    """Lava field; never climbable."""

    kind: Literal["lava"] = "lava"


class CoastalCliffPass(_FeaturePassBase):
    """Rectangular cliff bands, usually along the southern coast."""

    kind: Literal["coastal_cliff"] = "coastal_cliff"
    width_min: int = Field(default=8, ge=1)
    width_max: int = Field(default=20, ge=1)
    height_min: int = Field(default=2, ge=1)
    height_max: int = Field(default=5, ge=1)
    difficulty: tuple[float, float] = (1.5, 3.5)
    harness_above: float = 3.0


class RockFormationPass(_CircularPass):
    """Scattered climbable rock outcrops."""

    kind: Literal["rock_formation"] = "rock_formation"
    difficulty: tuple[float, float] = (1.0, 3.0)
    harness_above: float = 2.5


class VolcanicPeakPass(_CircularPass):
    """Volcano with a lava crater and steep rock flanks."""

    kind: Literal["volcanic_peak"] = "volcanic_peak"
    crater_fraction: float = Field(default=0.35, ge=0.0, le=1.0)
    flank_difficulty: tuple[float, float] = (3.0, 4.5)


FeaturePass = Annotated[
    GlacierPass | LavaPass | CoastalCliffPass | RockFormationPass | VolcanicPeakPass,
    Field(discriminator="kind"),
]


class WildlifeEntry(BaseModel):
    """One species a theme can spawn."""

    species: str
    aggression_min: float = Field(default=0.0, ge=0.0, le=1.0)
    aggression_max: float = Field(default=0.0, ge=0.0, le=1.0)
    band: Band = Field(default_factory=Band)
    weight: float = Field(default=1.0, gt=0.0)


class NPCEntry(BaseModel):
    """One NPC type a theme can spawn."""

    npc_type: str
    title: str
    band: Band = Field(default_factory=Band)
    weight: float = Field(default=1.0, gt=0.0)


class PopulationConfig(BaseModel):
    """Spawn count ranges and pools for one theme."""

    wildlife_count_min: int = Field(default=2, ge=0)
    wildlife_count_max: int = Field(default=6, ge=0)
    wildlife: list[WildlifeEntry] = Field(default_factory=list)

    npc_count_min: int = Field(default=1, ge=0)
    npc_count_max: int = Field(default=3, ge=0)
    npc_names: list[str] = Field(default_factory=lambda: ["Erik"])
    npcs: list[NPCEntry] = Field(default_factory=list)

    item_count_min: int = Field(default=3, ge=0)
    item_count_max: int = Field(default=8, ge=0)
    items: list[str] = Field(default_factory=list)
    item_band: Band = Field(default_factory=Band)
    multi_quantity_chance: float = Field(
        default=0.15, ge=0.0, le=1.0, description="Chance an item spawns as a stack"
    )
    quantity_max: int = Field(default=3, ge=1, description="Largest stack size")


class ThemeConfig(BaseModel):
    """Named generation profile: anchors, pass order, pools, weather."""

    name: str
    display_name: str
    description: str
    elevation: ElevationConfig = Field(default_factory=ElevationConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    passes: list[FeaturePass] = Field(default_factory=list)
    population: PopulationConfig = Field(default_factory=PopulationConfig)
    weather: WeatherConditions
    start_band: Band = Field(
        default_factory=lambda: Band(x_min=0.1, x_max=0.9, y_min=0.7, y_max=1.0),
        description="Where the climber starts, usually the coast",
    )


class LevelConfig(BaseModel):
    """Complete configuration for generating one level."""

    seed: int | None = Field(default=None, description="Random seed (None = fresh entropy)")
    theme: str = Field(default="mountain", description="Registered theme name")
    width: int = Field(default=200, description="Level width in tiles")
    height: int = Field(default=150, description="Level height in tiles")
    level_id: str | None = Field(
        default=None, description="Level identifier (None = derived from theme)"
    )

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )

    def resolve_level_id(self, theme_name: str | None = None) -> str:
        """Explicit level_id, else `<theme>_<w>x<h>` with `_<seed>` when seeded."""
        if self.level_id is not None:
            return self.level_id
        level_id = f"{theme_name or self.theme}_{self.width}x{self.height}"
        if self.seed is not None:
            level_id = f"{level_id}_{self.seed}"
        return level_id
