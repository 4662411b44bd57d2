"""Built-in generation themes."""

from ..exceptions import UnknownThemeError
from ..level import WeatherConditions
from .config import (
    Band,
    CoastalCliffPass,
    ElevationConfig,
    GlacierPass,
    LavaPass,
    NPCEntry,
    PopulationConfig,
    RockFormationPass,
    ThemeConfig,
    VolcanicPeakPass,
    WildlifeEntry,
)

NORSE_NAMES = [
    "Erik", "Björn", "Freydis", "Gudrun", "Leif", "Sigrid", "Ragnar",
    "Astrid", "Halldor", "Ingrid", "Thorvald", "Helga",
]

_LOWLANDS = Band(y_min=0.55, y_max=1.0)
_MIDLANDS = Band(y_min=0.3, y_max=0.75)
_HIGHLANDS = Band(x_min=0.1, x_max=0.9, y_min=0.0, y_max=0.35)

MOUNTAIN = ThemeConfig(
    name="mountain",
    display_name="Northern Ascent",
    description="Climb from the windswept coast to a glaciated summit",
    passes=[
        GlacierPass(
            name="glacier_caps",
            count_min=2,
            count_max=4,
            band=Band(x_min=0.2, x_max=0.8, y_min=0.0, y_max=0.3),
            radius_min=5,
            radius_max=12,
            fill_probability=0.85,
        ),
        LavaPass(
            name="lava_fields",
            count_min=1,
            count_max=3,
            band=Band(x_min=0.1, x_max=0.9, y_min=0.3, y_max=0.6),
            radius_min=3,
            radius_max=7,
            fill_probability=0.75,
        ),
        CoastalCliffPass(
            name="coastal_cliffs",
            count_min=2,
            count_max=4,
            band=Band(y_min=0.5, y_max=1.0),
        ),
        RockFormationPass(
            name="rock_formations",
            count_min=4,
            count_max=8,
            radius_min=2,
            radius_max=5,
            fill_probability=0.6,
        ),
    ],
    population=PopulationConfig(
        wildlife_count_min=3,
        wildlife_count_max=8,
        wildlife=[
            WildlifeEntry(species="sheep", band=_LOWLANDS, weight=3.0),
            WildlifeEntry(species="horse", band=_LOWLANDS, weight=2.0),
            WildlifeEntry(species="goat", aggression_max=0.2, band=_MIDLANDS),
            WildlifeEntry(
                species="wolf", aggression_min=0.5, aggression_max=0.9, band=_MIDLANDS
            ),
            WildlifeEntry(
                species="bear", aggression_min=0.6, aggression_max=1.0, band=_HIGHLANDS,
                weight=0.5,
            ),
        ],
        npc_names=NORSE_NAMES,
        npcs=[
            NPCEntry(npc_type="guide", title="Guide", band=_LOWLANDS, weight=2.0),
            NPCEntry(npc_type="climber", title="Climber", band=_MIDLANDS),
            NPCEntry(npc_type="viking", title="Viking", band=_LOWLANDS),
            NPCEntry(npc_type="mage", title="Mage", band=_HIGHLANDS, weight=0.5),
            NPCEntry(npc_type="hermit", title="Hermit", band=_HIGHLANDS, weight=0.5),
        ],
        items=["rope", "harness", "ice_axe", "crampons", "warm_cloak", "rune_stone"],
    ),
    weather=WeatherConditions(base_temperature=-5.0, wind_speed=15.0, weather_type="snow"),
)

COASTAL = ThemeConfig(
    name="coastal",
    display_name="Sea Cliffs",
    description="Traverse the basalt cliffs along a stormy shoreline",
    elevation=ElevationConfig(
        steepness=2.2,
        anchor_count_min=2,
        anchor_count_max=3,
        anchor_band=Band(x_min=0.1, x_max=0.9, y_min=0.05, y_max=0.25),
        gradient_strength=0.15,
    ),
    passes=[
        CoastalCliffPass(
            name="coastal_cliffs",
            count_min=4,
            count_max=7,
            band=Band(y_min=0.5, y_max=1.0),
            width_min=10,
            width_max=30,
        ),
        RockFormationPass(
            name="rock_formations",
            count_min=3,
            count_max=6,
            radius_min=2,
            radius_max=4,
            fill_probability=0.6,
        ),
    ],
    population=PopulationConfig(
        wildlife=[
            WildlifeEntry(species="sheep", band=_LOWLANDS, weight=2.0),
            WildlifeEntry(species="eagle", aggression_max=0.3, band=_HIGHLANDS),
            WildlifeEntry(species="dog", aggression_max=0.4, band=_LOWLANDS),
        ],
        npc_names=NORSE_NAMES,
        npcs=[
            NPCEntry(npc_type="trader", title="Trader", band=_LOWLANDS, weight=2.0),
            NPCEntry(npc_type="guide", title="Guide", band=_LOWLANDS),
        ],
        items=["rope", "harness", "jacket", "tent"],
        multi_quantity_chance=0.25,
    ),
    weather=WeatherConditions(base_temperature=8.0, wind_speed=20.0, weather_type="storm"),
)

VOLCANIC = ThemeConfig(
    name="volcanic",
    display_name="Fire and Ice",
    description="Skirt the lava flows to reach a smoking crater rim",
    elevation=ElevationConfig(
        steepness=1.4,
        fixed_anchors=[(0.5, 0.2)],
        gradient_strength=0.2,
    ),
    passes=[
        VolcanicPeakPass(
            name="volcanic_peak",
            count_min=1,
            count_max=1,
            band=Band(x_min=0.45, x_max=0.55, y_min=0.15, y_max=0.25),
            radius_min=8,
            radius_max=14,
            fill_probability=0.95,
        ),
        LavaPass(
            name="lava_fields",
            count_min=3,
            count_max=6,
            band=Band(x_min=0.1, x_max=0.9, y_min=0.2, y_max=0.7),
            radius_min=3,
            radius_max=8,
        ),
        RockFormationPass(
            name="rock_formations",
            count_min=3,
            count_max=6,
            radius_min=2,
            radius_max=5,
            fill_probability=0.6,
        ),
    ],
    population=PopulationConfig(
        wildlife_count_min=1,
        wildlife_count_max=4,
        wildlife=[
            WildlifeEntry(species="goat", aggression_max=0.2, band=_MIDLANDS),
            WildlifeEntry(
                species="puma", aggression_min=0.4, aggression_max=0.8, band=_MIDLANDS
            ),
        ],
        npc_names=NORSE_NAMES,
        npcs=[
            NPCEntry(npc_type="mage", title="Mage", band=_HIGHLANDS),
            NPCEntry(npc_type="hermit", title="Hermit", band=_MIDLANDS),
        ],
        items=["rope", "harness", "warm_cloak", "rune_stone"],
    ),
    weather=WeatherConditions(base_temperature=18.0, wind_speed=10.0, weather_type="ash"),
)

THEMES: dict[str, ThemeConfig] = {
    theme.name: theme for theme in (MOUNTAIN, COASTAL, VOLCANIC)
}


def get_theme(name: str) -> ThemeConfig:
    """Look up a built-in theme.

    Raises:
        UnknownThemeError: If no theme has that name.
    """
    try:
        return THEMES[name]
    except KeyError:
        raise UnknownThemeError(
            f"Unknown theme {name!r}. Available themes: {list_themes()}"
        ) from None


def list_themes() -> list[str]:
    """Names of the built-in themes."""
    return sorted(THEMES)
