"""Population scattering: wildlife, NPC and item spawns.

Placement is purely statistical. Spawns are not checked against each
other or against terrain hazards.
"""

from dataclasses import dataclass, field
from typing import TypeVar

import numpy as np

from ..level import ItemSpawn, NPCSpawn, WildlifeSpawn
from ..types import TILE_SIZE, WorldPoint
from .config import Band, NPCEntry, PopulationConfig, WildlifeEntry
from .regions import random_point_in_band

EntryT = TypeVar("EntryT", WildlifeEntry, NPCEntry)


@dataclass
class Population:
    """Spawn lists for one level, in generation order."""

    wildlife: list[WildlifeSpawn] = field(default_factory=list)
    npcs: list[NPCSpawn] = field(default_factory=list)
    items: list[ItemSpawn] = field(default_factory=list)


def _draw_count(rng: np.random.Generator, low: int, high: int) -> int:
    return int(rng.integers(low, max(high, low) + 1))


def _world_point(
    rng: np.random.Generator,
    band: Band,
    width: int,
    height: int,
    tile_size: float,
) -> WorldPoint:
    """Random world-space point inside a tile drawn from the band."""
    x, y = random_point_in_band(rng, band, width, height)
    # Upper bound keeps the rounded point inside the tile
    jitter_x, jitter_y = rng.uniform(0.0, tile_size - 0.01, size=2)
    return (
        round(x * tile_size + float(jitter_x), 2),
        round(y * tile_size + float(jitter_y), 2),
    )


def _pick_weighted(rng: np.random.Generator, entries: list[EntryT]) -> EntryT:
    weights = np.array([entry.weight for entry in entries], dtype=np.float64)
    index = rng.choice(len(entries), p=weights / weights.sum())
    return entries[int(index)]


def dialogue_reference(name: str, npc_type: str) -> str:
    """Dialogue file for an NPC, e.g. "erik_guide.json"."""
    slug = "_".join(name.lower().split())
    return f"{slug}_{npc_type}.json"


def place_wildlife(
    width: int,
    height: int,
    config: PopulationConfig,
    rng: np.random.Generator,
    tile_size: float = TILE_SIZE,
) -> list[WildlifeSpawn]:
    """Scatter wildlife with per-species aggression ranges and bands."""
    if not config.wildlife:
        return []

    spawns: list[WildlifeSpawn] = []
    count = _draw_count(rng, config.wildlife_count_min, config.wildlife_count_max)
    for _ in range(count):
        entry = _pick_weighted(rng, config.wildlife)
        low, high = sorted((entry.aggression_min, entry.aggression_max))
        aggression = round(float(rng.uniform(low, high)), 3) if high > low else low
        spawns.append(
            WildlifeSpawn(
                species=entry.species,
                position=_world_point(rng, entry.band, width, height, tile_size),
                aggression=aggression,
            )
        )
    return spawns


def place_npcs(
    width: int,
    height: int,
    config: PopulationConfig,
    rng: np.random.Generator,
    tile_size: float = TILE_SIZE,
) -> list[NPCSpawn]:
    """Scatter NPCs named "<Name> the <Title>" from the theme's pools."""
    if not config.npcs or not config.npc_names:
        return []

    spawns: list[NPCSpawn] = []
    count = _draw_count(rng, config.npc_count_min, config.npc_count_max)
    for _ in range(count):
        entry = _pick_weighted(rng, config.npcs)
        first_name = config.npc_names[int(rng.integers(len(config.npc_names)))]
        spawns.append(
            NPCSpawn(
                name=f"{first_name} the {entry.title}",
                npc_type=entry.npc_type,
                position=_world_point(rng, entry.band, width, height, tile_size),
                dialogue_file=dialogue_reference(first_name, entry.npc_type),
            )
        )
    return spawns


def place_items(
    width: int,
    height: int,
    config: PopulationConfig,
    rng: np.random.Generator,
    tile_size: float = TILE_SIZE,
) -> list[ItemSpawn]:
    """Scatter item pickups; most are single, some are small stacks."""
    if not config.items:
        return []

    spawns: list[ItemSpawn] = []
    count = _draw_count(rng, config.item_count_min, config.item_count_max)
    for _ in range(count):
        item_id = config.items[int(rng.integers(len(config.items)))]
        quantity = 1
        if config.quantity_max > 1 and rng.random() < config.multi_quantity_chance:
            quantity = int(rng.integers(2, config.quantity_max + 1))
        spawns.append(
            ItemSpawn(
                item_id=item_id,
                position=_world_point(rng, config.item_band, width, height, tile_size),
                quantity=quantity,
            )
        )
    return spawns


def populate(
    width: int,
    height: int,
    config: PopulationConfig,
    rng: np.random.Generator,
    tile_size: float = TILE_SIZE,
) -> Population:
    """Generate every spawn category for a level.

    Args:
        width: Grid width in tiles.
        height: Grid height in tiles.
        config: Theme population pools and count ranges.
        rng: Random number generator.
        tile_size: World units per tile.

    Returns:
        Population with wildlife, NPC and item spawns.
    """
    return Population(
        wildlife=place_wildlife(width, height, config, rng, tile_size),
        npcs=place_npcs(width, height, config, rng, tile_size),
        items=place_items(width, height, config, rng, tile_size),
    )
