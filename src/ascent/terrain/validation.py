"""Post-generation validation of level definitions."""

import logging

import numpy as np
from scipy import ndimage

from ..level import LevelDefinition
from ..terrain_types import TerrainType
from ..types import TILE_SIZE

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of level validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_level(level: LevelDefinition) -> ValidationResult:
    """Validate a level against playability constraints.

    Structural invariants (dimensions, climbing gates, bounded attributes)
    are enforced when the LevelDefinition is built; this checks the
    softer properties a designer cares about.

    Args:
        level: Level to check.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Start and goals are not on lava
    _check_safe_endpoints(level, result)

    # Check 2: Goals reachable from the start without crossing lava
    _check_goal_connectivity(level, result)

    # Check 3: Spawns inside the world-space extent of the grid
    _check_spawn_bounds(level, result)

    if result.passed:
        logger.info(f"Level {level.id} validation passed")
    else:
        logger.warning(
            f"Level {level.id} validation failed with {len(result.errors)} errors"
        )
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_safe_endpoints(level: LevelDefinition, result: ValidationResult) -> None:
    """Check the start and goals are not on lava."""
    for label, position in [("start", level.start_position)] + [
        ("goal", goal) for goal in level.goal_positions
    ]:
        tile = level.tile(position.x, position.y)
        if tile.terrain_type == TerrainType.LAVA:
            result.add_error(f"{label} position {position} is on lava")


def _check_goal_connectivity(level: LevelDefinition, result: ValidationResult) -> None:
    """Warn when a goal sits in a different non-lava component than the start."""
    passable = np.array(
        [
            [tile.terrain_type != TerrainType.LAVA for tile in row]
            for row in level.terrain
        ],
        dtype=bool,
    )

    structure = ndimage.generate_binary_structure(2, 2)  # 8-connected
    labeled, num_features = ndimage.label(passable, structure=structure)

    if num_features == 0:
        result.add_error("No passable terrain found")
        return

    start = level.start_position
    start_label = labeled[start.y, start.x]
    for goal in level.goal_positions:
        if labeled[goal.y, goal.x] != start_label or start_label == 0:
            result.add_warning(f"Goal {goal} is cut off from start {start} by lava")


def _check_spawn_bounds(level: LevelDefinition, result: ValidationResult) -> None:
    """Check spawns fall inside the level's world-space extent."""
    max_x, max_y = level.width, level.height
    outside = 0
    spawns = [*level.wildlife_spawns, *level.npc_spawns, *level.items]
    for spawn in spawns:
        x, y = spawn.position
        tile_x, tile_y = int(x // TILE_SIZE), int(y // TILE_SIZE)
        if not (0 <= tile_x < max_x and 0 <= tile_y < max_y):
            outside += 1

    if outside > 0:
        result.add_warning(f"{outside} spawns outside the level grid")
