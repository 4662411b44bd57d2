"""Tests for post-generation level validation."""

from ascent.level import LevelDefinition, TerrainData, WildlifeSpawn
from ascent.terrain.validation import validate_level


class TestValidateLevel:
    """Tests for playability checks."""

    def test_tutorial_passes(self, tutorial_level: LevelDefinition) -> None:
        """Hand-authored tutorial passes cleanly."""
        result = validate_level(tutorial_level)
        assert result.passed
        assert result.errors == []
        assert result.warnings == []

    def test_start_on_lava(self, make_level, lava_tile: TerrainData) -> None:
        """Start on lava is an error."""
        level = make_level(overrides={(0, 0): lava_tile})
        result = validate_level(level)
        assert not result.passed
        assert any("start" in error for error in result.errors)

    def test_goal_on_lava(self, make_level, lava_tile: TerrainData) -> None:
        """Goal on lava is an error."""
        level = make_level(overrides={(4, 3): lava_tile})
        result = validate_level(level)
        assert not result.passed
        assert any("goal" in error for error in result.errors)

    def test_goal_cut_off(self, make_level, lava_tile: TerrainData) -> None:
        """A lava wall between start and goal is a warning."""
        wall = {(2, y): lava_tile for y in range(4)}
        result = validate_level(make_level(overrides=wall))
        assert result.passed
        assert len(result.warnings) == 1
        assert "cut off" in result.warnings[0]

    def test_broken_wall_connects(self, make_level, lava_tile: TerrainData) -> None:
        """A lava wall with a gap leaves the goal reachable."""
        wall = {(2, 0): lava_tile, (2, 1): lava_tile, (3, 2): lava_tile, (3, 3): lava_tile}
        result = validate_level(make_level(overrides=wall))
        assert result.warnings == []

    def test_spawn_outside_grid(self, make_level) -> None:
        """Spawns beyond the world extent are reported."""
        level = make_level().model_copy(
            update={
                "wildlife_spawns": (
                    WildlifeSpawn(species="wolf", position=(1000.0, 10.0), aggression=0.5),
                )
            }
        )
        result = validate_level(level)
        assert result.passed
        assert result.warnings == ["1 spawns outside the level grid"]
