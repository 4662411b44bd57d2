"""Tests for level save/load."""

import json
from pathlib import Path

import pytest

from ascent.exceptions import LevelNotFoundError, LevelParseError, LevelWriteError
from ascent.level import LevelDefinition
from ascent.persistence import (
    FORMAT_VERSION,
    dumps_level,
    level_path,
    load_level,
    loads_level,
    save_level,
)
from ascent.terrain.config import LevelConfig
from ascent.terrain.generator import generate_level


class TestRoundTrip:
    """Tests for load(save(level)) == level."""

    def test_tutorial_round_trip(self, tutorial_level: LevelDefinition, tmp_path: Path) -> None:
        """Loading a saved tutorial gives the same level."""
        path = tmp_path / "tutorial_01.json"
        save_level(tutorial_level, path)
        assert load_level(path) == tutorial_level

    def test_tutorial_bytes_stable(
        self, tutorial_level: LevelDefinition, tmp_path: Path
    ) -> None:
        """Re-saving a loaded level reproduces the file byte-for-byte."""
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        save_level(tutorial_level, first)
        save_level(load_level(first), second)

        assert first.read_bytes() == second.read_bytes()
        reloaded = load_level(second)
        assert reloaded.width == 20
        assert reloaded.height == 15
        assert reloaded.terrain == tutorial_level.terrain

    def test_generated_round_trip(self, tmp_path: Path) -> None:
        """Generated levels round-trip with their spawns."""
        level = generate_level(LevelConfig(theme="mountain", width=40, height=30, seed=7))
        path = tmp_path / "generated.json"
        save_level(level, path)

        loaded = load_level(path)
        assert loaded == level
        assert loaded.wildlife_spawns == level.wildlife_spawns
        assert loaded.npc_spawns == level.npc_spawns
        assert loaded.items == level.items

    def test_string_round_trip(self, tutorial_level: LevelDefinition) -> None:
        """Text serialization round-trips."""
        assert loads_level(dumps_level(tutorial_level)) == tutorial_level


class TestFileFormat:
    """Tests for the persisted structure."""

    def test_envelope(self, tutorial_level: LevelDefinition) -> None:
        """Files carry the format version and the level."""
        data = json.loads(dumps_level(tutorial_level))
        assert data["format_version"] == FORMAT_VERSION
        level = data["level"]
        assert level["id"] == "tutorial_01"
        assert len(level["terrain"]) == 15
        assert len(level["terrain"][0]) == 20
        assert level["start_position"] == {"x": 2, "y": 2}

    def test_terrain_fields(self, tutorial_level: LevelDefinition) -> None:
        """Tiles serialize every attribute."""
        data = json.loads(dumps_level(tutorial_level))
        tile = data["level"]["terrain"][10][10]
        assert tile == {
            "terrain_type": "ice",
            "slope": 0.8,
            "stability": 0.6,
            "climbable": True,
            "climbing_difficulty": 2.0,
            "required_gear": ["ice_axe"],
        }

    def test_level_path(self, tmp_path: Path) -> None:
        """Level paths are <dir>/<id>.json."""
        assert level_path(tmp_path, "tutorial_01") == tmp_path / "tutorial_01.json"


class TestSave:
    """Tests for save_level behavior."""

    def test_creates_parent_directories(
        self, tutorial_level: LevelDefinition, tmp_path: Path
    ) -> None:
        """Missing parent directories are created."""
        path = tmp_path / "levels" / "nested" / "tutorial_01.json"
        save_level(tutorial_level, path)
        assert path.exists()

    def test_overwrites_existing(
        self, tutorial_level: LevelDefinition, make_level, tmp_path: Path
    ) -> None:
        """Saving over an existing file replaces it."""
        path = tmp_path / "level.json"
        save_level(make_level(), path)
        save_level(tutorial_level, path)
        assert load_level(path) == tutorial_level

    def test_write_failure(self, tutorial_level: LevelDefinition, tmp_path: Path) -> None:
        """Writing onto a directory fails cleanly without leftovers."""
        path = tmp_path / "level.json"
        path.mkdir()

        with pytest.raises(LevelWriteError):
            save_level(tutorial_level, path)

        assert [p.name for p in tmp_path.iterdir()] == ["level.json"]

    def test_write_error_is_os_error(self) -> None:
        """Write failures are OSErrors."""
        assert issubclass(LevelWriteError, OSError)


class TestLoadErrors:
    """Tests for distinguishing missing from corrupt files."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise LevelNotFoundError."""
        with pytest.raises(LevelNotFoundError):
            load_level(tmp_path / "missing.json")

    def test_missing_is_file_not_found(self, tmp_path: Path) -> None:
        """Missing files are FileNotFoundErrors."""
        with pytest.raises(FileNotFoundError):
            load_level(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Malformed JSON is a parse error."""
        path = tmp_path / "corrupt.json"
        path.write_text("{ this is not json")
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_truncated_file(self, tutorial_level: LevelDefinition, tmp_path: Path) -> None:
        """Truncated files are parse errors."""
        path = tmp_path / "truncated.json"
        path.write_text(dumps_level(tutorial_level)[:500])
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_schema_violation(self, tmp_path: Path) -> None:
        """Missing fields are parse errors."""
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"format_version": 1, "level": {"id": "x"}}))
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_wrong_version(self, tutorial_level: LevelDefinition, tmp_path: Path) -> None:
        """Unknown format versions are parse errors."""
        data = json.loads(dumps_level(tutorial_level))
        data["format_version"] = 99
        path = tmp_path / "future.json"
        path.write_text(json.dumps(data))
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_dimension_mismatch(self, tutorial_level: LevelDefinition, tmp_path: Path) -> None:
        """Inconsistent dimensions are parse errors."""
        data = json.loads(dumps_level(tutorial_level))
        data["level"]["height"] = 14
        path = tmp_path / "mismatch.json"
        path.write_text(json.dumps(data))
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_binary_garbage(self, tmp_path: Path) -> None:
        """Non-UTF-8 content is a parse error."""
        path = tmp_path / "garbage.json"
        path.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(LevelParseError):
            load_level(path)

    def test_parse_error_is_not_not_found(self) -> None:
        """Parse and not-found errors are distinct."""
        assert not issubclass(LevelParseError, FileNotFoundError)
        assert not issubclass(LevelNotFoundError, LevelParseError)
