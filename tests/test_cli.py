"""Tests for the command-line interface."""

from pathlib import Path

import pytest

from ascent.catalog import create_tutorial_level
from ascent.cli import main
from ascent.persistence import load_level, save_level


class TestGenerateCommand:
    """Tests for `ascent generate`."""

    def test_generate_to_file(self, tmp_path: Path, capsys) -> None:
        """generate writes the level to the -o path."""
        output = tmp_path / "level.json"
        main(
            [
                "generate",
                "--theme", "coastal",
                "--width", "24",
                "--height", "18",
                "--seed", "3",
                "--level-id", "cli_test",
                "-o", str(output),
            ]
        )

        level = load_level(output)
        assert level.id == "cli_test"
        assert (level.width, level.height) == (24, 18)
        assert "Saved to" in capsys.readouterr().out

    def test_generate_to_directory(self, tmp_path: Path) -> None:
        """generate names the file after the derived level id."""
        main(
            [
                "generate",
                "--width", "16",
                "--height", "12",
                "--seed", "9",
                "--output-dir", str(tmp_path),
            ]
        )
        assert (tmp_path / "mountain_16x12_9.json").exists()

    def test_debug_images(self, tmp_path: Path) -> None:
        """--debug-images writes layer PNGs beside the level."""
        pytest.importorskip("matplotlib")
        debug_dir = tmp_path / "debug"
        main(
            [
                "generate",
                "--width", "20",
                "--height", "16",
                "--seed", "2",
                "--debug-images", str(debug_dir),
                "--output-dir", str(tmp_path),
            ]
        )
        assert (tmp_path / "mountain_20x16_2.json").exists()
        assert (debug_dir / "terrain.png").exists()
        assert (debug_dir / "difficulty.png").exists()

    def test_requires_command(self) -> None:
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            main([])


class TestInspectCommand:
    """Tests for `ascent inspect`."""

    def test_inspect_tutorial(self, tmp_path: Path, capsys) -> None:
        """inspect prints the level summary."""
        path = tmp_path / "tutorial_01.json"
        save_level(create_tutorial_level(), path)

        main(["inspect", str(path)])

        out = capsys.readouterr().out
        assert "tutorial_01: First Steps (20x15)" in out
        assert "soil:" in out
        assert "1 wildlife, 1 NPCs, 1 items" in out


class TestCatalogCommand:
    """Tests for `ascent catalog`."""

    def test_catalog_with_config(self, tmp_path: Path) -> None:
        """catalog writes catalog and configured levels."""
        config_path = tmp_path / "batch.toml"
        config_path.write_text(
            "[[levels]]\n"
            'level_id = "small"\n'
            "width = 20\n"
            "height = 15\n"
            "seed = 4\n"
        )
        out_dir = tmp_path / "out"

        main(["catalog", "--config", str(config_path), "--output-dir", str(out_dir)])

        assert sorted(p.name for p in out_dir.iterdir()) == [
            "iceland_glacier_01.json",
            "small.json",
            "tutorial_01.json",
        ]
