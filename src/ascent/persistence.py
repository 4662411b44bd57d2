"""Level persistence: save and load level definitions as JSON."""

import os
import tempfile
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, ValidationError

from .exceptions import (
    InvalidDimensionsError,
    LevelNotFoundError,
    LevelParseError,
    LevelWriteError,
)
from .level import LevelDefinition

logger = structlog.get_logger()

FORMAT_VERSION = 1
LEVEL_SUFFIX = ".json"


class LevelFile(BaseModel):
    """On-disk envelope around a level definition."""

    format_version: Literal[1] = FORMAT_VERSION
    level: LevelDefinition


def level_path(directory: Path, level_id: str) -> Path:
    """Conventional file path for a level id, e.g. levels/tutorial_01.json."""
    return Path(directory) / f"{level_id}{LEVEL_SUFFIX}"


def dumps_level(level: LevelDefinition) -> str:
    """Serialize a level to its persisted text form."""
    return LevelFile(level=level).model_dump_json(indent=2) + "\n"


def loads_level(text: str | bytes) -> LevelDefinition:
    """Parse a level from its persisted text form.

    Raises:
        LevelParseError: If the content is malformed.
    """
    try:
        return LevelFile.model_validate_json(text).level
    except ValidationError as e:
        raise LevelParseError(f"Invalid level file: {e}") from e
    except InvalidDimensionsError as e:
        raise LevelParseError(f"Invalid level dimensions: {e}") from e


def save_level(level: LevelDefinition, path: Path) -> None:
    """Save a level to disk.

    The text is written to a temporary file in the target directory and
    renamed over `path`, so a failed save never leaves a partial file.

    Args:
        level: Level to save.
        path: Output path, conventionally ending in .json.

    Raises:
        LevelWriteError: If the file or its parent directory can't be written.
    """
    path = Path(path)
    content = dumps_level(level)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise LevelWriteError(f"Could not write level to {path}: {e}") from e

    logger.info("level_saved", level_id=level.id, path=str(path), bytes=len(content))


def load_level(path: Path) -> LevelDefinition:
    """Load a level from disk.

    Args:
        path: Path to a level file.

    Returns:
        The stored LevelDefinition.

    Raises:
        LevelNotFoundError: If the file doesn't exist or can't be read.
        LevelParseError: If the file content is malformed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LevelNotFoundError(f"Level file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise LevelParseError(f"Level file is not UTF-8 text: {path}") from e
    except OSError as e:
        raise LevelNotFoundError(f"Level file unreadable: {path}: {e}") from e

    level = loads_level(text)
    logger.info(
        "level_loaded",
        level_id=level.id,
        path=str(path),
        width=level.width,
        height=level.height,
    )
    return level
