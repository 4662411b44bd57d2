"""Batch generation configuration loading from TOML files."""

import tomllib
from collections import Counter
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, model_validator

from .terrain.config import LevelConfig
from .terrain.themes import THEMES, list_themes

logger = structlog.get_logger()

# Batch files shipped with the project, looked up by bare name
CONFIGS_DIR = Path(__file__).parent.parent.parent / "configs"


def _default_levels() -> list[LevelConfig]:
    return [
        LevelConfig(theme="mountain", seed=1, level_id="mountain_01"),
        LevelConfig(theme="coastal", seed=2, level_id="coastal_01"),
        LevelConfig(theme="volcanic", seed=3, level_id="volcanic_01"),
    ]


class CatalogConfig(BaseModel):
    """Levels to generate in one batch export.

    Every entry must name a built-in theme, and no two entries may
    resolve to the same level id, since each id becomes a file name.
    """

    output_dir: str = "levels"
    levels: list[LevelConfig] = Field(default_factory=_default_levels)

    @model_validator(mode="after")
    def _check_levels(self) -> "CatalogConfig":
        unknown = sorted({lvl.theme for lvl in self.levels} - set(THEMES))
        if unknown:
            raise ValueError(
                f"Unknown themes {unknown}. Available themes: {list_themes()}"
            )
        duplicates = [i for i, n in Counter(self.level_ids()).items() if n > 1]
        if duplicates:
            raise ValueError(f"Duplicate level ids in batch: {duplicates}")
        return self

    def level_ids(self) -> list[str]:
        """Ids the batch will write, in order."""
        return [lvl.resolve_level_id() for lvl in self.levels]


def load_config(config_path: Path) -> CatalogConfig:
    """Load a batch from a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the TOML is malformed.
        pydantic.ValidationError: If values are mistyped, name an unknown
            theme, or repeat a level id.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    config = CatalogConfig.model_validate(data)
    logger.info("config_loaded", path=str(config_path), levels=config.level_ids())
    return config


def find_config(name: str) -> Path:
    """Resolve a batch name or path.

    Anything that looks like a path (contains "/" or ends in .toml) is
    used as given; otherwise `name` is looked up as `configs/<name>.toml`.

    Raises:
        FileNotFoundError: If nothing matches; the message lists the
            bundled batch names.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {name}")
        return path

    path = CONFIGS_DIR / f"{name}.toml"
    if not path.exists():
        raise FileNotFoundError(
            f"No batch named {name!r}. Bundled batches: {list_configs()}"
        )
    return path


def list_configs() -> list[str]:
    """Names of the batch files bundled in configs/."""
    if not CONFIGS_DIR.exists():
        return []
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
