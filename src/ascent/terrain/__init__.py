"""Procedural level generation package.

This package implements the generation pipeline for climbing levels:
elevation synthesis, terrain classification, ordered feature passes
(glaciers, lava, cliffs, rock formations, volcanic peaks) and spawn
population.
"""

from .config import LevelConfig, ThemeConfig
from .features import FeaturePipeline, PassReport, apply_feature_pass
from .generator import (
    GenerationResult,
    assemble_level,
    generate_level,
    generate_terrain,
)
from .themes import get_theme, list_themes
from .validation import ValidationResult, validate_level

__all__ = [
    "FeaturePipeline",
    "GenerationResult",
    "LevelConfig",
    "PassReport",
    "ThemeConfig",
    "ValidationResult",
    "apply_feature_pass",
    "assemble_level",
    "generate_level",
    "generate_terrain",
    "get_theme",
    "list_themes",
    "validate_level",
]
