"""Command-line interface for level generation."""

import argparse
import logging
import time
from pathlib import Path

import structlog


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def _generate(args: argparse.Namespace) -> None:
    # Import here to avoid slow startup for --help
    from .persistence import level_path, save_level
    from .terrain.config import LevelConfig
    from .terrain.generator import generate_level
    from .terrain.validation import validate_level

    config = LevelConfig(
        seed=args.seed,
        theme=args.theme,
        width=args.width,
        height=args.height,
        level_id=args.level_id,
        debug_output_dir=args.debug_images,
    )

    print(f"Generating {args.theme} level {args.width}x{args.height} with seed {args.seed}")

    start_time = time.time()
    level = generate_level(config)
    gen_time = time.time() - start_time
    print(f"Generation complete in {gen_time:.1f}s")

    validate_level(level)

    output_path = Path(args.output) if args.output else level_path(args.output_dir, level.id)
    save_level(level, output_path)
    print(f"Saved to {output_path}")


def _catalog(args: argparse.Namespace) -> None:
    from .catalog import save_sample_levels
    from .config import CatalogConfig, find_config, load_config

    if args.config:
        config = load_config(find_config(args.config))
    else:
        config = CatalogConfig()

    output_dir = Path(args.output_dir or config.output_dir)
    written = save_sample_levels(output_dir, config)
    for path in written:
        print(path)


def _inspect(args: argparse.Namespace) -> None:
    from .persistence import load_level
    from .terrain.validation import validate_level

    level = load_level(Path(args.path))
    print(f"{level.id}: {level.name} ({level.width}x{level.height})")
    print(f"  {level.description}")
    print(f"  start {level.start_position}, goals {[str(g) for g in level.goal_positions]}")
    weather = level.weather_conditions
    print(
        f"  weather {weather.weather_type}, {weather.base_temperature:.1f}C, "
        f"wind {weather.wind_speed:.1f}"
    )
    total = level.width * level.height
    for terrain_type, count in level.terrain_counts().most_common():
        print(f"  {terrain_type.value}: {count:,} ({count / total * 100:.1f}%)")
    print(
        f"  {len(level.wildlife_spawns)} wildlife, {len(level.npc_spawns)} NPCs, "
        f"{len(level.items)} items"
    )

    result = validate_level(level)
    if not result.passed:
        raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for level generation."""
    parser = argparse.ArgumentParser(
        description="Generate and export climbing levels"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate one procedural level")
    generate.add_argument(
        "--theme", type=str, default="mountain", help="Theme name (default: mountain)"
    )
    generate.add_argument(
        "--width", type=int, default=200, help="Level width (default: 200)"
    )
    generate.add_argument(
        "--height", type=int, default=150, help="Level height (default: 150)"
    )
    generate.add_argument(
        "--seed", type=int, default=None, help="Random seed (default: random)"
    )
    generate.add_argument(
        "--level-id", type=str, default=None, help="Level identifier"
    )
    generate.add_argument(
        "--output", "-o", type=str, default=None, help="Output file path"
    )
    generate.add_argument(
        "--output-dir",
        type=str,
        default="levels",
        help="Output directory when --output is not given (default: levels)",
    )
    generate.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug images (optional)",
    )
    generate.set_defaults(handler=_generate)

    catalog = subparsers.add_parser(
        "catalog", help="Export hand-authored and configured levels"
    )
    catalog.add_argument(
        "--config", type=str, default=None, help="Path or name of batch TOML config"
    )
    catalog.add_argument(
        "--output-dir", type=str, default=None, help="Output directory (overrides config)"
    )
    catalog.set_defaults(handler=_catalog)

    inspect = subparsers.add_parser("inspect", help="Summarize a saved level file")
    inspect.add_argument("path", type=str, help="Level file to inspect")
    inspect.set_defaults(handler=_inspect)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    args.handler(args)


if __name__ == "__main__":
    main()
