"""InkStable command line - replay recorded strokes through the stabilizer."""

import argparse
import json
import logging
import logging.handlers
import os
import sys
from typing import List, Optional

import yaml

from . import __version__
from .config import ConfigError, InkStableConfig, LoggingConfig
from .presets import describe_level, preset_levels
from .replay import replay
from .types import PointerSample

logger = logging.getLogger("inkstable.cli")


def setup_logging(config: LoggingConfig):
    """Configure logging with optional file rotation."""
    root_logger = logging.getLogger("inkstable")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if config.file:
        log_dir = os.path.dirname(config.file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console goes to stderr so stdout stays clean for JSON output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def load_samples(path: str) -> List[PointerSample]:
    """Read a JSON list of ``{"x", "y", "pressure"?, "pointer_type"?}`` objects."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON list of samples")
    return [PointerSample.from_dict(item) for item in data]


def cmd_replay(args, config: InkStableConfig) -> int:
    if args.level is not None:
        config.stabilization.level = args.level
        config.stabilization.filters = None

    try:
        samples = load_samples(args.input)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1

    points = replay(samples, config, events_per_frame=args.events_per_frame)
    logger.info("Replayed %s: %d raw samples -> %d points (level %d)",
                args.input, len(samples), len(points), config.stabilization.level)

    output = json.dumps([p.to_dict() for p in points], indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(output)
    else:
        print(output)
    return 0


def cmd_preset(args, config: InkStableConfig) -> int:
    levels = preset_levels() if args.level is None else [args.level]
    print(json.dumps([describe_level(level).to_dict() for level in levels], indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="InkStable - stylus stroke stabilization",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser("replay", help="Stabilize a recorded stroke")
    replay_parser.add_argument("input", help="JSON file with raw samples")
    replay_parser.add_argument(
        "-o", "--output",
        help="Write stabilized points here instead of stdout",
        default=None,
    )
    replay_parser.add_argument(
        "-l", "--level",
        help="Stabilization level 0-100 (overrides config)",
        type=int,
        default=None,
    )
    replay_parser.add_argument(
        "--events-per-frame",
        help="Deliver samples as coalesced pointer events, N per frame",
        type=int,
        default=0,
    )
    replay_parser.set_defaults(handler=cmd_replay)

    preset_parser = subparsers.add_parser("preset", help="Show the filters used for a level")
    preset_parser.add_argument("level", type=int, nargs="?", default=None)
    preset_parser.set_defaults(handler=cmd_preset)

    args = parser.parse_args(argv)

    try:
        config = InkStableConfig.load(args.config)
    except (OSError, yaml.YAMLError, ConfigError) as e:
        setup_logging(LoggingConfig())
        logger.error("Could not load config: %s", e)
        return 1

    setup_logging(config.logging)
    logger.debug("InkStable v%s, command=%s", __version__, args.command)

    try:
        return args.handler(args, config)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
