"""
Main entry point for the turtle tree farm
"""

import argparse
import importlib
import sys
from typing import Callable, List, Optional, Tuple

from .config import FarmConfig, get_config
from .errors import FarmHaltError
from .farm import FarmOrchestrator
from .logging_config import get_logger, setup_logging
from .simulator import build_demo_world
from .turtle_api import TurtleAPI

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Automated 2x2 tree farm for a single turtle")
    parser.add_argument("--cycles", type=int, default=None, help="Number of farm cycles (default: run forever)")
    parser.add_argument("--growth-wait", type=float, default=None, help="Override the growth wait in seconds")
    parser.add_argument("--log-level", default=None, help="Override the log level")
    parser.add_argument("--json-logs", action="store_true", help="Render console logs as JSON")
    parser.add_argument(
        "--turtle",
        default=None,
        metavar="MODULE:FACTORY",
        help="Factory returning a TurtleAPI for the given config (default: simulated demo world)",
    )
    return parser.parse_args(argv)


def load_factory(spec: str) -> Callable[[FarmConfig], TurtleAPI]:
    """Resolve a 'package.module:callable' string"""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Turtle factory must look like 'module:callable', got {spec!r}")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def build_turtle(config: FarmConfig, factory_spec: Optional[str]) -> Tuple[TurtleAPI, Optional[Callable]]:
    """Create the capability surface and, for the simulator, a growth-aware sleep"""
    if factory_spec:
        return load_factory(factory_spec)(config), None

    world, turtle = build_demo_world(config)
    logger.info("Using simulated turtle")
    # Simulated time passes instantly and grows the planted trees
    return turtle, world.elapse


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    overrides = {}
    if args.growth_wait is not None:
        overrides["growth_wait_seconds"] = args.growth_wait
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.json_logs:
        overrides["log_json_format"] = True
    config = get_config(**overrides)

    setup_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        log_dir=config.log_dir,
        json_format=config.log_json_format,
    )

    turtle, sleep = build_turtle(config, args.turtle)
    farm = FarmOrchestrator(turtle, config, sleep=sleep) if sleep else FarmOrchestrator(turtle, config)

    logger.info(
        "Spruce tree farm starting",
        fuel_slot=config.fuel_slot,
        sapling_slot=config.sapling_slot,
        plots=[(p.x, p.z) for p in config.plots],
    )
    try:
        farm.run(cycles=args.cycles)
    except FarmHaltError as e:
        logger.error("Program halted", error=str(e), pose=farm.pose.position, heading=farm.pose.heading.name)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping farm", pose=farm.pose.position)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
