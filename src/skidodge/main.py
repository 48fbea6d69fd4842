"""
Main entry point for SKIDODGE.

Loads settings, configures logging and runs the desktop game.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from skidodge.config.settings import Settings, get_settings


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure console (and optional file) logging."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='SKIDODGE - dodge the obstacles on the slope')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    parser.add_argument('--debug-grid', action='store_true', help='Draw the cell grid')
    parser.add_argument('--seed', type=int, default=None, help='Seed for obstacle spawning')
    parser.add_argument('--fps', type=int, default=None, help='Target frames per second')
    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command line flags override environment settings.

    Returns a copy; the cached settings are left untouched.
    """
    game_update = {}
    if args.debug_grid:
        game_update["debug_grid"] = True
    if args.seed is not None:
        game_update["seed"] = args.seed

    display_update = {}
    if args.fps is not None:
        display_update["fps"] = args.fps

    return settings.model_copy(update={
        "debug": settings.debug or args.debug,
        "game": settings.game.model_copy(update=game_update),
        "display": settings.display.model_copy(update=display_update),
    })


async def run(settings: Settings) -> None:
    from skidodge.simulator.main import SkidodgeSimulator

    simulator = SkidodgeSimulator(settings)
    await simulator.run()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    load_dotenv()
    args = parse_args(argv)
    settings = apply_args(get_settings(), args)

    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("=" * 50)
    logger.info("SKIDODGE Starting")
    logger.info("=" * 50)
    logger.info("Controls:")
    logger.info("  ARROWS/WASD  - Move")
    logger.info("  R            - New game")
    logger.info("  G            - Toggle grid")
    logger.info("  ESC/Q        - Quit")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.exception(f"SKIDODGE error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
