"""Guild Map — entry point.

Usage:
    python -m guildmap                      # Open the map window
    python -m guildmap --catalog map.json   # Use another catalog file
    python -m guildmap --fullscreen         # Fill the screen
"""

import argparse
import logging
from pathlib import Path

from guildmap import config


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="guildmap",
        description="Guild Map — interactive image map",
    )
    parser.add_argument(
        "--catalog", type=Path, default=None,
        help="Region/marker catalog (default: %s)" % config.CATALOG_PATH,
    )
    parser.add_argument(
        "--width", type=int, default=config.WINDOW_WIDTH, help="Window width"
    )
    parser.add_argument(
        "--height", type=int, default=config.WINDOW_HEIGHT, help="Window height"
    )
    parser.add_argument(
        "--fullscreen", action="store_true", help="Open the window fullscreen"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("guildmap")
    logger.info("Starting Guild Map...")

    from guildmap.display.window import run_map_window

    run_map_window(
        catalog_path=args.catalog,
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
    )


if __name__ == "__main__":
    main()
