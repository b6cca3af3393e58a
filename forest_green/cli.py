"""
Command line entrypoint: ``forest-green <configuration_file>``.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from .composer import FrameComposer
from .config import Config, describe_config, load_config, prepare_output_dir
from .errors import ForestGreenError
from .fonts import CaptionFont, load_font
from .logging_setup import configure_logging, parse_level
from .rendering import RenderDriver

USAGE = "usage: forest-green [<configuration_file>]\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forest-green",
        description="Synthesize annotated mean-colour frames from timestamped camera photos.",
        add_help=True,
    )
    parser.add_argument("config", nargs="?", help="Path to the JSON configuration file")
    return parser


def startup(config_path: Optional[str]) -> tuple[Config, CaptionFont]:
    """Load config and font, then create the output directory."""
    if not config_path:
        raise ForestGreenError("Cannot parse config file path")
    config = load_config(config_path)
    font = load_font(config.font)
    prepare_output_dir(config)
    return config, font


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logger = configure_logging(
        level=parse_level(os.environ.get("FOREST_GREEN_LOG_LEVEL")),
        log_file=os.environ.get("FOREST_GREEN_LOG_FILE") or None,
    )

    try:
        config, font = startup(args.config)
    except ForestGreenError as exc:
        print(f"Problem parsing arguments. {exc}\n\n{USAGE}", file=sys.stderr)
        return 1

    for line in describe_config(config):
        logger.info(line)

    composer = FrameComposer(font, location=config.location)
    driver = RenderDriver(config, composer, logger=logger)
    try:
        driver.run()
    except ForestGreenError as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"Application Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
