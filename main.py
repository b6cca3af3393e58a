"""CLI entrypoint for the forest-green frame synthesizer."""

import sys

from forest_green.cli import main


if __name__ == "__main__":
    sys.exit(main())
