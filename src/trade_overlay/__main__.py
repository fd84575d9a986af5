"""
Command line entry point.

Scans the working directory for chart/record pairs and writes the
combined images under log_outputs/. Takes no arguments.

Usage:
    python -m trade_overlay
"""
from __future__ import annotations

import logging
import sys

from trade_overlay import __version__
from trade_overlay.config import RunConfig
from trade_overlay.controller import run

logger = logging.getLogger("trade_overlay")


def main() -> int:
    """Run over the current directory; returns the process exit code."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logger.debug(f"trade-overlay v{__version__}")

    try:
        run(RunConfig())
    except Exception:
        logger.exception("A critical error occurred")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
