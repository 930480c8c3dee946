#!/usr/bin/env python3
"""
Cadence Runner

Runs the outreach cadence scheduler once, or repeatedly on a fixed interval
(CADENCE_INTERVAL_SECONDS, hourly by default).

Usage:
    python scripts/run_cadence.py                 # single run
    python scripts/run_cadence.py --loop          # run every interval until interrupted
    python scripts/run_cadence.py --loop --interval 600
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import load_settings
from services.entrypoints import run_cadence

logger = logging.getLogger("run_cadence")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the lead outreach cadence scheduler")
    parser.add_argument(
        "--loop",
        action="store_true",
        help="Keep running on a fixed interval instead of exiting after one run",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Seconds between runs when --loop is set (default: CADENCE_INTERVAL_SECONDS)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)

    if not args.loop:
        summary = run_cadence()
        if summary is not None:
            print(summary.as_dict())
        return 0

    interval = args.interval or load_settings().cadence_interval_seconds
    logger.info(f"Running cadence every {interval}s")
    try:
        while True:
            started = time.monotonic()
            run_cadence()
            elapsed = time.monotonic() - started
            time.sleep(max(0.0, interval - elapsed))
    except KeyboardInterrupt:
        logger.info("Cadence runner stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
