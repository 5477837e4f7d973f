#!/usr/bin/env python3
"""Load an env file into the environment and optionally watch it.

Prints the variables defined in the file (as now visible in os.environ),
sorted by name. With --hot-reload the process keeps running and reports
added / changed / removed variables until interrupted.

Usage:
    python watch_env.py [--file .env] [--hot-reload] [--delay 1.0]

Environment Variables:
    LOADENV_LOG_LEVEL   Logging level for the default logger
    LOADENV_LOG_JSON    "true" for JSON log lines
"""

import argparse
import os
import sys
import time
from typing import List, Optional

from loadenv import (
    DefaultLogger,
    LoadEnvConfig,
    LoadEnvError,
    close_env,
    init_env,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load and hot-reload a KEY=VALUE env file")
    parser.add_argument("--file", default=".env", help="Env file path (default: .env)")
    parser.add_argument(
        "--hot-reload", action="store_true", help="Watch the file and reload on change"
    )
    parser.add_argument(
        "--delay", type=float, default=1.0, help="Debounce window in seconds (default: 1.0)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = LoadEnvConfig(
            file_path=args.file,
            hot_reload=args.hot_reload,
            reload_delay=args.delay,
            logger=DefaultLogger(prefix="[APP]"),
        )
        reloader = init_env(config)
    except LoadEnvError as e:
        print(f"Failed to init env: {e}", file=sys.stderr)
        return 1

    try:
        print("Environment Variables from env file:")
        for key in sorted(reloader.current()):
            value = os.environ.get(key)
            if value is not None:
                print(f"{key}={value}")

        if args.hot_reload:
            while True:
                time.sleep(300)
    except KeyboardInterrupt:
        pass
    finally:
        close_env()

    return 0


if __name__ == "__main__":
    sys.exit(main())
