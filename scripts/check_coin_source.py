#!/usr/bin/env python3
"""
Inspect a strategy's coin source file.

Prints the record with any extra symbols added, then the lenient validation
warnings. Exits 1 with --strict if there are warnings.

Usage:
    python scripts/check_coin_source.py config/strategies/example_mixed.yaml
    python scripts/check_coin_source.py strategy.yaml --add sol --add tsla --strict
"""

import argparse
import sys

from coin_source.config import get_config, load_coin_source_config
from coin_source.editor import add_coin
from coin_source.exceptions import CoinSourceError
from coin_source.infrastructure.observability import get_logger, setup_logging
from coin_source.validation import validate_config


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check a strategy coin source file")
    parser.add_argument("path", help="YAML file holding the coin source record")
    parser.add_argument(
        "--add",
        action="append",
        default=[],
        metavar="SYMBOL",
        help="Symbol to add to the static list (repeatable)",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Exit non-zero if there are warnings"
    )
    parser.add_argument("--config-dir", default=None, help="Settings directory")
    args = parser.parse_args(argv)

    try:
        settings = get_config(args.config_dir)
        setup_logging(
            level=settings.logging.level, json_logs=settings.logging.json_logs
        )
        config = load_coin_source_config(args.path)
    except CoinSourceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log = get_logger(__name__, component="check-coin-source")

    for raw in args.add:
        config = add_coin(config, raw)

    print(config.to_json())

    warnings = validate_config(config)
    for warning in warnings:
        print(f"warning [{warning.code}] {warning.field}: {warning.message}")

    log.info("coin_source_checked", path=args.path, warnings=len(warnings))
    if args.strict and warnings:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
