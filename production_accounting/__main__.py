"""
Command line runner for the production accounting engine.

    python -m production_accounting import readings.csv [--insert-only] [--db PATH]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .shared.config.settings import Settings, get_settings
from .shared.dependencies import DependencyContainer
from .shared.exceptions import ApplicationException
from .shared.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Production accounting engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import daily production readings from a CSV file")
    import_parser.add_argument("csv_file", type=Path, help="CSV file with one reading per row")
    import_parser.add_argument(
        "--insert-only",
        action="store_true",
        help="Reject rows for a well and day that already has a reading"
    )
    import_parser.add_argument("--db", type=Path, default=None, help="DuckDB file, defaults to the configured one")
    import_parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    return parser


def run_import(args: argparse.Namespace, settings: Settings) -> int:
    container = DependencyContainer(settings=settings, db_path=args.db)
    try:
        result = asyncio.run(container.get_import_service().import_csv(args.csv_file, upsert=not args.insert_only))
    except ApplicationException as e:
        logger.error(f"Import of {args.csv_file} aborted: {e.message}")
        return 2

    print(result.model_dump_json(indent=2))
    return 0 if result.status == "completed" else 1


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()

    settings.setup_directories()
    configure_logging(settings, log_to_file=not args.no_log_file)

    if args.command == "import":
        return run_import(args, settings)
    return 2


if __name__ == "__main__":
    sys.exit(main())
