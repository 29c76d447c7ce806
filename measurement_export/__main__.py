#!/usr/bin/env python3
import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings
from .exceptions import ConfigError
from .fetcher import get


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="measurement-export",
        description="Export temperature and pore-pressure measurements to per-device CSV files.",
    )
    parser.add_argument("--context-id", required=True, help="Context whose timelines are read")
    parser.add_argument("--scenario-id", default=None, help="Scenario within the context (switches to scenario column order)")
    parser.add_argument("--profile-id", required=True, help="Profile whose devices are exported")
    parser.add_argument("--from", dest="time_from", default=None, help="Lower time bound (inclusive)")
    parser.add_argument("--to", dest="time_to", default=None, help="Upper time bound (inclusive)")
    parser.add_argument("--prefix", default="", help="File name prefix for every CSV")
    parser.add_argument("--working-dir", default=None, help="Output directory (default: EXPORT_WORKING_DIR or /tmp/)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    report = get(
        args.context_id,
        args.scenario_id,
        args.profile_id,
        args.time_from,
        args.time_to,
        file_name_prefix=args.prefix,
        working_dir=args.working_dir or settings.working_dir,
        settings=settings,
    )

    print(f"Written: {report.written_count}, skipped: {report.skipped_count}")
    for path in report.written:
        print(f"  {path}")
    for custom_id, reason in report.skipped:
        print(f"  skipped {custom_id}: {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
