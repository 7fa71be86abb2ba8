# enginesync/cli.py
from __future__ import annotations

import argparse
import logging
import sys

from enginesync.config import DEFAULT_RESAMPLE_INTERVAL, KPH, SPEED_UNITS, SyncConfig
from enginesync.core import SyncError
from enginesync.io.writer import write_csv
from enginesync.pipeline import run_pipeline

logger = logging.getLogger("enginesync")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enginesync",
        description="Align a CSV log and an XML engine log on a common time base.",
    )
    parser.add_argument("csv", help="tabular log with Time and Speed columns")
    parser.add_argument("xml", help="log of <EngineDataLog> records")
    parser.add_argument("-o", "--output", help="merged CSV path (default: stdout)")
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_RESAMPLE_INTERVAL,
        help="resample step in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--offset",
        type=float,
        default=None,
        help="use this time offset in seconds instead of estimating it",
    )
    parser.add_argument("--csv-units", choices=SPEED_UNITS, default=KPH)
    parser.add_argument("--xml-units", choices=SPEED_UNITS, default=KPH)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for progress, -vv for debug output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        config = SyncConfig(
            resample_interval=args.interval,
            manual_offset=args.offset,
            csv_speed_unit=args.csv_units,
            xml_speed_unit=args.xml_units,
        )
        result = run_pipeline(args.csv, args.xml, config)
    except SyncError as e:
        logger.error("%s", e)
        return 1

    if args.output:
        try:
            write_csv(result.table, args.output)
        except OSError as e:
            logger.error("Could not write '%s': %s", args.output, e)
            return 1
    else:
        sys.stdout.write(result.csv_text)

    print(
        f"Time offset ({result.offset_source}): {result.time_offset:.3f} s, "
        f"{len(result.table)} rows",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
