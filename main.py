"""Command-line interface for MetaNetX metabolite lookup."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from metanetx_mapper import (
    MetaNetXClient,
    MetaNetXError,
    lookup_metabolite,
    record_to_json,
    write_record_csv,
)
from metanetx_mapper.metanetx import INPUT_TYPES
from metanetx_mapper.records import OUTPUT_STYLES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("token", help="Metabolite identifier or name to resolve.")
    parser.add_argument(
        "--input-type",
        default="id",
        choices=INPUT_TYPES,
        help="How to interpret the token (default 'id').",
    )
    parser.add_argument(
        "--output-style",
        default=None,
        choices=OUTPUT_STYLES,
        help="Print only this field instead of the whole record.",
    )
    parser.add_argument("--output", default=None, help="Write the record to this CSV file.")
    parser.add_argument("--sep", default=",", help="CSV delimiter (default ',').")
    parser.add_argument("--encoding", default="utf-8", help="File encoding (default utf-8).")
    parser.add_argument(
        "--timeout", type=float, default=None, help="Request timeout in seconds (default none)."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default INFO).")
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure basic logging."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )


# ---------------------------------------------------------------------------
# Main execution
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for MetaNetX lookup."""

    args = parse_args(argv)
    setup_logging(args.log_level)

    client = MetaNetXClient(timeout=args.timeout)
    try:
        record = lookup_metabolite(args.token, args.input_type, client=client)
    except MetaNetXError as exc:
        logger.error("Lookup of %s failed: %s", args.token, exc)
        return 1

    if args.output:
        write_record_csv(record, args.output, sep=args.sep, encoding=args.encoding)
    if args.output_style:
        print(getattr(record, args.output_style))
    elif not args.output:
        print(record_to_json(record))
    return 0


if __name__ == "__main__":
    sys.exit(main())
