"""Command line entry point for the product copy pipeline.

Usage examples:
  productcopy normalize supplier_export.csv
  productcopy normalize supplier_export.xlsx --warnings
  productcopy render supplier_export.csv --limit 3
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from config.categories import DEFAULT_REGISTRY
from config.settings import LOG_LEVEL
from domain.errors import ProductCopyError
from extraction import normalize_report, summarize
from generation import enrich_batch
from writers import render

logger = logging.getLogger(__name__)


def _load(path: Path):
    return normalize_report(path.read_bytes(), filename=path.name)


def cmd_normalize(args: argparse.Namespace) -> int:
    report = _load(Path(args.file))
    summary = summarize(report)
    if not args.warnings:
        summary.pop("warnings")
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    report = _load(Path(args.file))
    records = report.records[: args.limit] if args.limit else report.records

    copies = asyncio.run(enrich_batch(records, DEFAULT_REGISTRY, fill_required=args.fill_required))
    for record, copy in zip(records, copies):
        print(f"<!-- {record.sku} ({record.category}) -->")
        print(render(record, copy))
        print()
        for issue in copy.issues:
            logger.info("%s: %s", record.sku, issue)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="productcopy", description="Normalize and enrich supplier product data.")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default from LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command")

    norm = sub.add_parser("normalize", help="Print normalized records as JSON")
    norm.add_argument("file", help="CSV/TSV/text export or .xlsx workbook")
    norm.add_argument("--warnings", action="store_true", help="Include parse warnings in the output")
    norm.set_defaults(func=cmd_normalize)

    rend = sub.add_parser("render", help="Enrich records and print HTML fragments (needs OPENAI_API_KEY)")
    rend.add_argument("file", help="CSV/TSV/text export or .xlsx workbook")
    rend.add_argument("--limit", type=int, default=0, help="Only the first N records")
    rend.add_argument(
        "--fill-required",
        action="store_true",
        help="Show the category fallback for required technical fields nobody could fill",
    )
    rend.set_defaults(func=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (ProductCopyError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
