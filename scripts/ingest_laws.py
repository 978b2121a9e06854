#!/usr/bin/env python3
"""
CLI script for ingesting Slovak statutes from the Slov-Lex static portal.

Usage:
    # Ingest all target laws as of today
    python scripts/ingest_laws.py

    # Ingest the first two laws as of a fixed date
    python scripts/ingest_laws.py --limit 2 --as-of 2024-01-01

    # Re-parse cached pages without hitting the network
    python scripts/ingest_laws.py --skip-fetch

    # Ingest selected laws only
    python scripts/ingest_laws.py --law act-18-2018 --law act-69-2018
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))

from dotenv import load_dotenv
load_dotenv(root_dir / ".env")

from slovlex.config import get_settings
from slovlex.ingest import IngestionError, run_ingestion
from slovlex.targets import TARGET_SLOVAK_LAWS, get_target_law

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Ingest Slovak statutes from Slov-Lex into seed JSON files."
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only ingest the first N target laws",
    )
    parser.add_argument(
        "--skip-fetch",
        action="store_true",
        help="Use cached source pages where available instead of fetching",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        default=None,
        help="Reference date (YYYY-MM-DD) for version selection (default: today)",
    )
    parser.add_argument(
        "--law",
        action="append",
        default=[],
        help="Law id to ingest (repeatable, default: all target laws)",
    )
    parser.add_argument(
        "--seed-dir",
        type=str,
        default=None,
        help="Override the output directory for seed JSON files (default: from settings)",
    )
    parser.add_argument(
        "--source-dir",
        type=str,
        default=None,
        help="Override the raw page cache directory (default: from settings)",
    )
    args = parser.parse_args()

    settings = get_settings()
    overrides = {}
    if args.as_of:
        overrides["as_of_date"] = args.as_of
    if args.seed_dir:
        overrides["seed_dir"] = args.seed_dir
    if args.source_dir:
        overrides["source_dir"] = args.source_dir
    if overrides:
        try:
            settings = settings.model_validate({**settings.model_dump(), **overrides})
        except ValueError as e:
            logger.error(f"Invalid arguments: {e}")
            sys.exit(1)

    try:
        targets = [get_target_law(law_id) for law_id in args.law] if args.law else list(TARGET_SLOVAK_LAWS)
    except KeyError as e:
        logger.error(str(e))
        sys.exit(1)
    if args.limit:
        targets = targets[: args.limit]

    as_of_date = settings.resolve_as_of_date()
    logger.info("Slov-Lex ingestion")
    logger.info(f"  As-of date: {as_of_date}")
    if args.skip_fetch:
        logger.info("  Mode: --skip-fetch (use cached source pages where available)")
    if args.limit:
        logger.info(f"  Mode: --limit {args.limit}")

    start_time = time.time()
    try:
        report = run_ingestion(
            laws=targets,
            as_of_date=as_of_date,
            skip_fetch=args.skip_fetch,
            settings=settings,
        )
        exit_code = 0
    except IngestionError as e:
        logger.error(f"Fatal ingestion error: {e}")
        report = e.report
        exit_code = 1

    elapsed = time.time() - start_time

    # Summary
    if report is not None:
        logger.info("")
        logger.info("=" * 60)
        logger.info("Ingestion complete!")
        logger.info("=" * 60)
        logger.info(f"  Ingested laws: {report.ingested_laws}/{report.requested_laws}")
        logger.info(f"  Total provisions: {report.total_provisions}")
        logger.info(f"  Total definitions: {report.total_definitions}")
        logger.info(f"  Seed dir: {settings.seed_dir}")
        logger.info(f"  Time: {elapsed:.1f}s")
        if report.failures:
            logger.warning(f"  Skipped laws ({len(report.failures)}):")
            for failure in report.failures:
                logger.warning(f"    - {failure.law_id}: {failure.reason}")
        logger.info("=" * 60)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
