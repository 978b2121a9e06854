"""Seed JSON export of parsed acts and ingestion run metadata."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .types import IngestionReport, ParsedAct

logger = logging.getLogger(__name__)

INGESTION_META_FILE = "_ingestion-meta.json"


def clear_seed_files(seed_dir: Path) -> int:
    """
    Remove previously exported act files from the seed directory.

    Files starting with ``_`` (run metadata and other bookkeeping) are kept.

    Returns:
        Number of files removed
    """
    if not seed_dir.is_dir():
        return 0

    removed = 0
    for path in sorted(seed_dir.glob("*.json")):
        if path.name.startswith("_"):
            continue
        path.unlink()
        removed += 1

    if removed:
        logger.info(f"Removed {removed} stale seed files from {seed_dir}")
    return removed


def write_act(act: ParsedAct, output_path: Path) -> None:
    """Write a parsed act as JSON, replacing any previous file for the law."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(act.to_dict(), f, ensure_ascii=False, indent=2)
    logger.debug(f"Act {act.id} written to {output_path}")


def load_act(input_path: Path) -> ParsedAct:
    """
    Load a previously exported act.

    Args:
        input_path: Path to the seed JSON file

    Returns:
        ParsedAct rebuilt from the file
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Seed file not found: {input_path}")

    with open(input_path, "r", encoding="utf-8") as f:
        return ParsedAct.from_dict(json.load(f))


def write_ingestion_meta(report: IngestionReport, seed_dir: Path, source_url: str) -> Path:
    """Write the run summary next to the exported acts."""
    meta = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "as_of_date": report.as_of_date,
        "source": source_url,
        "requested_laws": report.requested_laws,
        "ingested_laws": report.ingested_laws,
        "total_provisions": report.total_provisions,
        "total_definitions": report.total_definitions,
        "selected_versions": report.selected_versions,
        "skipped": [{"law_id": f.law_id, "reason": f.reason} for f in report.failures],
    }

    output_path = seed_dir / INGESTION_META_FILE
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, ensure_ascii=False, indent=2)
    logger.info(f"Ingestion metadata written to {output_path}")
    return output_path
