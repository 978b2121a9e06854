"""Ingestion of target statutes: fetch, select version, parse, export."""

import logging
import re
from pathlib import Path

from .config import Settings, get_settings
from .export import clear_seed_files, write_act, write_ingestion_meta
from .fetcher import PageFetcher, resolve_relative_url
from .history import parse_history_entries, select_history_entry
from .parser import parse_act_from_version_page
from .targets import TARGET_SLOVAK_LAWS, get_history_url
from .types import IngestionFailure, IngestionReport, ParsedAct, TargetLaw, VersionSelection

logger = logging.getLogger(__name__)

HISTORY_CACHE_FILE = "history.html"
_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9_.-]")


class IngestionError(RuntimeError):
    """Raised when a law yields nothing usable, or when a whole run ingests no law."""

    def __init__(self, message: str, report: IngestionReport | None = None):
        super().__init__(message)
        self.report = report


def _cache_filename(href: str) -> str:
    return _UNSAFE_FILENAME_RE.sub("_", href)


def _get_page(fetcher: PageFetcher, url: str, cache_path: Path, skip_fetch: bool) -> str:
    """Return page HTML, from the local cache in offline mode, otherwise fetched and cached."""
    if skip_fetch and cache_path.exists():
        logger.debug(f"Cache hit for {url}: {cache_path}")
        return cache_path.read_text(encoding="utf-8")

    result = fetcher.fetch(url)
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(result.body, encoding="utf-8")
    return result.body


def ingest_law(
    law: TargetLaw,
    fetcher: PageFetcher,
    as_of_date: str,
    source_dir: Path,
    skip_fetch: bool = False,
    settings: Settings | None = None,
) -> tuple[ParsedAct, VersionSelection]:
    """
    Ingest a single law as of a reference date.

    Steps: history page -> version selection -> version page -> ParsedAct.

    Raises:
        StructureError: If the history or version page layout is not recognised
        FetchError: If a page cannot be fetched
        IngestionError: If the selected version yields no provisions
    """
    settings = settings or fetcher.settings
    law_source_dir = source_dir / law.id

    history_url = get_history_url(law, settings.static_base_url)
    history_html = _get_page(fetcher, history_url, law_source_dir / HISTORY_CACHE_FILE, skip_fetch)
    entries = parse_history_entries(history_html)

    selection = select_history_entry(entries, as_of_date)
    logger.info(
        f"[{law.id}] Selected {selection.selected.href} ({selection.status.value}) "
        f"from {len(entries)} history entries"
    )

    version_url = resolve_relative_url(history_url, selection.selected.href)
    version_cache = law_source_dir / _cache_filename(selection.selected.href)
    version_html = _get_page(fetcher, version_url, version_cache, skip_fetch)

    act = parse_act_from_version_page(
        version_html,
        law,
        selection.status,
        in_force_date=selection.first_in_force_date,
        portal_base_url=settings.portal_base_url,
    )
    if not act.provisions:
        raise IngestionError("Parser extracted zero provisions from selected version page")

    return act, selection


def run_ingestion(
    laws: list[TargetLaw] | None = None,
    as_of_date: str | None = None,
    skip_fetch: bool = False,
    settings: Settings | None = None,
    fetcher: PageFetcher | None = None,
) -> IngestionReport:
    """
    Ingest every requested law and export the results.

    Each law is processed independently: any failure is recorded with its
    reason and the run continues with the next law. Seed files from earlier
    runs are removed first, so the seed directory always reflects this run.

    Args:
        laws: Laws to ingest (default: all registered target laws)
        as_of_date: Reference date (default: settings, then today)
        skip_fetch: Read cached pages instead of fetching when available
        settings: Settings instance (default: get_settings())
        fetcher: Page fetcher (default: a new PageFetcher owned by this run)

    Returns:
        IngestionReport summarising ingested acts and failures

    Raises:
        IngestionError: If no law was ingested successfully
    """
    settings = settings or get_settings()
    laws = list(TARGET_SLOVAK_LAWS) if laws is None else laws
    as_of_date = as_of_date or settings.resolve_as_of_date()
    source_dir = Path(settings.source_dir)
    seed_dir = Path(settings.seed_dir)

    owns_fetcher = fetcher is None
    fetcher = fetcher or PageFetcher(settings)

    report = IngestionReport(as_of_date=as_of_date, requested_laws=len(laws))
    seed_dir.mkdir(parents=True, exist_ok=True)
    clear_seed_files(seed_dir)

    try:
        for law in laws:
            logger.info(f"[{law.id}] Fetching and parsing...")
            try:
                act, selection = ingest_law(
                    law,
                    fetcher,
                    as_of_date,
                    source_dir,
                    skip_fetch=skip_fetch,
                    settings=settings,
                )
                write_act(act, seed_dir / law.seed_file)
            except Exception as e:
                reason = str(e) or e.__class__.__name__
                logger.error(f"[{law.id}] FAILED ({reason})")
                report.failures.append(IngestionFailure(law_id=law.id, reason=reason))
                continue

            report.acts.append(act)
            report.selected_versions.append(
                {"law_id": law.id, "href": selection.selected.href, "status": selection.status.value}
            )
            logger.info(
                f"[{law.id}] OK ({len(act.provisions)} provisions, "
                f"{len(act.definitions)} definitions, status: {selection.status.value})"
            )
    finally:
        if owns_fetcher:
            fetcher.close()

    write_ingestion_meta(report, seed_dir, settings.static_base_url.rstrip("/") + "/")

    if report.ingested_laws == 0:
        raise IngestionError("No laws were ingested successfully.", report=report)

    return report
