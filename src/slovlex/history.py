"""Effectiveness history parsing and in-force version selection."""

import logging

from bs4 import BeautifulSoup

from .parser import StructureError
from .types import DocumentStatus, HistoryEntry, VersionSelection

logger = logging.getLogger(__name__)

_HISTORY_ROW_CLASS = "effectivenessHistoryItem"


def parse_history_entries(history_html: str) -> list[HistoryEntry]:
    """
    Extract revision rows from a law's history listing page.

    Each row looks like::

        <tr class="effectivenessHistoryItem" data-vyhlasene="0"
            data-ucinnostod="2018-05-25" data-ucinnostdo="2018-12-31">
            ... <a href="20180525.html">...</a> ...
        </tr>

    Rows are returned in document order. Rows without a version link are
    ignored.

    Raises:
        StructureError: If the page contains no history rows.
    """
    soup = BeautifulSoup(history_html, "html.parser")
    entries: list[HistoryEntry] = []

    for row in soup.find_all("tr", class_=_HISTORY_ROW_CLASS):
        link = row.find("a", href=True)
        if link is None:
            continue
        entries.append(
            HistoryEntry(
                href=link["href"].strip(),
                in_force_from=(row.get("data-ucinnostod") or "").strip(),
                in_force_to=(row.get("data-ucinnostdo") or "").strip(),
                is_promulgated_version=(row.get("data-vyhlasene") or "").strip() == "1",
            )
        )

    if not entries:
        raise StructureError("No history entries found in law history page")

    logger.debug("Parsed %d history entries", len(entries))
    return entries


def select_history_entry(entries: list[HistoryEntry], as_of_date: str) -> VersionSelection:
    """
    Pick the revision that is legally applicable on ``as_of_date``.

    Promulgation records and rows without an in-force-from date are not
    text versions and never take part. Dates are fixed-width ISO strings,
    so plain string comparison orders them correctly.

    - Some revision covers the date: the last one (by start date, stable
      for ties) wins and the law is ``in_force``.
    - Otherwise, if revisions start after the date: the earliest of them is
      selected and the law is ``not_yet_in_force``; its own start date is
      reported as the first in-force date.
    - Otherwise the last revision is selected and the law is ``repealed``.

    Raises:
        StructureError: If no candidate revision remains.
    """
    candidates = sorted(
        (e for e in entries if not e.is_promulgated_version and e.in_force_from),
        key=lambda e: e.in_force_from,
    )
    if not candidates:
        raise StructureError("No effective (non-promulgated) versions found on history page")

    first_in_force_date = candidates[0].in_force_from

    active = [
        e
        for e in candidates
        if e.in_force_from <= as_of_date and (not e.in_force_to or e.in_force_to >= as_of_date)
    ]
    if active:
        return VersionSelection(
            selected=active[-1],
            status=DocumentStatus.IN_FORCE,
            first_in_force_date=first_in_force_date,
        )

    future = [e for e in candidates if e.in_force_from > as_of_date]
    if future:
        return VersionSelection(
            selected=future[0],
            status=DocumentStatus.NOT_YET_IN_FORCE,
            first_in_force_date=future[0].in_force_from,
        )

    return VersionSelection(
        selected=candidates[-1],
        status=DocumentStatus.REPEALED,
        first_in_force_date=first_in_force_date,
    )
