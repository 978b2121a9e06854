"""Parser for extracting provisions from Slov-Lex statute version pages."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from .definitions import extract_definitions
from .targets import PORTAL_BASE_URL, get_canonical_portal_url
from .types import DocumentStatus, ParsedAct, ParsedProvision, TargetLaw
from .utils import clean_fragment, normalize_whitespace, parse_localized_date

logger = logging.getLogger(__name__)

# Hierarchy markers further back than this are ignored when labelling a §.
CHAPTER_LOOKBACK_CHARS = 15000
# Shorter bodies are structural placeholders (e.g. "zrušený").
MIN_PROVISION_CONTENT_CHARS = 5

CHAPTER_SEPARATOR = " / "
HIERARCHY_UNITS = ("cast", "hlava", "diel", "oddiel", "skupinaParagrafov")

_PREDPIS_START_RE = re.compile(r'<div class="predpis Skupina\s*" id="predpis">')
_PREDPIS_END_MARKERS = ('<div id="Poznamky"', '<div id="Prilohy"', '<div class="poznamky"')
_PARAGRAF_START_RE = re.compile(r'<div class="paragraf Skupina [^"]*" id="(paragraf-[^"]+)">')
_SECTION_SIGN_RE = re.compile(r"^§\s+")
_SECTION_PREFIX_RE = re.compile(r"^§\s*", flags=re.IGNORECASE)

_PREFIX_MARKER_CLASSES = ("odsekOznacenie", "pismenoOznacenie", "bodOznacenie")
_TEXT_CLASS = "text"

_HIERARCHY_RES = {
    unit: re.compile(
        rf'<div class="{unit}Oznacenie"[^>]*>(.*?)</div>'
        rf'(?:\s*<div class="{unit}Nadpis NADPIS"[^>]*>(.*?)</div>)?',
        flags=re.IGNORECASE | re.DOTALL,
    )
    for unit in HIERARCHY_UNITS
}


class StructureError(ValueError):
    """Raised when a Slov-Lex page does not have the layout the parser expects."""


def _block_text(tag: Tag | None) -> str | None:
    """Cleaned text of a block, or None when absent or empty."""
    if tag is None:
        return None
    value = clean_fragment(tag.decode_contents())
    return value or None


def _exact_class(*names: str):
    """bs4 filter matching <div> blocks whose class attribute is exactly one of names."""

    def matcher(tag: Tag) -> bool:
        classes = tag.get("class") or []
        return tag.name == "div" and len(classes) == 1 and classes[0] in names

    return matcher


def extract_predpis_block(html: str) -> str:
    """
    Return the substantive statute body of a version page.

    The block starts at the ``predpis`` root div and is cut at the first of
    the notes/annex containers that follow the operative text.

    Raises:
        StructureError: If the root block is missing.
    """
    match = _PREDPIS_START_RE.search(html)
    if not match:
        raise StructureError("Unable to locate predpis root block in statute HTML")

    start = match.start()
    end = len(html)
    for marker in _PREDPIS_END_MARKERS:
        idx = html.find(marker, start)
        if idx != -1 and idx < end:
            end = idx

    return html[start:end]


def _find_last_hierarchy_unit(snippet: str, unit: str) -> str | None:
    """Label plus heading of the last ``unit`` block in snippet."""
    last = None
    for match in _HIERARCHY_RES[unit].finditer(snippet):
        label = clean_fragment(match.group(1) or "")
        heading = clean_fragment(match.group(2) or "")
        merged = normalize_whitespace(f"{label} {heading}")
        if merged:
            last = merged
    return last


def find_chapter_label(predpis_html: str, position: int) -> str | None:
    """
    Build the hierarchy path (part / title / division / ...) above a §.

    Only the ``CHAPTER_LOOKBACK_CHARS`` characters before ``position`` are
    searched. Units are emitted broadest first.
    """
    snippet = predpis_html[max(0, position - CHAPTER_LOOKBACK_CHARS):position]
    parts = [_find_last_hierarchy_unit(snippet, unit) for unit in HIERARCHY_UNITS]
    parts = [part for part in parts if part]
    if not parts:
        return None
    return CHAPTER_SEPARATOR.join(parts)


def build_provision_content(paragraph_html: str) -> str:
    """
    Reconstruct the body text of one § from its HTML.

    Paragraph, letter and point markers are buffered and prefixed to the
    next ``text`` block, giving one logical line per text block:

        (1) Tento zákon upravuje ...
        a) osobným údajom sú ...

    When the markup has no marker blocks at all, the whole fragment is
    cleaned into a single line. Consecutive duplicate lines are collapsed.
    """
    soup = BeautifulSoup(paragraph_html, "html.parser")
    for cls in ("paragrafOznacenie", "paragrafNadpis"):
        header = soup.find("div", class_=cls)
        if header is not None:
            header.decompose()

    lines: list[str] = []
    marker_buffer: list[str] = []
    for block in soup.find_all(_exact_class(*_PREFIX_MARKER_CLASSES, _TEXT_CLASS)):
        value = clean_fragment(block.decode_contents())
        if not value:
            continue

        if block["class"][0] == _TEXT_CLASS:
            prefix = f"{' '.join(marker_buffer)} " if marker_buffer else ""
            lines.append(normalize_whitespace(f"{prefix}{value}"))
            marker_buffer = []
        else:
            marker_buffer.append(value)

    if not lines:
        return clean_fragment(str(soup))

    deduped: list[str] = []
    for line in lines:
        if not deduped or deduped[-1] != line:
            deduped.append(line)

    return "\n".join(deduped)


def _parse_provision(block: str, anchor_id: str) -> ParsedProvision | None:
    """Parse one § span; returns None for placeholders without real content."""
    soup = BeautifulSoup(block, "html.parser")

    raw_ref = _block_text(soup.find("div", class_="paragrafOznacenie"))
    if raw_ref is None:
        raw_ref = f"§ {anchor_id.removeprefix('paragraf-')}"
    provision_ref = _SECTION_SIGN_RE.sub("§", normalize_whitespace(raw_ref))
    section = normalize_whitespace(_SECTION_PREFIX_RE.sub("", provision_ref))

    heading = _block_text(soup.find("div", class_="paragrafNadpis"))
    title = normalize_whitespace(heading) if heading else provision_ref

    content = build_provision_content(block)
    if len(content) < MIN_PROVISION_CONTENT_CHARS:
        logger.debug("Skipping %s: content too short (%r)", provision_ref, content)
        return None

    return ParsedProvision(
        provision_ref=provision_ref,
        section=section,
        title=title,
        content=content,
    )


def parse_provisions(predpis_html: str) -> list[ParsedProvision]:
    """
    Split the statute body into provisions, in document order.

    Each § spans from its start marker to the next one (or the end of the
    block for the last §).
    """
    starts = [(m.group(1), m.start()) for m in _PARAGRAF_START_RE.finditer(predpis_html)]

    provisions: list[ParsedProvision] = []
    for i, (anchor_id, start) in enumerate(starts):
        end = starts[i + 1][1] if i + 1 < len(starts) else len(predpis_html)
        provision = _parse_provision(predpis_html[start:end], anchor_id)
        if provision is None:
            continue
        provision.chapter = find_chapter_label(predpis_html, start)
        provisions.append(provision)

    return provisions


def parse_act_from_version_page(
    version_html: str,
    law: TargetLaw,
    status: DocumentStatus,
    in_force_date: str | None = None,
    portal_base_url: str = PORTAL_BASE_URL,
) -> ParsedAct:
    """
    Parse a Slov-Lex version page into a ParsedAct.

    Args:
        version_html: Raw HTML of one dated statute version
        law: Target law the page belongs to
        status: Status computed by version selection
        in_force_date: First in-force date reported by version selection
        portal_base_url: Base of the canonical portal URL stored on the act

    Returns:
        ParsedAct with provisions in document order and mined definitions

    Raises:
        StructureError: If the page has no predpis root block
    """
    soup = BeautifulSoup(version_html, "html.parser")
    citation = _block_text(soup.find("h1")) or f"{law.number}/{law.year} Z. z."
    issued_raw = _block_text(soup.find("div", class_="predpisDatum"))
    title_body = _block_text(soup.find("div", class_="predpisNadpis"))
    issued_date = parse_localized_date(issued_raw) if issued_raw else None

    title = f"Zákon č. {citation} {title_body}" if title_body else f"Zákon č. {citation}"

    predpis_html = extract_predpis_block(version_html)
    provisions = parse_provisions(predpis_html)
    definitions = extract_definitions(provisions)

    logger.info(
        f"Parsed {len(provisions)} provisions and {len(definitions)} definitions from {law.id}"
    )

    return ParsedAct(
        id=law.id,
        title=normalize_whitespace(title),
        title_en=law.title_en,
        short_name=law.short_name,
        status=status,
        issued_date=issued_date,
        in_force_date=in_force_date,
        url=get_canonical_portal_url(law, portal_base_url),
        description=law.description,
        provisions=provisions,
        definitions=definitions,
    )
