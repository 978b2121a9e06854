"""Text and date normalization helpers for Slov-Lex HTML fragments."""

import html
import re

SLOVAK_MONTHS: dict[str, str] = {
    "januara": "01",
    "januára": "01",
    "februara": "02",
    "februára": "02",
    "marca": "03",
    "aprila": "04",
    "apríla": "04",
    "maja": "05",
    "mája": "05",
    "juna": "06",
    "júna": "06",
    "jula": "07",
    "júla": "07",
    "augusta": "08",
    "septembra": "09",
    "oktobra": "10",
    "októbra": "10",
    "novembra": "11",
    "decembra": "12",
}

# Named references folded to plain ASCII before generic unescaping.
_ASCII_ENTITIES = {
    "&nbsp;": " ",
    "&ndash;": "-",
    "&mdash;": "-",
    "&hellip;": "...",
}
_ASCII_ENTITY_RE = re.compile("|".join(re.escape(k) for k in _ASCII_ENTITIES))

_BR_RE = re.compile(r"<br\s*/?\s*>", flags=re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_CITATION_LINK_RE = re.compile(
    r'<a[^>]*class="citacnyOdkazJednoduchy"[^>]*>.*?</a>',
    flags=re.IGNORECASE | re.DOTALL,
)
_FOOTNOTE_RE = re.compile(r"<sup[^>]*>.*?</sup>", flags=re.IGNORECASE | re.DOTALL)
_ANCHOR_OPEN_RE = re.compile(r"<a[^>]*>", flags=re.IGNORECASE)
_ANCHOR_CLOSE_RE = re.compile(r"</a>", flags=re.IGNORECASE)
_SLOVAK_DATE_RE = re.compile(
    r"(\d{1,2})\.\s*([a-záäčďéíĺľňóôŕšťúýž]+)\s+(\d{4})",
    flags=re.IGNORECASE,
)


def decode_entities(text: str) -> str:
    """Replace named, decimal and hex character references with their characters."""
    text = _ASCII_ENTITY_RE.sub(lambda m: _ASCII_ENTITIES[m.group(0)], text)
    return html.unescape(text)


def strip_tags(text: str) -> str:
    """
    Remove markup from an HTML fragment.

    ``<br>`` becomes a newline, every other tag becomes a space, entities are
    decoded and non-breaking spaces are turned into regular spaces.
    """
    text = _BR_RE.sub("\n", text)
    text = _TAG_RE.sub(" ", text)
    text = decode_entities(text)
    return text.replace("\u00a0", " ")


def normalize_whitespace(text: str) -> str:
    """Collapse any run of whitespace to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_fragment(fragment: str) -> str:
    """
    Turn an HTML fragment from a statute page into a single line of text.

    Citation links and superscript footnote markers are dropped before the
    generic tag stripping, otherwise their numerals end up glued to the
    provision text. Remaining anchors are unwrapped without adding spaces.
    """
    fragment = _CITATION_LINK_RE.sub("", fragment)
    fragment = _FOOTNOTE_RE.sub("", fragment)
    fragment = _ANCHOR_OPEN_RE.sub("", fragment)
    fragment = _ANCHOR_CLOSE_RE.sub("", fragment)
    return normalize_whitespace(strip_tags(fragment))


def parse_localized_date(text: str) -> str | None:
    """
    Parse a Slovak ``day. month year`` date into ISO format.

    Examples:
        "29. novembra 2017" -> "2017-11-29"
        "1. januara 2018"   -> "2018-01-01"

    Returns:
        ``YYYY-MM-DD`` string, or None when no date is found or the month
        name is not recognised.
    """
    clean = normalize_whitespace(strip_tags(text)).lower()
    match = _SLOVAK_DATE_RE.search(clean)
    if not match:
        return None

    month = SLOVAK_MONTHS.get(match.group(2))
    if not month:
        return None

    day = match.group(1).zfill(2)
    return f"{match.group(3)}-{month}-{day}"
