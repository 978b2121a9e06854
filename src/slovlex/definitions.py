"""Mining of defined terms from definition provisions ("Vymedzenie pojmov")."""

import logging
import re

from .types import ParsedDefinition, ParsedProvision
from .utils import normalize_whitespace

logger = logging.getLogger(__name__)

MIN_DEFINITION_CHARS = 12
MIN_TERM_CHARS = 2
MAX_TERM_CHARS = 140

_TITLE_MARKERS = ("vymedzenie", "pojmov")
_BODY_MARKERS = (
    "na účely tohto zákona sa rozumie",
    "na účely tohto zákona sa rozumejú",
)
_LETTER_ITEM_RE = re.compile(r"^[a-z]\)\s+(.+)", flags=re.IGNORECASE)
# Term ends at the first comma/semicolon or copula ("je", "sú", "sa rozumie",
# "sa považuje") or relative pronoun ("ktorý", "ktorá", ...).
_TERM_END_RE = re.compile(
    r",|;|\sje\s|\ssú\s|\ssa\srozumie|\ssa\spovažuje|\sktor[ýaéeíôú]",
    flags=re.IGNORECASE,
)


def is_definition_like(provision: ParsedProvision) -> bool:
    """True when the heading or body signals that the § defines terms."""
    title = provision.title.lower()
    content = provision.content.lower()
    return any(marker in title for marker in _TITLE_MARKERS) or any(
        marker in content for marker in _BODY_MARKERS
    )


def _extract_term(definition_text: str) -> str:
    return normalize_whitespace(_TERM_END_RE.split(definition_text, maxsplit=1)[0])


def extract_definitions(provisions: list[ParsedProvision]) -> list[ParsedDefinition]:
    """
    Extract term/definition pairs from lettered items of definition provisions.

    Example line inside "§ 2 Vymedzenie pojmov":

        a) osobným údajom sú údaje týkajúce sa identifikovanej ...

    yields term "osobným údajom" with the full item text as the definition.
    Pairs are unique per (provision, lowercased term); the first one wins.
    """
    definitions: list[ParsedDefinition] = []
    seen: set[tuple[str, str]] = set()

    for provision in provisions:
        if not is_definition_like(provision):
            continue

        for line in provision.content.split("\n"):
            match = _LETTER_ITEM_RE.match(line)
            if not match:
                continue

            definition_text = normalize_whitespace(match.group(1))
            if len(definition_text) < MIN_DEFINITION_CHARS:
                continue

            term = _extract_term(definition_text)
            if not MIN_TERM_CHARS <= len(term) <= MAX_TERM_CHARS:
                continue

            key = (provision.provision_ref, term.lower())
            if key in seen:
                continue
            seen.add(key)

            definitions.append(
                ParsedDefinition(
                    term=term,
                    definition=definition_text,
                    source_provision=provision.provision_ref,
                )
            )

    logger.debug("Extracted %d definitions from %d provisions", len(definitions), len(provisions))
    return definitions
