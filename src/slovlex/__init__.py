"""Slovlex - structured extraction of Slovak statutes from Slov-Lex pages."""

__version__ = "0.1.0"

# Types
from .types import (
    DocumentStatus,
    TargetLaw,
    HistoryEntry,
    VersionSelection,
    ParsedProvision,
    ParsedDefinition,
    ParsedAct,
    IngestionReport,
)

# Normalization
from .utils import (
    decode_entities,
    strip_tags,
    normalize_whitespace,
    clean_fragment,
    parse_localized_date,
)

# History / version selection
from .history import parse_history_entries, select_history_entry

# Provision parsing
from .parser import (
    StructureError,
    extract_predpis_block,
    find_chapter_label,
    build_provision_content,
    parse_provisions,
    parse_act_from_version_page,
)

# Definitions
from .definitions import extract_definitions, is_definition_like

# Targets
from .targets import (
    TARGET_SLOVAK_LAWS,
    get_target_law,
    get_history_url,
    get_version_url,
    get_canonical_portal_url,
)

__all__ = [
    # types
    "DocumentStatus",
    "TargetLaw",
    "HistoryEntry",
    "VersionSelection",
    "ParsedProvision",
    "ParsedDefinition",
    "ParsedAct",
    "IngestionReport",
    # normalization
    "decode_entities",
    "strip_tags",
    "normalize_whitespace",
    "clean_fragment",
    "parse_localized_date",
    # history
    "parse_history_entries",
    "select_history_entry",
    # parser
    "StructureError",
    "extract_predpis_block",
    "find_chapter_label",
    "build_provision_content",
    "parse_provisions",
    "parse_act_from_version_page",
    # definitions
    "extract_definitions",
    "is_definition_like",
    # targets
    "TARGET_SLOVAK_LAWS",
    "get_target_law",
    "get_history_url",
    "get_version_url",
    "get_canonical_portal_url",
]
