"""Shared dataclasses used across history, parser, export and ingest modules.

No imports from other slovlex modules, so any module can import it
without circular dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class DocumentStatus(str, Enum):
    """Legal status of a statute on the reference date of a run."""

    IN_FORCE = "in_force"
    AMENDED = "amended"
    REPEALED = "repealed"
    NOT_YET_IN_FORCE = "not_yet_in_force"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TargetLaw:
    """A statute selected for ingestion, keyed by promulgation year and number."""

    id: str
    year: int
    number: int
    seed_file: str
    title_en: str
    short_name: str
    description: str


@dataclass(slots=True)
class HistoryEntry:
    """One row of a law's effectiveness history."""

    href: str
    in_force_from: str
    in_force_to: str
    is_promulgated_version: bool = False


@dataclass(slots=True)
class VersionSelection:
    """Revision chosen for a reference date, with its computed status."""

    selected: HistoryEntry
    status: DocumentStatus
    first_in_force_date: Optional[str] = None


@dataclass(slots=True)
class ParsedProvision:
    """A single § of a statute with its reconstructed text."""

    provision_ref: str
    section: str
    title: str
    content: str
    chapter: Optional[str] = None


@dataclass(slots=True)
class ParsedDefinition:
    """A defined term and the provision it was mined from."""

    term: str
    definition: str
    source_provision: str


@dataclass(slots=True)
class ParsedAct:
    """Structured result of ingesting one statute."""

    id: str
    title: str
    title_en: str
    short_name: str
    status: DocumentStatus
    url: str
    description: str
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    provisions: list[ParsedProvision] = field(default_factory=list)
    definitions: list[ParsedDefinition] = field(default_factory=list)
    type: str = "statute"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the seed JSON shape (absent optional fields omitted)."""
        provisions = []
        for provision in self.provisions:
            item = asdict(provision)
            if item["chapter"] is None:
                del item["chapter"]
            provisions.append(item)

        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "title_en": self.title_en,
            "short_name": self.short_name,
            "status": self.status.value,
        }
        if self.issued_date:
            data["issued_date"] = self.issued_date
        if self.in_force_date:
            data["in_force_date"] = self.in_force_date
        data["url"] = self.url
        data["description"] = self.description
        data["provisions"] = provisions
        data["definitions"] = [asdict(d) for d in self.definitions]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedAct:
        """Rebuild an act from its seed JSON shape."""
        return cls(
            id=data["id"],
            type=data.get("type", "statute"),
            title=data["title"],
            title_en=data.get("title_en", ""),
            short_name=data.get("short_name", ""),
            status=DocumentStatus(data.get("status", DocumentStatus.UNKNOWN.value)),
            url=data.get("url", ""),
            description=data.get("description", ""),
            issued_date=data.get("issued_date"),
            in_force_date=data.get("in_force_date"),
            provisions=[
                ParsedProvision(
                    provision_ref=p["provision_ref"],
                    section=p["section"],
                    title=p["title"],
                    content=p["content"],
                    chapter=p.get("chapter"),
                )
                for p in data.get("provisions", [])
            ],
            definitions=[
                ParsedDefinition(
                    term=d["term"],
                    definition=d["definition"],
                    source_provision=d["source_provision"],
                )
                for d in data.get("definitions", [])
            ],
        )


@dataclass(slots=True)
class FetchResult:
    """Response returned by the page fetcher."""

    url: str
    status: int
    body: str
    content_type: str = ""


@dataclass(slots=True)
class IngestionFailure:
    """A law that could not be ingested, with the reason."""

    law_id: str
    reason: str


@dataclass
class IngestionReport:
    """Summary of one ingestion run across all requested laws."""

    as_of_date: str
    requested_laws: int = 0
    acts: list[ParsedAct] = field(default_factory=list)
    selected_versions: list[dict[str, str]] = field(default_factory=list)
    failures: list[IngestionFailure] = field(default_factory=list)

    @property
    def ingested_laws(self) -> int:
        return len(self.acts)

    @property
    def total_provisions(self) -> int:
        return sum(len(act.provisions) for act in self.acts)

    @property
    def total_definitions(self) -> int:
        return sum(len(act.definitions) for act in self.acts)
