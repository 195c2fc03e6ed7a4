"""
Registry data model.

Instruments are plain dataclasses mutated in place while a sync run is in
progress. A Snapshot freezes a deep copy of them under a run date; a Diff is
the write-once comparison of two snapshots. JSON keys use the camelCase names
of the published files.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

# Lifecycle statuses
IN_FORCE = "in_force"
AMENDED = "amended"
REPEALED = "repealed"
UNKNOWN = "unknown"

STATUSES = (IN_FORCE, AMENDED, REPEALED, UNKNOWN)

# attribute name -> JSON key
_JSON_KEYS = {
    "id": "id",
    "title": "title",
    "source_url": "sourceUrl",
    "topic": "topic",
    "uae_portal": "uaePortal",
    "status": "status",
    "effective_from": "effectiveFrom",
    "effective_to": "effectiveTo",
    "meta_hash": "metaHash",
    "as_amended_by": "asAmendedBy",
    "repealed_by": "repealedBy",
}
_ALWAYS_SERIALIZED = ("id", "title", "as_amended_by", "repealed_by")


@dataclass
class Instrument:
    """One legal instrument tracked by the registry."""
    id: str
    title: str = ""
    source_url: Optional[str] = None
    topic: Optional[str] = None
    uae_portal: Optional[str] = None
    status: Optional[str] = None
    effective_from: Optional[str] = None  # ISO YYYY-MM-DD
    effective_to: Optional[str] = None  # ISO YYYY-MM-DD, set on repeal only
    meta_hash: Optional[str] = None
    as_amended_by: List[str] = field(default_factory=list)
    repealed_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with JSON key names, omitting unset optional fields."""
        data = {}
        for attr, key in _JSON_KEYS.items():
            value = getattr(self, attr)
            if attr in _ALWAYS_SERIALIZED or value is not None:
                data[key] = copy.copy(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instrument":
        kwargs = {}
        for attr, key in _JSON_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
        kwargs["as_amended_by"] = list(kwargs.get("as_amended_by") or [])
        kwargs["title"] = kwargs.get("title") or ""
        return cls(**kwargs)


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable, dated capture of the whole registry.

    Instruments are deep-copied on construction, so later mutation of the
    run's working set never leaks into a snapshot.
    """
    date: Optional[str]
    instruments: Tuple[Instrument, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "instruments", tuple(copy.deepcopy(list(self.instruments))))

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls(date=None)

    @classmethod
    def from_records(cls, date: Optional[str], records: Iterable[Dict[str, Any]]) -> "Snapshot":
        return cls(date=date, instruments=tuple(Instrument.from_dict(r) for r in records))

    def by_id(self) -> Dict[str, Instrument]:
        """Id-keyed map in snapshot order; a repeated id keeps its last record."""
        return {instrument.id: instrument for instrument in self.instruments}

    def to_records(self) -> List[Dict[str, Any]]:
        return [instrument.to_dict() for instrument in self.instruments]

    def in_force(self) -> List[Instrument]:
        """Instruments whose status is anything but repealed."""
        return [i for i in self.instruments if i.status != REPEALED]

    def __len__(self) -> int:
        return len(self.instruments)


@dataclass
class InstrumentChange:
    """Tracked-field changes for one instrument present in both snapshots."""
    id: str
    changes: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "changes": self.changes}


@dataclass
class Diff:
    """Structured comparison of a previous and a current snapshot."""
    generated_at: str
    added: List[Instrument] = field(default_factory=list)
    removed: List[Instrument] = field(default_factory=list)
    changed: List[InstrumentChange] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "added": [i.to_dict() for i in self.added],
            "removed": [i.to_dict() for i in self.removed],
            "changed": [c.to_dict() for c in self.changed],
        }
