"""
Model: ResourceRecord
One normalized entry of the Logos library catalog
"""

import unicodedata
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class ResourceRecord:
    id: str
    title: str
    author: Optional[str] = None
    abbrev: Optional[str] = None

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build a record from a cached dict, raising ValueError when it is unusable"""
        if not isinstance(data, dict):
            raise ValueError(f"Resource entry must be an object, got {type(data).__name__}")
        record_id = data.get("id")
        title = data.get("title")
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("Resource entry has no id")
        if not isinstance(title, str) or not title:
            raise ValueError(f"Resource {record_id} has no title")
        author = data.get("author")
        abbrev = data.get("abbrev")
        return cls(
            id=record_id,
            title=title,
            author=author if isinstance(author, str) else None,
            abbrev=abbrev if isinstance(abbrev, str) else None,
        )


def title_sort_key(title):
    """Collation key approximating a root-locale compare.

    Primary level ignores case and accents, ties fall back to the
    case-folded text and finally the raw title so the order is total.
    """
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    primary = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (primary, folded, title)


def sort_by_title(records: Iterable[ResourceRecord]) -> List[ResourceRecord]:
    return sorted(records, key=lambda record: title_sort_key(record.title))
