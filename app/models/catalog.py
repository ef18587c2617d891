"""
Models: catalog location, inferred schema and cache payload
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .resource import ResourceRecord


@dataclass(frozen=True)
class CatalogLocation:
    """A specific catalog file version, identified by path and mtime"""

    path: str
    mtime_millis: int


@dataclass(frozen=True)
class InferredSchema:
    table_name: str
    id_column: str
    title_column: str
    author_column: Optional[str] = None
    abbrev_column: Optional[str] = None


@dataclass
class CachePayload:
    source_path: str
    source_mtime_millis: int
    records: List[ResourceRecord] = field(default_factory=list)

    def matches(self, location: CatalogLocation) -> bool:
        return self.source_path == location.path and self.source_mtime_millis == location.mtime_millis

    def to_dict(self):
        return {
            "source_path": self.source_path,
            "source_mtime_millis": self.source_mtime_millis,
            "records": [record.to_dict() for record in self.records],
        }
