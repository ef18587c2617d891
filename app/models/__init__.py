"""
Models package

Plain value objects passed between the catalog pipeline stages:
- resource.py: ResourceRecord and the title ordering used everywhere
- catalog.py: CatalogLocation, InferredSchema, CachePayload
"""

from .resource import ResourceRecord, title_sort_key, sort_by_title
from .catalog import CatalogLocation, InferredSchema, CachePayload

__all__ = [
    "ResourceRecord",
    "title_sort_key",
    "sort_by_title",
    "CatalogLocation",
    "InferredSchema",
    "CachePayload",
]
