"""
Schema inference for the Logos catalog.

The catalog layout changed between Logos releases, so instead of a fixed
schema the resource table and its columns are discovered from the database
metadata: known table names are tried first, then every other table, and
columns are matched against prioritised candidate names.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import inspect

from constants import (
    RESOURCE_TABLE_CANDIDATES,
    ID_COLUMN_CANDIDATES,
    TITLE_COLUMN_CANDIDATES,
    AUTHOR_COLUMN_CANDIDATES,
    ABBREV_COLUMN_CANDIDATES,
)
from exceptions import SchemaNotFoundException
from models import InferredSchema

# Retrieve main logger
logger = logging.getLogger("main")


def resolve_field(available_names: Sequence[str], candidates: Iterable[str]) -> Optional[str]:
    """Return the first candidate present in available_names, ignoring case.

    Candidates are tried in priority order; the actual spelling from
    available_names is returned.
    """
    by_lower = {}
    for name in available_names:
        by_lower.setdefault(name.lower(), name)
    for candidate in candidates:
        match = by_lower.get(candidate.lower())
        if match is not None:
            return match
    return None


def table_search_order(table_names: Sequence[str], known_tables: Sequence[str] = RESOURCE_TABLE_CANDIDATES) -> List[str]:
    """Known table names first (in priority order), then every other table"""
    ordered = []
    seen = set()
    for known in known_tables:
        actual = resolve_field(table_names, [known])
        if actual is not None and actual not in seen:
            ordered.append(actual)
            seen.add(actual)
    for name in table_names:
        if name not in seen:
            ordered.append(name)
            seen.add(name)
    return ordered


def infer_schema_from_columns(table_name: str, columns: Sequence[str]) -> Optional[InferredSchema]:
    id_column = resolve_field(columns, ID_COLUMN_CANDIDATES)
    title_column = resolve_field(columns, TITLE_COLUMN_CANDIDATES)
    if not id_column or not title_column:
        return None
    return InferredSchema(
        table_name=table_name,
        id_column=id_column,
        title_column=title_column,
        author_column=resolve_field(columns, AUTHOR_COLUMN_CANDIDATES),
        abbrev_column=resolve_field(columns, ABBREV_COLUMN_CANDIDATES),
    )


def infer_schema(connection) -> InferredSchema:
    """Pick the first table exposing an id and a title column"""
    inspector = inspect(connection)
    table_names = inspector.get_table_names()
    logger.debug(f"Catalog tables: {', '.join(table_names) or '(none)'}")

    for table_name in table_search_order(table_names):
        columns = [column["name"] for column in inspector.get_columns(table_name)]
        schema = infer_schema_from_columns(table_name, columns)
        if schema is None:
            continue
        logger.info(
            f"Using table {schema.table_name} (id={schema.id_column}, title={schema.title_column}, "
            f"author={schema.author_column}, abbrev={schema.abbrev_column})"
        )
        return schema

    raise SchemaNotFoundException()
