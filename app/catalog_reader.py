"""
Extraction of resource rows from the catalog using an inferred schema
"""
import logging
from typing import List, Optional

from sqlalchemy import column, select, table

from models import InferredSchema, ResourceRecord, sort_by_title

# Retrieve main logger
logger = logging.getLogger("main")


def coerce_text(value) -> Optional[str]:
    """Turn any SQLite storage value into stripped text, None when empty"""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        text = bytes(value).decode("utf-8", errors="replace")
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    text = text.strip()
    return text or None


def build_resource_query(schema: InferredSchema):
    """SELECT the inferred columns under their logical names.

    Identifiers go through SQLAlchemy's quoting, so odd table or column names
    coming from the catalog metadata are escaped.
    """
    id_col = column(schema.id_column)
    title_col = column(schema.title_column)
    projection = [id_col.label("id"), title_col.label("title")]
    if schema.author_column:
        projection.append(column(schema.author_column).label("author"))
    if schema.abbrev_column:
        projection.append(column(schema.abbrev_column).label("abbrev"))

    return (
        select(*projection)
        .select_from(table(schema.table_name))
        .where(id_col.is_not(None), title_col.is_not(None))
    )


def extract_resources(connection, schema: InferredSchema) -> List[ResourceRecord]:
    """Read, normalise, de-duplicate and title-sort catalog resources.

    Duplicate ids keep the first row in the order the database returns them.
    """
    result = connection.execute(build_resource_query(schema))

    records = []
    seen = set()
    dropped = 0
    for row in result.mappings():
        record_id = coerce_text(row.get("id"))
        title = coerce_text(row.get("title"))
        if not record_id or not title:
            dropped += 1
            continue
        if record_id in seen:
            dropped += 1
            continue
        seen.add(record_id)
        records.append(
            ResourceRecord(
                id=record_id,
                title=title,
                author=coerce_text(row.get("author")),
                abbrev=coerce_text(row.get("abbrev")),
            )
        )

    if dropped:
        logger.debug(f"Dropped {dropped} catalog rows without id/title or with duplicate ids")
    logger.info(f"Extracted {len(records)} resources from {schema.table_name}")
    return sort_by_title(records)
