"""
Tests for resource extraction
"""
from catalog_reader import coerce_text, extract_resources
from db import open_catalog
from models import InferredSchema, title_sort_key
from schema import infer_schema


def _extract(path):
    with open_catalog(path) as connection:
        return extract_resources(connection, infer_schema(connection))


class TestCoerceText:
    def test_values(self):
        assert coerce_text(None) is None
        assert coerce_text("  Genesis ") == "Genesis"
        assert coerce_text("   ") is None
        assert coerce_text(42) == "42"
        assert coerce_text(2.0) == "2"
        assert coerce_text(2.5) == "2.5"
        assert coerce_text(b"LLS:ESV") == "LLS:ESV"


class TestExtractResources:
    """Tests for normalisation, de-duplication and ordering"""

    def test_genesis_scenario(self, make_catalog):
        path = make_catalog({
            "Resource": (
                ["resourceid INTEGER", "title TEXT", "author TEXT"],
                [(2, "genesis commentary", "Smith"), (1, "Genesis", "Moses")],
            ),
        })

        records = _extract(path)

        assert [r.id for r in records] == ["1", "2"]
        assert records[0].author == "Moses"
        assert records[0].abbrev is None

    def test_ids_unique_and_fields_non_empty(self, make_catalog):
        path = make_catalog({
            "Resource": (
                ["resourceid TEXT", "title TEXT"],
                [
                    ("a", "First A"),
                    ("a", "Second A"),
                    ("b", None),
                    (None, "Orphan"),
                    ("", "Empty id"),
                    ("c", "   "),
                    ("d", "Delta"),
                ],
            ),
        })

        records = _extract(path)

        assert [(r.id, r.title) for r in records] == [("d", "Delta"), ("a", "First A")]
        ids = [r.id for r in records]
        assert len(ids) == len(set(ids))
        assert all(r.id and r.title for r in records)

    def test_sorted_by_title(self, sample_catalog):
        records = _extract(sample_catalog)

        titles = [r.title for r in records]
        assert titles == sorted(titles, key=title_sort_key)
        assert titles[0] == "A Greek-English Lexicon of the New Testament"

    def test_deterministic(self, sample_catalog):
        assert _extract(sample_catalog) == _extract(sample_catalog)

    def test_empty_table_is_valid(self, make_catalog):
        path = make_catalog({"Resource": (["resourceid TEXT", "title TEXT"], [])})

        assert _extract(path) == []

    def test_non_text_storage_is_coerced(self, make_catalog):
        path = make_catalog({
            "Resource": (
                ["resourceid", "title", "author"],
                [(7, b"Blob Title", 3.0)],
            ),
        })

        records = _extract(path)

        assert records[0].id == "7"
        assert records[0].title == "Blob Title"
        assert records[0].author == "3"

    def test_odd_identifiers_are_quoted(self, make_catalog):
        table = 'Library "Items" 2024'
        path = make_catalog({table: (['"Resource Id" TEXT', '"Title" TEXT'], [("x", "Quoted")])})
        schema = InferredSchema(table_name=table, id_column="Resource Id", title_column="Title")

        with open_catalog(path) as connection:
            records = extract_resources(connection, schema)

        assert [(r.id, r.title) for r in records] == [("x", "Quoted")]
