"""
Tests for weighted fuzzy search
"""
from fuzzy_index import FuzzyIndex, search_records, field_distance
from models import ResourceRecord, sort_by_title


def _records():
    return sort_by_title([
        ResourceRecord(id="1", title="Genesis", author="Moses"),
        ResourceRecord(id="2", title="genesis commentary", author="Smith"),
        ResourceRecord(id="LLS:TOD", title="The Treasury of David", author="Charles Spurgeon", abbrev="TOD"),
        ResourceRecord(id="LLS:ESV", title="English Standard Version", abbrev="ESV"),
    ])


class TestEmptyQuery:
    def test_returns_first_page_in_title_order(self):
        records = sort_by_title(ResourceRecord(id=str(i), title=f"Title {i:03d}") for i in range(60))
        index = FuzzyIndex.build(records)

        results = index.search("")

        assert len(results) == 50
        assert results == records[:50]

    def test_whitespace_query_is_blank(self):
        records = _records()
        assert search_records(FuzzyIndex.build(records), records, "   ") == records


class TestFuzzySearch:
    """Tests for ranked multi-field matching"""

    def test_genesis_scenario(self):
        records = _records()
        index = FuzzyIndex.build(records)

        results = index.search("genesis")

        assert [r.id for r in results] == ["1", "2"]

    def test_no_match_is_empty(self):
        index = FuzzyIndex.build(_records())
        assert index.search("zzzzqqqq") == []

    def test_author_match_surfaces_record(self):
        index = FuzzyIndex.build(_records())
        assert [r.id for r in index.search("spurgeon")] == ["LLS:TOD"]

    def test_title_match_outranks_id_match(self):
        records = sort_by_title([
            ResourceRecord(id="HEBREWS-NOTES", title="Analytical Lexicon"),
            ResourceRecord(id="LLS:1.0.1", title="Hebrews Commentary"),
        ])
        index = FuzzyIndex.build(records)

        results = index.search("hebrews")

        assert [r.id for r in results] == ["LLS:1.0.1", "HEBREWS-NOTES"]

    def test_match_position_does_not_matter(self):
        index = FuzzyIndex.build([ResourceRecord(id="x", title="A Commentary on the Psalms")])
        assert len(index.search("psalms")) == 1

    def test_threshold_controls_strictness(self):
        records = _records()

        assert [r.id for r in FuzzyIndex.build(records, threshold=0.3).search("genesys")][:1] == ["1"]
        assert FuzzyIndex.build(records, threshold=0.0).search("genesys") == []

    def test_single_character_query_is_ignored(self):
        index = FuzzyIndex.build(_records())
        assert index.search("g") == []

    def test_limit_is_capped_at_page_size(self):
        records = sort_by_title(ResourceRecord(id=str(i), title=f"Genesis volume {i}") for i in range(80))
        index = FuzzyIndex.build(records)

        assert len(index.search("genesis", limit=500)) == 50
        assert len(index.search("genesis", limit=5)) == 5


class TestWithoutIndex:
    def test_build_of_empty_catalog(self):
        assert FuzzyIndex.build([]) is None

    def test_query_without_index(self):
        assert search_records(None, [], "genesis") == []
        assert search_records(None, [], "") == []


def test_short_field_is_compared_whole():
    assert field_distance("genesis", "gen") > 0.3
    assert field_distance("gen", "genesis") == 0.0
