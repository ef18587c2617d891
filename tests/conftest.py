"""
Pytest fixtures and configuration for LogosShelf tests
"""
import os
import sys
import sqlite3
import pytest
from unittest.mock import MagicMock

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'app'))


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.error = MagicMock()
    logger.warning = MagicMock()
    logger.debug = MagicMock()
    return logger


def _quote(identifier):
    return '"' + identifier.replace('"', '""') + '"'


def write_catalog(path, tables):
    """Create a SQLite catalog file.

    tables maps table name -> (column definitions, rows)
    """
    path = str(path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    con = sqlite3.connect(path)
    try:
        for table, (columns, rows) in tables.items():
            con.execute(f"CREATE TABLE {_quote(table)} ({', '.join(columns)})")
            if rows:
                placeholders = ", ".join("?" for _ in rows[0])
                con.executemany(f"INSERT INTO {_quote(table)} VALUES ({placeholders})", rows)
        con.commit()
    finally:
        con.close()
    return path


@pytest.fixture
def make_catalog(tmp_path):
    """Factory writing catalog databases under tmp_path"""
    def _make(tables, name="catalog.db"):
        return write_catalog(tmp_path / name, tables)
    return _make


@pytest.fixture
def sample_tables():
    """Catalog layout used by the Logos 'Resource' table"""
    return {
        "Resource": (
            ["resourceid TEXT", "title TEXT", "author TEXT", "abbreviation TEXT"],
            [
                ("LLS:1.0.20", "Lexham Bible Dictionary", "John D. Barry", "LBD"),
                ("LLS:ESV", "English Standard Version", None, "ESV"),
                ("LLS:TREASURY", "The Treasury of David", "Charles Spurgeon", "TOD"),
                ("LLS:BDAG", "A Greek-English Lexicon of the New Testament", "Walter Bauer", "BDAG"),
            ],
        ),
    }


@pytest.fixture
def sample_catalog(make_catalog, sample_tables):
    return make_catalog(sample_tables)


@pytest.fixture
def catalog_settings(sample_catalog):
    """Settings pointing the loader at the sample catalog"""
    return {
        "catalog": {
            "path": sample_catalog,
            "base_dir": "",
            "fuzzy_threshold": None,
            "open_scheme": "logosres",
        }
    }


@pytest.fixture
def catalog_writer():
    """write_catalog for tests that need a specific location"""
    return write_catalog
