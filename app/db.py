import os
import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DatabaseError, OperationalError
from sqlalchemy.pool import NullPool

from exceptions import CatalogAccessDeniedException, CatalogUnreadableException

# Retrieve main logger
logger = logging.getLogger("main")


def catalog_uri(path):
    """SQLite URI that opens the file read-only"""
    return Path(path).resolve().as_uri() + "?mode=ro"


class CatalogDatabase:
    """Owns the read-only SQLAlchemy engine for one catalog file.

    The engine is built on first use, at most once; concurrent first callers
    wait on the same lock and share the result.
    """

    def __init__(self, path):
        self.path = str(path)
        self._engine = None
        self._engine_lock = threading.Lock()

    def _connect(self):
        return sqlite3.connect(catalog_uri(self.path), uri=True, check_same_thread=False)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._engine_lock:
                if self._engine is None:
                    logger.debug(f"Creating read-only engine for {self.path}")
                    self._engine = create_engine("sqlite://", creator=self._connect, poolclass=NullPool)
        return self._engine

    @contextmanager
    def connect(self):
        if os.path.exists(self.path) and not os.access(self.path, os.R_OK):
            raise CatalogAccessDeniedException(f"Permission denied opening {self.path}")
        try:
            with self.engine.connect() as connection:
                yield connection
        except (OperationalError, DatabaseError) as e:
            raise CatalogUnreadableException(f"Could not read catalog database {self.path}: {e.orig or e}")

    def dispose(self):
        with self._engine_lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None


@contextmanager
def open_catalog(path, database_factory=CatalogDatabase):
    """Yield a connection to the catalog, releasing the engine on every exit path"""
    database = database_factory(path)
    try:
        with database.connect() as connection:
            yield connection
    finally:
        database.dispose()
