import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from constants import CATALOG_CACHE_FILE, SEARCH_PAGE_SIZE
from catalog_cache_file import read_cache, write_cache, is_cache_fresh
from catalog_locator import resolve_catalog
from catalog_reader import extract_resources
from db import CatalogDatabase, open_catalog
from exceptions import LogosShelfException
from fuzzy_index import FuzzyIndex, search_records
from models import CachePayload, CatalogLocation, ResourceRecord
from schema import infer_schema
import settings as settings_lib

# Retrieve main logger
logger = logging.getLogger("main")


@dataclass
class CatalogLoad:
    records: List[ResourceRecord]
    source_path: str
    from_cache: bool = False


class CatalogLoader:
    """Resolve, read and cache the catalog, one extraction at a time.

    An unforced load that arrives while another load is running joins it and
    gets the same outcome. Forced refreshes wait for the running load and
    then extract again.
    """

    def __init__(
        self,
        settings: Optional[dict] = None,
        cache_path: str = CATALOG_CACHE_FILE,
        database_factory: Callable[[str], CatalogDatabase] = CatalogDatabase,
        locate: Callable[..., CatalogLocation] = resolve_catalog,
    ):
        self._settings = settings
        self.cache_path = cache_path
        self.database_factory = database_factory
        self.locate = locate
        self._run_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._pending: Optional[Future] = None

    @property
    def settings(self):
        if self._settings is None:
            return settings_lib.load_settings()
        return self._settings

    def resolve_location(self) -> CatalogLocation:
        return self.locate(
            override_path=settings_lib.get_catalog_override(self.settings),
            base_dir=settings_lib.get_catalog_base_dir(self.settings),
        )

    def load(self, force_refresh: bool = False) -> CatalogLoad:
        with self._state_lock:
            pending = self._pending
        if pending is not None and not force_refresh:
            logger.debug("Catalog load already in progress, waiting for it")
            return pending.result()

        future = Future()
        with self._run_lock:
            with self._state_lock:
                self._pending = future
            try:
                result = self._load(force_refresh)
            except BaseException as e:
                future.set_exception(e)
                raise
            else:
                future.set_result(result)
                return result
            finally:
                with self._state_lock:
                    if self._pending is future:
                        self._pending = None

    def refresh(self) -> CatalogLoad:
        return self.load(force_refresh=True)

    def _load(self, force_refresh: bool) -> CatalogLoad:
        location = self.resolve_location()

        if not force_refresh:
            cached = read_cache(self.cache_path)
            if is_cache_fresh(cached, location):
                logger.info(f"Catalog loaded from cache: {len(cached.records)} resources ({location.path})")
                return CatalogLoad(records=cached.records, source_path=location.path, from_cache=True)
            if cached is not None:
                logger.info("Catalog changed since last cache, rebuilding.")

        logger.info(f"Reading catalog {location.path} (force={force_refresh})")
        records = self.extract(location.path)

        write_cache(
            self.cache_path,
            CachePayload(
                source_path=location.path,
                source_mtime_millis=location.mtime_millis,
                records=records,
            ),
        )
        return CatalogLoad(records=records, source_path=location.path)

    def extract(self, path: str) -> List[ResourceRecord]:
        with open_catalog(path, database_factory=self.database_factory) as connection:
            schema = infer_schema(connection)
            return extract_resources(connection, schema)


@dataclass
class LibraryState:
    records: List[ResourceRecord] = field(default_factory=list)
    index: Optional[FuzzyIndex] = None
    source_path: Optional[str] = None
    error: Optional[LogosShelfException] = None
    is_loading: bool = False
    loaded: bool = False


class CatalogLibrary:
    """In-memory record set and fuzzy index the UI queries on every keystroke"""

    def __init__(self, loader: Optional[CatalogLoader] = None, threshold: Optional[float] = None):
        self.loader = loader or CatalogLoader()
        self._threshold = threshold
        self._lock = threading.Lock()
        self._state = LibraryState()

    @property
    def threshold(self):
        if self._threshold is not None:
            return self._threshold
        return settings_lib.get_fuzzy_threshold(self.loader.settings)

    @property
    def state(self) -> LibraryState:
        with self._lock:
            return self._state

    def rebuild(self, force_refresh: bool = False) -> LibraryState:
        with self._lock:
            self._state.is_loading = True
        try:
            catalog = self.loader.load(force_refresh=force_refresh)
        except LogosShelfException as e:
            logger.error(f"Indexing failed: {e.message}")
            # Never keep serving the previous records after a hard failure
            state = LibraryState(error=e, loaded=True)
        except Exception:
            with self._lock:
                self._state.is_loading = False
            raise
        else:
            index = FuzzyIndex.build(catalog.records, threshold=self.threshold)
            state = LibraryState(
                records=catalog.records,
                index=index,
                source_path=catalog.source_path,
                loaded=True,
            )
            logger.info(f"Library indexed: {len(catalog.records)} resources")

        with self._lock:
            self._state = state
        return state

    def ensure_loaded(self) -> LibraryState:
        state = self.state
        if not state.loaded:
            state = self.rebuild()
        return state

    def search(self, query: str, limit: int = SEARCH_PAGE_SIZE) -> List[ResourceRecord]:
        state = self.ensure_loaded()
        return search_records(state.index, state.records, query, limit)

    def get(self, resource_id: str) -> Optional[ResourceRecord]:
        for record in self.ensure_loaded().records:
            if record.id == resource_id:
                return record
        return None

    def status(self):
        state = self.state
        return {
            "count": len(state.records),
            "source_path": state.source_path,
            "error": state.error.message if state.error else None,
            "error_code": state.error.code if state.error else None,
            "is_loading": state.is_loading,
        }


# Global library instance
_catalog_library: Optional[CatalogLibrary] = None
_catalog_library_lock = threading.Lock()


def get_catalog_library() -> CatalogLibrary:
    """Get or create the global catalog library instance"""
    global _catalog_library
    with _catalog_library_lock:
        if _catalog_library is None:
            _catalog_library = CatalogLibrary()
        return _catalog_library


def set_catalog_library(library: Optional[CatalogLibrary]) -> None:
    global _catalog_library
    with _catalog_library_lock:
        _catalog_library = library
