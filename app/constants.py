import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('LOGOSSHELF_DATA_DIR') or os.path.join(APP_DIR, 'data')
CONFIG_DIR = os.environ.get('LOGOSSHELF_CONFIG_DIR') or os.path.join(APP_DIR, 'config')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')
CACHE_DIR = os.path.join(DATA_DIR, 'cache')
CATALOG_CACHE_FILE = os.path.join(CACHE_DIR, 'catalog-cache.json')

# Logos keeps one data folder per signed-in account under this directory
DEFAULT_CATALOG_BASE_DIR = os.path.join('~', 'Library', 'Application Support', 'Logos4', 'Data')
CATALOG_RELATIVE_PATH = os.path.join('LibraryCatalog', 'catalog.db')

RESOURCE_TABLE_CANDIDATES = [
    'Resource',
    'Catalog',
    'Resources',
    'LibraryCatalog',
    'LibraryResources',
]
ID_COLUMN_CANDIDATES = ['resourceid', 'resource_id', 'res_id', 'id']
TITLE_COLUMN_CANDIDATES = ['title', 'name', 'displayname', 'resourcetitle']
AUTHOR_COLUMN_CANDIDATES = ['author', 'authors', 'creator', 'authorname']
ABBREV_COLUMN_CANDIDATES = ['abbreviation', 'abbrev', 'shorttitle', 'resourceabbreviation']

DEFAULT_FUZZY_THRESHOLD = 0.3
FUZZY_MIN_MATCH_CHAR_LENGTH = 2
FUZZY_FIELD_WEIGHTS = {
    'title': 0.6,
    'author': 0.25,
    'abbrev': 0.1,
    'id': 0.05,
}
SEARCH_PAGE_SIZE = 50

OPEN_SCHEME_LOGOSRES = 'logosres'
OPEN_SCHEME_LOGOS4 = 'logos4'

DEFAULT_SETTINGS = {
    "catalog": {
        "path": "",
        "base_dir": DEFAULT_CATALOG_BASE_DIR,
        "fuzzy_threshold": None,
        "open_scheme": OPEN_SCHEME_LOGOSRES,
    },
}

CATALOG_NOT_FOUND_HINT = (
    "catalog.db not found. Launch Logos once, then try again. "
    "You may need to grant Full Disk Access."
)
