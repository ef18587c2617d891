"""
LogosShelf - fuzzy search over the local Logos library catalog
"""
import os
import sys
import logging
import threading

from flask import Flask
import structlog

from exceptions import register_exception_handlers
from library import get_catalog_library
from routes.library import library_bp
from routes.system import system_bp
from utils import ColoredFormatter


def configure_logging(level=logging.INFO):
    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler]
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger('main')


def warm_catalog_index():
    """Index the catalog in the background so the first search is fast"""
    def _run():
        state = get_catalog_library().rebuild()
        if state.error is not None:
            logger.warning("Initial catalog indexing failed", error=state.error.message)

    thread = threading.Thread(target=_run, name="catalog-indexer", daemon=True)
    thread.start()
    return thread


def create_app(warm_index=False):
    app = Flask(__name__)
    app.register_blueprint(library_bp)
    app.register_blueprint(system_bp)
    register_exception_handlers(app)

    if warm_index:
        warm_catalog_index()
    return app


if __name__ == '__main__':
    configure_logging()
    logger.info('Starting LogosShelf...')
    app = create_app(warm_index=True)
    app.run(host=os.environ.get('LOGOSSHELF_HOST', '127.0.0.1'), port=int(os.environ.get('LOGOSSHELF_PORT', '8465')))
