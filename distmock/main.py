from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from .core.config import ACCESS_LOG, CDN_CHUNK_SIZE, SEED_SAMPLE_DATA
from .middleware import AccessLogMiddleware
from .routes import register_routes
from .routing import Dispatcher
from .seed import seed_sample_data
from .store import Store

logger = logging.getLogger(__name__)


def _default_store() -> Store:
    if SEED_SAMPLE_DATA:
        return seed_sample_data()
    return Store()


def create_app(
    store: Optional[Store] = None,
    *,
    chunk_size: Optional[int] = None,
    access_log: Optional[bool] = None,
) -> FastAPI:
    """Build the API around ``store``.

    The store must be fully populated before the app serves requests; handlers
    only read from it.
    """
    if store is None:
        store = _default_store()

    # No docs or openapi routes: every path outside the table must 404.
    app = FastAPI(
        title="distmock",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    if access_log is None:
        access_log = ACCESS_LOG
    if access_log:
        app.add_middleware(AccessLogMiddleware)

    dispatcher = Dispatcher(store, max(1, chunk_size or CDN_CHUNK_SIZE))
    register_routes(dispatcher)
    dispatcher.install(app)
    app.state.dispatcher = dispatcher
    logger.debug("Installed %d routes", len(dispatcher.ordered_routes()))
    return app
