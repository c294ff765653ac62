from typing import Optional

from fastapi import FastAPI

from sitesearch import __version__
from sitesearch.api.routers import create_search_router, create_systems_router
from sitesearch.services.search_service import SearchService


def create_app(search_service: SearchService, container_env: Optional[dict] = None) -> FastAPI:
    """Return the FastAPI app serving queries against `search_service`'s index."""
    app = FastAPI(title="SiteSearch", version=__version__)
    app.include_router(create_search_router(search_service))
    app.include_router(create_systems_router(container_env or {}, search_service))
    return app
