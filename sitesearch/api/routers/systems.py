from fastapi import APIRouter

from sitesearch.services.search_service import SearchService


def create_systems_router(container_env: dict, search_service: SearchService):
    """Create systems router with access to container environment config."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/config")
    def get_config():
        """Return current environment configuration values and index size."""
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            },
            "index": search_service.stats(),
        }

    return router
