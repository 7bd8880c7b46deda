from meetstats.web.routers.metadata import router as metadata_router
from meetstats.web.routers.sessions import router as sessions_router

__all__ = [
    "metadata_router",
    "sessions_router",
]
