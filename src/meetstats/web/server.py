from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from meetstats.app import App
from meetstats.config import Config
from meetstats.errors import UserError
from meetstats.web.error_handlers import general_exception_handler, request_validation_handler, user_error_handler
from meetstats.web.openapi import set_custom_openapi
from meetstats.web.routers import metadata_router, sessions_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="MeetStats API",
        lifespan=lifespan,
    )
    # Set eagerly so requests work even when the lifespan is not run (tests)
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins or config.cors_origin_regex:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_origin_regex=config.cors_origin_regex,
            allow_credentials=False,
            allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(sessions_router)
    app.include_router(metadata_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
