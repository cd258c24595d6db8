import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_builder.app.api.routes.resume import router as resume_router
from resume_builder.app.api.routes.resume_ai import router as resume_ai_router
from resume_builder.app.api.routes.templates import router as templates_router
from resume_builder.app.api.routes.user import router as user_router
from resume_builder.app.core.config import Settings, get_settings
from resume_builder.app.middleware import refresh_session_middleware
from resume_builder.app.storage import Storage, create_storage

log = logging.getLogger(__name__)


def create_app(
    storage: Storage | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        storage (Storage | None): The storage every route uses. When None, the
            backend named by `settings.storage_backend` is constructed.
        settings (Settings | None): Application settings. When None, loaded from
            the environment with `get_settings`.

    Returns:
        FastAPI: The configured FastAPI application instance.

    Notes:
        1. Resolve settings and construct the storage once, at startup.
        2. Attach both to `app.state`; routes read them through dependencies.
        3. Add the sliding-session middleware and permissive CORS.
        4. Include the user, template, resume, and AI routers.
        5. Define a health check endpoint at "/health".
        6. Close the storage when the application shuts down.

    """
    _msg = "Creating FastAPI application"
    log.debug(_msg)

    settings = settings or get_settings()
    if storage is None:
        storage = create_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.storage.close()

    app = FastAPI(title="Resume Builder API", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage

    app.middleware("http")(refresh_session_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # TODO: Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(user_router)
    app.include_router(templates_router)
    app.include_router(resume_router)
    app.include_router(resume_ai_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    _msg = "FastAPI application created successfully"
    log.debug(_msg)
    return app
