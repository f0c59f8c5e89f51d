from __future__ import annotations

# Standard library
import logging as _logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

# Third-party
from dotenv import load_dotenv
from fastapi import FastAPI

# Local application imports
from api.errors import register_exception_handlers
from api.routers.meals import router as meals_router
from api.routers.users import router as users_router
from infrastructure.config import get_app_version, get_log_level, get_store_backend
from infrastructure.container import Container, create_container

load_dotenv()

# --- Basic logging configuration ---
_logging.basicConfig(
    level=getattr(_logging, get_log_level(), _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

APP_VERSION = get_app_version()

__all__ = ["create_app", "app"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the container if none was injected, then prepare the store.

    A container passed to create_app belongs to the caller and is left
    open on shutdown. One built here is closed and dropped, so the next
    startup builds a fresh one.
    """
    logger = _logging.getLogger("startup")

    owns_container = getattr(app.state, "container", None) is None
    if owns_container:
        app.state.container = create_container()

    container: Container = app.state.container
    store: Any = container.store

    ensure_indexes = getattr(store, "ensure_indexes", None)
    if ensure_indexes is not None:
        await ensure_indexes()

    logger.info(
        "lifespan.ready",
        extra={"store_backend": get_store_backend(), "version": APP_VERSION},
    )
    try:
        yield
    finally:
        logger.info("lifespan.shutdown", extra={"status": "cleanup"})
        if owns_container:
            close = getattr(store, "close", None)
            if close is not None:
                close()
            app.state.container = None


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        container: Pre-built dependency container (tests pass one around an
            InMemoryStore); when None, lifespan builds one from the environment
    """
    application = FastAPI(
        title="Daily Diet Backend",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    application.state.container = container

    register_exception_handlers(application)
    application.include_router(meals_router)
    application.include_router(users_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @application.get("/version")
    async def version() -> dict[str, str]:
        return {"version": APP_VERSION}

    return application


app = create_app()
