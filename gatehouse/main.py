"""FastAPI application factory and server entrypoint. No business logic; only wiring and handlers."""

from dotenv import load_dotenv

load_dotenv()

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from gatehouse import __version__
from gatehouse.api import router
from gatehouse.api.deps import LoginRequired
from gatehouse.core.config import Settings, get_settings
from gatehouse.core.database import build_engine, build_session_factory
from gatehouse.core.templates import STATIC_DIR, templates
from gatehouse.services.errors import StorageError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Verify the database is reachable before serving; abort startup otherwise."""
    try:
        with app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database connection failed at startup: %s", e)
        raise RuntimeError("Database connection failed at startup") from e
    logger.info("Connected to database")
    yield
    app.state.engine.dispose()


async def login_required_handler(request: Request, exc: LoginRequired) -> Response:
    return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)


async def storage_error_handler(request: Request, exc: StorageError) -> Response:
    logger.error(
        "Storage failure on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc.cause or exc,
    )
    return PlainTextResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def page_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    Render the 404 page for unmatched routes; 403 from admin actions is plain text.

    A known path hit with an unsupported method is unmatched too, so 405 also gets the 404 page.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return templates.TemplateResponse(
            request, "404.html", {}, status_code=status.HTTP_404_NOT_FOUND
        )
    if exc.status_code == status.HTTP_403_FORBIDDEN:
        return PlainTextResponse(str(exc.detail), status_code=status.HTTP_403_FORBIDDEN)
    return await http_exception_handler(request, exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around its own engine and session factory.

    Everything request handlers need lives on app.state; nothing is held in module globals.
    """
    settings = settings or get_settings()
    engine = build_engine(settings)

    app = FastAPI(
        title="Gatehouse",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(router)

    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(StarletteHTTPException, page_exception_handler)
    return app


def run() -> int:
    """Console entrypoint: load settings, configure logging, serve with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger.error("Invalid configuration:\n%s", e)
        return 1

    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
    app = create_app(settings)
    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(run())
