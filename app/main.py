# app/main.py
"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.templating import Jinja2Templates

from app.core.config import Settings, get_settings
from app.db import create_db_engine, create_session_factory, init_db
from app.middleware import AccessLog, AccessLogMiddleware
from app.routers import contacts

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Debug mode: %s", settings.debug)
    init_db(app.state.engine)
    yield
    await app.state.access_log.drain()
    app.state.engine.dispose()
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its collaborators.

    The engine, session factory, templates and access log are created here
    and kept on ``app.state`` so handlers receive them through dependencies.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Formulário de cadastro e listagem de contatos.",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    engine = create_db_engine(settings.database_url, echo=settings.db_echo)
    access_log = AccessLog(settings.access_log_path)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.templates = Jinja2Templates(directory=str(settings.templates_dir))
    app.state.access_log = access_log

    app.add_middleware(AccessLogMiddleware, access_log=access_log)

    app.include_router(contacts.router)

    @app.get("/health", tags=["health"])
    def health_check(request: Request) -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": request.app.state.settings.app_version}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    logger.info("Servidor rodando na porta %d", settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
