# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from backend.config import Settings, get_settings
from backend.routers import auth, profile, tasks
from backend.utils.database import Database
from backend.utils.errors import register_exception_handlers
from backend.utils.logger import log_requests, setup_logging

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    logger.info("Application Startup: Connecting to database...")
    try:
        await database.connect()
    except Exception as e:
        # the server is useless without its store
        logger.critical(f"Could not connect to database: {e}")
        raise SystemExit(1)
    logger.info("Application Startup: Database connected.")
    yield
    await database.close()
    logger.info("Application Shutdown: Goodbye!")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Task Dashboard API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)

    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # --- Include Routers ---
    logger.debug("Including routers...")
    for prefix in ("/api/auth", "/api/users"):
        app.include_router(auth.router, prefix=prefix)       # register, login
        app.include_router(profile.router, prefix=prefix)    # me
    app.include_router(tasks.router)                           # /api/tasks...

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "API is running..."

    @app.get("/health")
    def health_check():
        return {"status": "ok", "database": app.state.database.is_connected}

    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
