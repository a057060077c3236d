import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.api import build_api_router
from .api.errors import (
    domain_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .core.config import Settings, settings as default_settings
from .core.exceptions import SleepDiaryError
from .core.logging import setup_logging
from .db import StoreHandle, create_store
from .services import CredentialStore, SECURITY_QUESTIONS, SessionIssuer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings: Settings = app.state.settings
    handle: StoreHandle = app.state.store_handle

    async def seed_admin(store):
        credentials = CredentialStore(
            store,
            rounds=settings.BCRYPT_ROUNDS,
            min_password_length=settings.MIN_PASSWORD_LENGTH,
            admin_username=settings.ADMIN_USERNAME,
            question_count=len(SECURITY_QUESTIONS)
        )
        await credentials.seed_admin(settings.ADMIN_DEFAULT_PASSWORD)

    # A failure here propagates and stops the server
    await handle.start(bootstrap=seed_admin)
    logger.info(f"{settings.APP_NAME} {settings.VERSION} started")

    yield

    # Shutdown
    await handle.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Sleep Diary API",
        description="Multi-user sleep journal",
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.store_handle = StoreHandle(lambda: create_store(settings))
    app.state.session_issuer = SessionIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(days=settings.TOKEN_TTL_DAYS)
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    # Add exception handlers
    app.add_exception_handler(SleepDiaryError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routes
    app.include_router(build_api_router(settings.API_PREFIX))

    api_root = settings.API_PREFIX.strip("/")
    static_dir = Path(settings.STATIC_DIR) if settings.STATIC_DIR else None

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        """Serve static assets, and the client shell for any other GET"""
        if full_path == api_root or full_path.startswith(api_root + "/"):
            raise StarletteHTTPException(status_code=404, detail="Not found.")

        if static_dir is not None:
            root = static_dir.resolve()
            candidate = (root / full_path).resolve()
            if full_path and candidate.is_file() and root in candidate.parents:
                return FileResponse(candidate)

            index = root / "index.html"
            if index.is_file():
                return FileResponse(index)

        if not full_path:
            return {
                "message": "Sleep Diary API",
                "version": settings.VERSION,
                "status": "operational",
                "docs_url": "/docs"
            }
        raise StarletteHTTPException(status_code=404, detail="Not found.")

    return app


app = create_app()


def run():
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    logger.info(f"Sleep Diary running on port {default_settings.PORT}")
    uvicorn.run(
        "sleep_diary.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower()
    )
