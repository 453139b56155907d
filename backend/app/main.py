"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.api.errors import register_exception_handlers
from app.api.rate_limit import create_limiter, rate_limit_exceeded_handler
from app.api.routes import blobs, categories, files, shares, users
from app.core.config import Settings, settings as default_settings
from app.core.security.identity import IdentityProvider, load_identity_provider
from app.core.storage.blob_store import BlobStore, create_blob_store
from app.core.storage.database import Database

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    blob_store: BlobStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators not passed in are built from ``settings``.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    if identity_provider is None and settings.identity_provider:
        identity_provider = load_identity_provider(settings.identity_provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info("Initializing database...")
        await app.state.db.init_db()
        await app.state.blob_store.initialize()
        if app.state.identity_provider is None:
            logger.warning("No identity provider configured; owner routes will reject requests")
        logger.info("SelfVault backend started")

        yield

        # Shutdown
        logger.info("Closing database connections...")
        await app.state.db.close_db()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="SelfVault Backend",
        description="File storage API with expiring, password-protected share links",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database or Database(settings.database_url, echo=settings.database_echo)
    app.state.blob_store = blob_store or create_blob_store(settings)
    app.state.identity_provider = identity_provider
    app.state.limiter = create_limiter(settings)

    # Rate limiting sits inside CORS so 429 responses keep their CORS headers
    app.add_middleware(SlowAPIMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Include routers
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(categories.router, prefix="/api/v1")
    app.include_router(files.router, prefix="/api/v1")
    app.include_router(shares.router, prefix="/api/v1")
    app.include_router(blobs.router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "SelfVault Backend",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=True,
    )
