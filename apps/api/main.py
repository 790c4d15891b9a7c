"""FastAPI application main entry point."""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from apps.api.errors import register_exception_handlers
from apps.api.v1.endpoints import checkout, orders, payments
from core.infrastructure.database.config import close_database, get_engine, init_database
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup (when enabled) and release the pool on shutdown."""
    settings = get_app_settings()
    if settings.database.create_tables:
        await init_database(get_engine(settings.database))
    logger.info("🚀 Checkout API started")
    yield
    await close_database()
    logger.info("👋 Checkout API stopped")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_app_settings()
    configure_logging(settings.api.log_level)

    app = FastAPI(
        title=settings.api.title,
        description="Order finalization: checkout, payment verification and gateway webhooks",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )
        return response

    register_exception_handlers(app)

    # Include routers
    app.include_router(checkout.router, prefix="/api/v1")
    app.include_router(payments.router, prefix="/api/v1")
    app.include_router(orders.router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint.

        Returns:
            Health status
        """
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
