from fastapi import FastAPI, APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

import config
from database import open_client, close_client, create_indexes, ping
from services.errors import CatalogUnavailable

# Import all routers
from routers import (
    settings_router,
    customizations_router,
    products_router,
    orders_router,
    webhooks_router
)

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """Build the API. Without `database` the app opens (and closes) its own
    Motor client for config.MONGO_URL; an injected database is used as-is."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if database is None:
            client = open_client(config.MONGO_URL)
            app.state.db = client[config.DB_NAME]
        await create_indexes(app.state.db)
        logger.info(f"Personalizer API started ({config.ENVIRONMENT})")
        try:
            yield
        finally:
            if client is not None:
                close_client(client)

    app = FastAPI(title="Product Personalizer API", version="1.0.0", lifespan=lifespan)
    if database is not None:
        app.state.db = database

    # Create main API router with /api prefix
    api_router = APIRouter(prefix="/api")
    api_router.include_router(settings_router)
    api_router.include_router(customizations_router)
    api_router.include_router(products_router)
    api_router.include_router(orders_router)

    app.include_router(api_router)
    app.include_router(webhooks_router)

    @app.get("/health")
    async def health(request: Request):
        connected = await ping(request.app.state.db)
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if connected else "disconnected",
            "environment": config.ENVIRONMENT
        }

    @app.exception_handler(CatalogUnavailable)
    async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailable):
        return JSONResponse(status_code=503, content={"error": "Settings store unavailable"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={
            "error": "Internal server error",
            "message": str(exc) if config.ENVIRONMENT == "development" else None
        })

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
