"""
Zairyo API
==========

Main entry point for the bilingual recipe finder.

Features:
- Ingredient search in English or Japanese (kanji/katakana variants)
- Optional external recipes from TheMealDB (ENABLE_EXTERNAL)
- Ingredient detection from photos (local heuristic or remote vision)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router as api_router
from app.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"External recipes: {'ON' if settings.enable_external else 'OFF'}")
    logger.info(f"Vision provider: {settings.vision_provider}")

    # Pre-warm the assistant so the catalog is seeded before the first request
    try:
        from app.assistant import get_assistant
        assistant = get_assistant()
        logger.info(f"Assistant ready. Catalog holds {assistant.catalog.count()} recipes.")
    except Exception as e:
        logger.warning(f"Assistant pre-warming failed (will retry on request): {e}")

    yield

    logger.info("Shutting down Zairyo.")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Bilingual (English/Japanese) ingredient-based recipe finder",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url=None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "version": settings.app_version,
        "external": settings.enable_external,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
