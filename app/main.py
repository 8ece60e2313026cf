# app/main.py
from contextlib import asynccontextmanager
import logging

import httpx
from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.exceptions import register_exception_handlers
from app.core.gemini_client import GeminiClient
from app.database import build_storage, seed_sample_products

# Routers
from app.routers.products import router as products_router
from app.routers.cart import router as cart_router
from app.routers.orders import router as orders_router
from app.routers.chat import router as chat_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Build the store (memory or sql) and seed the sample catalog.
      - Open the shared HTTP client used for Gemini calls.

    Shutdown:
      - Close the HTTP client.
    """
    logger.info(f"🔄 Startup: building {settings.STORAGE_BACKEND} storage...")
    try:
        storage = build_storage(settings)
    except Exception as e:
        logger.error(f"❌ Startup: storage init FAILED: {e}")
        raise

    if settings.SEED_SAMPLE_PRODUCTS:
        inserted = seed_sample_products(storage)
        logger.info(f"✅ Startup: storage ready, {inserted} sample products seeded.")
    else:
        logger.info("✅ Startup: storage ready.")

    http = httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS)
    app.state.storage = storage
    app.state.shopping_ai = GeminiClient(settings, http)
    if not app.state.shopping_ai.enabled:
        logger.warning("⚠️ GEMINI_API_KEY not set: chat will answer with fallbacks.")

    yield

    await http.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)
app.include_router(chat_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "glide-storefront"}
