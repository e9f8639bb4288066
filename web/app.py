import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from db import create_db_and_tables
from middleware.security_headers import SecurityHeadersMiddleware
from utils.error_handler import register_exception_handlers
from web.order_router import order_router
from web.product_router import product_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    await create_db_and_tables()
    logger.info(f"[Startup] FashionHub API ready ({config.RUNTIME_ENVIRONMENT.value})")
    yield
    logger.warning("Shutting down..")


app = FastAPI(title="FashionHub", lifespan=lifespan)

if config.SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware)
    logger.info("[Startup] Security headers middleware enabled")
else:
    logger.debug("[Startup] Security headers middleware disabled")

if config.CORS_ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    logger.info(f"[Startup] CORS middleware enabled for origins: {config.CORS_ALLOWED_ORIGINS}")
else:
    logger.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

register_exception_handlers(app)

app.include_router(product_router)
app.include_router(order_router)


# Health check endpoint (for container monitoring)
@app.get("/health")
async def health_check():
    return {"status": "healthy"}
