"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from northwind.config import get_settings
from northwind.core.exceptions import AppError, global_exception_handler
from northwind.core.logging import configure_logging
from northwind.core.middleware import setup_middleware
from northwind.domain.repositories.product_repository import ProductRepository
from northwind.infrastructure.database import get_engine, init_db
from northwind.interfaces.api.products import router as products_router
from northwind.interfaces.deps import get_product_repository

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    engine = get_engine()
    logger.info("Starting Northwind API", env=settings.ENVIRONMENT, dialect=engine.dialect.name)

    if settings.CREATE_TABLES:
        # Dev only: production databases are provisioned with their stored procedures
        init_db(engine)
        logger.info("Database tables created/verified")

    yield

    engine.dispose()
    logger.info("Northwind API stopped")


app = FastAPI(
    title="Northwind Products API",
    description="Products, categories, suppliers and the customer order report",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Data-Degraded"],
)

app.include_router(products_router)


@app.get("/")
def root():
    return {
        "name": "Northwind Products API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health(repo: ProductRepository = Depends(get_product_repository)):
    if repo.ping():
        return {"status": "healthy", "database": "online"}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "offline"})
