"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy import Engine

from northwind.config import Settings, get_settings
from northwind.domain.repositories.product_repository import ProductRepository
from northwind.infrastructure.database import get_engine
from northwind.infrastructure.repositories.product_repository import SQLAlchemyProductRepository


def get_db_engine() -> Engine:
    """Process-wide engine; tests override this to point at their own database."""
    return get_engine()


def get_product_repository(engine: Engine = Depends(get_db_engine)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(engine)


def get_app_settings() -> Settings:
    return get_settings()
