"""
Database engine construction.

The engine is the only process-wide store state. It is built once from the
frozen settings and handed to repositories, which open one connection per call.
"""

from functools import lru_cache

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from northwind.config import Settings, get_settings

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings) -> Engine:
    """Build an engine for ``settings.DATABASE_URL``."""
    url = settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, echo=settings.DATABASE_ECHO, pool_pre_ping=True)

    kwargs = {}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared in-memory database across all connections
        kwargs["poolclass"] = StaticPool

    engine = create_engine(
        url,
        # Requests run on FastAPI's thread pool
        connect_args={"check_same_thread": False},
        echo=settings.DATABASE_ECHO,
        **kwargs,
    )
    # SQLite only enforces REFERENCES clauses when asked to, per connection
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def get_engine() -> Engine:
    return create_db_engine(get_settings())


def init_db(engine: Engine) -> None:
    """Create the Northwind tables if they are missing (dev and tests only)."""
    # Import models so they are registered on Base.metadata
    from northwind.domain.models import category, customer, order, product, supplier  # noqa: F401

    Base.metadata.create_all(bind=engine)
