from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from northwind.config import Settings
from northwind.domain.models.category import Category
from northwind.domain.models.customer import Customer
from northwind.domain.models.order import Order
from northwind.domain.models.product import Product
from northwind.domain.models.supplier import Supplier
from northwind.infrastructure.database import create_db_engine, init_db
from northwind.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from northwind.interfaces.deps import get_app_settings, get_db_engine
from northwind.main import app


def seed(engine):
    with Session(engine) as session:
        session.add_all(
            [
                Category(id=1, name="Beverages", description="Soft drinks, coffees, teas"),
                Category(id=2, name="Condiments", description="Sauces and spreads"),
                Supplier(id=1, name="Exotic Liquid", city="London", country="UK"),
                Supplier(id=2, name="New Orleans Cajun Delights", city="New Orleans", country="USA"),
                Customer(id=1, name="Alfreds Futterkiste", city="Berlin", country="Germany"),
                Customer(id=2, name="Around the Horn", city="London", country="UK"),
                Customer(id=3, name="Bolido Comidas preparadas", city="Madrid", country="Spain"),
            ]
        )
        session.flush()
        session.add_all(
            [
                Product(id=1, name="Chais", supplier_id=1, category_id=1, unit="10 boxes x 20 bags", price=Decimal("18.00")),
                Product(id=2, name="Aniseed Syrup", supplier_id=1, category_id=2, unit="12 - 550 ml bottles", price=Decimal("10.00")),
                # No category or supplier: the by-id join must still return it
                Product(id=3, name="Mystery Box", supplier_id=None, category_id=None, unit="1 box", price=Decimal("5.50")),
            ]
        )
        # Around the Horn: 3 orders, Alfreds: 1, Bolido: none
        session.add_all(
            [
                Order(customer_id=2, order_date=date(1996, 7, 4)),
                Order(customer_id=2, order_date=date(1996, 7, 5)),
                Order(customer_id=2, order_date=date(1996, 7, 8)),
                Order(customer_id=1, order_date=date(1996, 7, 9)),
            ]
        )
        session.commit()


@pytest.fixture
def engine():
    engine = create_db_engine(Settings(DATABASE_URL="sqlite://"))
    init_db(engine)
    seed(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    # File databases get a QueuePool, which tracks checked-out connections
    engine = create_db_engine(Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'northwind.db'}"))
    init_db(engine)
    seed(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def unreachable_engine(tmp_path):
    # The parent directory does not exist, so every connect attempt fails
    engine = create_db_engine(Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'missing' / 'northwind.db'}"))
    yield engine
    engine.dispose()


@pytest.fixture
def repo(engine):
    return SQLAlchemyProductRepository(engine)


@pytest.fixture
def unreachable_repo(unreachable_engine):
    return SQLAlchemyProductRepository(unreachable_engine)


def _client_for(engine, settings=None):
    app.dependency_overrides[get_db_engine] = lambda: engine
    if settings is not None:
        app.dependency_overrides[get_app_settings] = lambda: settings
    return TestClient(app)


@pytest.fixture
def client(engine):
    yield _client_for(engine)
    app.dependency_overrides.clear()


@pytest.fixture
def offline_client(unreachable_engine):
    yield _client_for(unreachable_engine)
    app.dependency_overrides.clear()


@pytest.fixture
def strict_offline_client(unreachable_engine):
    yield _client_for(unreachable_engine, Settings(STRICT_READS=True))
    app.dependency_overrides.clear()
