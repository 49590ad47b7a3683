"""
Create the Northwind tables and load a small sample data set.

Usage: python scripts/seed_northwind.py
Targets DATABASE_URL from the environment / .env. Categories, suppliers and
customers are reference data this API never writes, so a fresh development
database needs them from here.
"""

import os
import sys
from datetime import date
from decimal import Decimal

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog
from sqlalchemy.orm import Session

from northwind.core.logging import configure_logging
from northwind.domain.models.category import Category
from northwind.domain.models.customer import Customer
from northwind.domain.models.order import Order
from northwind.domain.models.product import Product
from northwind.domain.models.supplier import Supplier
from northwind.infrastructure.database import get_engine, init_db

logger = structlog.get_logger("seed_northwind")

CATEGORIES = [
    (1, "Beverages", "Soft drinks, coffees, teas, beers, and ales"),
    (2, "Condiments", "Sweet and savory sauces, relishes, spreads, and seasonings"),
    (3, "Confections", "Desserts, candies, and sweet breads"),
    (4, "Dairy Products", "Cheeses"),
]

SUPPLIERS = [
    (1, "Exotic Liquid", "Charlotte Cooper", "London", "UK", "(171) 555-2222"),
    (2, "New Orleans Cajun Delights", "Shelley Burke", "New Orleans", "USA", "(100) 555-4822"),
    (3, "Grandma Kelly's Homestead", "Regina Murphy", "Ann Arbor", "USA", "(313) 555-5735"),
]

PRODUCTS = [
    ("Chais", 1, 1, "10 boxes x 20 bags", "18.00"),
    ("Chang", 1, 1, "24 - 12 oz bottles", "19.00"),
    ("Aniseed Syrup", 1, 2, "12 - 550 ml bottles", "10.00"),
    ("Chef Anton's Cajun Seasoning", 2, 2, "48 - 6 oz jars", "22.00"),
    ("Grandma's Boysenberry Spread", 3, 2, "12 - 8 oz jars", "25.00"),
    ("Queso Cabrales", 3, 4, "1 kg pkg.", "21.00"),
]

CUSTOMERS = [
    (1, "Alfreds Futterkiste", "Maria Anders", "Berlin", "Germany"),
    (2, "Ana Trujillo Emparedados y helados", "Ana Trujillo", "México D.F.", "Mexico"),
    (3, "Around the Horn", "Thomas Hardy", "London", "UK"),
]

# customer id -> number of orders
ORDERS = {1: 2, 2: 1, 3: 4}


def seed(session: Session) -> None:
    if session.query(Category).first() is not None:
        logger.info("Database already seeded, nothing to do")
        return

    session.add_all(Category(id=i, name=n, description=d) for i, n, d in CATEGORIES)
    session.add_all(
        Supplier(id=i, name=n, contact_name=c, city=city, country=country, phone=p)
        for i, n, c, city, country, p in SUPPLIERS
    )
    session.add_all(Customer(id=i, name=n, contact_name=c, city=city, country=country) for i, n, c, city, country in CUSTOMERS)
    session.flush()

    session.add_all(
        Product(name=n, supplier_id=s, category_id=c, unit=u, price=Decimal(p)) for n, s, c, u, p in PRODUCTS
    )
    for customer_id, count in ORDERS.items():
        session.add_all(Order(customer_id=customer_id, order_date=date(1996, 7, 4 + i)) for i in range(count))

    session.commit()
    logger.info("Seeded Northwind sample data", products=len(PRODUCTS), customers=len(CUSTOMERS))


if __name__ == "__main__":
    configure_logging()
    engine = get_engine()
    init_db(engine)
    with Session(engine) as session:
        seed(session)
