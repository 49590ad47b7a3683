"""Customer domain model — maps to the 'Customers' table (order report only)."""

from sqlalchemy import Column, Integer, String

from northwind.infrastructure.database import Base


class Customer(Base):
    __tablename__ = "Customers"

    id = Column("CustomerID", Integer, primary_key=True, autoincrement=True)
    name = Column("CustomerName", String(255), nullable=False)
    contact_name = Column("ContactName", String(255), nullable=True)
    city = Column("City", String(255), nullable=True)
    country = Column("Country", String(255), nullable=True)
