"""Order domain model — maps to the 'Orders' table."""

from sqlalchemy import Column, Date, ForeignKey, Integer

from northwind.infrastructure.database import Base


class Order(Base):
    __tablename__ = "Orders"

    id = Column("OrderID", Integer, primary_key=True, autoincrement=True)
    customer_id = Column("CustomerID", Integer, ForeignKey("Customers.CustomerID"), nullable=False)
    order_date = Column("OrderDate", Date, nullable=True)
