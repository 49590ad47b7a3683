"""Supplier domain model — maps to the 'Suppliers' table."""

from sqlalchemy import Column, Integer, String

from northwind.infrastructure.database import Base


class Supplier(Base):
    __tablename__ = "Suppliers"

    id = Column("SupplierID", Integer, primary_key=True, autoincrement=True)
    name = Column("SupplierName", String(255), nullable=False)
    contact_name = Column("ContactName", String(255), nullable=True)
    city = Column("City", String(255), nullable=True)
    country = Column("Country", String(255), nullable=True)
    phone = Column("Phone", String(50), nullable=True)

    def __repr__(self):
        return f"<Supplier {self.id} - {self.name}>"
