"""Product domain model — maps to the 'Products' table."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String

from northwind.infrastructure.database import Base


class Product(Base):
    __tablename__ = "Products"
    __table_args__ = (CheckConstraint("Price >= 0", name="CK_Products_Price"),)

    id = Column("ProductID", Integer, primary_key=True, autoincrement=True)
    name = Column("ProductName", String(255), nullable=False)
    # Nullable on purpose: the by-id query LEFT JOINs and must survive missing references
    supplier_id = Column("SupplierID", Integer, ForeignKey("Suppliers.SupplierID"), nullable=True)
    category_id = Column("CategoryID", Integer, ForeignKey("Categories.CategoryID"), nullable=True)
    unit = Column("Unit", String(255), nullable=True)
    price = Column("Price", Numeric(10, 2), nullable=False, default=0)

    def __repr__(self):
        return f"<Product {self.id} - {self.name}>"
