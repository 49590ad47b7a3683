"""Category domain model — maps to the 'Categories' table."""

from sqlalchemy import Column, Integer, String, Text

from northwind.infrastructure.database import Base


class Category(Base):
    __tablename__ = "Categories"

    id = Column("CategoryID", Integer, primary_key=True, autoincrement=True)
    name = Column("CategoryName", String(255), nullable=False)
    description = Column("Description", Text, nullable=True)

    def __repr__(self):
        return f"<Category {self.id} - {self.name}>"
