"""
Stored procedures used by the product repository.

SQL Server runs the real procedures with ``EXEC``. Other dialects (SQLite in
development and tests, PostgreSQL) run an equivalent SQL body bound by the
same parameter names, so the repository sees one contract everywhere.
"""

from dataclasses import dataclass
from typing import Any, Tuple

from sqlalchemy import Connection, CursorResult, Integer, Numeric, String, bindparam, text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.types import TypeEngine


@dataclass(frozen=True)
class StoredProcedure:
    name: str
    params: Tuple[Tuple[str, TypeEngine], ...]
    body: str

    def statement(self, dialect_name: str) -> TextClause:
        if dialect_name == "mssql":
            args = ", ".join(f"@{key}=:{key}" for key, _ in self.params)
            sql = f"EXEC {self.name} {args}".rstrip()
        else:
            sql = self.body
        return text(sql).bindparams(*(bindparam(key, type_=type_) for key, type_ in self.params))


def call(conn: Connection, procedure: StoredProcedure, **params: Any) -> CursorResult:
    """Execute ``procedure`` on ``conn`` with keyword parameters."""
    return conn.execute(procedure.statement(conn.dialect.name), params)


_PRODUCT_FIELDS = (
    ("ProductName", String(255)),
    ("SupplierID", Integer()),
    ("CategoryID", Integer()),
    ("Unit", String(255)),
    ("Price", Numeric(10, 2)),
)

GET_ALL_PRODUCTS = StoredProcedure(
    name="GetAllProducts",
    params=(),
    body="""
        SELECT p.ProductID, p.ProductName, p.Unit, p.Price, c.CategoryName, s.SupplierName
        FROM Products p
        LEFT JOIN Categories c ON p.CategoryID = c.CategoryID
        LEFT JOIN Suppliers s ON p.SupplierID = s.SupplierID
        ORDER BY p.ProductID
    """,
)

GET_CUSTOMER_ORDER_COUNTS = StoredProcedure(
    name="GetCustomerOrderCounts",
    params=(),
    body="""
        SELECT c.CustomerName, COUNT(o.OrderID) AS OrderCount
        FROM Customers c
        JOIN Orders o ON o.CustomerID = c.CustomerID
        GROUP BY c.CustomerID, c.CustomerName
        ORDER BY OrderCount DESC, c.CustomerName
    """,
)

# The SQL Server procedure ends with SELECT SCOPE_IDENTITY() to report the new id
ADD_PRODUCT = StoredProcedure(
    name="AddProduct",
    params=_PRODUCT_FIELDS,
    body="""
        INSERT INTO Products (ProductName, SupplierID, CategoryID, Unit, Price)
        VALUES (:ProductName, :SupplierID, :CategoryID, :Unit, :Price)
        RETURNING ProductID
    """,
)

UPDATE_PRODUCT = StoredProcedure(
    name="UpdateProduct",
    params=(("ProductID", Integer()),) + _PRODUCT_FIELDS,
    body="""
        UPDATE Products
        SET ProductName = :ProductName,
            SupplierID = :SupplierID,
            CategoryID = :CategoryID,
            Unit = :Unit,
            Price = :Price
        WHERE ProductID = :ProductID
    """,
)

DELETE_PRODUCT = StoredProcedure(
    name="DeleteProduct",
    params=(("ProductID", Integer()),),
    body="DELETE FROM Products WHERE ProductID = :ProductID",
)
