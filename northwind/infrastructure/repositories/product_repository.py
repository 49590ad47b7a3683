"""
SQLAlchemy implementation of the Product Repository.

Every method opens its own connection and releases it before returning.
Reads never raise for store or row-data failures: a ``SQLAlchemyError`` or a
row that does not fit its record is logged and turned into a failed
``ReadResult``. Writes log store errors and re-raise them.
"""

from typing import List, Optional

import structlog
from pydantic import ValidationError
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from northwind.domain.repositories.product_repository import ProductRepository
from northwind.domain.results import ErrorKind, ReadResult
from northwind.domain.schemas.customer import CustomerOrderCount
from northwind.domain.schemas.product import (
    CategoryRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    SupplierRead,
)
from northwind.infrastructure import procedures

logger = structlog.get_logger(__name__)

# Reference ids come from Products so they survive a dangling foreign key
PRODUCT_BY_ID_SQL = text(
    """
    SELECT p.ProductID, p.ProductName, p.Unit, p.Price,
           p.CategoryID, c.CategoryName,
           p.SupplierID, s.SupplierName
    FROM Products p
    LEFT JOIN Categories c ON p.CategoryID = c.CategoryID
    LEFT JOIN Suppliers s ON p.SupplierID = s.SupplierID
    WHERE p.ProductID = :ProductID
    """
)
CATEGORIES_SQL = text("SELECT CategoryID, CategoryName FROM Categories ORDER BY CategoryID")
SUPPLIERS_SQL = text("SELECT SupplierID, SupplierName FROM Suppliers ORDER BY SupplierID")


def _log_store_error(operation: str, exc: SQLAlchemyError) -> None:
    logger.error("Store error", operation=operation, error=str(exc.__cause__ or exc), exc_info=exc)


def _read_failure(operation: str, exc: Exception, empty):
    if isinstance(exc, ValidationError):
        logger.error("Malformed row", operation=operation, error=str(exc))
        return ReadResult.failure(ErrorKind.MALFORMED_ROW, empty)
    _log_store_error(operation, exc)
    return ReadResult.failure(ErrorKind.STORE_UNAVAILABLE, empty)


def _product_from_list_row(row) -> ProductRead:
    return ProductRead(
        product_id=row[0],
        product_name=row[1],
        unit=row[2],
        price=row[3],
        category_name=row[4],
        supplier_name=row[5],
    )


def _product_from_joined_row(row) -> ProductRead:
    return ProductRead(
        product_id=row[0],
        product_name=row[1],
        unit=row[2],
        price=row[3],
        category_id=row[4],
        category_name=row[5],
        supplier_id=row[6],
        supplier_name=row[7],
    )


class SQLAlchemyProductRepository(ProductRepository):
    """Product repository backed by stored procedures and plain SELECTs."""

    def __init__(self, engine: Engine):
        self.engine = engine

    # Reads

    def list_products(self) -> ReadResult[List[ProductRead]]:
        try:
            with self.engine.connect() as conn:
                rows = procedures.call(conn, procedures.GET_ALL_PRODUCTS).all()
            return ReadResult.success([_product_from_list_row(row) for row in rows])
        except (SQLAlchemyError, ValidationError) as exc:
            return _read_failure("list_products", exc, [])

    def get_product_by_id(self, product_id: int) -> ReadResult[Optional[ProductRead]]:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(PRODUCT_BY_ID_SQL, {"ProductID": product_id}).first()
            return ReadResult.success(None if row is None else _product_from_joined_row(row))
        except (SQLAlchemyError, ValidationError) as exc:
            return _read_failure("get_product_by_id", exc, None)

    def list_categories(self) -> ReadResult[List[CategoryRead]]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(CATEGORIES_SQL).all()
            return ReadResult.success([CategoryRead(category_id=row[0], category_name=row[1]) for row in rows])
        except (SQLAlchemyError, ValidationError) as exc:
            return _read_failure("list_categories", exc, [])

    def list_suppliers(self) -> ReadResult[List[SupplierRead]]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(SUPPLIERS_SQL).all()
            return ReadResult.success([SupplierRead(supplier_id=row[0], supplier_name=row[1]) for row in rows])
        except (SQLAlchemyError, ValidationError) as exc:
            return _read_failure("list_suppliers", exc, [])

    def customer_order_counts(self) -> ReadResult[List[CustomerOrderCount]]:
        try:
            with self.engine.connect() as conn:
                rows = procedures.call(conn, procedures.GET_CUSTOMER_ORDER_COUNTS).all()
            return ReadResult.success(
                [CustomerOrderCount(customer_name=row[0], order_count=row[1]) for row in rows]
            )
        except (SQLAlchemyError, ValidationError) as exc:
            return _read_failure("customer_order_counts", exc, [])

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            _log_store_error("ping", exc)
            return False
        return True

    # Writes

    def add_product(self, product: ProductCreate) -> Optional[int]:
        try:
            with self.engine.begin() as conn:
                result = procedures.call(
                    conn,
                    procedures.ADD_PRODUCT,
                    ProductName=product.product_name,
                    SupplierID=product.supplier_id,
                    CategoryID=product.category_id,
                    Unit=product.unit,
                    Price=product.price,
                )
                row = result.first() if result.returns_rows else None
        except SQLAlchemyError as exc:
            _log_store_error("add_product", exc)
            raise

        new_id = int(row[0]) if row is not None and row[0] is not None else None
        logger.info("Product added", product_id=new_id, product_name=product.product_name)
        return new_id

    def update_product(self, product: ProductUpdate) -> bool:
        try:
            with self.engine.begin() as conn:
                result = procedures.call(
                    conn,
                    procedures.UPDATE_PRODUCT,
                    ProductID=product.product_id,
                    ProductName=product.product_name,
                    SupplierID=product.supplier_id,
                    CategoryID=product.category_id,
                    Unit=product.unit,
                    Price=product.price,
                )
                updated = result.rowcount > 0
        except SQLAlchemyError as exc:
            _log_store_error("update_product", exc)
            raise

        logger.info("Product updated", product_id=product.product_id, updated=updated)
        return updated

    def delete_product(self, product_id: int) -> bool:
        try:
            with self.engine.begin() as conn:
                deleted = procedures.call(conn, procedures.DELETE_PRODUCT, ProductID=product_id).rowcount > 0
        except SQLAlchemyError as exc:
            _log_store_error("delete_product", exc)
            raise

        logger.info("Product deleted", product_id=product_id, deleted=deleted)
        return deleted
