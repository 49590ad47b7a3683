"""Product service. One function per use case, each a single repository call."""

from typing import Iterable, List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from northwind.domain.repositories.product_repository import ProductRepository
from northwind.domain.results import ReadResult
from northwind.domain.schemas.customer import CustomerOrderCount
from northwind.domain.schemas.product import (
    BulkDeleteResult,
    CategoryRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    SupplierRead,
)

logger = structlog.get_logger(__name__)


def list_products(repo: ProductRepository) -> ReadResult[List[ProductRead]]:
    return repo.list_products()


def get_product(repo: ProductRepository, product_id: int) -> ReadResult[Optional[ProductRead]]:
    return repo.get_product_by_id(product_id)


def add_product(repo: ProductRepository, product: ProductCreate) -> Optional[int]:
    """Insert a product. Foreign keys are checked by the store, not here."""
    return repo.add_product(product)


def update_product(repo: ProductRepository, product: ProductUpdate) -> bool:
    return repo.update_product(product)


def delete_product(repo: ProductRepository, product_id: int) -> bool:
    return repo.delete_product(product_id)


def list_categories(repo: ProductRepository) -> ReadResult[List[CategoryRead]]:
    return repo.list_categories()


def list_suppliers(repo: ProductRepository) -> ReadResult[List[SupplierRead]]:
    return repo.list_suppliers()


def get_customer_order_counts(repo: ProductRepository) -> ReadResult[List[CustomerOrderCount]]:
    """Orders per customer, most orders first."""
    return repo.customer_order_counts()


def get_top_customers(repo: ProductRepository, limit: int = 3) -> ReadResult[List[CustomerOrderCount]]:
    """The ``limit`` customers with the most orders."""
    result = repo.customer_order_counts()
    return ReadResult(result.value[:limit], result.error)


def bulk_delete_products(repo: ProductRepository, product_ids: Iterable[int]) -> BulkDeleteResult:
    """
    Delete each product independently.

    There is no atomicity: a failure on one id neither stops nor rolls back the
    others. Store failures are reported per id in ``failed``; any other
    exception propagates.
    """
    outcome = BulkDeleteResult()
    # Duplicates would only report not_found for the second attempt
    for product_id in dict.fromkeys(product_ids):
        try:
            deleted = repo.delete_product(product_id)
        except SQLAlchemyError:
            outcome.failed.append(product_id)
            continue
        (outcome.deleted if deleted else outcome.not_found).append(product_id)

    if outcome.failed:
        logger.warning("Bulk delete partially failed", failed=outcome.failed, deleted=outcome.deleted)
    return outcome
