"""
Product Repository Interface.
Data access contract for products and their read-only reference data.
"""

from typing import List, Optional, Protocol

from northwind.domain.results import ReadResult
from northwind.domain.schemas.customer import CustomerOrderCount
from northwind.domain.schemas.product import (
    CategoryRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    SupplierRead,
)


class ProductRepository(Protocol):
    """
    Reads return a ``ReadResult`` and never raise on store failure.
    Writes raise on store failure so callers can tell success from loss.
    """

    def list_products(self) -> ReadResult[List[ProductRead]]:
        """All products with category and supplier names (ids left unset)."""
        ...

    def get_product_by_id(self, product_id: int) -> ReadResult[Optional[ProductRead]]:
        """A single product with ids and names, or None when no row matches."""
        ...

    def add_product(self, product: ProductCreate) -> Optional[int]:
        """Insert a product; returns its new id when the store reports one."""
        ...

    def update_product(self, product: ProductUpdate) -> bool:
        """Replace a product's mutable fields; True iff a row changed."""
        ...

    def delete_product(self, product_id: int) -> bool:
        """Delete a product; True iff a row was removed."""
        ...

    def list_categories(self) -> ReadResult[List[CategoryRead]]:
        ...

    def list_suppliers(self) -> ReadResult[List[SupplierRead]]:
        ...

    def customer_order_counts(self) -> ReadResult[List[CustomerOrderCount]]:
        """Orders per customer, most orders first."""
        ...

    def ping(self) -> bool:
        """True when the store answers a trivial query."""
        ...
