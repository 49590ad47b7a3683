"""Pydantic schemas for the Product domain."""

from typing import Optional

from pydantic import Field

from northwind.domain.schemas.base import CamelModel, Money


class ProductBase(CamelModel):
    product_name: str = Field(min_length=1, max_length=255)
    supplier_id: int = Field(gt=0)
    category_id: int = Field(gt=0)
    price: Money = Field(ge=0)
    unit: str = Field(max_length=255)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """Full replacement of a product's mutable fields."""

    product_id: int = Field(gt=0)


class ProductRead(CamelModel):
    """
    A product as read from the store.

    The list query fills the display names only; the by-id query fills both
    the reference ids and the names. Names are null when a reference dangles.
    """

    product_id: int
    product_name: str
    supplier_id: Optional[int] = None
    category_id: Optional[int] = None
    price: Money
    unit: Optional[str] = None
    category_name: Optional[str] = None
    supplier_name: Optional[str] = None


class CategoryRead(CamelModel):
    category_id: int
    category_name: str


class SupplierRead(CamelModel):
    supplier_id: int
    supplier_name: str


class BulkDeleteRequest(CamelModel):
    product_ids: list[int] = Field(min_length=1)


class BulkDeleteResult(CamelModel):
    deleted: list[int] = []
    not_found: list[int] = []
    failed: list[int] = []


class MessageResponse(CamelModel):
    message: str


class ProductAddedResponse(MessageResponse):
    product_id: Optional[int] = None
