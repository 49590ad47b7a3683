"""Pydantic schemas for the customer order report."""

from pydantic import Field

from northwind.domain.schemas.base import CamelModel


class CustomerOrderCount(CamelModel):
    customer_name: str
    order_count: int = Field(ge=0)
