"""Products API routes: products, reference data and the customer order report."""

from typing import List, TypeVar

from fastapi import APIRouter, Depends, Query, Response

from northwind.application.services import product_service
from northwind.config import Settings
from northwind.core.exceptions import EntityNotFoundException, StoreUnavailableException, guarded
from northwind.domain.repositories.product_repository import ProductRepository
from northwind.domain.results import ReadResult
from northwind.domain.schemas.customer import CustomerOrderCount
from northwind.domain.schemas.product import (
    BulkDeleteRequest,
    BulkDeleteResult,
    CategoryRead,
    MessageResponse,
    ProductAddedResponse,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    SupplierRead,
)
from northwind.interfaces.deps import get_app_settings, get_product_repository

T = TypeVar("T")

DEGRADED_HEADER = "X-Data-Degraded"

router = APIRouter(prefix="/api/products", tags=["Products"])


def unwrap_read(result: ReadResult[T], response: Response, settings: Settings) -> T:
    """
    Failed reads answer with their empty value and a degraded marker header,
    or with 503 when reads are strict.
    """
    if not result.ok:
        if settings.STRICT_READS:
            raise StoreUnavailableException(details={"reason": result.error.value})
        response.headers[DEGRADED_HEADER] = result.error.value
    return result.value


@router.get("", response_model=List[ProductRead])
@guarded("list_products")
def list_products(
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    """All products with category and supplier names."""
    return unwrap_read(product_service.list_products(repo), response, settings)


@router.get("/categories", response_model=List[CategoryRead])
@guarded("list_categories")
def list_categories(
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    return unwrap_read(product_service.list_categories(repo), response, settings)


@router.get("/suppliers", response_model=List[SupplierRead])
@guarded("list_suppliers")
def list_suppliers(
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    return unwrap_read(product_service.list_suppliers(repo), response, settings)


@router.get("/customer-orders", response_model=List[CustomerOrderCount])
@guarded("customer_order_counts")
def customer_order_counts(
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Number of orders per customer, most orders first."""
    return unwrap_read(product_service.get_customer_order_counts(repo), response, settings)


@router.get("/top-customers", response_model=List[CustomerOrderCount])
@guarded("top_customers")
def top_customers(
    response: Response,
    limit: int = Query(3, ge=1, le=100),
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    return unwrap_read(product_service.get_top_customers(repo, limit), response, settings)


@router.post("/add", response_model=ProductAddedResponse)
@guarded("add_product")
def add_product(
    product: ProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
):
    product_id = product_service.add_product(repo, product)
    return ProductAddedResponse(message="Product added successfully.", product_id=product_id)


@router.put("/update", response_model=MessageResponse)
@guarded("update_product")
def update_product(
    product: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
):
    product_service.update_product(repo, product)
    return MessageResponse(message="Product updated successfully.")


@router.post("/bulk-delete", response_model=BulkDeleteResult)
@guarded("bulk_delete_products")
def bulk_delete_products(
    request: BulkDeleteRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    """Delete several products independently; partial success is reported, not rolled back."""
    return product_service.bulk_delete_products(repo, request.product_ids)


@router.get("/{product_id}", response_model=ProductRead)
@guarded("get_product_by_id")
def get_product_by_id(
    product_id: int,
    response: Response,
    repo: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_app_settings),
):
    result = product_service.get_product(repo, product_id)
    product = unwrap_read(result, response, settings)
    if product is None:
        headers = None if result.ok else {DEGRADED_HEADER: result.error.value}
        raise EntityNotFoundException("Product not found", headers=headers)
    return product


@router.delete("/{product_id}", response_model=MessageResponse)
@guarded("delete_product")
def delete_product(
    product_id: int,
    repo: ProductRepository = Depends(get_product_repository),
):
    # Deleting an id that does not exist is still a success
    product_service.delete_product(repo, product_id)
    return MessageResponse(message="Product deleted.")
