import pytest
from fastapi.testclient import TestClient

from northwind.domain.results import ReadResult
from northwind.interfaces.deps import get_product_repository
from northwind.main import app

BASE = "/api/products"

WIDGET = {
    "productName": "Widget",
    "supplierId": 2,
    "categoryId": 1,
    "price": 9.99,
    "unit": "10 boxes",
}


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "Northwind Products API"

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "online"}


def test_list_products_uses_camel_case(client):
    response = client.get(BASE)

    assert response.status_code == 200
    assert "X-Data-Degraded" not in response.headers
    first = response.json()[0]
    assert first == {
        "productId": 1,
        "productName": "Chais",
        "supplierId": None,
        "categoryId": None,
        "price": 18.0,
        "unit": "10 boxes x 20 bags",
        "categoryName": "Beverages",
        "supplierName": "Exotic Liquid",
    }


def test_reference_data_endpoints(client):
    categories = client.get(f"{BASE}/categories")
    suppliers = client.get(f"{BASE}/suppliers")

    assert categories.status_code == 200
    assert categories.json()[0] == {"categoryId": 1, "categoryName": "Beverages"}
    assert suppliers.status_code == 200
    assert suppliers.json()[1] == {"supplierId": 2, "supplierName": "New Orleans Cajun Delights"}


def test_customer_orders_and_top_customers(client):
    orders = client.get(f"{BASE}/customer-orders")
    top = client.get(f"{BASE}/top-customers", params={"limit": 1})

    assert orders.status_code == 200
    assert orders.json() == [
        {"customerName": "Around the Horn", "orderCount": 3},
        {"customerName": "Alfreds Futterkiste", "orderCount": 1},
    ]
    assert top.json() == [{"customerName": "Around the Horn", "orderCount": 3}]


def test_add_then_get_round_trip(client):
    response = client.post(f"{BASE}/add", json=WIDGET)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product added successfully."
    product_id = body["productId"]

    fetched = client.get(f"{BASE}/{product_id}")
    assert fetched.status_code == 200
    product = fetched.json()
    for key, value in WIDGET.items():
        assert product[key] == value
    assert product["categoryName"] == "Beverages"
    assert product["supplierName"] == "New Orleans Cajun Delights"

    listed = client.get(BASE).json()
    assert any(p["productId"] == product_id and p["productName"] == "Widget" for p in listed)


def test_add_accepts_snake_case_fields(client):
    payload = {"product_name": "Gadget", "supplier_id": 1, "category_id": 2, "price": 3, "unit": "1 unit"}

    response = client.post(f"{BASE}/add", json=payload)

    assert response.status_code == 200
    assert client.get(f"{BASE}/{response.json()['productId']}").json()["productName"] == "Gadget"


@pytest.mark.parametrize(
    "change",
    [{"productName": ""}, {"price": -1}, {"supplierId": 0}],
)
def test_add_rejects_invalid_payloads(client, change):
    response = client.post(f"{BASE}/add", json={**WIDGET, **change})

    assert response.status_code == 422


def test_add_with_unknown_category_is_an_opaque_500(client):
    response = client.post(f"{BASE}/add", json={**WIDGET, "categoryId": 42})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "InternalServerError"
    assert error["message"] == "An unexpected error occurred while processing add_product."
    assert "FOREIGN KEY" not in response.text


def test_get_missing_product_is_404(client):
    response = client.get(f"{BASE}/999")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Product not found"


def test_update_twice_is_idempotent(client):
    payload = {**WIDGET, "productId": 1, "productName": "Chai Tea"}

    for _ in range(2):
        response = client.put(f"{BASE}/update", json=payload)
        assert response.status_code == 200
        assert response.json() == {"message": "Product updated successfully."}
        product = client.get(f"{BASE}/1").json()
        assert {k: product[k] for k in payload} == payload


def test_delete_existing_and_missing_products(client):
    response = client.delete(f"{BASE}/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted."}
    assert all(p["productId"] != 1 for p in client.get(BASE).json())

    missing = client.delete(f"{BASE}/999")
    assert missing.status_code == 200
    assert missing.json() == {"message": "Product deleted."}


def test_bulk_delete_reports_each_id(client):
    response = client.post(f"{BASE}/bulk-delete", json={"productIds": [1, 999, 2]})

    assert response.status_code == 200
    assert response.json() == {"deleted": [1, 2], "notFound": [999], "failed": []}
    assert [p["productId"] for p in client.get(BASE).json()] == [3]


def test_reads_degrade_to_empty_lists_when_store_is_down(offline_client):
    for path in ("", "/categories", "/suppliers", "/customer-orders", "/top-customers"):
        response = offline_client.get(f"{BASE}{path}")
        assert response.status_code == 200, path
        assert response.json() == []
        assert response.headers["X-Data-Degraded"] == "store-unavailable"

    by_id = offline_client.get(f"{BASE}/1")
    assert by_id.status_code == 404
    assert by_id.headers["X-Data-Degraded"] == "store-unavailable"

    assert offline_client.get("/health").status_code == 503


def test_writes_fail_with_500_when_store_is_down(offline_client):
    add = offline_client.post(f"{BASE}/add", json=WIDGET)
    update = offline_client.put(f"{BASE}/update", json={**WIDGET, "productId": 1})
    delete = offline_client.delete(f"{BASE}/1")

    assert [add.status_code, update.status_code, delete.status_code] == [500, 500, 500]
    assert update.json()["error"]["message"] == "An unexpected error occurred while processing update_product."


def test_strict_reads_answer_503(strict_offline_client):
    response = strict_offline_client.get(BASE)

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "StoreUnavailableException"


def test_unexpected_errors_never_leak_details():
    class BrokenRepository:
        def list_products(self) -> ReadResult:
            raise RuntimeError("secret connection string")

    app.dependency_overrides[get_product_repository] = lambda: BrokenRepository()
    try:
        response = TestClient(app).get(BASE)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"]["message"] == "An unexpected error occurred while processing list_products."
    assert "secret" not in response.text


def test_update_requires_the_full_product(client):
    payload = {key: value for key, value in WIDGET.items() if key != "unit"}

    response = client.put(f"{BASE}/update", json={**payload, "productId": 1})

    assert response.status_code == 422
    assert client.get(f"{BASE}/1").json()["unit"] == "10 boxes x 20 bags"
