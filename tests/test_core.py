import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from northwind.core.exceptions import (
    AppError,
    EntityNotFoundException,
    OperationFailedException,
    global_exception_handler,
    guarded,
)
from northwind.core.middleware import setup_middleware


def test_guarded_replaces_unexpected_exceptions():
    @guarded("compute")
    def compute():
        raise KeyError("internal detail")

    with pytest.raises(OperationFailedException) as info:
        compute()

    assert info.value.status_code == 500
    assert info.value.message == "An unexpected error occurred while processing compute."
    assert info.value.__cause__ is None


def test_guarded_lets_application_errors_through():
    @guarded("lookup")
    def lookup():
        raise EntityNotFoundException("Product not found")

    with pytest.raises(EntityNotFoundException):
        lookup()


def test_guarded_keeps_return_values_and_signature():
    @guarded("add")
    def add(a: int, b: int = 2) -> int:
        return a + b

    assert add(1) == 3
    assert add.__wrapped__.__name__ == "add"


@pytest.fixture
def small_app():
    app = FastAPI()
    setup_middleware(app)
    app.add_exception_handler(AppError, global_exception_handler)

    @app.get("/missing")
    def missing():
        raise EntityNotFoundException("Thing not found", details={"id": 7}, headers={"X-Extra": "1"})

    return app


def test_error_envelope_and_request_id(small_app):
    response = TestClient(small_app).get("/missing", headers={"X-Request-ID": "a3f1c2d4-5b6e-4f70-8a91-b2c3d4e5f607"})

    assert response.status_code == 404
    assert response.headers["X-Extra"] == "1"
    assert response.headers["X-Request-ID"] == "a3f1c2d4-5b6e-4f70-8a91-b2c3d4e5f607"
    assert response.json() == {
        "error": {
            "code": "EntityNotFoundException",
            "message": "Thing not found",
            "details": {"id": 7},
            "path": "/missing",
        }
    }
