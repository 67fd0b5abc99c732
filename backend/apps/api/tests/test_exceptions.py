import pytest
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import (
    ApplicationError,
    AuthError,
    ConflictError,
    ConsistencyError,
    EmptyCartError,
    InvalidInputError,
    NotFoundError,
    global_exception_handler,
)

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.get("/api/example/")
    exc = ApplicationError(
        "CONFLICT",
        "Cart was modified concurrently",
        status_code=status.HTTP_409_CONFLICT,
        details={"cartId": "12"},
    )
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Cart was modified concurrently"
    assert payload["details"] == {"cartId": "12"}


@pytest.mark.parametrize(
    "exc_class, code, http_status",
    [
        (InvalidInputError, "VALIDATION_ERROR", 400),
        (NotFoundError, "NOT_FOUND", 404),
        (EmptyCartError, "EMPTY_CART", 400),
        (ConflictError, "CONFLICT", 409),
        (ConsistencyError, "CONSISTENCY_ERROR", 500),
        (AuthError, "UNAUTHORIZED", 401),
    ],
)
def test_domain_errors_map_to_codes(exc_class, code, http_status):
    request = factory.get("/api/example/")
    response = global_exception_handler(exc_class(), _context(request))
    payload = response.data["error"]
    assert response.status_code == http_status
    assert payload["code"] == code
    assert payload["status"] == http_status
    assert payload["message"] == exc_class.default_message


def test_domain_error_keeps_custom_message_and_details():
    exc = NotFoundError("Order not found", details={"orderId": "x"})
    response = global_exception_handler(exc, _context(factory.get("/api/orders/x/")))
    assert response.data["error"]["message"] == "Order not found"
    assert response.data["error"]["details"] == {"orderId": "x"}


def test_validation_error_preserves_details():
    request = factory.post("/api/example/", data={})
    exc = ValidationError({"field": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"field": ["This field is required."]}


def test_not_authenticated_is_unauthorized():
    response = global_exception_handler(
        NotAuthenticated(), _context(factory.get("/api/carts/my-cart/"))
    )
    assert response.data["error"]["code"] == "UNAUTHORIZED"
    assert "details" not in response.data["error"]


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/example/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload
