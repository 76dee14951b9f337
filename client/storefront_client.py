from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from client.cart import Cart
from core.exceptions import NotFoundError, PersistenceError, ValidationError
from schemas.base import CamelModel
from schemas.order_schemas import OrderDetail, OrderPlacedResponse
from schemas.product_schemas import ProductRecord
from utils.logger import get_logger

logger = get_logger(__name__)

_PRODUCTS = TypeAdapter(list[ProductRecord])


class BillingDetails(CamelModel):
    """Checkout form fields. The server does the validating."""
    first_name: str
    last_name: str
    email: str
    card_number: str
    exp_date: str
    cvv: str


class StorefrontClient:
    """
    Thin HTTP client for the storefront API.

    Pass an existing httpx.Client (for example FastAPI's TestClient) or a
    base_url to have one created.
    """

    def __init__(self, base_url: str = "http://localhost:8000", http: httpx.Client | None = None,
                 timeout: float = 10.0):
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, path: str, failure: str) -> httpx.Response:
        try:
            response = self.http.get(path)
        except httpx.HTTPError as exc:
            logger.error(failure, extra={"path": path, "error": str(exc)})
            raise PersistenceError(failure) from exc

        if response.status_code == 404:
            raise NotFoundError(response.json().get("detail", "Not found"))
        if response.status_code == 400:
            raise ValidationError(response.json().get("detail"))
        if response.status_code != 200:
            logger.error(failure, extra={"path": path, "status_code": response.status_code})
            raise PersistenceError(failure)
        return response

    def list_products(self) -> list[ProductRecord]:
        response = self._get("/api/products", "Failed to load products")
        return _PRODUCTS.validate_python(response.json())

    def list_featured_products(self) -> list[ProductRecord]:
        response = self._get("/api/products/featured", "Failed to load products")
        return _PRODUCTS.validate_python(response.json())

    def list_products_by_category(self, category: str) -> list[ProductRecord]:
        response = self._get(f"/api/products/category/{quote(category, safe='')}", "Failed to load products")
        return _PRODUCTS.validate_python(response.json())

    def get_product(self, product_id: int) -> ProductRecord:
        response = self._get(f"/api/products/{product_id}", "Failed to load product")
        return ProductRecord.model_validate(response.json())

    def get_order(self, order_id: int) -> OrderDetail:
        response = self._get(f"/api/orders/{order_id}", "Failed to load order")
        return OrderDetail.model_validate(response.json())

    @staticmethod
    def build_checkout_payload(cart: Cart, billing: BillingDetails) -> dict:
        totals = cart.compute_totals()
        return {
            **billing.model_dump(by_alias=True),
            "items": [item.model_dump(mode="json", by_alias=True) for item in cart.items],
            "subtotal": str(totals.subtotal),
            "tax": str(totals.tax),
            "total": str(totals.total),
        }

    def checkout(self, cart: Cart, billing: BillingDetails) -> OrderPlacedResponse:
        """
        Submit the cart as an order. On success the cart is cleared and the
        confirmation returned; on any failure the cart is left untouched.

        Raises:
            ValidationError: the server rejected the payload (400)
            PersistenceError: transport failure or any other status
        """
        payload = self.build_checkout_payload(cart, billing)

        try:
            response = self.http.post("/api/orders", json=payload)
        except httpx.HTTPError as exc:
            logger.error("Failed to place order", extra={"error": str(exc)})
            raise PersistenceError("Failed to place order") from exc

        if response.status_code == 400:
            raise ValidationError(response.json().get("detail"))
        if response.status_code != 201:
            logger.error("Failed to place order", extra={"status_code": response.status_code})
            raise PersistenceError("Failed to place order")

        confirmation = OrderPlacedResponse.model_validate(response.json())
        cart.clear()

        logger.info("Order confirmed", extra={"order_id": confirmation.order_id})
        return confirmation
