from decimal import Decimal

TEST_PASSWORD = "TestPassword123"


def make_cart_line(product_id=1, price=49.99, quantity=1, name="AI Assistant Pro") -> dict:
    return {"id": product_id, "name": name, "price": price, "quantity": quantity,
            "image": "https://example.com/image.png"}


def make_checkout_payload(items=None, **overrides) -> dict:
    """
    A checkout body shaped like the storefront client sends it: cart prices
    and totals are JSON numbers.
    """
    if items is None:
        items = [make_cart_line()]

    subtotal = sum(Decimal(str(item["price"])) * item["quantity"] for item in items)
    tax = subtotal * Decimal("0.07")

    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "cardNumber": "4242424242424242",
        "expDate": "12/30",
        "cvv": "123",
        "items": items,
        "subtotal": float(subtotal),
        "tax": float(tax),
        "total": float(subtotal + tax),
    }
    payload.update(overrides)
    return payload
