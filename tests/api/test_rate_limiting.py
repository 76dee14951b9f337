from middleware.rate_limiter import limiter
from core.config import settings
from tests.factories import make_checkout_payload


def test_rate_limiter_disabled_in_testing():
    """Verify rate limiter is disabled during tests."""
    assert settings.ENV == "testing"
    assert limiter.enabled is False


async def test_can_place_many_orders_in_tests(client):
    """Checkout is limited to 10/minute outside of tests."""
    for _ in range(12):
        response = await client.post("/api/orders", json=make_checkout_payload())
        assert response.status_code == 201
