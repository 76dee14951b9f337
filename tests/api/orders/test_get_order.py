from decimal import Decimal


async def test_get_placed_order(client, checkout_payload):
    placed = await client.post("/api/orders", json=checkout_payload)
    order_id = placed.json()["orderId"]

    response = await client.get(f"/api/orders/{order_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == order_id
    assert data["status"] == "completed"
    assert data["userId"] is None
    assert data["createdAt"]
    assert Decimal(data["total"]) == Decimal("53.4893")
    assert len(data["items"]) == 1
    assert data["items"][0]["orderId"] == order_id
    assert data["items"][0]["productId"] == 1
    assert data["items"][0]["price"] == "49.99"


async def test_get_missing_order(client):
    response = await client.get("/api/orders/12345")

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"
