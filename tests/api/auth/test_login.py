from jose import jwt
from core.config import settings
from tests.factories import TEST_PASSWORD


async def test_login_success(client, registered_user):
    """Test successful user login."""
    response = await client.post("/api/login", json={
        "username": registered_user.username,
        "password": TEST_PASSWORD
    })

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"

    payload = jwt.decode(data["access_token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == registered_user.username
    assert payload["id"] == registered_user.id
    assert payload["type"] == "access"


async def test_login_wrong_password(client, registered_user):
    response = await client.post("/api/login", json={
        "username": registered_user.username,
        "password": "WrongPassword123"
    })

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


async def test_login_nonexistent_user(client):
    response = await client.post("/api/login", json={
        "username": "ghost",
        "password": "Password123"
    })

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


async def test_register_then_login(client):
    await client.post("/api/register", json={"username": "fresh", "password": "secret123"})

    response = await client.post("/api/login", json={"username": "fresh", "password": "secret123"})
    assert response.status_code == 200
