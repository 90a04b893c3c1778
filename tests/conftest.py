import pytest
from httpx import ASGITransport, AsyncClient

from backend.config import Settings
from backend.main import create_app
from backend.utils.database import Database

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
    )


@pytest.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.connect()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def app(settings, database):
    # the lifespan does not run under ASGITransport, so the database is connected by the fixture
    return create_app(settings, database)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def register(client, name="Jo", email="jo@x.com", password="secret1"):
    response = await client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def alice(client):
    return await register(client, name="Alice", email="alice@example.com", password="alicepass")


@pytest.fixture
async def bob(client):
    return await register(client, name="Bob", email="bob@example.com", password="bobpass1")
