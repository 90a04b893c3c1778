import pytest

from backend.config import Settings
from backend.main import create_app, lifespan


async def test_root_reports_running(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.text == "API is running..."


async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "ok", "database": True}


async def test_cors_preflight(client):
    response = await client.options(
        "/api/tasks",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


async def test_unreachable_store_at_startup_is_fatal(tmp_path):
    settings = Settings(
        jwt_secret="s3cret",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'tasks.db'}",
    )
    app = create_app(settings)

    with pytest.raises(SystemExit) as exc_info:
        async with lifespan(app):
            pytest.fail("application served requests without a database")

    assert exc_info.value.code == 1
    assert not app.state.database.is_connected
