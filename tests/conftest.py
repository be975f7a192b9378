"""Pytest configuration and fixtures."""

from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
from httpx import ASGITransport, AsyncClient, Response

ACCOUNTS_YAML = """
accounts:
  - username: "patient"
    password: "patient-pass"
    role: "patient"

  - username: "clinic"
    password: "clinic-pass"
    role: "clinic"

  - username: "gov"
    password: "gov-pass"
    role: "government"
"""

PASSWORDS = {
    "patient": "patient-pass",
    "clinic": "clinic-pass",
    "gov": "gov-pass",
}


@pytest.fixture(autouse=True)
def test_accounts_path(monkeypatch):
    """Create a temporary accounts file and set PORTAL_ACCOUNTS_PATH for all tests."""
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False, encoding="utf-8") as f:
        f.write(ACCOUNTS_YAML)
        f.flush()
        accounts_path = f.name

    monkeypatch.setenv("PORTAL_ACCOUNTS_PATH", accounts_path)

    from portal.config.settings import get_settings

    get_settings.cache_clear()

    yield accounts_path

    Path(accounts_path).unlink(missing_ok=True)
    get_settings.cache_clear()


@asynccontextmanager
async def lifespan_wrapper(app):
    """Wrap app lifespan for testing."""
    async with app.router.lifespan_context(app):
        yield


@pytest.fixture
async def client():
    """Create async test client with lifespan."""
    from portal.main import app

    async with lifespan_wrapper(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
def session_store(client):
    """The session store of the app started by the client fixture."""
    from portal.main import app

    return app.state.session_store


@pytest.fixture
def login(client: AsyncClient) -> Callable[[str], Awaitable[Response]]:
    """Log the test client in as one of the demo accounts."""

    async def _login(username: str, password: str | None = None) -> Response:
        if password is None:
            password = PASSWORDS[username]
        return await client.post(
            "/login",
            data={"username": username, "password": password},
        )

    return _login
