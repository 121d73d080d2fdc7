"""
SampleWeb Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── make_request:     Factory for hand-built WebRequest objects
    ├── resolver:         ViewResolver over the packaged templates
    ├── temp_templates:   Temporary template root with a single view
    └── test_client:      HTTPX AsyncClient talking to the FastAPI app
"""

import os

import pytest
import pytest_asyncio
from fastapi.templating import Jinja2Templates
from httpx import AsyncClient, ASGITransport

# Keep test output quiet; set before the settings singleton is imported
os.environ["LOG_LEVEL"] = "WARNING"

from sampleweb.config import DEFAULT_TEMPLATES_DIR  # noqa: E402
from sampleweb.services.request_context import WebRequest  # noqa: E402
from sampleweb.services.view_resolver import ViewResolver  # noqa: E402


@pytest.fixture
def make_request():
    """
    Builds a WebRequest from keyword parameters.

    Usage:
        req = make_request(name="Pen", price="1200", method="POST", path="doG")
    """

    def _make(method: str = "GET", path: str = "", **params):
        return WebRequest(parameters=params, method=method, path=path)

    return _make


@pytest.fixture
def resolver():
    """ViewResolver configured like the application (views/<name>.html)."""
    return ViewResolver(
        prefix="views/",
        suffix=".html",
        templates=Jinja2Templates(directory=DEFAULT_TEMPLATES_DIR),
    )


@pytest.fixture
def temp_templates(tmp_path):
    """A template root containing only views/only.html."""
    views = tmp_path / "views"
    views.mkdir()
    (views / "only.html").write_text("only {{ msg }}")
    return tmp_path


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient wired directly to the FastAPI app.

    Usage:
        async def test_home(test_client):
            response = await test_client.get("/main.home")
            assert response.status_code == 200
    """
    from sampleweb.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
