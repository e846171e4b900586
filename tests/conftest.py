"""Shared test fixtures and sample data."""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gist_proxy.config import Settings
from gist_proxy.main import app
from gist_proxy.routers import gists
from gist_proxy.services.github_client import GistFetcher

# Trimmed GitHub API response for octocat; extra fields are ignored by the models
SAMPLE_GIST_DATA = {
    "id": "6cad326836d38bd3a7ae",
    "url": "https://api.github.com/gists/6cad326836d38bd3a7ae",
    "html_url": "https://gist.github.com/octocat/6cad326836d38bd3a7ae",
    "description": "Hello world!",
    "public": True,
    "comments": 291,
    "files": {
        "hello_world.rb": {
            "filename": "hello_world.rb",
            "type": "application/x-ruby",
            "language": "Ruby",
            "raw_url": "https://gist.githubusercontent.com/octocat/6cad326836d38bd3a7ae/raw/hello_world.rb",
            "size": 175,
        }
    },
    "owner": {"login": "octocat", "id": 583231},
}

TWO_GISTS_PAYLOAD = (
    '[{"id":"1", "description":"Gist One", "url":"url1", '
    '"files":{"file1.txt":{"filename":"file1.txt"}}}, '
    '{"id":"2", "description":"Gist Two", "url":"url2", '
    '"files":{"file2.txt":{"filename":"file2.txt"}}}]'
)


class FakeGitHub:
    """
    Canned upstream for httpx.MockTransport.

    Maps a username to ``(status, body)``; a username mapped to an
    exception instance raises it instead. Every request is recorded.
    """

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, username: str, status: int, body) -> None:
        if not isinstance(body, str):
            body = json.dumps(body)
        self.routes[username] = (status, body)

    def fail(self, username: str, exc: Exception) -> None:
        self.routes[username] = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        username = path.removeprefix("/users/").removesuffix("/gists")
        route = self.routes.get(username, (404, '{"message":"Not Found"}'))
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, text=body)


@pytest.fixture
def settings():
    """Test settings."""
    return Settings(github_api_base_url="https://api.github.test")


@pytest.fixture
def sample_gist_data():
    """Sample gist data for testing."""
    return SAMPLE_GIST_DATA


@pytest.fixture
def two_gists_payload():
    """Two-gist upstream body, exactly as GitHub might send it."""
    return TWO_GISTS_PAYLOAD


@pytest.fixture
def fake_github():
    """Canned upstream responses."""
    return FakeGitHub()


@pytest_asyncio.fixture
async def fetcher(settings, fake_github):
    """GistFetcher talking to the canned upstream."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_github))
    async with GistFetcher(settings, http_client=http_client) as fetcher:
        yield fetcher
    await http_client.aclose()


@pytest_asyncio.fixture
async def test_client(fetcher):
    """AsyncClient driving the app with the canned upstream."""
    app.dependency_overrides[gists.get_gist_fetcher] = lambda: fetcher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
