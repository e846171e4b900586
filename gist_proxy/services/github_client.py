"""Async GitHub gist fetcher using httpx."""

import logging

import httpx
from pydantic import ValidationError

from gist_proxy.config import Settings
from gist_proxy.exceptions import FetchError
from gist_proxy.models.result import Result
from gist_proxy.models.schemas import Gist, parse_gists

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"


class GistFetcher:
    """
    Fetches a user's public gists from the GitHub REST API.

    An ``httpx.AsyncClient`` may be injected, e.g. one backed by
    ``httpx.MockTransport``. Otherwise ``start()`` creates one and
    ``close()`` releases it.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self._base_url = settings.github_api_base_url.rstrip("/")
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "GistFetcher":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        """Initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def gists_url(self, username: str) -> str:
        """Upstream gists URL; the username is inserted verbatim."""
        return self._base_url + "/users/" + username + "/gists"

    async def fetch(self, username: str) -> Result[list[Gist], FetchError]:
        """
        Fetch public gists for a GitHub user.

        Args:
            username: GitHub username, forwarded without escaping

        Returns:
            ``Result.ok`` with the gists in upstream order, or ``Result.err``
            with a classified FetchError. Nothing is retried.

        Raises:
            RuntimeError: If the fetcher was not started
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Call start() first.")

        url = self.gists_url(username)
        logger.debug(f"GET {url}")

        try:
            response = await self._client.get(url, headers={"Accept": GITHUB_ACCEPT})
        except httpx.TransportError as e:
            logger.warning(f"Transport failure fetching gists for {username}: {e!r}")
            return Result.err(FetchError.transport(e))

        if response.status_code == 404:
            return Result.err(FetchError.user_not_found(username))

        if response.status_code == 429:
            logger.warning("GitHub API rate limit exceeded")
            return Result.err(FetchError.rate_limited())

        if response.status_code != 200:
            logger.warning(f"GitHub API returned {response.status_code} for {username}")
            return Result.err(FetchError.upstream(response.status_code, response.text))

        try:
            gists = parse_gists(response.content)
        except ValidationError as e:
            logger.warning(f"Malformed gist payload for {username}: {e}")
            return Result.err(FetchError.parse(e))

        return Result.ok(gists)
