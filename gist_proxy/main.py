"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gist_proxy.config import get_settings, resolve_port
from gist_proxy.routers import gists, health
from gist_proxy.services.github_client import GistFetcher

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

gist_fetcher: GistFetcher | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the upstream HTTP client on startup and closes it on shutdown.
    """
    global gist_fetcher

    settings = get_settings()
    logger.info(f"Starting {settings.app_name}")

    gist_fetcher = GistFetcher(settings)
    await gist_fetcher.start()

    logger.info(f"Proxying gists from {settings.github_api_base_url}")

    yield

    logger.info("Shutting down services")
    await gist_fetcher.close()


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="A proxy exposing a GitHub user's public gists as JSON",
        version="1.0.0",
        lifespan=lifespan,
    )

    async def get_gist_fetcher_dep():
        return gist_fetcher

    app.dependency_overrides[gists.get_gist_fetcher] = get_gist_fetcher_dep

    # /health must be registered ahead of the catch-all username route.
    app.include_router(health.router)
    app.include_router(gists.router)

    return app


app = create_app()


def main(argv: list[str] | None = None) -> None:
    """Run the server. The optional first argument is the listen port."""
    import uvicorn

    settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]
    port = resolve_port(argv, settings.port)

    logger.info(f"Access health check at http://localhost:{port}/health")
    logger.info(f"Access Gists API at http://localhost:{port}/<username>")
    uvicorn.run(
        "gist_proxy.main:app",
        host=settings.host,
        port=port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
