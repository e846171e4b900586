"""Gist-related endpoints."""

import logging

from fastapi import APIRouter, Depends, Response

from gist_proxy.exceptions import (
    fetch_error_response,
    internal_error_response,
    username_required_response,
)
from gist_proxy.models.schemas import ErrorResponse, MessageResponse, dump_gists
from gist_proxy.services.github_client import GistFetcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gists"])


async def get_gist_fetcher() -> GistFetcher:
    """Placeholder - overridden in main.py."""
    raise NotImplementedError


@router.get(
    "/",
    summary="Usage hint",
    status_code=400,
    responses={400: {"model": MessageResponse, "description": "No username given"}},
)
async def missing_username() -> Response:
    """Reject requests that do not name a GitHub user."""
    return username_required_response()


@router.get(
    "/{username:path}",
    summary="Get user's public gists",
    description="Proxies the public gists of a GitHub user.",
    responses={
        200: {"description": "JSON array of gists, possibly empty"},
        400: {"model": MessageResponse, "description": "No username given"},
        404: {"model": ErrorResponse, "description": "GitHub user not found"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Any other failure"},
    },
)
async def get_user_gists(
    username: str,
    fetcher: GistFetcher = Depends(get_gist_fetcher),
) -> Response:
    """
    Get public gists for a GitHub user.

    - **username**: everything after the leading ``/``, forwarded verbatim
    """
    try:
        result = await fetcher.fetch(username)
    except Exception as e:
        logger.exception(f"Error fetching gists for {username}")
        return internal_error_response(str(e) or type(e).__name__)

    if result.is_err:
        return fetch_error_response(result.error)

    return Response(content=dump_gists(result.value), media_type="application/json")
