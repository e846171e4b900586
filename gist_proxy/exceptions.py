"""Upstream failure taxonomy and JSON error responses."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import ValidationError

USERNAME_REQUIRED_MESSAGE = "Please specify a GitHub username, e.g., /octocat"
RATE_LIMIT_MESSAGE = "GitHub API rate limit exceeded."


class FetchErrorKind(str, Enum):
    """Classification of a failed upstream gist lookup."""

    USER_NOT_FOUND = "user_not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    PARSE = "parse"


@dataclass(frozen=True)
class FetchError:
    """A classified failure returned by the gist fetcher."""

    kind: FetchErrorKind
    message: str
    status_code: int | None = None
    body: str | None = None
    cause: BaseException | None = None

    @classmethod
    def user_not_found(cls, username: str) -> "FetchError":
        return cls(
            kind=FetchErrorKind.USER_NOT_FOUND,
            message=f"GitHub user not found: {username}",
            status_code=404,
        )

    @classmethod
    def rate_limited(cls) -> "FetchError":
        return cls(
            kind=FetchErrorKind.RATE_LIMITED,
            message=RATE_LIMIT_MESSAGE,
            status_code=429,
        )

    @classmethod
    def upstream(cls, status_code: int, body: str) -> "FetchError":
        return cls(
            kind=FetchErrorKind.UPSTREAM,
            message=f"GitHub API error: {status_code} - {body}",
            status_code=status_code,
            body=body,
        )

    @classmethod
    def transport(cls, exc: BaseException) -> "FetchError":
        return cls(
            kind=FetchErrorKind.TRANSPORT,
            message=str(exc) or type(exc).__name__,
            cause=exc,
        )

    @classmethod
    def parse(cls, exc: BaseException) -> "FetchError":
        return cls(
            kind=FetchErrorKind.PARSE,
            message=f"Malformed gist payload: {_first_error_message(exc)}",
            cause=exc,
        )


def _first_error_message(exc: BaseException) -> str:
    """One-line summary of a decoding failure, without the offending input."""
    if isinstance(exc, ValidationError):
        errors = exc.errors(include_url=False, include_input=False)
        if errors:
            return errors[0]["msg"]
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__


# Kinds not listed here are reported as 500.
ERROR_STATUS_CODES: dict[FetchErrorKind, int] = {
    FetchErrorKind.USER_NOT_FOUND: 404,
    FetchErrorKind.RATE_LIMITED: 429,
}


class PlainJSONResponse(JSONResponse):
    """JSONResponse rendered with the standard ``json.dumps`` separators."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False).encode("utf-8")


def fetch_error_response(error: FetchError) -> JSONResponse:
    """Map a classified fetch failure to its HTTP status and error envelope."""
    status_code = ERROR_STATUS_CODES.get(error.kind)
    if status_code is None:
        return internal_error_response(error.message)
    return PlainJSONResponse(status_code=status_code, content={"error": error.message})


def internal_error_response(detail: str) -> JSONResponse:
    """Build the 500 envelope for unclassified failures."""
    return PlainJSONResponse(
        status_code=500,
        content={"error": f"Internal Server Error: {detail}"},
    )


def username_required_response() -> JSONResponse:
    """Build the 400 envelope for a request without a username."""
    return PlainJSONResponse(
        status_code=400,
        content={"message": USERNAME_REQUIRED_MESSAGE},
    )
