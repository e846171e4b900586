"""Pydantic models for gist records and JSON envelopes."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GistFile(BaseModel):
    """Metadata for a single file within a gist."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    filename: str | None = None


class Gist(BaseModel):
    """Represents a GitHub Gist."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str | None = None
    description: str | None = None
    url: str | None = None
    files: dict[str, GistFile] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error envelope returned for failed gist lookups."""

    error: str


class MessageResponse(BaseModel):
    """Guidance envelope returned when no username is given."""

    message: str


GistList = TypeAdapter(list[Gist])


def parse_gists(payload: bytes | str) -> list[Gist]:
    """
    Deserialize an upstream JSON array into gists.

    Fields missing from an element are left as None.

    Raises:
        pydantic.ValidationError: If the payload is not valid JSON, is not an
            array, or holds an element that is not a JSON object.
    """
    return GistList.validate_json(payload)


def dump_gists(gists: list[Gist]) -> bytes:
    """Serialize gists to a JSON array, omitting absent fields."""
    return GistList.dump_json(gists, exclude_none=True)
