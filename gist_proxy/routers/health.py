"""Health check endpoint."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness probe",
)
async def health_check() -> PlainTextResponse:
    """Returns 200 ``OK`` while the service is running. Never calls GitHub."""
    return PlainTextResponse("OK")
