"""Character generation API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from character_studio.models.character import (
    CharacterErrorResponse,
    CharacterRequest,
    CharacterResponse,
)
from character_studio.services.character import CharacterGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["character"])


def get_character_service(request: Request) -> CharacterGenerationService:
    """FastAPI dependency: retrieve CharacterGenerationService from app.state.

    Returns HTTP 503 if the service was not initialized at startup
    (e.g. GEMINI_API_KEY is missing).
    """
    svc: CharacterGenerationService | None = getattr(
        request.app.state, "character_service", None
    )
    if svc is None:
        raise HTTPException(
            status_code=503,
            detail="Image generation unavailable. Service not initialized.",
        )
    return svc


@router.post(
    "/generate-character",
    response_model=CharacterResponse,
    responses={500: {"model": CharacterErrorResponse}},
)
async def generate_character(
    request: Request,
    service: CharacterGenerationService = Depends(get_character_service),
):
    """Generate a character image from the JSON body.

    The body is parsed here rather than by FastAPI so that malformed input is
    reported with the same 500 error envelope as generation failures.
    """
    body: Optional[CharacterRequest] = None
    try:
        body = CharacterRequest.model_validate(await request.json())
        return await service.generate(body)
    except Exception as exc:
        logger.error(
            "Error in character generation: %s",
            exc,
            exc_info=True,
            extra={"service_component": "CharacterRouter", "error_type": type(exc).__name__},
        )
        error = CharacterErrorResponse.from_failure(exc, body)
        return JSONResponse(status_code=500, content=error.model_dump(by_alias=True))
