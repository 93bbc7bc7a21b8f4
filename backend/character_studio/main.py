"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from character_studio.core.config import Settings, get_server_settings, get_settings
from character_studio.core.logging import setup_logging

if TYPE_CHECKING:
    from character_studio.services.character import CharacterGenerationService

# Setup logging
logger = setup_logging("main")


def build_character_service(settings: Settings) -> "CharacterGenerationService":
    """Build CharacterGenerationService and its provider clients from settings."""
    from character_studio.services.background import RemoveBgClient
    from character_studio.services.character import CharacterGenerationService
    from character_studio.services.image import GeminiImageClient

    image_client = GeminiImageClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_image_model,
    )
    background_client = None
    if settings.background_removal_enabled:
        background_client = RemoveBgClient(
            api_key=settings.remove_bg_api_key,
            url=settings.remove_bg_url,
            timeout=settings.remove_bg_timeout,
        )
    else:
        logger.info("Background removal disabled (REMOVE_BG_API_KEY not set or switched off)")

    return CharacterGenerationService(
        image_client=image_client,
        background_client=background_client,
        remove_background=settings.remove_background,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize services at startup."""
    if getattr(app.state, "character_service", None) is None:
        try:
            app.state.character_service = build_character_service(get_settings())
            logger.info("Services initialized successfully")
        except Exception as exc:
            logger.error(
                "Service initialization failed, running in degraded mode",
                exc_info=True,
                extra={"service_component": "main", "error_type": type(exc).__name__},
            )
            # Continue without services; endpoints return 503 until fixed

    yield


# Create FastAPI app
app = FastAPI(
    title="Character Studio API",
    description="Character portrait generation with Gemini and remove.bg",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration; provider keys are only needed in lifespan
server_settings = get_server_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[f"http://localhost:{server_settings.frontend_port}"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
from character_studio.api.character import router as character_router  # noqa: E402

app.include_router(character_router)


@app.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint.

    Reports initialization status of the image generation service and
    whether background removal is active. Always returns HTTP 200.
    """
    svc = getattr(request.app.state, "character_service", None)
    if svc is None:
        image_status = "unavailable"
        background_status = "unavailable"
    else:
        image_status = "ok"
        background_status = "ok" if svc.attempts_background_removal else "disabled"

    logger.info("Health check requested")
    return {
        "status": "ok",
        "version": app.version,
        "services": {
            "image_generation": image_status,
            "background_removal": background_status,
        },
    }


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "character_studio.main:app",
        host=server_settings.backend_host,
        port=server_settings.backend_port,
    )


if __name__ == "__main__":
    run()
