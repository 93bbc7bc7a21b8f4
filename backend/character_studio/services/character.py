"""CharacterGenerationService: orchestrates one character image request."""
from typing import TYPE_CHECKING, Optional

from character_studio.core.logging import setup_logging
from character_studio.models.character import (
    BackgroundRemovalResult,
    CharacterRequest,
    CharacterResponse,
)
from character_studio.services.prompt import build_prompt_for_request

if TYPE_CHECKING:
    from character_studio.services.background import BackgroundRemovalClient
    from character_studio.services.image import ImageGenerationClient

logger = setup_logging("character")

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


class CharacterGenerationService:
    """Orchestrates a single character generation.

    Responsibilities:
    1. Build the image prompt from the request
    2. Delegate image generation to the ImageGenerationClient
    3. Run best-effort background removal when enabled and configured
    4. Return CharacterResponse with the image as a PNG data URI

    Image generation errors propagate to the caller. Background removal never
    fails the request; its outcome is a BackgroundRemovalResult.
    """

    def __init__(
        self,
        image_client: "ImageGenerationClient",
        background_client: Optional["BackgroundRemovalClient"] = None,
        remove_background: bool = True,
    ) -> None:
        self.image_client = image_client
        self.background_client = background_client
        self.remove_background_enabled = remove_background

    @property
    def attempts_background_removal(self) -> bool:
        """True when removal is switched on and a client is configured."""
        return self.remove_background_enabled and self.background_client is not None

    async def generate(self, request: CharacterRequest) -> CharacterResponse:
        """Generate a character image for the request.

        Args:
            request: Parsed character request.

        Returns:
            CharacterResponse. ``background_removed`` reports whether removal
            was attempted, not whether it succeeded.

        Raises:
            ImageGenerationError: When the provider returns no image.
        """
        # --- 1. Prompt ---
        prompt = build_prompt_for_request(request)
        logger.info(
            "generate: characterType=%s gender=%s emotion=%s",
            request.character_type,
            request.gender,
            request.emotion,
        )
        logger.debug("prompt: %s", prompt)

        # --- 2. Image generation (fatal on failure) ---
        image_base64 = await self.image_client.generate(prompt)

        # --- 3. Background removal (best-effort) ---
        removal = await self.remove_background(image_base64)
        if removal.reason:
            logger.info("Background removal %s: %s", removal.status.value, removal.reason)

        # --- 4. Build response ---
        return CharacterResponse(
            image=f"{PNG_DATA_URI_PREFIX}{removal.image_base64}",
            emotion=request.emotion,
            character_type=request.character_type,
            gender=request.gender,
            background_removed=self.attempts_background_removal,
        )

    async def remove_background(self, image_base64: str) -> BackgroundRemovalResult:
        """Run background removal if enabled, keeping the original on any failure."""
        if not self.remove_background_enabled:
            return BackgroundRemovalResult.skipped(image_base64, "background removal disabled")
        if self.background_client is None:
            return BackgroundRemovalResult.skipped(
                image_base64, "background removal API key not configured"
            )
        try:
            return await self.background_client.remove_background(image_base64)
        except Exception as exc:
            logger.error(
                "Background removal client raised: %s",
                exc,
                exc_info=True,
                extra={
                    "service_component": "CharacterGenerationService",
                    "error_type": type(exc).__name__,
                },
            )
            return BackgroundRemovalResult.failed(image_base64, f"{type(exc).__name__}: {exc}")
