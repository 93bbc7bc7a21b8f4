"""Image generation via the Gemini image API."""
import base64
import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gemini-2.0-flash-exp-image-generation"
NO_IMAGE_MESSAGE = "No image generated"


class ImageGenerationError(RuntimeError):
    """Raised when the image provider returns no inline image data."""


class ImageGenerationClient(Protocol):
    """Turns a text prompt into a base64-encoded image."""

    async def generate(self, prompt: str) -> str: ...


def extract_inline_image(response: Any) -> str:
    """Return the first inline image of a generate_content response as base64.

    Args:
        response: A ``GenerateContentResponse`` (or any object shaped like one).

    Returns:
        Base64 string of the image bytes.

    Raises:
        ImageGenerationError: When no candidate part carries inline data.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates or candidates[0].content is None:
        raise ImageGenerationError(NO_IMAGE_MESSAGE)

    for part in candidates[0].content.parts or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            data = inline_data.data
            if isinstance(data, str):
                return data
            return base64.b64encode(bytes(data)).decode("ascii")

    raise ImageGenerationError(NO_IMAGE_MESSAGE)


class GeminiImageClient:
    """Calls Gemini with text+image response modalities."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_IMAGE_MODEL,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        if client is None:
            from google import genai  # type: ignore[import-untyped]

            client = genai.Client(api_key=api_key)
        self._client = client

    async def generate(self, prompt: str) -> str:
        """Generate one image for ``prompt``.

        A single call is made; provider and network errors propagate.

        Returns:
            Base64-encoded image data.

        Raises:
            ImageGenerationError: When the response contains no image.
        """
        from google.genai import types  # type: ignore[import-untyped]

        logger.debug("Requesting image from %s", self.model, extra={"model": self.model})
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_modalities=["TEXT", "IMAGE"],
            ),
        )
        image_base64 = extract_inline_image(response)
        logger.info(
            "Image generated (%d base64 chars)",
            len(image_base64),
            extra={"model": self.model},
        )
        return image_base64
