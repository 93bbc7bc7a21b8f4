"""Best-effort background removal via the remove.bg API."""
import logging
from typing import Optional, Protocol

import httpx

from character_studio.models.character import (
    BackgroundRemovalResult,
    BackgroundRemovalStatus,
)

logger = logging.getLogger(__name__)

REMOVE_BG_URL = "https://api.remove.bg/v1.0/removebg"


class BackgroundRemovalClient(Protocol):
    """Removes the background of a base64 image. Must not raise."""

    async def remove_background(self, image_base64: str) -> BackgroundRemovalResult: ...


class RemoveBgClient:
    """remove.bg client posting base64 image data as a form."""

    def __init__(
        self,
        api_key: str,
        url: str = REMOVE_BG_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def remove_background(self, image_base64: str) -> BackgroundRemovalResult:
        """Send the image to remove.bg and return the outcome.

        On a non-2xx status, a transport error or an unexpected body the
        original image is returned in a ``failed`` result.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.url,
                    headers={"X-Api-Key": self.api_key, "Accept": "application/json"},
                    data={
                        "image_file_b64": image_base64,
                        "size": "auto",
                        "format": "png",
                    },
                )
            if not response.is_success:
                logger.warning(
                    "Background removal failed with HTTP %d, using original image",
                    response.status_code,
                    extra={"service_component": "RemoveBgClient", "status_code": response.status_code},
                )
                return BackgroundRemovalResult.failed(
                    image_base64, f"remove.bg returned HTTP {response.status_code}"
                )
            result_b64 = response.json()["data"]["result_b64"]
            if not isinstance(result_b64, str) or not result_b64:
                raise ValueError("remove.bg response has an empty result_b64")
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.error(
                "Error in background removal: %s",
                exc,
                exc_info=True,
                extra={"service_component": "RemoveBgClient", "error_type": type(exc).__name__},
            )
            return BackgroundRemovalResult.failed(image_base64, f"{type(exc).__name__}: {exc}")

        logger.info("Background removed", extra={"service_component": "RemoveBgClient"})
        return BackgroundRemovalResult(
            status=BackgroundRemovalStatus.applied, image_base64=result_b64
        )
