"""Character generation request/response models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_CHARACTER_TYPE = "anime"
DEFAULT_GENDER = "Female"
DEFAULT_UNIVERSE_TYPE = "fantasy"
DEFAULT_EMOTION_LABEL = "default"

IMAGE_SOURCE = "gemini"
GENERATION_ERROR = "Failed to generate character"


class CharacterType(str, Enum):
    """Character types with a dedicated style phrase. Anything else is cartoon."""

    anime = "anime"
    realistic = "realistic"


class Emotion(str, Enum):
    """Emotions with a dedicated prompt clause. Anything else is neutral."""

    happy = "happy"
    sad = "sad"


class CharacterRequest(BaseModel):
    """Request body for POST /api/generate-character.

    Field names are camelCase on the wire. ``None`` for the defaulted fields is
    treated as if the field had been omitted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: Optional[str] = None
    emotion: Optional[str] = None
    character_type: str = Field(DEFAULT_CHARACTER_TYPE, alias="characterType")
    gender: str = DEFAULT_GENDER
    universe_type: str = Field(DEFAULT_UNIVERSE_TYPE, alias="universeType")

    @field_validator("character_type", "gender", "universe_type", mode="before")
    @classmethod
    def none_means_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CharacterResponse(BaseModel):
    """Success envelope returned to the frontend."""

    model_config = ConfigDict(populate_by_name=True)

    image: str
    emotion: Optional[str] = None
    character_type: str = Field(..., alias="characterType")
    gender: str
    source: str = IMAGE_SOURCE
    background_removed: bool = Field(..., alias="backgroundRemoved")


class CharacterErrorResponse(BaseModel):
    """Error envelope returned with HTTP 500."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = GENERATION_ERROR
    message: str
    emotion: str = DEFAULT_EMOTION_LABEL
    character_type: str = Field(DEFAULT_CHARACTER_TYPE, alias="characterType")
    gender: str = DEFAULT_GENDER

    @classmethod
    def from_failure(
        cls, exc: BaseException, request: Optional[CharacterRequest] = None
    ) -> "CharacterErrorResponse":
        """Build the envelope, echoing whatever request fields were parsed."""
        if request is None:
            return cls(message=str(exc))
        return cls(
            message=str(exc),
            emotion=request.emotion or DEFAULT_EMOTION_LABEL,
            character_type=request.character_type or DEFAULT_CHARACTER_TYPE,
            gender=request.gender or DEFAULT_GENDER,
        )


class BackgroundRemovalStatus(str, Enum):
    """Outcome of the best-effort background removal step."""

    applied = "applied"
    skipped = "skipped"
    failed = "failed"


class BackgroundRemovalResult(BaseModel):
    """Result of background removal: the image to continue with and why."""

    status: BackgroundRemovalStatus
    image_base64: str
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.status is BackgroundRemovalStatus.applied

    @classmethod
    def skipped(cls, image_base64: str, reason: str) -> "BackgroundRemovalResult":
        return cls(
            status=BackgroundRemovalStatus.skipped,
            image_base64=image_base64,
            reason=reason,
        )

    @classmethod
    def failed(cls, image_base64: str, reason: str) -> "BackgroundRemovalResult":
        return cls(
            status=BackgroundRemovalStatus.failed,
            image_base64=image_base64,
            reason=reason,
        )
