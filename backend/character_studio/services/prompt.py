"""Character image prompt templating."""
from typing import Optional

from character_studio.models.character import (
    CharacterRequest,
    CharacterType,
    Emotion,
)

STYLE_PROMPTS: dict[CharacterType, str] = {
    CharacterType.anime: "anime style",
    CharacterType.realistic: "photorealistic",
}
DEFAULT_STYLE = "cartoon style"

MALE_BASE_PROMPT = (
    "{style}: A handsome medieval peasant man with well-defined features, "
    "wearing simple but well-fitted period clothing appropriate for "
    "{universe} setting. Full body portrait facing forward"
)
FEMALE_BASE_PROMPT = (
    "{style}: A beautiful medieval peasant woman with graceful features, "
    "wearing a simple yet charming linen dress with an apron and a corset "
    "appropriate for {universe} setting. Full body portrait facing forward"
)

MALE_HAPPY_PROMPT = (
    "He has a bright smile, confident posture, and a joyful expression. "
    "He looks directly at the viewer with warmth and enthusiasm"
)
FEMALE_HAPPY_PROMPT = (
    "She has rosy cheeks, tousled hair, and a playful smile. "
    "She looks directly at the viewer with warmth and enthusiasm"
)
SAD_PROMPT = "A sad, melancholic character with downcast eyes"
NEUTRAL_PROMPT = (
    "{pronoun} has a neutral expression, dressed in attire fitting the "
    "{universe} setting"
)


def _style_prompt(character_type: Optional[str]) -> str:
    try:
        return STYLE_PROMPTS[CharacterType(character_type)]
    except ValueError:
        return DEFAULT_STYLE


def _emotion_prompt(emotion: Optional[str], is_male: bool, universe_type: str) -> str:
    if emotion == Emotion.happy.value:
        return MALE_HAPPY_PROMPT if is_male else FEMALE_HAPPY_PROMPT
    if emotion == Emotion.sad.value:
        return SAD_PROMPT
    return NEUTRAL_PROMPT.format(
        pronoun="He" if is_male else "She", universe=universe_type
    )


def build_character_prompt(
    prompt: Optional[str] = None,
    emotion: Optional[str] = None,
    character_type: Optional[str] = None,
    gender: Optional[str] = None,
    universe_type: str = "fantasy",
) -> str:
    """Build the Gemini image prompt for a medieval peasant character.

    Unknown or missing values fall back to cartoon style, the female
    description and a neutral expression. A non-empty ``prompt`` is prepended
    to the templated description, separated by a comma.

    Args:
        prompt: Optional free text supplied by the user.
        emotion: "happy", "sad" or anything else (neutral).
        character_type: "anime", "realistic" or anything else (cartoon).
        gender: "male" in any casing selects the male description.
        universe_type: Setting name, inserted verbatim.

    Returns:
        Prompt string to send to the image generation API.
    """
    is_male = (gender or "").lower() == "male"
    style = _style_prompt(character_type)
    base = (MALE_BASE_PROMPT if is_male else FEMALE_BASE_PROMPT).format(
        style=style, universe=universe_type
    )
    description = f"{base}. {_emotion_prompt(emotion, is_male, universe_type)}"
    if prompt:
        return f"{prompt}, {description}"
    return description


def build_prompt_for_request(request: CharacterRequest) -> str:
    """Build the prompt for a parsed request."""
    return build_character_prompt(
        prompt=request.prompt,
        emotion=request.emotion,
        character_type=request.character_type,
        gender=request.gender,
        universe_type=request.universe_type,
    )
