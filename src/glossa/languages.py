"""Response and translation language tables."""

from typing import Literal

ResponseLanguage = Literal["en", "es", "fr", "zh", "ja"]
TranslateLanguage = Literal["English", "Spanish", "French", "Chinese", "Japanese"]

DEFAULT_RESPONSE_LANGUAGE: ResponseLanguage = "en"

# Full names used in prompt directives
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "zh": "Simplified Chinese",
    "ja": "Japanese",
}

TRANSLATE_TO_RESPONSE: dict[str, str] = {
    "English": "en",
    "Spanish": "es",
    "French": "fr",
    "Chinese": "zh",
    "Japanese": "ja",
}


def is_language_conflict(response_lang: str, translate_lang: str) -> bool:
    """True when translating would target the language answers are already in."""
    return TRANSLATE_TO_RESPONSE.get(translate_lang) == response_lang


def default_translate_language(response_lang: str) -> str:
    if response_lang == "en":
        return "Chinese"
    return "English"
