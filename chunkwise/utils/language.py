"""
Language code utilities.

Single place for ISO 639-1 code <-> English name conversion. Profile and
request fields may hold either form ("de" or "German"); everything
downstream works with codes.
"""

import logging

logger = logging.getLogger(__name__)

NAME_TO_CODE = {
    "english": "en",
    "french": "fr",
    "german": "de",
    "spanish": "es",
    "italian": "it",
    "portuguese": "pt",
    "japanese": "ja",
    "chinese": "zh",
    "korean": "ko",
    "russian": "ru",
    "arabic": "ar",
    "hindi": "hi",
    "dutch": "nl",
    "swedish": "sv",
    "polish": "pl",
    "ukrainian": "uk",
    "romanian": "ro",
}

# Derived from NAME_TO_CODE
CODE_TO_NAME = {code: name.capitalize() for name, code in NAME_TO_CODE.items()}

FALLBACK_LANGUAGE_CODE = "en"


def to_language_code(language: str) -> str:
    """
    Convert a language name or code to an ISO 639-1 code.

    Examples:
        to_language_code("German")    -> "de"
        to_language_code("de")        -> "de"
        to_language_code(" FRENCH ")  -> "fr"

    Unknown two-letter strings are passed through; anything else falls
    back to "en".
    """
    normalized = language.strip().lower()

    if normalized in CODE_TO_NAME:
        return normalized

    code = NAME_TO_CODE.get(normalized)
    if code:
        return code

    if len(normalized) == 2 and normalized.isalpha():
        logger.warning(f"Unknown 2-letter language code '{normalized}', using as-is")
        return normalized

    logger.error(f"Unrecognised language '{language}', defaulting to '{FALLBACK_LANGUAGE_CODE}'")
    return FALLBACK_LANGUAGE_CODE


def to_language_name(code: str) -> str:
    """Convert a language code to a display name ("de" -> "German")."""
    normalized = code.strip().lower()

    if normalized in NAME_TO_CODE:
        return normalized.capitalize()

    return CODE_TO_NAME.get(normalized, code)


def is_valid_language_code(code: str) -> bool:
    return len(code) == 2 and code.lower() in CODE_TO_NAME


def get_supported_languages() -> list[dict[str, str]]:
    """All supported languages as {"code", "name"} dicts, sorted by name."""
    return sorted(
        ({"code": code, "name": name} for code, name in CODE_TO_NAME.items()),
        key=lambda item: item["name"],
    )
