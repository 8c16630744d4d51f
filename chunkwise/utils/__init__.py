"""chunkwise utilities."""

from .language import (
    to_language_code,
    to_language_name,
    is_valid_language_code,
    get_supported_languages,
)
from .prompt_loader import load_prompt, format_prompt, template_fields

__all__ = [
    "to_language_code",
    "to_language_name",
    "is_valid_language_code",
    "get_supported_languages",
    "load_prompt",
    "format_prompt",
    "template_fields",
]
