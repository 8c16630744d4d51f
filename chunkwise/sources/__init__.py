"""
chunkwise content sources.

- GeminiContentSource: primary, AI-generated chunks
- StaticContentSource: fallback, hand-authored chunks per language pair
"""

from .base import ContentSource
from .gemini import (
    GeminiClient,
    GeminiContentSource,
    extract_json_payload,
    fill_optional_fields,
    parse_chunk_response,
)
from .fallback import StaticContentSource, STARTER_CHUNKS, GENERIC_CHUNKS

__all__ = [
    'ContentSource',
    'GeminiClient',
    'GeminiContentSource',
    'extract_json_payload',
    'fill_optional_fields',
    'parse_chunk_response',
    'StaticContentSource',
    'STARTER_CHUNKS',
    'GENERIC_CHUNKS',
]
