"""
Gemini content source - AI-generated chunk content.

The model's reply is treated as untrusted text:
- markdown code fences are stripped
- either a bare JSON array or an object with a "chunks" array is accepted
- each chunk is validated on its own; bad chunks are dropped, not patched
- missing optional descriptive fields are synthesized from the phrase
- the call only fails when no chunk survives

No retries: a transport failure or timeout is reported as
ContentSourceError and the pipeline switches to the fallback source.
"""

import json
import logging
import os
import re
from typing import Any, Iterable

from google import genai
from google.genai import types as genai_types
from pydantic import ValidationError

from chunkwise.config import (
    CONTENT_SOURCE_TIMEOUT_SECONDS,
    GEMINI_MODEL,
    GEMINI_TEMPERATURE,
)
from chunkwise.errors import ContentSourceError
from chunkwise.schemas import ChunkContent, LessonRequest
from chunkwise.utils.language import to_language_name
from chunkwise.utils.prompt_loader import format_prompt, load_prompt

from .base import ContentSource

logger = logging.getLogger(__name__)

PROMPT_NAME = "generate_chunks"

# Placeholders build_prompts() fills in the user template
PROMPT_FIELDS = (
    "count",
    "topic",
    "target_language",
    "target_code",
    "native_language",
    "native_code",
    "age_band",
    "interests",
    "exclusions",
)

# (snake_case key, camelCase key) for fields that may be synthesized
OPTIONAL_FIELDS = (
    ("example_sentence", "exampleSentence"),
    ("usage_note", "usageNote"),
    ("explanation", "explanation"),
)


# -----------------------------------------------------------------------------
# Gemini API Client
# -----------------------------------------------------------------------------

class GeminiClient:
    """Thin wrapper around the Gemini API. One request per generate() call."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = GEMINI_MODEL,
        temperature: float = GEMINI_TEMPERATURE,
        timeout_seconds: float = CONTENT_SOURCE_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not set. Check your .env file.")

        # HttpOptions.timeout is in milliseconds
        self.client = genai.Client(
            api_key=self.api_key,
            http_options=genai_types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )
        self.temperature = temperature
        self.model_name = model

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Generate text using Gemini API."""
        full_prompt = f"{system_prompt}\n\n---\n\n{user_prompt}"

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=full_prompt,
            config=genai_types.GenerateContentConfig(
                temperature=self.temperature,
                response_mime_type="application/json",
            ),
        )

        if not response.text:
            if response.candidates and len(response.candidates) > 0:
                candidate = response.candidates[0]
                if candidate.content and candidate.content.parts and candidate.content.parts[0].text:
                    return candidate.content.parts[0].text
            raise ValueError("Empty response from API")

        return response.text


# -----------------------------------------------------------------------------
# Response parsing
# -----------------------------------------------------------------------------

def extract_json_payload(text: str) -> Any:
    """Extract a JSON value from an LLM response, handling markdown code blocks."""
    code_block_pattern = r'```(?:json)?\s*([\s\S]*?)```'
    for match in re.findall(code_block_pattern, text):
        try:
            return json.loads(match.strip())
        except (ValueError, RecursionError):
            continue

    text = text.strip()
    if text[:1] in ("{", "["):
        opening = text[0]
        closing = "}" if opening == "{" else "]"
        depth = 0
        end_pos = 0
        for i, char in enumerate(text):
            if char == opening:
                depth += 1
            elif char == closing:
                depth -= 1
                if depth == 0:
                    end_pos = i + 1
                    break

        if end_pos > 0:
            try:
                return json.loads(text[:end_pos])
            except (ValueError, RecursionError):
                pass

    # ValueError covers JSONDecodeError and integers over the digit limit
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ContentSourceError(f"Could not extract JSON from response: {e}") from e


def _unwrap_chunks(payload: Any) -> list:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("chunks"), list):
        return payload["chunks"]
    raise ContentSourceError(
        f"Expected a JSON array or an object with a 'chunks' array, got {type(payload).__name__}"
    )


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def fill_optional_fields(raw: dict) -> dict:
    """
    Synthesize missing descriptive fields from the target phrase.

    Only example_sentence, usage_note and explanation are filled in; the
    answer-bearing fields are never invented.
    """
    phrase = raw.get("target_phrase") or raw.get("targetPhrase")
    if not _non_empty(phrase):
        return raw

    phrase = phrase.strip()
    synthesized = {
        "example_sentence": phrase,
        "usage_note": f'Use "{phrase}" in everyday conversation.',
        "explanation": f'"{phrase}" is a common phrase worth learning as a whole.',
    }

    filled = dict(raw)
    for snake, camel in OPTIONAL_FIELDS:
        if not _non_empty(raw.get(snake)) and not _non_empty(raw.get(camel)):
            filled[snake] = synthesized[snake]
    return filled


def parse_chunk_response(
    text: str,
    expected_count: int,
    already_seen: Iterable[str] = (),
) -> list[ChunkContent]:
    """
    Parse and validate an AI chunk response.

    Args:
        text: Raw model output
        expected_count: Number of chunks requested; extras are dropped
        already_seen: Phrases the learner already knows (skipped)

    Returns:
        Surviving chunks, in response order

    Raises:
        ContentSourceError: If the response can't be parsed or no chunk survives
    """
    raw_chunks = _unwrap_chunks(extract_json_payload(text))

    seen = {phrase.strip().casefold() for phrase in already_seen}
    chunks = []

    for i, raw in enumerate(raw_chunks, 1):
        if not isinstance(raw, dict):
            logger.warning(f"Discarding chunk {i}: not an object")
            continue

        try:
            chunk = ChunkContent.model_validate(fill_optional_fields(raw))
        except ValidationError as e:
            logger.warning(f"Discarding chunk {i}: {e.error_count()} validation error(s): {e.errors()[0]['msg']}")
            continue

        key = chunk.target_phrase.casefold()
        if key in seen:
            logger.warning(f"Discarding chunk {i}: '{chunk.target_phrase}' already seen")
            continue

        seen.add(key)
        chunks.append(chunk)

    if not chunks:
        raise ContentSourceError(f"No valid chunks in AI response ({len(raw_chunks)} received)")

    if len(chunks) > expected_count:
        logger.info(f"Keeping {expected_count} of {len(chunks)} valid chunks")

    return chunks[:expected_count]


# -----------------------------------------------------------------------------
# Content source
# -----------------------------------------------------------------------------

class GeminiContentSource(ContentSource):
    """
    Primary content source backed by Gemini.

    The client is created on first use, so a missing API key surfaces as a
    ContentSourceError (and a fallback) rather than an import-time crash.
    """

    name = "gemini"

    def __init__(
        self,
        client: GeminiClient | None = None,
        prompt_config: dict | None = None,
        model: str = GEMINI_MODEL,
    ):
        self._client = client
        self.model = model
        self.prompt_config = prompt_config or load_prompt(PROMPT_NAME, fields=PROMPT_FIELDS)

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient(model=self.model)
        return self._client

    def build_prompts(self, request: LessonRequest) -> tuple[str, str]:
        """Return (system_prompt, user_prompt) for a request."""
        exclusions = "\n".join(f"- {p}" for p in request.already_seen_phrases) or "(none)"
        user_prompt = format_prompt(
            self.prompt_config["user_template"],
            count=request.desired_chunk_count,
            topic=request.topic,
            target_language=to_language_name(request.target_language_code),
            target_code=request.target_language_code,
            native_language=to_language_name(request.native_language_code),
            native_code=request.native_language_code,
            age_band=request.age_band,
            interests=", ".join(request.interests) or "none given",
            exclusions=exclusions,
        )
        return self.prompt_config["system"], user_prompt

    def fetch_chunks(self, request: LessonRequest) -> list[ChunkContent]:
        system_prompt, user_prompt = self.build_prompts(request)

        try:
            logger.info(
                f"Requesting {request.desired_chunk_count} chunks for '{request.topic}' "
                f"({request.target_language_code}/{request.native_language_code})"
            )
            response_text = self._get_client().generate(system_prompt, user_prompt)
        except Exception as e:
            raise ContentSourceError(f"Gemini request failed: {e}") from e

        return parse_chunk_response(
            response_text,
            expected_count=request.desired_chunk_count,
            already_seen=request.already_seen_phrases,
        )
