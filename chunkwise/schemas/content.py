"""
Content schemas for chunkwise.

Defines Pydantic models for the raw pedagogical content:
- ChunkContent: one lexical chunk with translation, distractors, contexts
- LessonContent: the chunks for one lesson request
- LessonRequest: inbound request for a lesson
"""

import re
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from chunkwise.config import DEFAULT_CHUNK_COUNT, DEFAULT_NATIVE_LANGUAGE
from chunkwise.utils.language import to_language_code

NonEmptyStr = Annotated[str, Field(min_length=1)]

# Distractors and wrong usage contexts always come in threes
OPTION_SET_SIZE = 3

AGE_BANDS = ("7-10", "11-14", "15-18")
DEFAULT_AGE_BAND = "11-14"

MIN_CHUNKS_PER_REQUEST = 2
MAX_CHUNKS_PER_LESSON = 4


def _alias(name: str, camel: str) -> AliasChoices:
    return AliasChoices(name, camel)


def _same_text(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


class ChunkContent(BaseModel):
    """
    One taught phrase (a lexical chunk), created once per request and never
    mutated. Distractors and contexts are in the learner's native language.

    Both snake_case and the camelCase keys used in AI output are accepted.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    target_phrase: NonEmptyStr = Field(validation_alias=_alias("target_phrase", "targetPhrase"))
    native_translation: NonEmptyStr = Field(
        validation_alias=_alias("native_translation", "nativeTranslation")
    )
    example_sentence: NonEmptyStr = Field(
        validation_alias=_alias("example_sentence", "exampleSentence")
    )
    usage_note: NonEmptyStr = Field(validation_alias=_alias("usage_note", "usageNote"))
    explanation: NonEmptyStr
    distractors: list[NonEmptyStr] = Field(
        ..., min_length=OPTION_SET_SIZE, max_length=OPTION_SET_SIZE
    )
    correct_usage_context: NonEmptyStr = Field(
        validation_alias=_alias("correct_usage_context", "correctUsageContext")
    )
    wrong_usage_contexts: list[NonEmptyStr] = Field(
        ...,
        min_length=OPTION_SET_SIZE,
        max_length=OPTION_SET_SIZE,
        validation_alias=_alias("wrong_usage_contexts", "wrongUsageContexts"),
    )

    @model_validator(mode="after")
    def canonical_answers_not_repeated(self):
        for distractor in self.distractors:
            if _same_text(distractor, self.native_translation):
                raise ValueError(
                    f"Distractor '{distractor}' equals the translation '{self.native_translation}'"
                )
        for context in self.wrong_usage_contexts:
            if _same_text(context, self.correct_usage_context):
                raise ValueError(
                    f"Wrong usage context '{context}' equals the correct context"
                )
        return self


class LessonContent(BaseModel):
    """
    Request-scoped aggregate handed to the assembler. Chunks are independent
    of each other; order is the teaching order.
    """
    model_config = ConfigDict(frozen=True)

    title: NonEmptyStr
    target_language_code: NonEmptyStr
    native_language_code: NonEmptyStr
    # Lower bound is 1: the generic fallback set and partial AI batches can be smaller
    chunks: list[ChunkContent] = Field(..., min_length=1, max_length=MAX_CHUNKS_PER_LESSON)


class LessonRequest(BaseModel):
    """Inbound lesson-open request."""
    topic: NonEmptyStr
    target_language_code: NonEmptyStr
    native_language_code: NonEmptyStr = DEFAULT_NATIVE_LANGUAGE
    desired_chunk_count: int = Field(
        default=DEFAULT_CHUNK_COUNT, ge=MIN_CHUNKS_PER_REQUEST, le=MAX_CHUNKS_PER_LESSON
    )
    age_band: Literal["7-10", "11-14", "15-18"] = DEFAULT_AGE_BAND
    interests: list[str] = []
    already_seen_phrases: list[str] = []

    @field_validator("topic")
    @classmethod
    def strip_language_suffix(cls, v):
        # "Greetings (German)" -> "Greetings"
        topic = re.sub(r"\s*\([^)]*\)\s*$", "", v).strip()
        if not topic:
            raise ValueError("Topic must not be empty")
        return topic

    @field_validator("target_language_code", "native_language_code")
    @classmethod
    def normalize_language(cls, v):
        return to_language_code(v)

    @field_validator("age_band", mode="before")
    @classmethod
    def coerce_age_band(cls, v):
        return v if v in AGE_BANDS else DEFAULT_AGE_BAND
