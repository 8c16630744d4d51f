"""
Lesson schemas for chunkwise.

Defines Pydantic models for assembled lessons:
- Activities (a discriminated union of seven types)
- Lesson steps and the lesson plan
- Pipeline result with generation metadata
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

NonEmptyStr = Annotated[str, Field(min_length=1)]

BLANK_MARKER = "___"

MIN_REWARD = 0
MAX_REWARD = 4


class ActivityType(str, Enum):
    INFO = "info"
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_BLANK = "fill_blank"
    TRANSLATE = "translate"
    TRUE_FALSE = "true_false"
    MATCHING = "matching"
    WORD_ARRANGE = "word_arrange"


# -----------------------------------------------------------------------------
# Activity types
# -----------------------------------------------------------------------------

class ActivityBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    reward: int = Field(..., ge=MIN_REWARD, le=MAX_REWARD, strict=True)
    hint: Optional[str] = None


class InfoActivity(ActivityBase):
    """Teaching card. Nothing to answer."""
    type: Literal["info"] = "info"
    title: Optional[str] = None
    content: Optional[str] = None
    explanation: Optional[str] = None
    example: Optional[str] = None

    @model_validator(mode="after")
    def has_title_or_content(self):
        if not self.title and not self.content:
            raise ValueError("Info activity needs a title or content")
        return self


class MultipleChoiceActivity(ActivityBase):
    """
    Options are shown in order; correct_index points into options.
    Duplicate options are not rejected here, the lesson validator reports them.
    """
    type: Literal["multiple_choice"] = "multiple_choice"
    question: NonEmptyStr
    options: list[str] = Field(..., min_length=2)
    correct_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def index_in_range(self):
        if self.correct_index >= len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for {len(self.options)} options"
            )
        return self


class FillBlankActivity(ActivityBase):
    type: Literal["fill_blank"] = "fill_blank"
    sentence: NonEmptyStr
    correct_answer: NonEmptyStr
    accepted_answers: list[str] = []

    @model_validator(mode="after")
    def sentence_has_blank(self):
        if BLANK_MARKER not in self.sentence:
            raise ValueError(f"Fill-blank sentence must contain {BLANK_MARKER}")
        return self


class TranslateActivity(ActivityBase):
    type: Literal["translate"] = "translate"
    source_phrase: NonEmptyStr
    instruction: Optional[str] = None
    accepted_answers: list[NonEmptyStr] = Field(..., min_length=1)


class TrueFalseActivity(ActivityBase):
    type: Literal["true_false"] = "true_false"
    statement: Optional[str] = None
    question: Optional[str] = None
    is_true: bool = Field(..., strict=True)

    @model_validator(mode="after")
    def has_statement_or_question(self):
        if not self.statement and not self.question:
            raise ValueError("True/false activity needs a statement or question")
        return self


class MatchingPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: NonEmptyStr
    right: NonEmptyStr


class MatchingActivity(ActivityBase):
    type: Literal["matching"] = "matching"
    pairs: list[MatchingPair] = Field(..., min_length=2)


class WordArrangeActivity(ActivityBase):
    type: Literal["word_arrange"] = "word_arrange"
    target_sentence: NonEmptyStr
    scrambled_words: list[str] = Field(..., min_length=2)


Activity = Annotated[
    Union[
        InfoActivity,
        MultipleChoiceActivity,
        FillBlankActivity,
        TranslateActivity,
        TrueFalseActivity,
        MatchingActivity,
        WordArrangeActivity,
    ],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Lesson plan
# -----------------------------------------------------------------------------

class LessonStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    tutor_text: str
    help_text: str
    activity: Activity


class LessonPlan(BaseModel):
    """Render-ready lesson. Immutable once assembled."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    target_language_code: str
    native_language_code: str
    steps: list[LessonStep]
    total_reward: int  # declared sum of step rewards


class LessonMeta(BaseModel):
    used_fallback: bool
    generation_latency_ms: int = Field(..., ge=0)
    warnings: list[str] = []
    source_name: str


class LessonResult(BaseModel):
    """What the pipeline hands to the rendering layer."""
    plan: LessonPlan
    meta: LessonMeta
