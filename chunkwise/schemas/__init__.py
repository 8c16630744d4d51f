"""
chunkwise Schemas - Pydantic models for the lesson pipeline.

This module exports all schema classes for:
- Content: lexical chunks, lesson content, inbound requests
- Lesson: activities, lesson steps, lesson plans, pipeline results
"""

# Content schemas
from .content import (
    ChunkContent,
    LessonContent,
    LessonRequest,
    AGE_BANDS,
    OPTION_SET_SIZE,
)

# Lesson schemas
from .lesson import (
    ActivityType,
    ActivityBase,
    InfoActivity,
    MultipleChoiceActivity,
    FillBlankActivity,
    TranslateActivity,
    TrueFalseActivity,
    MatchingPair,
    MatchingActivity,
    WordArrangeActivity,
    Activity,
    LessonStep,
    LessonPlan,
    LessonMeta,
    LessonResult,
    BLANK_MARKER,
    MIN_REWARD,
    MAX_REWARD,
)

__all__ = [
    # Content
    'ChunkContent',
    'LessonContent',
    'LessonRequest',
    'AGE_BANDS',
    'OPTION_SET_SIZE',
    # Lesson
    'ActivityType',
    'ActivityBase',
    'InfoActivity',
    'MultipleChoiceActivity',
    'FillBlankActivity',
    'TranslateActivity',
    'TrueFalseActivity',
    'MatchingPair',
    'MatchingActivity',
    'WordArrangeActivity',
    'Activity',
    'LessonStep',
    'LessonPlan',
    'LessonMeta',
    'LessonResult',
    'BLANK_MARKER',
    'MIN_REWARD',
    'MAX_REWARD',
]
