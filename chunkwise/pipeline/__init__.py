"""
chunkwise lesson pipeline.

- assembler: chunk content -> lesson plan (pure, deterministic)
- validator: lesson plan -> ValidationResult (pure, never raises)
- orchestrator: primary/fallback state machine producing LessonResult
"""

from .assembler import (
    assemble_lesson_plan,
    assemble_chunk_steps,
    placement_index,
    place_correct_answer,
    answer_variants,
    strip_punctuation,
    build_lesson_id,
    STEPS_PER_CHUNK,
    REWARD_PER_CHUNK,
)
from .validator import (
    validate_lesson_plan,
    ValidationIssue,
    ValidationResult,
)
from .orchestrator import LessonPipeline, PipelineState

__all__ = [
    # Assembler
    'assemble_lesson_plan',
    'assemble_chunk_steps',
    'placement_index',
    'place_correct_answer',
    'answer_variants',
    'strip_punctuation',
    'build_lesson_id',
    'STEPS_PER_CHUNK',
    'REWARD_PER_CHUNK',
    # Validator
    'validate_lesson_plan',
    'ValidationIssue',
    'ValidationResult',
    # Orchestrator
    'LessonPipeline',
    'PipelineState',
]
