"""
Lesson assembler - deterministic chunk content -> lesson plan transform.

Every chunk is taught with the same five-step "teach-first" progression:

    INTRODUCE  info             0  phrase + translation, nothing to answer
    RECOGNIZE  multiple choice  1  what does the phrase mean?
    PRACTICE   fill blank       2  complete the phrase
    RECALL     translate        3  produce the phrase from the translation
    APPLY      multiple choice  2  pick the situation it fits

No I/O, no randomness, no clock: identical content always yields an
identical plan. Option text is taken as given; duplicate options are the
validator's concern.
"""

import hashlib
import unicodedata

from chunkwise.schemas import (
    BLANK_MARKER,
    ChunkContent,
    FillBlankActivity,
    InfoActivity,
    LessonContent,
    LessonPlan,
    LessonStep,
    MultipleChoiceActivity,
    TranslateActivity,
)
from chunkwise.utils.language import to_language_name

STEPS_PER_CHUNK = 5

INTRODUCE_REWARD = 0
RECOGNIZE_REWARD = 1
PRACTICE_REWARD = 2
RECALL_REWARD = 3
APPLY_REWARD = 2

REWARD_PER_CHUNK = (
    INTRODUCE_REWARD + RECOGNIZE_REWARD + PRACTICE_REWARD + RECALL_REWARD + APPLY_REWARD
)

OPTION_COUNT = 4


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def placement_index(correct_text: str) -> int:
    """Position of the correct answer among the options: len(text) mod 4."""
    return len(correct_text) % OPTION_COUNT


def place_correct_answer(correct: str, wrong: list[str]) -> tuple[list[str], int]:
    """
    Insert the correct answer among the wrong ones at its placement index.

    Returns:
        Tuple of (options, correct_index)
    """
    position = placement_index(correct)
    options = list(wrong)
    options.insert(position, correct)
    return options, position


def _is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


def strip_punctuation(text: str) -> str:
    """Remove Unicode punctuation and collapse whitespace."""
    kept = "".join(ch for ch in text if not _is_punctuation(ch))
    return " ".join(kept.split())


def split_edge_punctuation(token: str) -> tuple[str, str, str]:
    """
    Split a token into (leading punctuation, core, trailing punctuation).

        "¿Qué"    -> ("¿", "Qué", "")
        "geht's?" -> ("", "geht's", "?")
        "?"       -> ("?", "", "")
    """
    start = 0
    while start < len(token) and _is_punctuation(token[start]):
        start += 1
    end = len(token)
    while end > start and _is_punctuation(token[end - 1]):
        end -= 1
    return token[:start], token[start:end], token[end:]


def answer_variants(text: str) -> list[str]:
    """Exact, lowercase and punctuation-stripped forms, deduplicated in order."""
    lowered = text.lower()
    variants = []
    for candidate in (text, lowered, strip_punctuation(lowered)):
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


def prefix_hint(phrase: str) -> str:
    length = 1 if len(phrase) <= 3 else 2
    return f'Starts with "{phrase[:length]}..."'


def build_lesson_id(content: LessonContent) -> str:
    """Content-derived lesson ID, stable across calls."""
    digest = hashlib.sha256(content.model_dump_json().encode("utf-8")).hexdigest()
    return f"lesson_{digest[:16]}"


# -----------------------------------------------------------------------------
# Step builders
# -----------------------------------------------------------------------------

def _introduce_step(chunk: ChunkContent, language_name: str) -> LessonStep:
    return LessonStep(
        tutor_text=f'New phrase! Here is how to say "{chunk.native_translation}" in {language_name}.',
        help_text=chunk.usage_note,
        activity=InfoActivity(
            reward=INTRODUCE_REWARD,
            title=chunk.target_phrase,
            content=f"{chunk.target_phrase} = {chunk.native_translation}",
            explanation=chunk.explanation,
            example=chunk.example_sentence,
        ),
    )


def _recognize_step(chunk: ChunkContent) -> LessonStep:
    options, correct_index = place_correct_answer(chunk.native_translation, chunk.distractors)
    return LessonStep(
        tutor_text=f'Do you remember "{chunk.target_phrase}"?',
        help_text=f"Look back at the example: {chunk.example_sentence}",
        activity=MultipleChoiceActivity(
            reward=RECOGNIZE_REWARD,
            question=f'What does "{chunk.target_phrase}" mean?',
            options=options,
            correct_index=correct_index,
        ),
    )


def _practice_step(chunk: ChunkContent) -> LessonStep:
    tokens = chunk.target_phrase.split()
    # Tokens that are not punctuation only; "?" in "Ça va ?" is skipped
    word_positions = [i for i, token in enumerate(tokens) if split_edge_punctuation(token)[1]]

    if len(word_positions) >= 2:
        # Blank the last word, keeping its punctuation in the sentence
        position = word_positions[-1]
        leading, answer, trailing = split_edge_punctuation(tokens[position])
        blanked = list(tokens)
        blanked[position] = f"{leading}{BLANK_MARKER}{trailing}"
        sentence = " ".join(blanked)
        tutor_text = "Fill in the missing word."
    else:
        # Single word: blank the whole phrase against its translation
        answer = chunk.target_phrase
        sentence = f"{BLANK_MARKER} = {chunk.native_translation}"
        tutor_text = "Type the phrase you just learned."

    return LessonStep(
        tutor_text=tutor_text,
        help_text=f'The whole phrase means "{chunk.native_translation}".',
        activity=FillBlankActivity(
            reward=PRACTICE_REWARD,
            sentence=sentence,
            correct_answer=answer,
            accepted_answers=answer_variants(answer),
            hint=chunk.native_translation,
        ),
    )


def _recall_step(chunk: ChunkContent, language_name: str) -> LessonStep:
    hint = prefix_hint(chunk.target_phrase)
    return LessonStep(
        tutor_text=f"Now say it yourself in {language_name}!",
        help_text=hint,
        activity=TranslateActivity(
            reward=RECALL_REWARD,
            source_phrase=chunk.native_translation,
            instruction=f"Translate into {language_name}",
            accepted_answers=answer_variants(chunk.target_phrase),
            hint=hint,
        ),
    )


def _apply_step(chunk: ChunkContent) -> LessonStep:
    options, correct_index = place_correct_answer(
        chunk.correct_usage_context, chunk.wrong_usage_contexts
    )
    return LessonStep(
        tutor_text="Time to use it in real life.",
        help_text=chunk.usage_note,
        activity=MultipleChoiceActivity(
            reward=APPLY_REWARD,
            question=f'When would you say "{chunk.target_phrase}"?',
            options=options,
            correct_index=correct_index,
        ),
    )


def assemble_chunk_steps(chunk: ChunkContent, language_name: str) -> list[LessonStep]:
    """The five teach-first steps for one chunk, in order."""
    return [
        _introduce_step(chunk, language_name),
        _recognize_step(chunk),
        _practice_step(chunk),
        _recall_step(chunk, language_name),
        _apply_step(chunk),
    ]


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------

def assemble_lesson_plan(content: LessonContent, lesson_id: str | None = None) -> LessonPlan:
    """
    Build a lesson plan from chunk content.

    Args:
        content: Chunks plus lesson title and language pair
        lesson_id: Optional explicit plan ID; derived from the content if omitted

    Returns:
        LessonPlan with 5 steps per chunk and total_reward = 8 * chunk count
    """
    language_name = to_language_name(content.target_language_code)

    steps = []
    for chunk in content.chunks:
        steps.extend(assemble_chunk_steps(chunk, language_name))

    return LessonPlan(
        id=lesson_id or build_lesson_id(content),
        title=content.title,
        target_language_code=content.target_language_code,
        native_language_code=content.native_language_code,
        steps=steps,
        total_reward=sum(step.activity.reward for step in steps),
    )
