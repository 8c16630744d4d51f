"""
Lesson validator - gate between assembly and rendering.

No lesson plan may be rendered unless validate_lesson_plan() reports it
valid. The validator only inspects: it never modifies the plan and never
raises, whatever it is given.

Errors are blocking (missing required fields, out-of-range indices,
duplicate options). Warnings are informational (short or long lessons,
quiz before teaching, reward total mismatch) and never affect validity.

Accepts a LessonPlan or its plain mapping form (LessonPlan.model_dump()),
so render payloads with missing or mistyped fields can be checked too.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel

from chunkwise.schemas import BLANK_MARKER, MAX_REWARD, MIN_REWARD, ActivityType

logger = logging.getLogger(__name__)

MIN_STEPS = 3
MAX_STEPS = 30
STANDARD_OPTION_COUNT = 4

ERROR = "error"
WARNING = "warning"


@dataclass
class ValidationIssue:
    """A single finding, tied to a step where one applies."""
    severity: str              # "error" or "warning"
    message: str
    step_index: Optional[int] = None  # 0-based; None for plan-level issues


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    def errors_for_step(self, step_index: int) -> list[str]:
        return [
            issue.message for issue in self.issues
            if issue.severity == ERROR and issue.step_index == step_index
        ]

    def warnings_for_step(self, step_index: int) -> list[str]:
        return [
            issue.message for issue in self.issues
            if issue.severity == WARNING and issue.step_index == step_index
        ]


class _IssueCollector:
    def __init__(self):
        self.issues: list[ValidationIssue] = []

    def error(self, message: str, step_index: Optional[int] = None):
        self.issues.append(ValidationIssue(ERROR, message, step_index))

    def warning(self, message: str, step_index: Optional[int] = None):
        self.issues.append(ValidationIssue(WARNING, message, step_index))

    def result(self) -> ValidationResult:
        errors = [i.message for i in self.issues if i.severity == ERROR]
        warnings = [i.message for i in self.issues if i.severity == WARNING]
        return ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            issues=list(self.issues),
        )


class _StepReporter:
    """Prefixes messages with the step label and records the step index."""

    def __init__(self, collector: _IssueCollector, step_index: int, activity_type: Any):
        self.collector = collector
        self.step_index = step_index
        self.prefix = f"Step {step_index + 1} ({activity_type})"

    def error(self, message: str):
        self.collector.error(f"{self.prefix}: {message}", self.step_index)

    def warning(self, message: str):
        self.collector.warning(f"{self.prefix}: {message}", self.step_index)


# -----------------------------------------------------------------------------
# Field helpers
# -----------------------------------------------------------------------------

def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_list(value: Any) -> Optional[list]:
    return list(value) if isinstance(value, (list, tuple)) else None


def _as_mapping(plan: Any) -> Optional[Mapping]:
    if isinstance(plan, BaseModel):
        return plan.model_dump()
    if isinstance(plan, Mapping):
        return plan
    return None


# -----------------------------------------------------------------------------
# Activity checks (one per type)
# -----------------------------------------------------------------------------

def _check_info(activity: Mapping, report: _StepReporter):
    if not _has_text(activity.get("title")) and not _has_text(activity.get("content")):
        report.error("Must have title or content")


def _check_multiple_choice(activity: Mapping, report: _StepReporter):
    if not _has_text(activity.get("question")):
        report.error("Missing question")

    options = _as_list(activity.get("options"))
    if options is None or len(options) < 2:
        report.error(f"Must have at least 2 options, got {len(options) if options else 0}")
    elif len(options) != STANDARD_OPTION_COUNT:
        report.warning(f"Expected {STANDARD_OPTION_COUNT} options, got {len(options)}")

    correct_index = activity.get("correct_index")
    if not _is_int(correct_index):
        report.error("Missing correct_index")
    elif options is not None and not 0 <= correct_index < len(options):
        report.error(
            f"correct_index {correct_index} out of range [0, {len(options) - 1}]"
        )

    if options:
        for j, option in enumerate(options):
            if not _has_text(option):
                report.error(f"Option {j + 1} is empty")
        normalized = [o.strip().casefold() for o in options if isinstance(o, str)]
        if len(set(normalized)) < len(normalized):
            report.error("Duplicate options detected")


def _check_fill_blank(activity: Mapping, report: _StepReporter):
    sentence = activity.get("sentence")
    if not _has_text(sentence):
        report.error("Missing sentence")
    elif BLANK_MARKER not in sentence:
        report.error(f"Sentence has no {BLANK_MARKER} placeholder")
    if not _has_text(activity.get("correct_answer")):
        report.error("Missing correct_answer")


def _check_translate(activity: Mapping, report: _StepReporter):
    if not _has_text(activity.get("source_phrase")):
        report.error("Missing source_phrase")
    accepted = _as_list(activity.get("accepted_answers")) or []
    if not any(_has_text(answer) for answer in accepted):
        report.error("Missing accepted_answers (need at least 1)")


def _check_true_false(activity: Mapping, report: _StepReporter):
    if not _has_text(activity.get("statement")) and not _has_text(activity.get("question")):
        report.error("Must have statement or question")
    if not isinstance(activity.get("is_true"), bool):
        report.error("Missing is_true (must be a boolean)")


def _check_matching(activity: Mapping, report: _StepReporter):
    pairs = _as_list(activity.get("pairs"))
    if pairs is None or len(pairs) < 2:
        report.error(f"Must have at least 2 pairs, got {len(pairs) if pairs else 0}")
    for j, pair in enumerate(pairs or []):
        if (
            not isinstance(pair, Mapping)
            or not _has_text(pair.get("left"))
            or not _has_text(pair.get("right"))
        ):
            report.error(f"Pair {j + 1} has empty left or right")


def _check_word_arrange(activity: Mapping, report: _StepReporter):
    if not _has_text(activity.get("target_sentence")):
        report.error("Missing target_sentence")
    words = _as_list(activity.get("scrambled_words"))
    if words is None or len(words) < 2:
        report.error(f"Must have at least 2 scrambled_words, got {len(words) if words else 0}")


_ACTIVITY_CHECKS: dict[str, Callable[[Mapping, _StepReporter], None]] = {
    ActivityType.INFO.value: _check_info,
    ActivityType.MULTIPLE_CHOICE.value: _check_multiple_choice,
    ActivityType.FILL_BLANK.value: _check_fill_blank,
    ActivityType.TRANSLATE.value: _check_translate,
    ActivityType.TRUE_FALSE.value: _check_true_false,
    ActivityType.MATCHING.value: _check_matching,
    ActivityType.WORD_ARRANGE.value: _check_word_arrange,
}


def validate_activity(activity: Mapping, report: _StepReporter):
    """Reward range plus the per-type required field contract."""
    reward = activity.get("reward")
    if not _is_int(reward):
        report.error(f"reward must be an integer, got {type(reward).__name__}")
    elif not MIN_REWARD <= reward <= MAX_REWARD:
        report.error(f"reward {reward} out of range [{MIN_REWARD}, {MAX_REWARD}]")

    activity_type = activity.get("type")
    check = _ACTIVITY_CHECKS.get(activity_type) if isinstance(activity_type, str) else None
    if check is None:
        report.error(f'Unknown activity type "{activity_type}"')
        return
    check(activity, report)


# -----------------------------------------------------------------------------
# Main validator
# -----------------------------------------------------------------------------

def validate_lesson_plan(plan: Any) -> ValidationResult:
    """
    Validate a lesson plan completely before rendering.

    Checks:
        1. Plan-level structure (id, title, non-empty steps, length)
        2. Step-level text (tutor_text, help_text) and activity presence
        3. Activity fields per type, reward range, duplicate options
        4. Teach-first: an info step before the first quiz step
        5. Declared total_reward against the step sum

    Args:
        plan: LessonPlan or its mapping form

    Returns:
        ValidationResult; valid is True iff there are no errors
    """
    issues = _IssueCollector()
    data = _as_mapping(plan)

    if data is None:
        issues.error(f"Lesson plan must be a mapping, got {type(plan).__name__}")
        return _finish(issues.result(), None)

    title = data.get("title")
    if not _has_text(data.get("id")):
        issues.error("Missing lesson plan ID")
    if not _has_text(title):
        issues.error("Missing lesson plan title")

    steps = _as_list(data.get("steps"))
    if not steps:
        issues.error("Lesson plan has no steps")
        # Nothing else to check without steps
        return _finish(issues.result(), title)

    if len(steps) < MIN_STEPS:
        issues.warning(f"Very short lesson: only {len(steps)} steps")
    if len(steps) > MAX_STEPS:
        issues.warning(f"Very long lesson: {len(steps)} steps")

    seen_info = False
    warned_quiz_first = False
    computed_reward = 0

    for index, step in enumerate(steps):
        label = f"Step {index + 1}"

        if not isinstance(step, Mapping):
            issues.error(f"{label}: Step must be a mapping", index)
            continue

        if not _has_text(step.get("tutor_text")):
            issues.warning(f"{label}: Missing tutor_text", index)
        if not _has_text(step.get("help_text")):
            issues.warning(f"{label}: Missing help_text", index)

        activity = step.get("activity")
        if not isinstance(activity, Mapping):
            issues.error(f"{label}: Missing activity", index)
            continue

        activity_type = activity.get("type")
        if activity_type == ActivityType.INFO.value:
            seen_info = True
        elif not seen_info and not warned_quiz_first:
            warned_quiz_first = True
            issues.warning(
                f"{label}: Quiz activity ({activity_type}) appears before any info step",
                index,
            )

        validate_activity(activity, _StepReporter(issues, index, activity_type))

        reward = activity.get("reward")
        if _is_int(reward):
            computed_reward += reward

    declared = data.get("total_reward")
    if not _is_int(declared):
        issues.warning("total_reward missing or not an integer")
    elif declared != computed_reward:
        issues.warning(
            f"total_reward mismatch: plan says {declared}, steps sum to {computed_reward}"
        )

    return _finish(issues.result(), title)


def _finish(result: ValidationResult, title: Any) -> ValidationResult:
    if result.valid and not result.warnings:
        logger.info(f"Validation passed for '{title}'")
    elif result.valid:
        logger.warning(f"Validation passed for '{title}' with {len(result.warnings)} warning(s): {result.warnings}")
    else:
        logger.error(f"Validation FAILED for '{title}': {result.errors}")
    return result
