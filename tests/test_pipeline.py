"""
Lesson pipeline tests: primary/fallback state machine.
"""

import logging

import pytest

from chunkwise.errors import (
    USER_FACING_FAILURE_MESSAGE,
    ContentSourceError,
    PipelineFatalError,
)
from chunkwise.pipeline import LessonPipeline, PipelineState, validate_lesson_plan
from chunkwise.sources import ContentSource, GeminiContentSource, StaticContentSource

from conftest import make_chunk


class StubSource(ContentSource):
    """Returns fixed chunks, or raises, and counts calls."""

    def __init__(self, name, chunks=None, error=None):
        self.name = name
        self.chunks = chunks or []
        self.error = error
        self.calls = 0

    def fetch_chunks(self, request):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.chunks)


class FixedResponseClient:
    """Stands in for GeminiClient with one canned reply."""

    def __init__(self, text):
        self.text = text

    def generate(self, system_prompt, user_prompt):
        return self.text


@pytest.fixture
def good_chunks():
    return [
        make_chunk(),
        make_chunk(target_phrase="Tschüss", native_translation="Bye"),
    ]


@pytest.fixture
def bad_chunks():
    # Repeated distractors produce duplicate options after assembly
    return [make_chunk(distractors=["Goodbye", "Goodbye", "Sorry"])]


class TestPrimaryPath:
    """Primary source succeeds."""

    def test_primary_success(self, greetings_request, good_chunks):
        primary = StubSource("primary", chunks=good_chunks)
        fallback = StubSource("fallback", error=AssertionError("fallback must not run"))

        result = LessonPipeline(primary, fallback).run(greetings_request)

        assert result.meta.used_fallback is False
        assert result.meta.source_name == "primary"
        assert result.meta.generation_latency_ms >= 0
        assert result.meta.warnings == []
        assert len(result.plan.steps) == 10
        assert result.plan.title == "Greetings"
        assert primary.calls == 1
        assert fallback.calls == 0

    def test_plan_is_valid(self, greetings_request, good_chunks):
        result = LessonPipeline(
            StubSource("primary", chunks=good_chunks), StaticContentSource()
        ).run(greetings_request)
        assert validate_lesson_plan(result.plan).valid


class TestFallbackPath:
    """Primary fails, fallback takes over."""

    def test_primary_transport_error(self, greetings_request):
        primary = StubSource("primary", error=ContentSourceError("connection reset"))

        result = LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        assert result.meta.used_fallback is True
        assert result.meta.source_name == "static"
        assert result.plan.steps[0].activity.title == "Guten Morgen"
        assert validate_lesson_plan(result.plan).valid
        assert primary.calls == 1

    def test_primary_invalid_plan_falls_back(self, greetings_request, bad_chunks):
        primary = StubSource("primary", chunks=bad_chunks)

        result = LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        assert result.meta.used_fallback is True
        assert primary.calls == 1

    def test_primary_too_many_chunks_falls_back(self, greetings_request):
        primary = StubSource("primary", chunks=[make_chunk()] * 5)
        result = LessonPipeline(primary, StaticContentSource()).run(greetings_request)
        assert result.meta.used_fallback is True

    def test_unknown_pair_uses_generic(self):
        from chunkwise.schemas import LessonRequest

        request = LessonRequest(topic="Basics", target_language_code="ja", native_language_code="en")
        primary = StubSource("primary", error=ContentSourceError("timeout"))

        result = LessonPipeline(primary, StaticContentSource()).run(request)
        assert result.meta.used_fallback is True
        assert len(result.plan.steps) == 5

    def test_fallback_transition_logged(self, greetings_request, caplog):
        primary = StubSource("primary", error=ContentSourceError("timeout"))
        with caplog.at_level(logging.INFO, logger="chunkwise.pipeline.orchestrator"):
            LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        messages = [r.getMessage() for r in caplog.records]
        assert any("TRY_PRIMARY -> TRY_FALLBACK" in m for m in messages)
        assert any("TRY_FALLBACK -> TERMINAL" in m for m in messages)

    @pytest.mark.parametrize("error", [ConnectionError("reset"), RuntimeError("bug"), KeyError("chunks")])
    def test_unexpected_primary_error_falls_back(self, greetings_request, error):
        primary = StubSource("primary", error=error)

        result = LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        assert result.meta.used_fallback is True
        assert result.meta.source_name == "static"
        assert validate_lesson_plan(result.plan).valid

    def test_unexpected_primary_error_logged(self, greetings_request, caplog):
        primary = StubSource("primary", error=RuntimeError("bug"))
        with caplog.at_level(logging.WARNING, logger="chunkwise.pipeline.orchestrator"):
            LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        record = next(r for r in caplog.records if "RuntimeError" in r.getMessage())
        assert record.exc_info is not None

    @pytest.mark.parametrize(
        "response",
        [
            "[" + "1" * 5000 + "]",
            '{"chunks": ' + "[" * 100000 + "]" * 100000 + "}",
            "```json\n" + "[" * 100000 + "]" * 100000 + "\n```",
        ],
        ids=["huge-integer", "deep-nesting", "fenced-deep-nesting"],
    )
    def test_malformed_ai_json_falls_back(self, greetings_request, response):
        primary = GeminiContentSource(client=FixedResponseClient(response))

        result = LessonPipeline(primary, StaticContentSource()).run(greetings_request)

        assert result.meta.used_fallback is True
        assert result.meta.source_name == "static"


class TestFatalPath:
    """Fallback also fails: no plan is returned."""

    def test_fallback_invalid_plan(self, greetings_request, bad_chunks):
        primary = StubSource("primary", error=ContentSourceError("down"))
        fallback = StubSource("fallback", chunks=bad_chunks)

        with pytest.raises(PipelineFatalError) as exc_info:
            LessonPipeline(primary, fallback).run(greetings_request)

        error = exc_info.value
        assert error.user_message == USER_FACING_FAILURE_MESSAGE
        assert any("Duplicate options" in e for e in error.errors)
        assert fallback.calls == 1

    def test_both_invalid(self, greetings_request, bad_chunks):
        primary = StubSource("primary", chunks=bad_chunks)
        fallback = StubSource("fallback", chunks=bad_chunks)

        with pytest.raises(PipelineFatalError):
            LessonPipeline(primary, fallback).run(greetings_request)
        assert primary.calls == 1
        assert fallback.calls == 1

    def test_fallback_source_error(self, greetings_request):
        primary = StubSource("primary", error=ContentSourceError("down"))
        fallback = StubSource("fallback", error=ContentSourceError("missing data"))

        with pytest.raises(PipelineFatalError, match="missing data"):
            LessonPipeline(primary, fallback).run(greetings_request)

    def test_custom_validator(self, greetings_request, good_chunks):
        from chunkwise.pipeline import ValidationResult

        def reject_all(plan):
            return ValidationResult(valid=False, errors=["rejected"])

        pipeline = LessonPipeline(
            StubSource("primary", chunks=good_chunks), StaticContentSource(), validator=reject_all
        )
        with pytest.raises(PipelineFatalError) as exc_info:
            pipeline.run(greetings_request)
        assert exc_info.value.errors == ["rejected"]


def test_pipeline_states():
    assert [s.name for s in PipelineState] == ["TRY_PRIMARY", "TRY_FALLBACK", "TERMINAL"]
