"""
Static fallback source tests.

Every shipped chunk set must assemble into a valid lesson: the fallback
path has nothing to fall back to.
"""

import pytest

from chunkwise.pipeline import assemble_lesson_plan, validate_lesson_plan
from chunkwise.schemas import LessonContent, LessonRequest
from chunkwise.sources import GENERIC_CHUNKS, STARTER_CHUNKS, StaticContentSource

from conftest import make_chunk


def _validate(target, native, chunks):
    content = LessonContent(
        title="Starter",
        target_language_code=target,
        native_language_code=native,
        chunks=chunks,
    )
    return validate_lesson_plan(assemble_lesson_plan(content))


class TestShippedChunkSets:
    """Test the hand-authored data."""

    @pytest.mark.parametrize("pair", sorted(STARTER_CHUNKS))
    def test_chunk_set_validates(self, pair):
        target, native = pair
        result = _validate(target, native, STARTER_CHUNKS[pair])
        assert result.valid, result.errors
        assert result.warnings == []

    def test_generic_set_validates(self):
        result = _validate("xx", "yy", GENERIC_CHUNKS)
        assert result.valid, result.errors

    def test_generic_set_is_one_chunk(self):
        assert len(GENERIC_CHUNKS) == 1

    @pytest.mark.parametrize("pair", sorted(STARTER_CHUNKS))
    def test_options_distinct(self, pair):
        for chunk in STARTER_CHUNKS[pair]:
            options = [chunk.native_translation, *chunk.distractors]
            assert len({o.casefold() for o in options}) == 4
            contexts = [chunk.correct_usage_context, *chunk.wrong_usage_contexts]
            assert len({c.casefold() for c in contexts}) == 4

    def test_expected_pairs_present(self):
        for pair in [("de", "en"), ("fr", "en"), ("es", "en"), ("it", "en"),
                     ("pt", "en"), ("en", "fr"), ("en", "de")]:
            assert pair in STARTER_CHUNKS


class TestStaticContentSource:
    """Test lookup by language pair."""

    def test_known_pair(self):
        request = LessonRequest(topic="Greetings", target_language_code="German")
        chunks = StaticContentSource().fetch_chunks(request)
        assert chunks[0].target_phrase == "Guten Morgen"

    def test_unknown_pair_gets_generic(self):
        request = LessonRequest(topic="Greetings", target_language_code="ja", native_language_code="ko")
        assert StaticContentSource().fetch_chunks(request) == GENERIC_CHUNKS

    def test_reverse_pair_is_distinct(self):
        source = StaticContentSource()
        assert source.lookup("en", "de")[0].native_translation == "Guten Morgen"
        assert source.lookup("de", "en")[0].target_phrase == "Guten Morgen"

    def test_injected_table(self):
        chunk = make_chunk()
        source = StaticContentSource(chunk_sets={("de", "en"): [chunk]}, generic_chunks=[])
        assert source.lookup("de", "en") == [chunk]
        assert source.lookup("fr", "en") == []
        assert source.supported_pairs == [("de", "en")]

    def test_returns_copy(self):
        source = StaticContentSource()
        chunks = source.lookup("fr", "en")
        chunks.clear()
        assert len(source.lookup("fr", "en")) == 3

    def test_source_name(self):
        assert StaticContentSource().name == "static"
