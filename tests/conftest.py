"""Shared fixtures for chunkwise tests."""

import pytest

from chunkwise.schemas import ChunkContent, LessonContent, LessonRequest


def make_chunk(**overrides) -> ChunkContent:
    fields = dict(
        target_phrase="Hallo",
        native_translation="Hello",
        example_sentence="Hallo, wie geht's?",
        usage_note="Informal greeting for any time of day",
        explanation="The everyday German hello",
        distractors=["Goodbye", "Thank you", "Sorry"],
        correct_usage_context="Meeting a friend",
        wrong_usage_contexts=["Leaving a party", "Ordering food", "Going to bed"],
    )
    fields.update(overrides)
    return ChunkContent(**fields)


def raw_chunk(**overrides) -> dict:
    """A chunk as the AI returns it (camelCase keys)."""
    raw = {
        "targetPhrase": "Wie geht's?",
        "nativeTranslation": "How are you?",
        "exampleSentence": "Hallo Anna, wie geht's?",
        "usageNote": "Casual question between friends",
        "explanation": "Short for 'Wie geht es dir?'",
        "distractors": ["Where are you?", "Who are you?", "What is that?"],
        "correctUsageContext": "Greeting a classmate",
        "wrongUsageContexts": ["Leaving school", "Paying for lunch", "Answering a test"],
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def hallo_chunk():
    return make_chunk()


@pytest.fixture
def two_chunk_content(hallo_chunk):
    return LessonContent(
        title="Greetings",
        target_language_code="de",
        native_language_code="en",
        chunks=[
            hallo_chunk,
            make_chunk(
                target_phrase="Guten Abend",
                native_translation="Good evening",
                example_sentence="Guten Abend, Frau Schmidt!",
                distractors=["Good morning", "Good night", "See you"],
                correct_usage_context="Arriving at a dinner",
                wrong_usage_contexts=["Waking up", "Leaving work", "Eating breakfast"],
            ),
        ],
    )


@pytest.fixture
def greetings_request():
    return LessonRequest(topic="Greetings", target_language_code="de", native_language_code="en")
