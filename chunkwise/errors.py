"""
Error types for the lesson pipeline.

- ContentSourceError: the AI source failed (transport, timeout, unparseable
  output, no usable chunks). Always recoverable by falling back.
- LessonValidationError: an assembled plan has blocking errors. Recoverable
  only by switching content source.
- PipelineFatalError: the fallback plan failed validation too. Not
  recoverable at runtime; end users only ever see ``user_message``.
"""

USER_FACING_FAILURE_MESSAGE = "We couldn't prepare your lesson right now. Please try again."


class ChunkwiseError(Exception):
    """Base class for all chunkwise errors."""


class ContentSourceError(ChunkwiseError):
    """A content source could not produce usable chunks."""


class LessonValidationError(ChunkwiseError):
    """An assembled lesson plan failed validation."""

    def __init__(self, errors: list[str], source_name: str | None = None):
        self.errors = list(errors)
        self.source_name = source_name
        where = f" ({source_name})" if source_name else ""
        super().__init__(f"Lesson validation failed{where}: {'; '.join(self.errors)}")


class PipelineFatalError(ChunkwiseError):
    """Both the primary and the fallback paths produced invalid lessons."""

    user_message = USER_FACING_FAILURE_MESSAGE

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Fallback lesson failed validation: {'; '.join(self.errors)}")
