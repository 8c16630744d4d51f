"""
ContentSource - the interface every chunk producer implements.

The pipeline talks to chunk producers only through this interface.
"""

from abc import ABC, abstractmethod

from chunkwise.schemas import ChunkContent, LessonRequest


class ContentSource(ABC):
    """Produces the chunks for one lesson request."""

    name: str = "content_source"

    @abstractmethod
    def fetch_chunks(self, request: LessonRequest) -> list[ChunkContent]:
        """
        Produce chunk content for a request.

        Raises:
            ContentSourceError: If no usable chunks could be produced
        """
