"""
cli.py - Generate one validated lesson from the command line.

Usage:
  chunkwise --topic "Greetings" --target de                 # AI source, static fallback
  chunkwise --topic "Food" --target fr --chunks 4 --output lesson.json
  chunkwise --topic "Greetings" --target es --offline       # static chunks only
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from chunkwise.config import DEFAULT_CHUNK_COUNT, DEFAULT_NATIVE_LANGUAGE, GEMINI_MODEL
from chunkwise.errors import ContentSourceError, PipelineFatalError
from chunkwise.pipeline import LessonPipeline
from chunkwise.schemas import AGE_BANDS, ChunkContent, LessonRequest
from chunkwise.sources import ContentSource, GeminiContentSource, StaticContentSource

logger = logging.getLogger(__name__)


class OfflineSource(ContentSource):
    """Primary stand-in for --offline: always fails, so the fallback runs."""

    name = "offline"

    def fetch_chunks(self, request: LessonRequest) -> list[ChunkContent]:
        raise ContentSourceError("Offline mode: AI source disabled")


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkwise",
        description="Generate a validated chunk-based language lesson",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--topic",
        type=str,
        required=True,
        help="Lesson topic, e.g. 'Greetings'"
    )
    parser.add_argument(
        "--target",
        type=str,
        required=True,
        help="Target language code or name (e.g. de, German)"
    )
    parser.add_argument(
        "--native",
        type=str,
        default=DEFAULT_NATIVE_LANGUAGE,
        help=f"Learner's native language (default: {DEFAULT_NATIVE_LANGUAGE})"
    )
    parser.add_argument(
        "--chunks",
        type=int,
        default=DEFAULT_CHUNK_COUNT,
        help=f"Number of chunks to request, 2-4 (default: {DEFAULT_CHUNK_COUNT})"
    )
    parser.add_argument(
        "--age-band",
        type=str,
        default="11-14",
        help=f"Learner age band, one of {', '.join(AGE_BANDS)}"
    )
    parser.add_argument(
        "--interests",
        type=str,
        help="Comma-separated learner interests"
    )
    parser.add_argument(
        "--seen",
        type=str,
        help="Comma-separated phrases the learner already knows"
    )
    parser.add_argument(
        "--model",
        type=str,
        default=GEMINI_MODEL,
        help=f"Gemini model to use (default: {GEMINI_MODEL})"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the lesson JSON to this file instead of stdout"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the AI source and use the static fallback chunks"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        request = LessonRequest(
            topic=args.topic,
            target_language_code=args.target,
            native_language_code=args.native,
            desired_chunk_count=args.chunks,
            age_band=args.age_band,
            interests=_split_list(args.interests),
            already_seen_phrases=_split_list(args.seen),
        )
    except ValidationError as e:
        parser.error(f"Invalid lesson request: {e}")

    primary = OfflineSource() if args.offline else GeminiContentSource(model=args.model)
    pipeline = LessonPipeline(primary=primary, fallback=StaticContentSource())

    try:
        result = pipeline.run(request)
    except PipelineFatalError as e:
        logger.error(f"Lesson pipeline failed: {e}")
        print(e.user_message, file=sys.stderr)
        return 1

    payload = result.model_dump_json(indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        logger.info(f"Saved lesson to {args.output}")
    else:
        print(payload)

    if result.meta.used_fallback:
        logger.info("Lesson was built from fallback content")
    return 0


if __name__ == "__main__":
    sys.exit(main())
