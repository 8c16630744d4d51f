"""
Lesson pipeline - ContentSource -> assembler -> validator, with one fallback.

    TRY_PRIMARY --ok--> TERMINAL
        |
        | source raised, or blocking validation errors
        v
    TRY_FALLBACK --ok--> TERMINAL
        |
        | blocking validation errors
        v
    PipelineFatalError

The fallback transition is the only retry point. A plan is only returned
from TERMINAL, so callers never see a partial or unvalidated plan.
"""

import logging
import time
from enum import Enum
from typing import Callable

from pydantic import ValidationError

from chunkwise.errors import ContentSourceError, LessonValidationError, PipelineFatalError
from chunkwise.schemas import LessonContent, LessonMeta, LessonPlan, LessonRequest, LessonResult
from chunkwise.sources.base import ContentSource

from .assembler import assemble_lesson_plan
from .validator import ValidationResult, validate_lesson_plan

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    TRY_PRIMARY = "try_primary"
    TRY_FALLBACK = "try_fallback"
    TERMINAL = "terminal"


class LessonPipeline:
    """
    Produces one validated lesson per request.

    Stateless between runs: one pipeline instance can serve any number of
    requests, from any thread.
    """

    def __init__(
        self,
        primary: ContentSource,
        fallback: ContentSource,
        validator: Callable[[LessonPlan], ValidationResult] = validate_lesson_plan,
    ):
        self.primary = primary
        self.fallback = fallback
        self.validator = validator

    def build_plan(
        self, source: ContentSource, request: LessonRequest
    ) -> tuple[LessonPlan, ValidationResult]:
        """
        Fetch, assemble and validate a plan from one source.

        Raises:
            ContentSourceError: If the source produced no chunks
            LessonValidationError: If the assembled plan has blocking errors
        """
        chunks = source.fetch_chunks(request)

        try:
            content = LessonContent(
                title=request.topic,
                target_language_code=request.target_language_code,
                native_language_code=request.native_language_code,
                chunks=chunks,
            )
            plan = assemble_lesson_plan(content)
        except ValidationError as e:
            messages = [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]
            raise LessonValidationError(messages, source.name) from e

        result = self.validator(plan)
        if not result.valid:
            raise LessonValidationError(result.errors, source.name)
        return plan, result

    def run(self, request: LessonRequest) -> LessonResult:
        """
        Run the pipeline for one request.

        Returns:
            LessonResult with the validated plan and generation metadata

        Raises:
            PipelineFatalError: If the fallback plan also fails
        """
        start = time.perf_counter()
        state = PipelineState.TRY_PRIMARY
        used_fallback = False
        logger.info(f"Lesson request: '{request.topic}' ({request.target_language_code}/{request.native_language_code})")

        try:
            plan, result = self.build_plan(self.primary, request)
            source_name = self.primary.name
        except (ContentSourceError, LessonValidationError) as e:
            logger.warning(f"Primary source '{self.primary.name}' failed: {e}")
            used_fallback = True
        except Exception as e:
            # Any primary failure is recoverable; only the fallback path escalates
            logger.warning(
                f"Primary source '{self.primary.name}' raised {type(e).__name__}: {e}",
                exc_info=True,
            )
            used_fallback = True

        if used_fallback:
            state = self._transition(state, PipelineState.TRY_FALLBACK)

            try:
                plan, result = self.build_plan(self.fallback, request)
                source_name = self.fallback.name
            except LessonValidationError as fallback_error:
                logger.error(f"Fallback source '{self.fallback.name}' produced an invalid lesson: {fallback_error}")
                raise PipelineFatalError(fallback_error.errors) from fallback_error
            except ContentSourceError as fallback_error:
                logger.error(f"Fallback source '{self.fallback.name}' failed: {fallback_error}")
                raise PipelineFatalError([str(fallback_error)]) from fallback_error

        self._transition(state, PipelineState.TERMINAL)
        latency_ms = int((time.perf_counter() - start) * 1000)

        meta = LessonMeta(
            used_fallback=used_fallback,
            generation_latency_ms=latency_ms,
            warnings=result.warnings,
            source_name=source_name,
        )
        logger.info(
            f"Lesson '{plan.title}' ready: {len(plan.steps)} steps from '{source_name}' "
            f"in {latency_ms}ms"
        )
        return LessonResult(plan=plan, meta=meta)

    @staticmethod
    def _transition(current: PipelineState, new: PipelineState) -> PipelineState:
        logger.info(f"Pipeline state: {current.name} -> {new.name}")
        return new
