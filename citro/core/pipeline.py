"""
Pipeline Orchestrator for Citro voice commands.
Coordinates the Normalize → Intent → Resolve → Render pipeline.
"""

import time
import traceback
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional
import logging

from citro.config import get_settings
from citro.core.exceptions import PipelineStageException
from citro.core.models import CommandContext, IntentMatch, ResolveResult, VoiceResponse
from citro.logging.command_logger import CommandLogger
from citro.resolvers.registry import ResolverRegistry
from citro.voice.intent_dataset import IntentId
from citro.voice.intent_engine import detect_intent
from citro.voice.normalizer import normalize
from citro.voice.response_templates import RenderContext, build_response

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass
class PipelineMetrics:
    """Metrics for a single pipeline execution."""
    start_time: float = field(default_factory=time.time)
    normalize_start: Optional[float] = None
    normalize_end: Optional[float] = None
    intent_start: Optional[float] = None
    intent_end: Optional[float] = None
    resolve_start: Optional[float] = None
    resolve_end: Optional[float] = None
    render_start: Optional[float] = None
    render_end: Optional[float] = None

    @staticmethod
    def _span(start: Optional[float], end: Optional[float]) -> Optional[float]:
        if start is not None and end is not None:
            return (end - start) * 1000
        return None

    @property
    def normalize_latency_ms(self) -> Optional[float]:
        return self._span(self.normalize_start, self.normalize_end)

    @property
    def intent_latency_ms(self) -> Optional[float]:
        return self._span(self.intent_start, self.intent_end)

    @property
    def resolve_latency_ms(self) -> Optional[float]:
        return self._span(self.resolve_start, self.resolve_end)

    @property
    def render_latency_ms(self) -> Optional[float]:
        return self._span(self.render_start, self.render_end)

    @property
    def total_latency_ms(self) -> float:
        return (time.time() - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "normalize_latency_ms": self.normalize_latency_ms,
            "intent_latency_ms": self.intent_latency_ms,
            "resolve_latency_ms": self.resolve_latency_ms,
            "render_latency_ms": self.render_latency_ms,
            "total_latency_ms": self.total_latency_ms
        }


class PipelineOrchestrator:
    """
    Orchestrates the command pipeline: normalize → detect intent →
    confidence gate → resolve → render.

    Matches below PIPELINE_CONFIDENCE_GATE skip the resolver and render
    the LOW_CONFIDENCE template.
    """

    def __init__(
        self,
        resolver_registry: ResolverRegistry,
        command_logger: Optional[CommandLogger] = None
    ):
        self.resolvers = resolver_registry
        self.command_logger = command_logger

    async def process_command(
        self,
        transcript: Optional[str],
        context: Optional[CommandContext] = None,
        seed: int = 0,
        hour: Optional[int] = None
    ) -> VoiceResponse:
        """Run one transcript through the full pipeline."""
        metrics = PipelineMetrics()
        context = context or CommandContext()
        current_page = context.current_page or "/"

        try:
            # ==================
            # Stage 1: Normalize
            # ==================
            metrics.normalize_start = time.time()
            normalized = self._run_stage("normalize", normalize, transcript)
            metrics.normalize_end = time.time()

            # ==================
            # Stage 2: Intent
            # ==================
            metrics.intent_start = time.time()
            match: IntentMatch = self._run_stage("intent", detect_intent, normalized)
            metrics.intent_end = time.time()

            # ==================
            # Stage 3: Resolve
            # ==================
            result: Optional[ResolveResult] = None
            if match.confidence < settings.PIPELINE_CONFIDENCE_GATE:
                logger.debug(f"Confidence gate: {match.intent.value} at {match.confidence:.2f} for '{normalized}'")
                intent = IntentId.LOW_CONFIDENCE
                render_ctx = RenderContext(
                    confidence=match.confidence,
                    current_page=current_page,
                    transcript=normalized,
                    seed=seed,
                    hour=hour,
                )
            else:
                intent = match.intent
                metrics.resolve_start = time.time()
                result = await self.resolvers.resolve(
                    match.intent,
                    match.entities,
                    replace(context, current_page=current_page, transcript=normalized)
                )
                metrics.resolve_end = time.time()
                render_ctx = RenderContext(
                    entities=dict(match.entities),
                    data=result.data,
                    error=result.error,
                    confidence=match.confidence,
                    current_page=result.current_page,
                    transcript=normalized,
                    seed=seed,
                    hour=hour,
                )

            # ==================
            # Stage 4: Render
            # ==================
            metrics.render_start = time.time()
            response = self._run_stage("render", build_response, intent, render_ctx)
            metrics.render_end = time.time()

        except PipelineStageException as e:
            logger.exception(f"Pipeline error: {e.message}")
            if self.command_logger:
                await self.command_logger.log_error(
                    "pipeline_error",
                    e.message,
                    traceback.format_exc()
                )
            raise

        logger.info(
            f"'{normalized}' -> {response.intent} "
            f"({response.confidence:.2f}) in {metrics.total_latency_ms:.1f}ms"
        )

        if self.command_logger:
            await self.command_logger.log_command(
                transcript=transcript or "",
                normalized=normalized,
                intent=response.intent,
                confidence=match.confidence,
                entities=match.entities,
                success=result.success if result else None,
                error=result.error if result else None,
                metrics=metrics.to_dict()
            )

        return response

    @staticmethod
    def _run_stage(stage: str, func, *args):
        try:
            return func(*args)
        except Exception as e:
            raise PipelineStageException(stage, str(e)) from e


_default_pipeline: Optional[PipelineOrchestrator] = None


def get_pipeline() -> PipelineOrchestrator:
    """Process-wide pipeline using the default resolver registry."""
    global _default_pipeline
    if _default_pipeline is None:
        from citro.resolvers import get_registry
        _default_pipeline = PipelineOrchestrator(get_registry())
    return _default_pipeline


def set_pipeline(pipeline: Optional[PipelineOrchestrator]):
    global _default_pipeline
    _default_pipeline = pipeline


async def process_command(
    transcript: Optional[str],
    context: Optional[CommandContext] = None,
    **kwargs
) -> VoiceResponse:
    """Main entry point: raw transcript + caller context → VoiceResponse."""
    return await get_pipeline().process_command(transcript, context, **kwargs)
