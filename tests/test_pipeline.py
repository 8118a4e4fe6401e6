"""Tests for the pipeline orchestrator."""

from unittest.mock import AsyncMock, patch

import pytest

from citro.core.exceptions import PipelineStageException
from citro.core.models import CommandContext
from citro.core.pipeline import PipelineMetrics, PipelineOrchestrator, process_command, set_pipeline


@pytest.fixture
def pipeline(registry):
    return PipelineOrchestrator(registry)


class TestProcessCommand:
    """End-to-end command handling with mocked collaborators."""

    @pytest.mark.asyncio
    async def test_hinglish_navigation(self, pipeline):
        """dikhao events navigates to the events page."""
        response = await pipeline.process_command("dikhao events")
        assert response.intent == "NAV_EVENTS"
        assert response.confidence == 1.0
        assert response.action == {"type": "navigate", "path": "/events"}

    @pytest.mark.asyncio
    async def test_filler_words_do_not_become_an_event(self, pipeline):
        """"show me events" opens the events page instead of looking up an event."""
        response = await pipeline.process_command("show me events")
        assert response.intent == "NAV_EVENTS"
        assert response.action == {"type": "navigate", "path": "/events"}

    @pytest.mark.asyncio
    async def test_register_misheard_event(self, pipeline):
        """A misheard name reaches the registration flow with KB data."""
        response = await pipeline.process_command("register for cardiology")
        assert response.intent == "REGISTER_EVENT"
        assert response.data["event"].name == "Codeology"
        assert response.action == {"type": "execute", "handler": "registerForEvent", "path": "/events"}

    @pytest.mark.asyncio
    async def test_gibberish_is_low_confidence(self, pipeline, event_service):
        """Unmatched input skips the resolver and asks again."""
        response = await pipeline.process_command("asdkjasd")
        assert response.intent == "LOW_CONFIDENCE"
        assert response.confidence == 0.0
        assert response.reply.startswith('I heard "asdkjasd", but ')
        event_service.get_published_events.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_transcript(self, pipeline):
        """Empty input short-circuits to the low-confidence reply."""
        response = await pipeline.process_command("")
        assert response.intent == "LOW_CONFIDENCE"
        assert response.reply.startswith("I didn't quite catch that.")

    @pytest.mark.asyncio
    async def test_add_to_cart(self, pipeline, event_service):
        """Cart commands dispatch the reconciled cart item."""
        response = await pipeline.process_command("add master chef to cart", CommandContext(current_page="/events"))
        assert response.intent == "ADD_TO_CART"
        assert response.action["type"] == "add-to-cart"
        assert response.action["cartItem"]["eventId"] == 7
        event_service.get_published_events.assert_awaited()

    @pytest.mark.asyncio
    async def test_sold_out(self, pipeline, event_service, make_row):
        """Sold-out events come back flagged without a cart action."""
        event_service.get_published_events.return_value = [make_row(registered=20)]
        response = await pipeline.process_command("add master chef to cart")
        assert response.data["soldOut"] is True
        assert response.action is None
        assert "sold out" in response.reply

    @pytest.mark.asyncio
    async def test_day_from_transcript(self, pipeline):
        """Literal day phrases still resolve the day."""
        response = await pipeline.process_command("day 2 events")
        assert response.intent == "DAY_EVENTS"
        assert response.data["day"] == 2
        assert response.reply.startswith("📅 Day 2 (April 9)")

    @pytest.mark.asyncio
    async def test_page_context(self, pipeline):
        """The caller's page flows into page-aware replies."""
        response = await pipeline.process_command("where am i", CommandContext(current_page="/events"))
        assert response.intent == "CONTEXT_WHERE_AM_I"
        assert response.reply == "You're currently on the events page."

    @pytest.mark.asyncio
    async def test_downstream_failure_is_a_reply(self, pipeline, dashboard_service):
        """A failing dashboard service yields a friendly reply, not an exception."""
        dashboard_service.get_stats.side_effect = RuntimeError("db down")
        response = await pipeline.process_command("show stats")
        assert response.intent == "QUERY_STATS"
        assert response.reply == "Could not fetch stats"

    @pytest.mark.asyncio
    async def test_stage_failure_raises(self, pipeline):
        """A crashing stage raises PipelineStageException."""
        with patch("citro.core.pipeline.detect_intent", side_effect=ValueError("bad table")):
            with pytest.raises(PipelineStageException) as exc_info:
                await pipeline.process_command("show events")
        assert exc_info.value.details["stage"] == "intent"


class TestCommandLogging:
    """Tests for the command logger hook."""

    @pytest.mark.asyncio
    async def test_logs_command(self, registry):
        """Each processed command is logged with its outcome."""
        command_logger = AsyncMock()
        pipeline = PipelineOrchestrator(registry, command_logger)
        await pipeline.process_command("show events")
        kwargs = command_logger.log_command.await_args.kwargs
        assert kwargs["intent"] == "NAV_EVENTS"
        assert kwargs["success"] is True
        assert kwargs["normalized"] == "show events"

    @pytest.mark.asyncio
    async def test_gate_logged_as_skipped(self, registry):
        """Gated commands log no resolver outcome."""
        command_logger = AsyncMock()
        pipeline = PipelineOrchestrator(registry, command_logger)
        await pipeline.process_command("asdkjasd")
        assert command_logger.log_command.await_args.kwargs["success"] is None

    @pytest.mark.asyncio
    async def test_stage_failure_logged(self, registry):
        """Stage failures reach the error log."""
        command_logger = AsyncMock()
        pipeline = PipelineOrchestrator(registry, command_logger)
        with patch("citro.core.pipeline.build_response", side_effect=KeyError("x")):
            with pytest.raises(PipelineStageException):
                await pipeline.process_command("show events")
        command_logger.log_error.assert_awaited_once()
        assert command_logger.log_error.await_args.args[0] == "pipeline_error"


class TestFacade:
    """Tests for the module-level entry point."""

    @pytest.mark.asyncio
    async def test_process_command_uses_default_pipeline(self, pipeline):
        """process_command runs through the installed pipeline."""
        set_pipeline(pipeline)
        try:
            response = await process_command("hello", hour=9)
        finally:
            set_pipeline(None)
        assert response.intent == "GREETING"
        assert response.reply.startswith("Good morning!")


def test_metrics_spans():
    """Stage latencies are only reported for completed stages."""
    metrics = PipelineMetrics(normalize_start=1.0, normalize_end=1.5)
    data = metrics.to_dict()
    assert data["normalize_latency_ms"] == pytest.approx(500.0)
    assert data["resolve_latency_ms"] is None
    assert data["total_latency_ms"] >= 0
