"""Tests for the analysis session state machine and the analyze() facade."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from agents.analyst import AnalystAgent, analyze
from agents.session import AnalysisSession
from conftest import fake_genai_client, make_media
from states import AnalysisStatus, MediaFile
from utils.config import AnalyzerConfig
from utils.error_classifier import PAYLOAD_TOO_LARGE_MESSAGE
from utils.errors import (
    MISSING_CREDENTIAL_MESSAGE,
    RejectionCause,
    SessionBusyError,
    ValidationError,
)
from utils.gemini_client import GeminiClient


def _session(config: AnalyzerConfig, fake=None) -> tuple[AnalysisSession, list[AnalysisStatus]]:
    fake = fake or fake_genai_client()
    analyst = AnalystAgent(config, gemini_client=GeminiClient(config, client=fake))
    transitions: list[AnalysisStatus] = []
    return AnalysisSession(config, analyst=analyst, on_status_change=transitions.append), transitions


def _broken_loader() -> bytes:
    raise OSError("unreadable")


class TestTransitions:
    @pytest.mark.asyncio
    async def test_empty_working_set_stays_idle(self, config):
        session, transitions = _session(config)
        assert await session.trigger() is None
        assert session.status == AnalysisStatus.IDLE
        assert transitions == []

    @pytest.mark.asyncio
    async def test_two_part_scenario_completes(self, config):
        fake = fake_genai_client(text="Overview\n...")
        session, transitions = _session(config, fake)
        session.select_files([make_media("partA.mp4", 50), make_media("partB.mp4", 50)])
        assert session.status == AnalysisStatus.IDLE

        result = await session.trigger()

        assert result == "Overview\n..."
        assert session.result == "Overview\n..."
        assert session.status == AnalysisStatus.COMPLETED
        assert transitions == [AnalysisStatus.PREPARING, AnalysisStatus.ANALYZING, AnalysisStatus.COMPLETED]
        contents = fake.aio.models.generate_content.await_args.kwargs["contents"]
        assert "2 video part(s)" in contents[0].text
        assert [c.inline_data.data for c in contents[1:]] == [b"partA.mp4-bytes", b"partB.mp4-bytes"]

    def test_oversized_file_rejected_and_state_unchanged(self, config):
        session, transitions = _session(config)
        with pytest.raises(ValidationError) as exc:
            session.select_files([make_media("big.mp4", 200)])
        assert exc.value.cause == RejectionCause.FILE_TOO_LARGE
        assert "150MB" in exc.value.message
        assert len(session.working_set) == 0
        assert session.status == AnalysisStatus.IDLE
        assert transitions == []

    @pytest.mark.asyncio
    async def test_missing_credential_errors_without_network_call(self):
        config = AnalyzerConfig(api_key=None)
        fake = fake_genai_client()
        session, transitions = _session(config, fake)
        session.select_files([make_media("a.mp4", 1)])

        assert await session.trigger() is None

        assert transitions == [AnalysisStatus.PREPARING, AnalysisStatus.ANALYZING, AnalysisStatus.ERROR]
        assert session.error == MISSING_CREDENTIAL_MESSAGE
        assert fake.aio.models.generate_content.await_count == 0

    @pytest.mark.asyncio
    async def test_backend_failure_stores_classified_message(self, config):
        session, _ = _session(config, fake_genai_client(error=RuntimeError("413 Payload Too Large")))
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        assert session.status == AnalysisStatus.ERROR
        assert session.error == PAYLOAD_TOO_LARGE_MESSAGE
        assert session.result is None

    @pytest.mark.asyncio
    async def test_encode_failure_sends_nothing(self, config):
        fake = fake_genai_client()
        session, _ = _session(config, fake)
        broken = MediaFile(name="b.mp4", size=10, mime_type="video/mp4", loader=_broken_loader)
        session.select_files([make_media("a.mp4", 1), broken])
        await session.trigger()
        assert session.status == AnalysisStatus.ERROR
        assert "b.mp4" in session.error
        assert fake.aio.models.generate_content.await_count == 0

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_state(self, config):
        analyst = AnalystAgent(config)
        analyst.analyze = AsyncMock(side_effect=RuntimeError())
        session = AnalysisSession(config, analyst=analyst)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        assert session.status == AnalysisStatus.ERROR
        assert session.error == "Failed to analyze video."

    @pytest.mark.asyncio
    async def test_error_state_can_retry(self, config):
        fake = fake_genai_client(error=RuntimeError("boom"))
        session, _ = _session(config, fake)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        assert session.status == AnalysisStatus.ERROR

        fake.aio.models.generate_content.side_effect = None
        assert await session.trigger() == "Overview\n..."
        assert session.status == AnalysisStatus.COMPLETED
        assert session.error is None


class TestEditsAndReset:
    @pytest.mark.asyncio
    async def test_empty_selection_keeps_outcome(self, config):
        session, transitions = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()

        session.select_files([])

        assert session.status == AnalysisStatus.COMPLETED
        assert session.result == "Overview\n..."
        assert transitions[-1] == AnalysisStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_retrigger_hides_previous_result_while_running(self, config):
        session, _ = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        seen = []

        async def recording_analyze(files, context):
            seen.append(session.snapshot()["result"])
            return "second report"

        session.analyst.analyze = recording_analyze
        assert await session.trigger() == "second report"
        assert seen == [None]

    @pytest.mark.asyncio
    async def test_editing_after_completion_returns_to_idle(self, config):
        session, _ = _session(config)
        session.select_files([make_media("a.mp4", 1), make_media("b.mp4", 1)])
        await session.trigger()

        session.remove_file(0)

        assert session.status == AnalysisStatus.IDLE
        assert session.result is None
        assert [f.name for f in session.working_set] == ["b.mp4"]

    @pytest.mark.asyncio
    async def test_rejected_edit_keeps_result(self, config):
        session, _ = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        with pytest.raises(ValidationError):
            session.select_files([make_media("notes.txt", 1, mime_type="text/plain")])
        assert session.status == AnalysisStatus.COMPLETED
        assert session.result == "Overview\n..."

    @pytest.mark.asyncio
    async def test_start_new_clears_everything(self, config):
        session, _ = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        session.set_context("Fitness tracker")
        await session.trigger()

        session.start_new()

        snap = session.snapshot()
        assert snap["status"] == AnalysisStatus.IDLE
        assert snap["part_count"] == 0
        assert snap["context"] == ""
        assert snap["result"] is None

    @pytest.mark.asyncio
    async def test_no_second_trigger_while_analyzing(self, config):
        session, _ = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        observed = []

        async def slow_analyze(files, context):
            observed.append(session.status)
            with pytest.raises(SessionBusyError):
                await session.trigger()
            with pytest.raises(SessionBusyError):
                session.select_files([make_media("b.mp4", 1)])
            return "done"

        session.analyst.analyze = slow_analyze
        assert await session.trigger() == "done"
        assert observed == [AnalysisStatus.ANALYZING]
        assert len(session.working_set) == 1

    @pytest.mark.asyncio
    async def test_settle_delay_keeps_transition_order(self):
        config = AnalyzerConfig(api_key="k", settle_delay_seconds=0.01)
        session, transitions = _session(config)
        session.select_files([make_media("a.mp4", 1)])
        await session.trigger()
        assert transitions == [AnalysisStatus.PREPARING, AnalysisStatus.ANALYZING, AnalysisStatus.COMPLETED]


class TestAnalyzeFacade:
    @pytest.mark.asyncio
    async def test_context_flows_into_request(self, config):
        fake = fake_genai_client(text="report")
        analyst = AnalystAgent(config, gemini_client=GeminiClient(config, client=fake))
        assert await analyst.analyze([make_media("a.mp4", 1)], "Recipe app") == "report"
        contents = fake.aio.models.generate_content.await_args.kwargs["contents"]
        assert contents[0].text.startswith('Context provided by user: "Recipe app".')

    @pytest.mark.asyncio
    async def test_module_analyze_reports_missing_credential(self):
        from utils.errors import MissingCredentialError

        with pytest.raises(MissingCredentialError):
            await analyze([make_media("a.mp4", 1)], "")
