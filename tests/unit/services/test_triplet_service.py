"""Tests for the log file lifecycle: ingest, analyze, list and insights."""

from datetime import datetime, timezone

import pytest

from recordhub.core.exceptions import DatabaseError, LLMServiceError, NotFoundError, ValidationError
from recordhub.repositories.triplet_repository import ExtractedTripletRepository, LogFileRepository
from recordhub.services.triplet_service import (
    NO_TRIPLETS_MESSAGE,
    TripletService,
    build_content_hash,
    first_distinct,
)


@pytest.fixture
def triplet_service(db_session, extraction_service) -> TripletService:
    return TripletService(
        log_file_repository=LogFileRepository(db_session),
        triplet_repository=ExtractedTripletRepository(db_session),
        extraction_service=extraction_service,
    )


def test_build_content_hash_sanitizes_name():
    uploaded_at = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    content_hash = build_content_hash("my app (1).log", uploaded_at)

    assert content_hash == f"logfile_{int(uploaded_at.timestamp() * 1000)}_my_app__1_.log"


def test_first_distinct_keeps_encounter_order():
    values = ["b", "a", "b", "c", "d", "a", "e", "f", "g"]
    assert first_distinct(values, limit=5) == ["b", "a", "c", "d", "e"]


@pytest.mark.asyncio
class TestTripletService:

    async def test_ingest_stores_uploaded_file(self, triplet_service, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 2048)

        assert log_file.id is not None
        assert log_file.status == "uploaded"
        assert log_file.raw_content == sample_log
        assert log_file.summary == "Log file: app.log (2.0 KB)"
        assert log_file.agent == "LogFileUpload"
        assert log_file.content_hash.startswith("logfile_")
        assert log_file.extracted_count is None
        assert await triplet_service.list_derived(log_file.id) == []

    async def test_ingest_rejects_empty_content(self, triplet_service):
        with pytest.raises(ValidationError, match="File is empty"):
            await triplet_service.ingest("   \n", "empty.log", 4)

    async def test_analyze_persists_triplets_and_marks_file(self, triplet_service, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", len(sample_log))

        outcome = await triplet_service.analyze(log_file.id)

        assert outcome.extracted_count == 2
        assert outcome.summary == "Login followed by a payment database timeout"
        assert outcome.log_file.status == "analyzed"
        assert outcome.log_file.extracted_count == 2
        assert outcome.log_file.analysis_timestamp is not None

        first = outcome.extracted[0]
        assert first.source_log_id == log_file.id
        assert first.source_file == "app.log"
        assert first.agent == "LogAnalyzer"
        assert first.summary == "Analysis of app.log: alice → logged_in_to → auth-service"
        assert first.content_hash.endswith("_0")

        derived = await triplet_service.list_derived(log_file.id)
        assert len(derived) == 2

    async def test_analyze_with_no_triplets_still_marks_analyzed(self, triplet_service, mock_llm_client, sample_log):
        mock_llm_client.generate_content.return_value = '{"triplets": [], "summary": "nothing notable"}'
        log_file = await triplet_service.ingest(sample_log, "quiet.log", 10)

        outcome = await triplet_service.analyze(log_file.id)

        assert outcome.extracted_count == 0
        assert outcome.log_file.status == "analyzed"
        assert outcome.log_file.extracted_count == 0
        assert outcome.log_file.analysis_summary == "nothing notable"

    async def test_analyze_unparseable_reply_stores_fallback_triplet(self, triplet_service, mock_llm_client, sample_log):
        mock_llm_client.generate_content.return_value = "Sorry, I can't help with that."
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)

        outcome = await triplet_service.analyze(log_file.id)

        assert outcome.extracted_count == 1
        assert outcome.extracted[0].subject == "log_file"
        assert outcome.extracted[0].confidence == 0.8

    async def test_analyze_unknown_file(self, triplet_service):
        with pytest.raises(NotFoundError, match="Log file not found"):
            await triplet_service.analyze(999)

    async def test_analyze_whitespace_content(self, triplet_service, db_session, mock_llm_client):
        log_file = await LogFileRepository(db_session).create_log_file(
            file_name="blank.log",
            file_size=3,
            raw_content="   ",
            summary="Log file: blank.log (0.0 KB)",
            content_hash="logfile_0_blank.log",
            uploaded_at=datetime.now(timezone.utc),
        )

        with pytest.raises(ValidationError, match="No log content found for analysis"):
            await triplet_service.analyze(log_file.id)
        mock_llm_client.generate_content.assert_not_awaited()

    async def test_analyze_model_failure_leaves_file_uploaded(self, triplet_service, mock_llm_client, sample_log):
        mock_llm_client.generate_content.side_effect = RuntimeError("connection refused")
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)

        with pytest.raises(LLMServiceError):
            await triplet_service.analyze(log_file.id)

        stored = await triplet_service.get_log_file(log_file.id)
        assert stored.status == "uploaded"
        assert await triplet_service.list_derived(log_file.id) == []

    async def test_reanalysis_appends_by_default(self, triplet_service, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)

        await triplet_service.analyze(log_file.id)
        outcome = await triplet_service.analyze(log_file.id)

        assert outcome.extracted_count == 2
        assert len(await triplet_service.list_derived(log_file.id)) == 4

    async def test_reanalysis_with_supersede_replaces(self, triplet_service, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)

        await triplet_service.analyze(log_file.id)
        await triplet_service.analyze(log_file.id, supersede=True)

        assert len(await triplet_service.list_derived(log_file.id)) == 2

    async def test_supersede_keeps_previous_triplets_when_insert_fails(
        self, triplet_service, db_session, monkeypatch, sample_log
    ):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)
        await triplet_service.analyze(log_file.id)

        async def failing_create_many(rows):
            await db_session.rollback()
            raise DatabaseError("Failed to save ExtractedTriplet records")

        monkeypatch.setattr(triplet_service.triplets, "create_many", failing_create_many)

        with pytest.raises(DatabaseError):
            await triplet_service.analyze(log_file.id, supersede=True)

        monkeypatch.undo()
        assert len(await triplet_service.list_derived(log_file.id)) == 2

    async def test_list_all_includes_both_record_kinds(self, triplet_service, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)
        await triplet_service.analyze(log_file.id)

        records = await triplet_service.list_all()

        assert len(records) == 3
        timestamps = [r.timestamp.replace(tzinfo=None) for r in records]
        assert timestamps == sorted(timestamps, reverse=True)

    async def test_insights_without_triplets(self, triplet_service, mock_llm_client, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)

        outcome = await triplet_service.insights(log_file.id)

        assert outcome.insights == NO_TRIPLETS_MESSAGE
        assert outcome.triplet_count == 0
        assert not outcome.has_triplets
        mock_llm_client.generate_content.assert_not_awaited()

    async def test_insights_summarizes_triplets(self, triplet_service, mock_llm_client, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)
        await triplet_service.analyze(log_file.id)
        mock_llm_client.generate_content.return_value = "Auth is fine; payments are timing out."

        outcome = await triplet_service.insights(log_file.id)

        assert outcome.insights == "Auth is fine; payments are timing out."
        assert outcome.triplet_count == 2
        assert sorted(outcome.most_common_subjects) == ["alice", "payment-service"]
        assert sorted(outcome.most_common_predicates) == ["logged_in_to", "timed_out_on"]
        prompt = mock_llm_client.generate_content.await_args.kwargs["contents"]
        assert "alice → logged_in_to → auth-service" in prompt

    async def test_insights_fall_back_when_model_fails(self, triplet_service, mock_llm_client, sample_log):
        log_file = await triplet_service.ingest(sample_log, "app.log", 10)
        await triplet_service.analyze(log_file.id)
        mock_llm_client.generate_content.side_effect = RuntimeError("down")

        outcome = await triplet_service.insights(log_file.id)

        assert outcome.insights == "Log file summary"
        assert outcome.triplet_count == 2
