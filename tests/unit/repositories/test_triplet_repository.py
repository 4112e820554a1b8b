"""Tests for log file and extracted triplet persistence."""

from datetime import datetime, timedelta, timezone

import pytest

from recordhub.repositories.triplet_repository import ExtractedTripletRepository, LogFileRepository


def triplet_row(source_log_id: int, subject: str, timestamp: datetime) -> dict:
    return {
        "timestamp": timestamp,
        "agent": "LogAnalyzer",
        "summary": f"Analysis of app.log: {subject} → runs → job",
        "content_hash": f"analysis_{int(timestamp.timestamp() * 1000)}_0",
        "source_log_id": source_log_id,
        "source_file": "app.log",
        "subject": subject,
        "predicate": "runs",
        "object": "job",
        "confidence": 0.7,
    }


@pytest.mark.asyncio
class TestLogFileRepository:

    async def test_create_and_mark_analyzed(self, db_session):
        repo = LogFileRepository(db_session)
        uploaded_at = datetime.now(timezone.utc)

        log_file = await repo.create_log_file(
            file_name="app.log",
            file_size=12,
            raw_content="hello world\n",
            summary="Log file: app.log (0.0 KB)",
            content_hash="logfile_1_app.log",
            uploaded_at=uploaded_at,
        )
        assert log_file.status == "uploaded"

        updated = await repo.mark_analyzed(log_file.id, extracted_count=3, analyzed_at=uploaded_at, summary="ok")

        assert updated.status == "analyzed"
        assert updated.extracted_count == 3
        assert updated.analysis_summary == "ok"

    async def test_mark_analyzed_unknown_id(self, db_session):
        repo = LogFileRepository(db_session)
        assert await repo.mark_analyzed(404, extracted_count=0, analyzed_at=datetime.now(timezone.utc)) is None


@pytest.mark.asyncio
class TestExtractedTripletRepository:

    async def test_list_for_source_newest_first(self, db_session):
        repo = ExtractedTripletRepository(db_session)
        now = datetime.now(timezone.utc)
        await repo.create_batch([
            triplet_row(1, "older", now - timedelta(minutes=5)),
            triplet_row(1, "newer", now),
            triplet_row(2, "other", now),
        ])

        rows = await repo.list_for_source(1)

        assert [row.subject for row in rows] == ["newer", "older"]

    async def test_create_batch_empty(self, db_session):
        repo = ExtractedTripletRepository(db_session)
        assert await repo.create_batch([]) == []

    async def test_delete_for_source(self, db_session):
        repo = ExtractedTripletRepository(db_session)
        now = datetime.now(timezone.utc)
        await repo.create_batch([triplet_row(1, "a", now), triplet_row(2, "b", now)])

        deleted = await repo.delete_for_source(1)

        assert deleted == 1
        assert await repo.list_for_source(1) == []
        assert len(await repo.list_for_source(2)) == 1
