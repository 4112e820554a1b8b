from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recordhub.database.models import ExtractedTriplet, LogFile
from recordhub.repositories.base_repository import BaseRepository
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)


class LogFileRepository(BaseRepository[LogFile]):
    """Repository for uploaded log files (source records)."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, LogFile)

    async def create_log_file(
        self,
        *,
        file_name: str,
        file_size: int,
        raw_content: str,
        summary: str,
        content_hash: str,
        uploaded_at: datetime,
    ) -> LogFile:
        """Store a freshly uploaded log file with status ``uploaded``."""
        return await self.create(
            timestamp=uploaded_at,
            agent="LogFileUpload",
            summary=summary,
            content_hash=content_hash,
            file_name=file_name,
            file_size=file_size,
            raw_content=raw_content,
            status="uploaded",
        )

    async def mark_analyzed(
        self,
        log_file_id: int,
        extracted_count: int,
        analyzed_at: datetime,
        summary: Optional[str] = None,
    ) -> Optional[LogFile]:
        """Flip a log file to ``analyzed`` and stamp the analysis counters."""
        return await self.update(
            log_file_id,
            status="analyzed",
            extracted_count=extracted_count,
            analysis_timestamp=analyzed_at,
            analysis_summary=summary,
        )

    async def list_newest_first(self) -> List[LogFile]:
        return await self.get_all(order_by=[LogFile.timestamp.desc(), LogFile.id.desc()])


class ExtractedTripletRepository(BaseRepository[ExtractedTriplet]):
    """Repository for triplets derived from log files."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ExtractedTriplet)

    async def create_batch(self, rows: List[Dict[str, Any]]) -> List[ExtractedTriplet]:
        """Insert all triplets of one analysis run together."""
        if not rows:
            return []
        LOGGER.info(f"Storing {len(rows)} extracted triplets")
        return await self.create_many(rows)

    async def list_for_source(self, source_log_id: int) -> List[ExtractedTriplet]:
        """Triplets derived from ``source_log_id``, newest first."""
        return await self.get_all(
            filters={"source_log_id": source_log_id},
            order_by=[ExtractedTriplet.timestamp.desc(), ExtractedTriplet.id.desc()],
        )

    async def delete_for_source(self, source_log_id: int, commit: bool = True) -> int:
        """Remove every triplet previously derived from ``source_log_id``.

        With ``commit=False`` the deletion joins the current transaction.
        """
        deleted = await self.delete_where(commit=commit, source_log_id=source_log_id)
        LOGGER.info(
            f"Superseded {deleted} extracted triplets",
            extra={"source_log_id": source_log_id}
        )
        return deleted

    async def list_newest_first(self) -> List[ExtractedTriplet]:
        return await self.get_all(
            order_by=[ExtractedTriplet.timestamp.desc(), ExtractedTriplet.id.desc()]
        )
