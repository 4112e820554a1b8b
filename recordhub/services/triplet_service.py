"""Lifecycle of uploaded log files and the triplets derived from them.

A log file is stored as ``uploaded``. Analyzing it writes one derived record
per extracted triplet and flips the file to ``analyzed``, also when nothing
was extracted. Analyzing again appends another set of derived records; pass
``supersede=True`` to replace the previous set instead.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Union

from recordhub.core.exceptions import NotFoundError, ValidationError
from recordhub.database.models import ExtractedTriplet, LogFile
from recordhub.prompts.system_prompts import TRIPLET_INSIGHTS_PROMPT
from recordhub.repositories.triplet_repository import ExtractedTripletRepository, LogFileRepository
from recordhub.services.extraction.triplet_extraction_service import TripletExtractionService
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

NO_TRIPLETS_MESSAGE = "No triplets found for analysis. Please analyze the log file first."
PATTERN_PREVIEW_SIZE = 5

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def build_content_hash(file_name: str, uploaded_at: datetime) -> str:
    """Display label for an upload: ``logfile_<epoch-ms>_<sanitized name>``.

    This is not a digest of the content.
    """
    epoch_ms = int(uploaded_at.timestamp() * 1000)
    return f"logfile_{epoch_ms}_{_UNSAFE_FILENAME_CHARS.sub('_', file_name)}"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def first_distinct(values: Iterable[str], limit: int = PATTERN_PREVIEW_SIZE) -> List[str]:
    """The first ``limit`` distinct values in encounter order.

    No frequency ranking is applied.
    """
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
            if len(seen) == limit:
                break
    return seen


@dataclass
class AnalysisOutcome:
    log_file: LogFile
    extracted: List[ExtractedTriplet]
    summary: str

    @property
    def extracted_count(self) -> int:
        return len(self.extracted)


@dataclass
class InsightsOutcome:
    insights: str
    triplet_count: int
    most_common_subjects: List[str] = field(default_factory=list)
    most_common_predicates: List[str] = field(default_factory=list)
    most_common_objects: List[str] = field(default_factory=list)

    @property
    def has_triplets(self) -> bool:
        return self.triplet_count > 0


class TripletService:
    """Coordinates log file storage, extraction and insight generation."""

    def __init__(
        self,
        log_file_repository: LogFileRepository,
        triplet_repository: ExtractedTripletRepository,
        extraction_service: TripletExtractionService,
    ):
        self.log_files = log_file_repository
        self.triplets = triplet_repository
        self.extraction = extraction_service

    async def ingest(self, content: str, file_name: str, size: int) -> LogFile:
        """Store an uploaded log file.

        Raises:
            ValidationError: If the content is empty or only whitespace
        """
        if not content or not content.strip():
            raise ValidationError("File is empty")

        uploaded_at = datetime.now(timezone.utc)
        log_file = await self.log_files.create_log_file(
            file_name=file_name,
            file_size=size,
            raw_content=content,
            summary=f"Log file: {file_name} ({size / 1024:.1f} KB)",
            content_hash=build_content_hash(file_name, uploaded_at),
            uploaded_at=uploaded_at,
        )
        LOGGER.info(
            "Stored uploaded log file",
            extra={"log_file_id": log_file.id, "file_name": file_name, "file_size": size}
        )
        return log_file

    async def get_log_file(self, log_file_id: int) -> LogFile:
        log_file = await self.log_files.get_by_id(log_file_id)
        if log_file is None:
            raise NotFoundError("Log file not found")
        return log_file

    async def analyze(self, log_file_id: int, supersede: bool = False) -> AnalysisOutcome:
        """Extract triplets from a stored log file and persist them.

        Args:
            log_file_id: Source log file identifier
            supersede: Delete triplets from earlier analyses first

        Raises:
            NotFoundError: If the log file does not exist
            ValidationError: If the log file has no content to analyze
            LLMServiceError: If the model could not be reached
        """
        log_file = await self.get_log_file(log_file_id)
        if not log_file.raw_content or not log_file.raw_content.strip():
            raise ValidationError("No log content found for analysis")

        result = await self.extraction.extract_triplets(log_file.raw_content)

        if supersede:
            # Committed together with the replacement rows (or the status update)
            await self.triplets.delete_for_source(log_file.id, commit=False)

        extracted_at = datetime.now(timezone.utc)
        epoch_ms = int(extracted_at.timestamp() * 1000)
        rows = [
            {
                "timestamp": extracted_at,
                "agent": "LogAnalyzer",
                "summary": (
                    f"Analysis of {log_file.file_name}: "
                    f"{triplet.subject} → {triplet.predicate} → {triplet.object}"
                ),
                "content_hash": f"analysis_{epoch_ms}_{index}",
                "source_log_id": log_file.id,
                "source_file": log_file.file_name,
                "subject": triplet.subject,
                "predicate": triplet.predicate,
                "object": triplet.object,
                "confidence": triplet.confidence,
            }
            for index, triplet in enumerate(result.triplets)
        ]
        extracted = await self.triplets.create_batch(rows)

        updated = await self.log_files.mark_analyzed(
            log_file.id,
            extracted_count=len(extracted),
            analyzed_at=extracted_at,
            summary=result.summary,
        )
        LOGGER.info(
            "Log file analyzed",
            extra={"log_file_id": log_file.id, "extracted_count": len(extracted)}
        )
        return AnalysisOutcome(log_file=updated or log_file, extracted=extracted, summary=result.summary)

    async def list_derived(self, log_file_id: int) -> List[ExtractedTriplet]:
        """Triplets derived from ``log_file_id``, newest first."""
        return await self.triplets.list_for_source(log_file_id)

    async def list_all(self) -> List[Union[LogFile, ExtractedTriplet]]:
        """Log files and derived triplets together, newest first."""
        records: List[Union[LogFile, ExtractedTriplet]] = [
            *await self.log_files.list_newest_first(),
            *await self.triplets.list_newest_first(),
        ]
        records.sort(key=lambda record: _as_utc(record.timestamp), reverse=True)
        return records

    async def insights(self, log_file_id: int) -> InsightsOutcome:
        """Summarize the triplets derived from a log file.

        Returns an explanatory message rather than an error when nothing has
        been extracted yet.
        """
        extracted = await self.triplets.list_for_source(log_file_id)
        if not extracted:
            return InsightsOutcome(insights=NO_TRIPLETS_MESSAGE, triplet_count=0)

        triplet_lines = "\n".join(
            f"{t.subject} → {t.predicate} → {t.object}" for t in extracted
        )
        insights = await self.extraction.generate_summary(
            TRIPLET_INSIGHTS_PROMPT.format(triplet_lines=triplet_lines)
        )

        return InsightsOutcome(
            insights=insights,
            triplet_count=len(extracted),
            most_common_subjects=first_distinct(t.subject for t in extracted),
            most_common_predicates=first_distinct(t.predicate for t in extracted),
            most_common_objects=first_distinct(t.object for t in extracted),
        )
