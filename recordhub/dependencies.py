"""Centralized dependency injection for the FastAPI application.

Handlers never touch module-level state directly: the database session,
repositories, services and the owner identity all arrive through the
factories below, so tests can replace any of them with
``app.dependency_overrides``.
"""

from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from recordhub.core.config import settings
from recordhub.core.database import get_async_session
from recordhub.repositories.record_repository import RecordRepository
from recordhub.repositories.triplet_repository import ExtractedTripletRepository, LogFileRepository
from recordhub.services.extraction.triplet_extraction_service import TripletExtractionService
from recordhub.services.log_analysis_service import LogAnalysisService
from recordhub.services.records.record_service import OwnedRecordService, RecordFamily
from recordhub.services.triplet_service import TripletService


async def get_owner_id() -> int:
    """Get the identity that owns every record created or listed.

    Returns:
        int: Owner identifier
    """
    return settings.default_owner_id


async def get_log_file_repository(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> LogFileRepository:
    """Get log file repository instance.

    Args:
        db_session: Database session from dependency injection

    Returns:
        LogFileRepository: Repository for uploaded log files
    """
    return LogFileRepository(db_session)


async def get_extracted_triplet_repository(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> ExtractedTripletRepository:
    """Get extracted triplet repository instance.

    Args:
        db_session: Database session from dependency injection

    Returns:
        ExtractedTripletRepository: Repository for derived triplets
    """
    return ExtractedTripletRepository(db_session)


async def get_triplet_extraction_service() -> TripletExtractionService:
    """Get triplet extraction service instance.

    The LLM client is created on first use, so requests that never reach the
    model do not need a configured provider.

    Returns:
        TripletExtractionService: Service wrapping the configured LLM provider
    """
    return TripletExtractionService(settings=settings)


async def get_triplet_service(
    log_file_repository: Annotated[LogFileRepository, Depends(get_log_file_repository)],
    triplet_repository: Annotated[ExtractedTripletRepository, Depends(get_extracted_triplet_repository)],
    extraction_service: Annotated[TripletExtractionService, Depends(get_triplet_extraction_service)],
) -> TripletService:
    """Get triplet lifecycle service instance with all dependencies."""
    return TripletService(
        log_file_repository=log_file_repository,
        triplet_repository=triplet_repository,
        extraction_service=extraction_service,
    )


async def get_log_analysis_service(
    extraction_service: Annotated[TripletExtractionService, Depends(get_triplet_extraction_service)],
) -> LogAnalysisService:
    """Get domain log analysis service instance."""
    return LogAnalysisService(
        extraction_service=extraction_service,
        char_limit=settings.log_analysis_char_limit,
    )


def record_service_dependency(family: RecordFamily) -> Callable[..., OwnedRecordService]:
    """Build the dependency that yields the service for one record family.

    Args:
        family: Record family definition

    Returns:
        Dependency callable resolving to an ``OwnedRecordService``
    """

    async def get_record_service(
        db_session: Annotated[AsyncSession, Depends(get_async_session)]
    ) -> OwnedRecordService:
        return OwnedRecordService(family, RecordRepository(db_session, family.model))

    get_record_service.__name__ = f"get_{family.model.__tablename__}_service"
    return get_record_service
