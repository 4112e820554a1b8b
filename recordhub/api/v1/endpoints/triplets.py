"""Log file upload, triplet extraction and insight endpoints."""

from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, File, Query, UploadFile
from pydantic import Field

from recordhub.api.v1.uploads import read_text_upload
from recordhub.core.config import settings
from recordhub.database.models import LogFile
from recordhub.dependencies import get_triplet_service
from recordhub.schemas.triplets import (
    AnalyzeResponse,
    ExtractedListResponse,
    ExtractedTripletRead,
    FileInfo,
    InsightsResponse,
    LogFileRead,
    TripletPatterns,
    UploadResponse,
)
from recordhub.services.triplet_service import TripletService
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

TripletRecord = Annotated[Union[LogFileRead, ExtractedTripletRead], Field(discriminator="type")]


@router.get(
    "",
    response_model=List[TripletRecord],
    summary="List log files and extracted triplets",
    operation_id="list_triplet_records",
)
async def list_triplet_records(
    triplet_service: Annotated[TripletService, Depends(get_triplet_service)],
) -> List[Union[LogFileRead, ExtractedTripletRead]]:
    """Every stored log file and derived triplet, newest first."""
    records = await triplet_service.list_all()
    LOGGER.info(f"Found {len(records)} triplet records")
    return [
        LogFileRead.model_validate(record) if isinstance(record, LogFile)
        else ExtractedTripletRead.model_validate(record)
        for record in records
    ]


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload a log file",
    operation_id="upload_log_file",
)
async def upload_log_file(
    triplet_service: Annotated[TripletService, Depends(get_triplet_service)],
    file: Optional[UploadFile] = File(None, description="Text, log or JSON file"),
) -> UploadResponse:
    """Store an uploaded log file for later analysis."""
    upload = await read_text_upload(file, settings.max_upload_bytes)
    log_file = await triplet_service.ingest(upload.content, upload.name, upload.size)

    return UploadResponse(
        message="Log file uploaded and stored successfully",
        log_record=LogFileRead.model_validate(log_file),
        file_info=FileInfo(name=upload.name, size=upload.size, id=log_file.id),
    )


@router.post(
    "/{log_file_id}/analyze",
    response_model=AnalyzeResponse,
    summary="Extract triplets from a stored log file",
    operation_id="analyze_log_file",
)
async def analyze_log_file(
    log_file_id: int,
    triplet_service: Annotated[TripletService, Depends(get_triplet_service)],
    supersede: bool = Query(
        False,
        description="Replace triplets from earlier analyses instead of appending",
    ),
) -> AnalyzeResponse:
    """Run extraction and persist the derived triplets."""
    outcome = await triplet_service.analyze(log_file_id, supersede=supersede)

    message = (
        "Log file analyzed successfully"
        if outcome.extracted_count
        else "Log file analyzed but no triplets extracted"
    )
    return AnalyzeResponse(
        message=message,
        extracted_triplets=[ExtractedTripletRead.model_validate(t) for t in outcome.extracted],
        extracted_count=outcome.extracted_count,
        summary=outcome.summary,
        log_record=LogFileRead.model_validate(outcome.log_file),
    )


@router.get(
    "/{log_file_id}/extracted",
    response_model=ExtractedListResponse,
    summary="List triplets extracted from a log file",
    operation_id="list_extracted_triplets",
)
async def list_extracted_triplets(
    log_file_id: int,
    triplet_service: Annotated[TripletService, Depends(get_triplet_service)],
) -> ExtractedListResponse:
    extracted = await triplet_service.list_derived(log_file_id)
    return ExtractedListResponse(
        extracted_triplets=[ExtractedTripletRead.model_validate(t) for t in extracted],
        count=len(extracted),
    )


@router.post(
    "/{log_file_id}/insights",
    response_model=InsightsResponse,
    response_model_exclude_none=True,
    summary="Generate insights from extracted triplets",
    operation_id="generate_triplet_insights",
)
async def generate_triplet_insights(
    log_file_id: int,
    triplet_service: Annotated[TripletService, Depends(get_triplet_service)],
) -> InsightsResponse:
    outcome = await triplet_service.insights(log_file_id)
    patterns = None
    if outcome.has_triplets:
        patterns = TripletPatterns(
            most_common_subjects=outcome.most_common_subjects,
            most_common_predicates=outcome.most_common_predicates,
            most_common_objects=outcome.most_common_objects,
        )
    return InsightsResponse(
        insights=outcome.insights,
        triplet_count=outcome.triplet_count,
        patterns=patterns,
    )
