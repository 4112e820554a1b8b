"""Health domain: records, appointments, medications, diagnoses, consents, treatments."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from recordhub.api.v1.records import add_record_routes
from recordhub.api.v1.uploads import read_text_upload
from recordhub.core.config import settings
from recordhub.dependencies import get_log_analysis_service
from recordhub.schemas.triplets import HealthcareLogAnalysisResponse, UploadedFile
from recordhub.services.log_analysis_service import HEALTHCARE, LogAnalysisService
from recordhub.services.records import families

router = APIRouter()

add_record_routes(router, "/records", families.HEALTH_RECORDS)
add_record_routes(router, "/appointments", families.APPOINTMENTS)
add_record_routes(router, "/medications", families.MEDICATIONS)
add_record_routes(router, "/ai-diagnoses", families.AI_DIAGNOSES)
add_record_routes(router, "/patient-consents", families.PATIENT_CONSENTS)
add_record_routes(router, "/treatment-actions", families.TREATMENT_ACTIONS)


@router.post(
    "/analyze-logs",
    response_model=HealthcareLogAnalysisResponse,
    summary="Screen a log file for healthcare events",
    operation_id="analyze_healthcare_logs",
)
async def analyze_healthcare_logs(
    analysis_service: Annotated[LogAnalysisService, Depends(get_log_analysis_service)],
    file: Optional[UploadFile] = File(None, description="Text, log or JSON file"),
) -> HealthcareLogAnalysisResponse:
    """Keyword screening plus a model narrative when healthcare terms appear."""
    upload = await read_text_upload(file, settings.max_upload_bytes)
    result = await analysis_service.analyze(upload.content, HEALTHCARE)

    return HealthcareLogAnalysisResponse(
        analysis=result.analysis,
        has_healthcare_content=result.has_domain_content,
        file_info=UploadedFile(name=upload.name, size=upload.size),
    )
