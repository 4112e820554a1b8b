"""Finance domain: transactions, budgets, expenses and portfolio holdings."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from recordhub.api.v1.records import add_record_routes
from recordhub.api.v1.uploads import read_text_upload
from recordhub.core.config import settings
from recordhub.dependencies import get_log_analysis_service
from recordhub.schemas.triplets import FinanceLogAnalysisResponse, UploadedFile
from recordhub.services.log_analysis_service import FINANCE, LogAnalysisService
from recordhub.services.records import families

router = APIRouter()

add_record_routes(router, "/transactions", families.TRANSACTIONS)
add_record_routes(router, "/budgets", families.BUDGETS)
add_record_routes(router, "/expenses", families.EXPENSES)
add_record_routes(router, "/portfolio", families.PORTFOLIO_ITEMS)


@router.post(
    "/analyze-logs",
    response_model=FinanceLogAnalysisResponse,
    summary="Screen a log file for financial events",
    operation_id="analyze_finance_logs",
)
async def analyze_finance_logs(
    analysis_service: Annotated[LogAnalysisService, Depends(get_log_analysis_service)],
    file: Optional[UploadFile] = File(None, description="Text, log or JSON file"),
) -> FinanceLogAnalysisResponse:
    """Keyword screening plus a model narrative when financial terms appear."""
    upload = await read_text_upload(file, settings.max_upload_bytes)
    result = await analysis_service.analyze(upload.content, FINANCE)

    return FinanceLogAnalysisResponse(
        analysis=result.analysis,
        has_finance_content=result.has_domain_content,
        file_info=UploadedFile(name=upload.name, size=upload.size),
    )
