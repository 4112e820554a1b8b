"""Schemas for log files, extracted triplets and pipeline responses."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Triplet(BaseModel):
    """One subject-predicate-object relationship as returned by the model."""

    subject: str = ""
    predicate: str = ""
    object: str = ""
    confidence: float = 0.0

    @classmethod
    def from_model_output(cls, item: Dict[str, Any]) -> "Triplet":
        """Build a triplet from a loosely typed JSON object.

        Missing strings become ``""``; a missing or non-numeric confidence
        becomes ``0.0``. Values are taken as given otherwise.
        """
        try:
            confidence = float(item.get("confidence", 0.0))
        except (TypeError, ValueError):
            confidence = 0.0
        return cls(
            subject=str(item.get("subject") or ""),
            predicate=str(item.get("predicate") or ""),
            object=str(item.get("object") or ""),
            confidence=confidence,
        )


class TripletExtractionResult(BaseModel):
    """Structured result of one extraction call. Never contains nulls."""

    triplets: List[Triplet] = Field(default_factory=list)
    summary: str
    agent: str


class LogFileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: Literal["log_file"] = "log_file"
    id: int
    timestamp: datetime
    agent: str
    summary: str
    content_hash: str
    file_name: str
    file_size: int
    raw_content: str
    status: str
    extracted_count: Optional[int] = None
    analysis_timestamp: Optional[datetime] = None
    analysis_summary: Optional[str] = None


class ExtractedTripletRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: Literal["extracted_triplet"] = "extracted_triplet"
    id: int
    timestamp: datetime
    agent: str
    summary: str
    content_hash: str
    source_log_id: int
    source_file: str
    subject: str
    predicate: str
    object: str
    confidence: float


class UploadedFile(BaseModel):
    name: str
    size: int


class FileInfo(UploadedFile):
    id: Optional[int] = None


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    log_record: LogFileRead
    file_info: FileInfo


class AnalyzeResponse(BaseModel):
    success: bool = True
    message: str
    extracted_triplets: List[ExtractedTripletRead]
    extracted_count: int
    summary: str
    log_record: LogFileRead


class ExtractedListResponse(BaseModel):
    success: bool = True
    extracted_triplets: List[ExtractedTripletRead]
    count: int


class TripletPatterns(BaseModel):
    """First distinct values per field, in encounter order."""

    most_common_subjects: List[str]
    most_common_predicates: List[str]
    most_common_objects: List[str]


class InsightsResponse(BaseModel):
    success: bool = True
    insights: str
    triplet_count: int
    patterns: Optional[TripletPatterns] = None


class HealthcareLogAnalysisResponse(BaseModel):
    success: bool = True
    analysis: str
    has_healthcare_content: bool
    file_info: UploadedFile


class FinanceLogAnalysisResponse(BaseModel):
    success: bool = True
    analysis: str
    has_finance_content: bool
    file_info: UploadedFile
