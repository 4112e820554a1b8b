"""Keyword screening and narrative analysis of domain log files."""

from dataclasses import dataclass
from typing import List, Tuple

from recordhub.prompts.system_prompts import (
    FINANCE_LOG_ANALYSIS_PROMPT,
    HEALTHCARE_LOG_ANALYSIS_PROMPT,
)
from recordhub.services.extraction.triplet_extraction_service import TripletExtractionService
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

MAX_LISTED_KEYWORDS = 5


@dataclass(frozen=True)
class LogDomain:
    """Vocabulary and wording for one analysis domain."""

    name: str
    label: str
    keywords: Tuple[str, ...]
    prompt_template: str

    @property
    def no_content_message(self) -> str:
        return f"No {self.name}-related content detected in the uploaded logs."


HEALTHCARE = LogDomain(
    name="healthcare",
    label="Healthcare",
    keywords=(
        "patient", "doctor", "nurse", "hospital", "clinic", "medical", "diagnosis", "treatment",
        "medication", "prescription", "surgery", "appointment", "vital signs", "blood pressure",
        "heart rate", "temperature", "symptoms", "disease", "illness", "therapy", "consent",
        "HIPAA", "EMR", "EHR", "lab results", "radiology", "pathology",
    ),
    prompt_template=HEALTHCARE_LOG_ANALYSIS_PROMPT,
)

FINANCE = LogDomain(
    name="finance",
    label="Financial",
    keywords=(
        "transaction", "payment", "transfer", "deposit", "withdrawal", "balance", "account",
        "credit", "debit", "loan", "interest", "fee", "charge", "refund", "invoice",
        "expense", "income", "revenue", "cost", "budget", "portfolio", "investment",
        "stock", "bond", "crypto", "bitcoin", "ethereum", "trading", "market",
        "bank", "ATM", "card", "currency", "exchange", "rate",
    ),
    prompt_template=FINANCE_LOG_ANALYSIS_PROMPT,
)


@dataclass
class LogAnalysis:
    analysis: str
    has_domain_content: bool
    matched_keywords: List[str]


def match_keywords(text: str, keywords: Tuple[str, ...]) -> List[str]:
    """Keywords that occur in ``text``, case-insensitively, in vocabulary order."""
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in lowered]


class LogAnalysisService:
    """Screens a log for domain vocabulary and narrates it with the model."""

    def __init__(self, extraction_service: TripletExtractionService, char_limit: int = 2000):
        self.extraction = extraction_service
        self.char_limit = char_limit

    async def analyze(self, content: str, domain: LogDomain) -> LogAnalysis:
        matched = match_keywords(content, domain.keywords)
        if not matched:
            return LogAnalysis(
                analysis=domain.no_content_message,
                has_domain_content=False,
                matched_keywords=[],
            )

        LOGGER.info(
            f"{domain.label} content detected",
            extra={"matched_keywords": matched[:MAX_LISTED_KEYWORDS]}
        )
        fallback = (
            f"{domain.label} content detected including: "
            f"{', '.join(matched[:MAX_LISTED_KEYWORDS])}. Enable AI analysis for deeper insights."
        )
        analysis = await self.extraction.generate_summary(
            domain.prompt_template.format(log_excerpt=content[:self.char_limit]),
            fallback=fallback,
        )
        return LogAnalysis(analysis=analysis, has_domain_content=True, matched_keywords=matched)
