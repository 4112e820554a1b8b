"""Tests for keyword screening and narrative analysis of domain logs."""

from unittest.mock import AsyncMock

import pytest

from recordhub.services.extraction.triplet_extraction_service import TripletExtractionService
from recordhub.services.log_analysis_service import (
    FINANCE,
    HEALTHCARE,
    LogAnalysisService,
    match_keywords,
)


def test_match_keywords_is_case_insensitive():
    text = "PATIENT admitted; Blood Pressure recorded per hipaa policy"
    assert match_keywords(text, HEALTHCARE.keywords) == ["patient", "blood pressure", "HIPAA"]


def test_no_content_messages():
    assert HEALTHCARE.no_content_message == "No healthcare-related content detected in the uploaded logs."
    assert FINANCE.no_content_message == "No finance-related content detected in the uploaded logs."


@pytest.mark.asyncio
class TestLogAnalysisService:

    async def test_no_domain_content_skips_model(self):
        client = AsyncMock()
        service = LogAnalysisService(TripletExtractionService(llm_client=client))

        result = await service.analyze("disk usage at 40%", HEALTHCARE)

        assert result.has_domain_content is False
        assert result.analysis == HEALTHCARE.no_content_message
        client.generate_content.assert_not_awaited()

    async def test_domain_content_is_narrated(self):
        client = AsyncMock()
        client.generate_content.return_value = "A payment was refunded."
        service = LogAnalysisService(TripletExtractionService(llm_client=client), char_limit=20)

        result = await service.analyze("refund issued for payment 42 on account 7", FINANCE)

        assert result.has_domain_content is True
        assert result.analysis == "A payment was refunded."
        assert "payment" in result.matched_keywords
        prompt = client.generate_content.await_args.kwargs["contents"]
        assert "refund issued for pa" in prompt
        assert "account 7" not in prompt

    async def test_model_failure_uses_keyword_fallback(self):
        client = AsyncMock()
        client.generate_content.side_effect = RuntimeError("no key")
        service = LogAnalysisService(TripletExtractionService(llm_client=client))

        result = await service.analyze(
            "patient seen by doctor at clinic; diagnosis pending; treatment plan; medication given",
            HEALTHCARE,
        )

        assert result.has_domain_content is True
        assert result.analysis == (
            "Healthcare content detected including: patient, doctor, clinic, diagnosis, treatment. "
            "Enable AI analysis for deeper insights."
        )
