"""LLM-backed triplet extraction and summary generation.

Two calls share one client:

* ``extract_triplets`` turns log text into subject-predicate-object triplets.
  An unparseable reply degrades to a single placeholder triplet; only failures
  to reach the model are raised.
* ``generate_summary`` produces a short narrative and never raises.
"""

from typing import Optional

from recordhub.core.config import Settings, settings as default_settings
from recordhub.core.exceptions import AppError, LLMServiceError
from recordhub.core.llm_client import LLMClient, create_llm_client_from_settings
from recordhub.prompts.system_prompts import (
    LOG_SUMMARY_PROMPT,
    TRIPLET_EXTRACTION_PROMPT,
    TRUNCATION_MARKER,
)
from recordhub.schemas.triplets import Triplet, TripletExtractionResult
from recordhub.utils.json_parser import parse_json_safely
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_AGENT = "CohereExtractor"
DEFAULT_SUMMARY = "Log analysis summary"
DEFAULT_LOG_SUMMARY = "Log file summary"

FALLBACK_TRIPLET = Triplet(
    subject="log_file",
    predicate="contains",
    object="system_events",
    confidence=0.8,
)
FALLBACK_SUMMARY = "Log file processed - JSON parsing failed"

EXTRACTION_GENERATION_CONFIG = {"max_output_tokens": 1000, "temperature": 0.3}
SUMMARY_GENERATION_CONFIG = {"max_output_tokens": 100, "temperature": 0.2}


def build_extraction_prompt(text: str, char_limit: int = 4000) -> str:
    """Embed at most ``char_limit`` characters of ``text`` in the extraction prompt.

    A truncation marker follows the excerpt whenever text was cut, so the
    model does not mistake the prefix for the whole log.
    """
    if len(text) > char_limit:
        log_content = f"{text[:char_limit]} {TRUNCATION_MARKER}"
    else:
        log_content = text
    return TRIPLET_EXTRACTION_PROMPT.format(log_content=log_content)


def fallback_result() -> TripletExtractionResult:
    return TripletExtractionResult(
        triplets=[FALLBACK_TRIPLET.model_copy()],
        summary=FALLBACK_SUMMARY,
        agent=DEFAULT_AGENT,
    )


def parse_extraction_response(response_text: str) -> TripletExtractionResult:
    """Turn a free-form model reply into a structured result.

    Args:
        response_text: Raw text returned by the model

    Returns:
        The parsed result, with defaults for missing fields, or the fallback
        result when no JSON object can be recovered
    """
    parsed = parse_json_safely(response_text)
    if not isinstance(parsed, dict):
        LOGGER.warning("Model response was not a JSON object, using fallback triplet")
        return fallback_result()

    raw_triplets = parsed.get("triplets") or []
    if not isinstance(raw_triplets, list):
        raw_triplets = []

    triplets = [
        Triplet.from_model_output(item)
        for item in raw_triplets
        if isinstance(item, dict)
    ]

    return TripletExtractionResult(
        triplets=triplets,
        summary=str(parsed.get("summary") or DEFAULT_SUMMARY),
        agent=str(parsed.get("agent") or DEFAULT_AGENT),
    )


class TripletExtractionService:
    """Prompt assembly, model invocation and tolerant parsing."""

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the service.

        Args:
            llm_client: Client to use; built from settings on first use if omitted
            settings: Application settings (defaults to the global instance)
        """
        self.settings = settings or default_settings
        self._llm_client = llm_client

    def _get_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = create_llm_client_from_settings(self.settings)
        return self._llm_client

    async def extract_triplets(self, text: str) -> TripletExtractionResult:
        """Extract triplets, a summary and an agent label from log text.

        Raises:
            LLMServiceError: If the model cannot be reached or is not configured
        """
        prompt = build_extraction_prompt(text, self.settings.triplet_prompt_char_limit)

        try:
            client = self._get_client()
            LOGGER.info(
                "Requesting triplet extraction",
                extra={"text_length": len(text), "prompt_length": len(prompt)}
            )
            response_text = await client.generate_content(
                contents=prompt,
                generation_config=EXTRACTION_GENERATION_CONFIG,
            )
        except AppError as e:
            LOGGER.error(f"Error extracting triplets: {e}")
            raise LLMServiceError(f"Failed to extract triplets from text: {e.message}", e) from e
        except Exception as e:
            LOGGER.error(f"Error extracting triplets: {e}", exc_info=True)
            raise LLMServiceError(f"Failed to extract triplets from text: {e}", e) from e

        LOGGER.debug(f"Model response received: {(response_text or '')[:200]}")
        return parse_extraction_response(response_text or "")

    async def generate_summary(self, text: str, fallback: str = DEFAULT_LOG_SUMMARY) -> str:
        """Summarize ``text`` in one sentence.

        Never raises: any failure, or an empty reply, yields ``fallback``.
        """
        try:
            client = self._get_client()
            response_text = await client.generate_content(
                contents=LOG_SUMMARY_PROMPT.format(text=text),
                generation_config=SUMMARY_GENERATION_CONFIG,
            )
        except Exception as e:
            LOGGER.warning(f"Error generating summary, using fallback: {e}")
            return fallback

        return (response_text or "").strip() or fallback
