"""LLM provider clients.

Every client exposes the same coroutine::

    await client.generate_content(contents, system_instruction=None, generation_config=None)

``generation_config`` understands ``temperature`` and ``max_output_tokens``.
Failures surface as ``APIClientError`` (or ``APITimeoutError``); callers decide
whether to degrade or propagate.
"""

import asyncio
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union

import httpx
from google import genai
from google.genai import types
from httpx import HTTPStatusError, TimeoutException

from recordhub.core.config import Settings
from recordhub.core.exceptions import APIClientError, APITimeoutError, ConfigurationError
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

Contents = Union[str, List[Union[str, Dict[str, Any]]]]


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    COHERE = "cohere"
    GEMINI = "gemini"
    OPENROUTER = "openrouter"


class LLMClient(Protocol):
    """Interface shared by every provider client."""

    async def generate_content(
        self,
        contents: Contents,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        ...


def _flatten_contents(contents: Contents) -> str:
    if isinstance(contents, str):
        return contents
    text = ""
    for part in contents:
        if isinstance(part, str):
            text += part
        elif isinstance(part, dict) and "text" in part:
            text += part["text"]
    return text


class BaseLLMClient:
    """HTTP transport for JSON-over-HTTP LLM APIs.

    Handles common logic for HTTP requests, retries, timeout management,
    and error logging.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: int = 60,
        max_retries: int = 1,
        retry_delay: int = 2
    ):
        """Initialize the LLM client.

        Args:
            api_key: API key for authentication
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Total attempts per call (1 disables retrying)
            retry_delay: Base delay for exponential backoff
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.logger = LOGGER

    async def call_api(
        self,
        endpoint: str = "",
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """POST ``payload`` and return the parsed JSON response.

        Raises:
            APIClientError: If the API call fails after retries
            APITimeoutError: If the API call times out after retries
        """
        url = f"{self.base_url}{endpoint}" if endpoint else self.base_url

        default_headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if headers:
            default_headers.update(headers)

        self.logger.debug(f"Calling LLM API: {url}", extra={"timeout": self.timeout})

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(url, headers=default_headers, json=payload)
                    response.raise_for_status()
                    return response.json()

                except HTTPStatusError as e:
                    await self._handle_http_error(e, attempt, url)

                except TimeoutException as e:
                    await self._handle_timeout_error(e, attempt, url)

                except httpx.HTTPError as e:
                    await self._handle_generic_error(e, attempt, url)

        raise APIClientError(f"Failed to call API {url} after {self.max_retries} attempts")

    async def _handle_http_error(self, error: HTTPStatusError, attempt: int, url: str):
        """Handle HTTP status errors."""
        status_code = error.response.status_code
        error_body = error.response.text

        self.logger.warning(
            f"API HTTP error (Attempt {attempt + 1}/{self.max_retries})",
            extra={
                "url": url,
                "status_code": status_code,
                "error_body": error_body[:500]
            }
        )

        # Client errors other than rate limiting will not improve on retry
        if 400 <= status_code < 500 and status_code != 429:
            raise APIClientError(f"API Client Error {status_code}: {error_body}", error) from error

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"API HTTP Error {status_code}", error) from error

    async def _handle_timeout_error(self, error: TimeoutException, attempt: int, url: str):
        """Handle timeout errors."""
        self.logger.warning(
            f"API Timeout (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": url}
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APITimeoutError(f"API Timeout after {self.max_retries} attempts", error) from error

    async def _handle_generic_error(self, error: Exception, attempt: int, url: str):
        """Handle transport errors (connection refused, DNS, ...)."""
        self.logger.warning(
            f"API Generic Error (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": url, "error": str(error)}
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"API Error: {str(error)}", error) from error

    async def _wait_before_retry(self, attempt: int):
        """Exponential backoff wait."""
        await asyncio.sleep(self.retry_delay * (2 ** attempt))


class CohereClient:
    """Client for Cohere's chat endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = "command-r",
        base_url: str = "https://api.cohere.com/v1/chat",
        timeout: int = 60,
        max_retries: int = 1,
    ):
        self.model = model
        self.client = BaseLLMClient(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries
        )
        LOGGER.info(f"Initialized Cohere client with model {self.model}")

    async def generate_content(
        self,
        contents: Contents,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate content using a Cohere model.

        Raises:
            APIClientError: If generation fails
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "message": _flatten_contents(contents),
        }
        if system_instruction:
            payload["preamble"] = system_instruction

        config = generation_config or {}
        payload["temperature"] = config.get("temperature", 0.0)
        if "max_output_tokens" in config:
            payload["max_tokens"] = config["max_output_tokens"]

        response = await self.client.call_api(payload=payload)

        if "text" not in response:
            LOGGER.error(f"Unexpected Cohere response format: {str(response)[:500]}")
            raise APIClientError("Invalid response format from Cohere")

        content = response.get("text") or ""
        if not content:
            LOGGER.warning("Empty response from Cohere")
        return content


class GeminiClient:
    """Wrapper for Google Gemini API client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: int = 60,
        max_retries: int = 1,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name to use
            timeout: Request timeout in seconds
            max_retries: Total attempts per call
        """
        self.model = model
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

        try:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout * 1000),
            )
            LOGGER.info(f"Initialized Gemini client with model {self.model}")
        except Exception as e:
            LOGGER.error(f"Failed to initialize Gemini client: {e}")
            raise APIClientError(f"Failed to initialize Gemini client: {e}", e) from e

    async def generate_content(
        self,
        contents: Contents,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate content using Gemini model.

        Raises:
            APIClientError: If generation fails
        """
        config = types.GenerateContentConfig(temperature=0.0)

        if generation_config:
            if "temperature" in generation_config:
                config.temperature = generation_config["temperature"]
            if "max_output_tokens" in generation_config:
                config.max_output_tokens = generation_config["max_output_tokens"]

        if system_instruction:
            config.system_instruction = system_instruction

        for attempt in range(self.max_retries):
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=config
                )

                if not response.text:
                    LOGGER.warning("Empty response from Gemini")
                    return ""

                return response.text

            except Exception as e:
                LOGGER.warning(
                    f"Gemini API error (Attempt {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)
                else:
                    raise APIClientError(f"Gemini generation failed: {e}", e) from e

        raise APIClientError("Gemini generation failed")


class OpenRouterClient:
    """Wrapper for OpenRouter chat completions."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: str = "https://openrouter.ai/api/v1/chat/completions",
        timeout: int = 60,
        max_retries: int = 1,
    ):
        self.model = model
        self.client = BaseLLMClient(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries
        )
        LOGGER.info(f"Initialized OpenRouter client with model {self.model}")

    async def generate_content(
        self,
        contents: Contents,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate content using OpenRouter model.

        Raises:
            APIClientError: If generation fails
        """
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": _flatten_contents(contents)})

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }

        config = generation_config or {}
        payload["temperature"] = config.get("temperature", 0.0)
        if "max_output_tokens" in config:
            payload["max_tokens"] = config["max_output_tokens"]

        response = await self.client.call_api(payload=payload)

        choices = response.get("choices") or []
        if not choices:
            LOGGER.error(f"Unexpected OpenRouter response format: {str(response)[:500]}")
            raise APIClientError("Invalid response format from OpenRouter")

        content = choices[0].get("message", {}).get("content", "")
        if not content:
            LOGGER.warning("Empty response from OpenRouter")
            return ""
        return content


def create_llm_client_from_settings(settings: Settings) -> LLMClient:
    """Create the client for ``settings.llm_provider``.

    Raises:
        ConfigurationError: If the provider is unknown or its API key is missing
    """
    try:
        provider = LLMProvider(settings.llm_provider.lower())
    except ValueError as e:
        raise ConfigurationError(f"Unsupported LLM provider: {settings.llm_provider}", e) from e

    if provider == LLMProvider.COHERE:
        if not settings.cohere_api_key.strip():
            raise ConfigurationError("Cohere API key not configured")
        return CohereClient(
            api_key=settings.cohere_api_key,
            model=settings.cohere_model,
            base_url=settings.cohere_api_url,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        )

    if provider == LLMProvider.GEMINI:
        if not settings.gemini_api_key.strip():
            raise ConfigurationError("Gemini API key not configured")
        return GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        )

    if not settings.openrouter_api_key.strip():
        raise ConfigurationError("OpenRouter API key not configured")
    return OpenRouterClient(
        api_key=settings.openrouter_api_key,
        model=settings.openrouter_model,
        base_url=settings.openrouter_api_url,
        timeout=settings.llm_timeout,
        max_retries=settings.llm_max_retries,
    )
