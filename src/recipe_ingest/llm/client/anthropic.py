"""HTTP client for the Anthropic Messages API.

Talks to POST /v1/messages directly over httpx and validates JSON output
against Pydantic schemas.
"""

from __future__ import annotations

import re
from typing import Any, TypeVar, cast

import httpx
from aiolimiter import AsyncLimiter
from pydantic import BaseModel, ValidationError

from recipe_ingest.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from recipe_ingest.llm.models import (
    AnthropicMessage,
    AnthropicMessagesRequest,
    AnthropicMessagesResponse,
    LLMCompletionResult,
)
from recipe_ingest.observability.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around a JSON answer."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1) if match else stripped


class AnthropicClient:
    """Async HTTP client for the Anthropic Messages API.

    Attributes:
        base_url: API base URL.
        model: Default model (e.g., claude-3-5-haiku-latest).
        max_tokens: Default output token budget.
        timeout: HTTP request timeout in seconds.
        max_retries: Maximum retry attempts for transient failures.
    """

    DEFAULT_BASE_URL = "https://api.anthropic.com"
    DEFAULT_API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-latest",
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        max_tokens: int = 2048,
        timeout: float = 60.0,
        max_retries: int = 2,
        requests_per_minute: float = 50.0,
    ) -> None:
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key.
            model: Default model name.
            base_url: API base URL.
            api_version: Value of the anthropic-version header.
            max_tokens: Default maximum output tokens.
            timeout: HTTP request timeout in seconds.
            max_retries: Retries for timeouts and connection errors.
            requests_per_minute: Pacing for outgoing requests.
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self._http_client: httpx.AsyncClient | None = None
        # One request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def messages_url(self) -> str:
        """Get the messages endpoint URL."""
        return f"{self.base_url}/v1/messages"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return
        if not self.api_key:
            msg = "Anthropic API key is not configured"
            raise LLMConfigurationError(msg)

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": self.api_version,
                "content-type": "application/json",
            },
        )
        logger.info("AnthropicClient initialized", model=self.model)

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("AnthropicClient shutdown")

    async def _execute_with_retry(
        self,
        request: AnthropicMessagesRequest,
    ) -> AnthropicMessagesResponse:
        """Send a request, retrying timeouts and connection errors."""
        if self._http_client is None:
            await self.initialize()
        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(
                    self.messages_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"Anthropic rate limit exceeded, retry after {retry_after}s"
                    raise LLMRateLimitError(msg, status_code=429)

                response.raise_for_status()
                return AnthropicMessagesResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "Anthropic request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Anthropic timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.warning(
                    "Anthropic request failed",
                    status_code=e.response.status_code,
                    body=e.response.text[:500],
                )
                msg = f"Anthropic returned {e.response.status_code}"
                raise LLMResponseError(msg, status_code=e.response.status_code) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "Anthropic connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to Anthropic: {e}"
                raise LLMUnavailableError(msg) from e

            except ValidationError as e:
                msg = f"Unexpected Anthropic response shape: {e}"
                raise LLMResponseError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        schema: type[T] | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion from the Messages API.

        Args:
            prompt: User message text.
            model: Model to use (defaults to client's default model).
            system: Optional system prompt.
            schema: Optional Pydantic model for structured JSON output.
            options: ``temperature`` and ``max_tokens`` overrides.

        Returns:
            LLMCompletionResult with raw response and optionally parsed output.

        Raises:
            LLMUnavailableError: If the API cannot be reached.
            LLMTimeoutError: If request times out.
            LLMResponseError: If the API returns an error.
            LLMValidationError: If response doesn't match schema.
        """
        options = options or {}
        request = AnthropicMessagesRequest(
            model=model or self.model,
            max_tokens=options.get("max_tokens") or self.max_tokens,
            system=system,
            temperature=options.get("temperature"),
            messages=[AnthropicMessage(role="user", content=prompt)],
        )

        response = await self._execute_with_retry(request)

        text_blocks = [block.text for block in response.content if block.type == "text"]
        if not text_blocks or text_blocks[0] is None:
            msg = "Unexpected response type from Anthropic: no text content"
            raise LLMValidationError(msg)
        raw_response = text_blocks[0]

        parsed: Any = None
        if schema is not None:
            try:
                parsed = schema.model_validate_json(strip_code_fence(raw_response))
            except ValidationError as e:
                logger.warning(
                    "Failed to parse structured Anthropic output",
                    schema=schema.__name__,
                    error=str(e),
                    raw_response=raw_response[:500],
                )
                msg = f"Response does not match {schema.__name__} schema: {e}"
                raise LLMValidationError(msg) from e

        return LLMCompletionResult(
            raw_response=raw_response,
            parsed=parsed,
            model=response.model,
            prompt_tokens=response.usage.input_tokens if response.usage else None,
            completion_tokens=response.usage.output_tokens if response.usage else None,
            stop_reason=response.stop_reason,
        )

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        model: str | None = None,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> T:
        """Generate structured output matching a Pydantic schema.

        Raises:
            LLMValidationError: If response doesn't match schema.
        """
        result = await self.generate(
            prompt=prompt,
            model=model,
            system=system,
            schema=schema,
            options=options,
        )

        if result.parsed is None:
            msg = "Structured generation returned no parsed result"
            raise LLMValidationError(msg)

        return cast("T", result.parsed)
