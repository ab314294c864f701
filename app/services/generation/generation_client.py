"""
Generation Client Module

This module sends prompts to the external text-generation endpoint and returns the
raw text reply. Gemini is reached through its OpenAI-compatible chat completions
API with the openai SDK, so the request envelope and error classes are the SDK's.

Retry policy:
- An overload reply (HTTP 503 / provider status UNAVAILABLE) is retried up to a
  fixed number of attempts with a fixed delay between attempts.
- Any other failure is returned immediately after a single attempt.
- Exhausting the attempts raises TransientProviderError with the last overload
  detail, so callers can answer "try again later" instead of a generic failure.

The SDK's own retries are disabled so that this policy is the only one in effect.

Dependencies:
- openai: For the AsyncOpenAI client and its error types.
- asyncio: For the inter-attempt delay.
- loguru: For logging retries and provider failures.
- app.errors.exceptions: For the provider error taxonomy.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional
from openai import AsyncOpenAI, APIError, APIStatusError
from loguru import logger
from app.errors.exceptions import PermanentProviderError, TransientProviderError

MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 2.0
OVERLOAD_STATUS_CODE = 503
OVERLOAD_STATUS = "UNAVAILABLE"

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT_SECONDS = 60.0

ClientFactory = Callable[[str], AsyncOpenAI]

def _provider_error(body: Any) -> Dict[str, Any]:
    """Return the `error` object from a provider error body, if there is one.

    Gemini wraps errors as {"error": {...}}, sometimes inside a one-element list.
    """
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            return error
    return {}

def is_overload_error(exc: Exception) -> bool:
    """True when the provider reported temporary unavailability."""
    if not isinstance(exc, APIStatusError):
        return False
    if exc.status_code == OVERLOAD_STATUS_CODE:
        return True
    error = _provider_error(exc.body)
    return error.get("code") == OVERLOAD_STATUS_CODE or error.get("status") == OVERLOAD_STATUS

def error_details(exc: Exception) -> Any:
    """Diagnostic payload for a failed provider call."""
    body = getattr(exc, "body", None)
    if body is not None:
        return body
    return str(exc)

class GenerationClient:
    """
    Client for the external text-generation endpoint.

    One AsyncOpenAI instance is kept per API key. Tests inject a client_factory
    returning a fake and a sleep function that records delays.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay: float = RETRY_DELAY_SECONDS,
        client_factory: Optional[ClientFactory] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._client_factory = client_factory or self._build_client
        self._sleep = sleep or asyncio.sleep
        self._clients: Dict[str, AsyncOpenAI] = {}

    def _build_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
        )

    def _get_client(self, api_key: str) -> AsyncOpenAI:
        if api_key not in self._clients:
            self._clients[api_key] = self._client_factory(api_key)
        return self._clients[api_key]

    async def _complete(self, client: AsyncOpenAI, prompt: str) -> str:
        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        content = None
        if response.choices:
            content = response.choices[0].message.content
        if not content or not content.strip():
            raise PermanentProviderError("No content returned from Gemini API")
        return content

    async def generate(self, prompt: str, api_key: str) -> str:
        """
        Send the prompt and return the raw text reply.

        Args:
            prompt (str): Instruction string for the model.
            api_key (str): Credential for the generation endpoint.

        Returns:
            str: The model's text reply.

        Raises:
            TransientProviderError: The endpoint stayed overloaded for every attempt.
            PermanentProviderError: Any other provider or transport failure.
        """
        client = self._get_client(api_key)
        last_overload: Optional[APIStatusError] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._complete(client, prompt)
            except APIError as e:
                if not is_overload_error(e):
                    logger.error(f"Gemini API error on attempt {attempt}: {e}")
                    raise PermanentProviderError(details=error_details(e)) from e
                last_overload = e
                if attempt < self.max_attempts:
                    logger.warning(
                        f"Gemini overloaded (attempt {attempt}/{self.max_attempts}), "
                        f"retrying in {self.retry_delay}s"
                    )
                    await self._sleep(self.retry_delay)

        logger.error(f"Gemini still overloaded after {self.max_attempts} attempts")
        raise TransientProviderError(details=error_details(last_overload)) from last_overload
