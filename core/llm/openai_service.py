"""
OpenAI Service - LLM implementation using OpenAI API.

Provides JSON-mode chat completions and embedding generation. Transient API
failures are retried with tenacity; rate-limit responses wait as long as the
server asks (capped), everything else backs off exponentially.
"""
from typing import Any, Callable, Dict, List, Optional
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    Retrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from core.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

MAX_DECLARED_WAIT = 120.0
RESET_HEADERS = ('x-ratelimit-reset-requests', 'x-ratelimit-reset-tokens')

_DURATION_RE = re.compile(r"([\d.]+)(ms|s|m|h)")
_UNIT_SECONDS = {'ms': 0.001, 's': 1.0, 'm': 60.0, 'h': 3600.0}
_exponential = wait_exponential(multiplier=1, min=2, max=30)


def reset_duration_seconds(value: Optional[str]) -> float:
    """Seconds in a reset-timer header value such as '1s', '500ms' or '1m30s'."""
    return sum(float(amount) * _UNIT_SECONDS[unit] for amount, unit in _DURATION_RE.findall(value or ''))


def declared_wait_seconds(exc: BaseException) -> float:
    """Longest wait the server asked for via ``retry-after`` or the reset headers; 0 if none."""
    response = getattr(exc, 'response', None)
    if response is None:
        return 0.0

    waits = [reset_duration_seconds(response.headers.get(name)) for name in RESET_HEADERS]
    retry_after = response.headers.get('retry-after')
    if retry_after:
        try:
            waits.append(float(retry_after))
        except ValueError:
            logger.debug(f"Ignoring non-numeric retry-after header: {retry_after!r}")
    return max(waits)


def backoff_seconds(retry_state: RetryCallState) -> float:
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        declared = declared_wait_seconds(exc)
        if declared > 0:
            return min(declared, MAX_DECLARED_WAIT)
    return _exponential(retry_state)


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Any OpenAI-compatible endpoint works through ``base_url``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        max_retries: int = 3,
    ):
        client_kwargs = {}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url

        # Retries are handled here, not by the SDK
        self.client = OpenAI(max_retries=0, **client_kwargs)

        self.model_config = model_config or {}
        self.model = self.model_config.get('model', 'gpt-4o-mini')
        self.embedding_model = self.model_config.get('embedding_model', 'text-embedding-3-small')
        self.embedding_dimensions = self.model_config.get('embedding_dimensions', 1024)
        self.temperature = self.model_config.get('temperature', 0.2)

        self._retrying = Retrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=backoff_seconds,
            stop=stop_after_attempt(max(1, max_retries)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def _request(self, call: Callable[..., Any], **kwargs) -> Any:
        return self._retrying.copy()(call, **kwargs)

    def complete_json(
        self,
        system_prompt: str,
        user_message: str,
        temperature: Optional[float] = None,
    ) -> str:
        response = self._request(
            self.client.chat.completions.create,
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature if temperature is None else temperature,
            response_format={"type": "json_object"},
        )

        content = (response.choices[0].message.content if response.choices else None) or ''
        logger.debug(f"LLM response ({self.model}): {content[:200]}...")
        return content

    def generate_embedding(self, text: str) -> List[float]:
        """Generate embedding vector for text."""
        response = self._request(
            self.client.embeddings.create,
            input=text,
            model=self.embedding_model,
            dimensions=self.embedding_dimensions
        )
        return response.data[0].embedding

    def generate_embeddings(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of texts in a single request, preserving input order."""
        if not texts:
            return []
        response = self._request(
            self.client.embeddings.create,
            input=texts,
            model=self.embedding_model,
            dimensions=self.embedding_dimensions
        )
        return [item.embedding for item in sorted(response.data, key=lambda item: item.index)]
