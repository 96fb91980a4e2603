"""
LLM client for OpenAI-compatible chat completion endpoints.
"""

import time
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from openai import AsyncOpenAI
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from meeting_assistant.config import LLMConfig, get_config
from meeting_assistant.models import TokenUsage


class LLMNotConfiguredError(RuntimeError):
    """Raised when a completion is requested without an API key."""


class LLMClient:
    """Client for an OpenAI-compatible text-generation service."""

    def __init__(self, config: Optional[LLMConfig] = None):
        """Initialize the LLM client. No connection is made until a call."""
        self.config = config or get_config().llm
        logger.info(f"Initialized LLM client with model: {self.config.model}")

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def _build_async_client(self) -> AsyncOpenAI:
        # One SDK client per call: callers may run each call on a fresh event loop
        if not self.is_configured:
            raise LLMNotConfiguredError("No API key configured; set GITHUB_TOKEN or OPENAI_API_KEY")
        return AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.api_base,
            timeout=self.config.timeout,
        )

    async def _make_api_call_async(self, messages: List[Dict[str, str]], **kwargs) -> Any:
        """Make an async API call, retrying up to the configured attempt count."""
        call_params: Dict[str, Any] = {
            'model': kwargs.get('model', self.config.model),
            'messages': messages,
        }
        for key in ('temperature', 'top_p', 'max_tokens'):
            if kwargs.get(key) is not None:
                call_params[key] = kwargs[key]

        async with self._build_async_client() as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.config.max_retries),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                reraise=True,
            ):
                with attempt:
                    try:
                        return await client.chat.completions.create(**call_params)
                    except Exception as e:
                        logger.error(f"API call failed: {str(e)}")
                        raise

    async def complete_async(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> Tuple[str, TokenUsage]:
        """
        Generate a completion asynchronously.

        Returns:
            Tuple of (response_text, token_usage). The text is empty when the
            service returned no content.
        """
        start_time = time.time()

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self._make_api_call_async(messages, **kwargs)

        response_text = ""
        if response.choices:
            response_text = response.choices[0].message.content or ""

        token_usage = TokenUsage(max_tokens=kwargs.get('max_tokens'))
        usage = getattr(response, 'usage', None)
        if usage is not None:
            token_usage = TokenUsage(
                prompt_tokens=usage.prompt_tokens or 0,
                completion_tokens=usage.completion_tokens or 0,
                total_tokens=usage.total_tokens or 0,
                max_tokens=kwargs.get('max_tokens'),
            )

        elapsed_time = time.time() - start_time
        logger.debug(f"API call completed in {elapsed_time:.2f}s, used {token_usage.total_tokens} tokens")

        return response_text, token_usage
