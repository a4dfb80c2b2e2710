"""
Structured LLM Service.

Shared plumbing for the AI oracles: one async OpenAI chat completion in JSON
mode, bounded by a timeout. Oracles build on `complete_json` and convert
every failure into their own fallback value.
"""
import asyncio
import logging
from typing import Any, List, Optional, Union

from openai import AsyncOpenAI

from smartschool.config import settings

logger = logging.getLogger(__name__)


class OracleFailure(Exception):
    """An oracle could not produce a valid result."""


class StructuredLLMService:
    """Thin async wrapper around the OpenAI chat completions API."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        api_key = settings.openai_api_key if api_key is None else api_key
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.timeout = settings.oracle_timeout_seconds if timeout is None else timeout

    async def _create(self, system_prompt: str, user_content: Union[str, List[dict]], temperature: float) -> str:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
        return completion.choices[0].message.content or ""

    async def complete_json(
        self,
        system_prompt: str,
        user_content: Union[str, List[dict]],
        temperature: float = 0.2,
    ) -> str:
        """
        Run one completion and return the raw JSON text.

        Raises:
            OracleFailure: no client is configured, the call failed, or it
                did not finish within `timeout` seconds.
        """
        if self.client is None:
            raise OracleFailure("OpenAI API key is not configured")
        try:
            return await asyncio.wait_for(
                self._create(system_prompt, user_content, temperature),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise OracleFailure(f"model call timed out after {self.timeout}s") from e
        except Exception as e:
            raise OracleFailure(f"model call failed: {e}") from e
