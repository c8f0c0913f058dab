"""Claude API wrapper with async support and retry logic."""

from __future__ import annotations

import logging
from typing import Any

import anthropic
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-opus-4-5-20251101"

# Transient failures worth another attempt; auth and bad-request errors are not.
RETRYABLE_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


class LLMClient:
    """Async Claude API client with exponential-backoff retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        # tenacity owns retries, so the SDK's built-in retry loop is disabled
        kwargs: dict = {"max_retries": 0}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.max_attempts = max_retries + 1
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def _call_api(self, **kwargs: Any) -> anthropic.types.Message:
        """Make the actual API call, retrying transient failures."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)
        raise RuntimeError("unreachable")  # pragma: no cover

    async def generate_tool_input(
        self,
        prompt: str,
        tool: dict,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 16000,
    ) -> dict:
        """Force a single tool call and return the tool's input payload.

        Raises:
            ValueError: the response carried no ``tool_use`` block for the tool.
        """
        logger.debug("LLM tool call: model=%s tool=%s", model, tool["name"])
        try:
            message = await self._call_api(
                model=model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
                tools=[tool],
                tool_choice={"type": "tool", "name": tool["name"]},
            )
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))

        for block in message.content:
            if getattr(block, "type", None) == "tool_use" and block.name == tool["name"]:
                if not isinstance(block.input, dict):
                    raise ValueError(f"Tool {tool['name']} returned a non-object input")
                return block.input
        raise ValueError(f"No {tool['name']} tool use found in Claude response")

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
