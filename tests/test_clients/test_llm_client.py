"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from vet_pathways.clients.llm_client import LLMClient

TOOL = {"name": "emit_analysis", "description": "test", "input_schema": {"type": "object"}}


def _tool_block(payload, name: str = "emit_analysis") -> MagicMock:
    block = MagicMock()
    block.type = "tool_use"
    block.name = name
    block.input = payload
    return block


def _make_api_message(content: list, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = content
    return message


def _client_with(create: AsyncMock, **kwargs) -> LLMClient:
    with patch("vet_pathways.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
        mock_client = MagicMock()
        mock_client.messages.create = create
        mock_cls.return_value = mock_client
        return LLMClient(**kwargs)


class TestLLMClientInit:
    def test_init_default_disables_sdk_retries(self):
        with patch("vet_pathways.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient()
            mock_cls.assert_called_once_with(max_retries=0)
        assert llm.max_attempts == 4

    def test_init_with_api_key_and_timeout(self):
        with patch("vet_pathways.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(max_retries=0, api_key="test-key", timeout=30.0)

    def test_max_retries_zero_means_single_attempt(self):
        with patch("vet_pathways.clients.llm_client.anthropic.AsyncAnthropic"):
            assert LLMClient(max_retries=0).max_attempts == 1


class TestGenerateToolInput:
    async def test_returns_tool_input(self):
        payload = {"summary": "ok", "pathways": []}
        create = AsyncMock(return_value=_make_api_message([_tool_block(payload)]))
        llm = _client_with(create)

        result = await llm.generate_tool_input("analyze", TOOL, model="test-model", max_tokens=99)

        assert result == payload
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 99
        assert kwargs["tools"] == [TOOL]
        assert kwargs["tool_choice"] == {"type": "tool", "name": "emit_analysis"}
        assert kwargs["messages"] == [{"role": "user", "content": "analyze"}]

    async def test_skips_text_blocks(self):
        text = MagicMock()
        text.type = "text"
        create = AsyncMock(return_value=_make_api_message([text, _tool_block({"a": 1})]))
        llm = _client_with(create)
        assert await llm.generate_tool_input("p", TOOL) == {"a": 1}

    async def test_missing_tool_use_raises(self):
        create = AsyncMock(return_value=_make_api_message([_tool_block({"a": 1}, name="other")]))
        llm = _client_with(create)
        with pytest.raises(ValueError, match="No emit_analysis tool use"):
            await llm.generate_tool_input("p", TOOL)

    async def test_non_object_input_raises(self):
        create = AsyncMock(return_value=_make_api_message([_tool_block(["not", "a", "dict"])]))
        llm = _client_with(create)
        with pytest.raises(ValueError, match="non-object"):
            await llm.generate_tool_input("p", TOOL)

    async def test_token_log_and_summary(self):
        create = AsyncMock(return_value=_make_api_message([_tool_block({})], input_tokens=20, output_tokens=8))
        llm = _client_with(create)
        await llm.generate_tool_input("one", TOOL, model="m")
        await llm.generate_tool_input("two", TOOL, model="m")

        summary = llm.get_token_summary()
        assert summary == {"input": 40, "output": 16, "calls": [("m", 20, 8), ("m", 20, 8)]}
        assert llm.get_token_summary()["calls"] == []


class TestRetries:
    async def test_non_retryable_error_raised_once(self):
        create = AsyncMock(side_effect=ValueError("bad request"))
        llm = _client_with(create, max_retries=3)
        with pytest.raises(ValueError, match="bad request"):
            await llm.generate_tool_input("p", TOOL)
        assert create.await_count == 1

    async def test_connection_error_retried(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        create = AsyncMock(
            side_effect=[
                anthropic.APIConnectionError(request=request),
                _make_api_message([_tool_block({"ok": True})]),
            ]
        )
        llm = _client_with(create, max_retries=1)
        assert await llm.generate_tool_input("p", TOOL) == {"ok": True}
        assert create.await_count == 2

    async def test_retries_exhausted(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        create = AsyncMock(side_effect=anthropic.APIConnectionError(request=request))
        llm = _client_with(create, max_retries=0)
        with pytest.raises(anthropic.APIConnectionError):
            await llm.generate_tool_input("p", TOOL)
        assert create.await_count == 1
