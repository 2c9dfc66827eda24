"""Tests for the completion service providers.

HTTP traffic is served by httpx.MockTransport, so the real OpenAI SDK
request/response path is exercised without network access.
"""
import json

import httpx
import pytest

from weanwise.conversation import CHAT_FALLBACKS, ConversationSession, FailureKind
from weanwise.errors import CompletionTransportError
from weanwise.llm import (
    ChatMessage,
    DeepSeekProvider,
    LLMProvider,
    OpenAIProvider,
    create_llm_provider,
)


def _completion_body(content: str | None = "Offer iron-rich foods.") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


def _provider(handler, **kwargs) -> DeepSeekProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DeepSeekProvider(api_key="test-key", http_client=client, **kwargs)


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestFactory:
    """Tests for create_llm_provider."""

    def test_create_deepseek(self):
        provider = create_llm_provider("deepseek", api_key="sk-test")
        assert isinstance(provider, DeepSeekProvider)
        assert provider.model == "deepseek-chat"

    def test_create_openai(self):
        provider = create_llm_provider("OpenAI", api_key="sk-test", model="gpt-4o")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_missing_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("deepseek")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("gemini", api_key="x")


class TestDeepSeekProvider:
    """Tests for the OpenAI-compatible request/response contract."""

    @pytest.mark.asyncio
    async def test_request_body_and_success(self):
        """Test the POST body and reading choices[0].message.content."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion_body())

        provider = _provider(handler)
        try:
            response = await provider.chat_completion(
                [
                    ChatMessage(role="system", content="Be brief."),
                    ChatMessage(role="user", content="What about iron?"),
                ],
                temperature=0.3,
                max_tokens=1500,
                presence_penalty=0.1,
                frequency_penalty=0.1,
            )
        finally:
            await provider.close()

        assert response.content == "Offer iron-rich foods."
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17}
        assert seen["url"] == "https://api.deepseek.com/v1/chat/completions"
        assert seen["auth"] == "Bearer test-key"
        body = seen["body"]
        assert body["model"] == "deepseek-chat"
        assert body["stream"] is False
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 1500
        assert body["presence_penalty"] == 0.1
        assert body["frequency_penalty"] == 0.1
        assert body["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "What about iron?"},
        ]

    @pytest.mark.asyncio
    async def test_server_error_is_transport_error(self):
        """Test that HTTP 500 raises CompletionTransportError without retrying."""
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(500, json={"error": {"message": "boom"}})

        provider = _provider(handler)
        try:
            with pytest.raises(CompletionTransportError):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])
        finally:
            await provider.close()

        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_empty_choices_is_transport_error(self):
        """Test that a body without choices is treated as malformed."""
        def handler(request: httpx.Request) -> httpx.Response:
            body = _completion_body()
            body["choices"] = []
            return httpx.Response(200, json=body)

        provider = _provider(handler)
        try:
            with pytest.raises(CompletionTransportError, match="choices"):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])
        finally:
            await provider.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("choice", [
        {"index": 0},
        None,
        {"index": 0, "message": None},
    ])
    async def test_malformed_choice_is_transport_error(self, choice):
        """Test that a choice without a usable message is treated as malformed."""
        def handler(request: httpx.Request) -> httpx.Response:
            body = _completion_body()
            body["choices"] = [choice]
            return httpx.Response(200, json=body)

        provider = _provider(handler)
        try:
            with pytest.raises(CompletionTransportError, match="choices"):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])
        finally:
            await provider.close()

    @pytest.mark.asyncio
    async def test_session_shows_fallback_on_malformed_choice(self):
        """Test that a malformed 200 body settles the send with a fallback."""
        def handler(request: httpx.Request) -> httpx.Response:
            body = _completion_body()
            body["choices"] = [{"index": 0, "message": None}]
            return httpx.Response(200, json=body)

        provider = _provider(handler)
        session = ConversationSession(provider)
        try:
            await session.send("Is honey safe?")
        finally:
            await provider.close()

        assert session.messages[-1].text == CHAT_FALLBACKS[FailureKind.TRANSPORT]
        assert not session.is_waiting

    @pytest.mark.asyncio
    async def test_null_content_is_transport_error(self):
        """Test that a null message content is treated as malformed."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_completion_body(content=None))

        provider = _provider(handler)
        try:
            with pytest.raises(CompletionTransportError):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])
        finally:
            await provider.close()

    @pytest.mark.asyncio
    async def test_network_error_is_transport_error(self):
        """Test that a connection failure raises CompletionTransportError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = _provider(handler)
        try:
            with pytest.raises(CompletionTransportError):
                await provider.chat_completion([ChatMessage(role="user", content="hi")])
        finally:
            await provider.close()

    @pytest.mark.asyncio
    async def test_session_shows_fallback_on_http_500(self):
        """Test the whole chat path when the service returns HTTP 500."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": {"message": "boom"}})

        provider = _provider(handler)
        session = ConversationSession(provider)
        try:
            await session.send("Is honey safe?")
        finally:
            await provider.close()

        assert len(session.messages) == 3
        assert session.messages[-1].text == CHAT_FALLBACKS[FailureKind.TRANSPORT]
        assert not session.is_waiting

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_real_api(self, api_keys):
        """Integration test: one real completion."""
        if not api_keys["deepseek"]:
            pytest.skip("DEEPSEEK_API_KEY not set")

        async with DeepSeekProvider(api_key=api_keys["deepseek"]) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Reply with the word ok.")],
                max_tokens=5,
            )

        assert response.content
