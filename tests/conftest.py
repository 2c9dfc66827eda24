"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from weanwise.llm import ChatMessage, LLMProvider, LLMResponse
from weanwise.planning import PlanIntake
from weanwise.storage import IdentityContext, InMemoryBackend


class ScriptedLLM(LLMProvider):
    """Completion provider that replays canned replies.

    Records every call so tests can inspect the payload. A delay simulates
    a slow service; an error is raised instead of replying.
    """

    def __init__(
        self,
        replies: list[str] | None = None,
        delay: float = 0.0,
        error: Exception | None = None,
    ):
        self.replies = list(replies or ["Mashed banana is a great first food."])
        self.delay = delay
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        return LLMResponse(content=content, model=model or "scripted")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted_llm():
    """Return the ScriptedLLM class for building fakes inside tests."""
    return ScriptedLLM


@pytest.fixture
def complete_intake():
    """Return an intake with every mandatory field set."""
    return PlanIntake(age_range="8-12", height_cm=72, weight_kg=8.5, sex="girl")


@pytest.fixture
def platform():
    """Return an in-memory platform backend."""
    return InMemoryBackend()


@pytest.fixture
def identity(platform):
    """Return an identity context following the in-memory platform."""
    context = IdentityContext(platform)
    context.attach()
    yield context
    context.detach()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "deepseek": os.getenv("DEEPSEEK_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }
