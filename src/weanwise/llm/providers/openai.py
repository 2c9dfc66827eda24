from typing import Any

from openai import APIError, AsyncOpenAI

from ...errors import CompletionTransportError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions provider.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Translation of SDK errors and malformed bodies into
      CompletionTransportError
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        # Deadlines and fallbacks are owned by the caller, so the SDK must
        # not retry behind its back.
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional parameters (presence_penalty, frequency_penalty)

        Returns:
            LLMResponse with generated content

        Raises:
            CompletionTransportError: On any SDK error or malformed body
        """
        model_to_use = model or self._model

        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        # Build request params, only including max_tokens if set
        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": openai_messages,
            "temperature": temperature,
            "stream": False,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except APIError as e:
            raise CompletionTransportError(str(e)) from e

        choices = getattr(completion, "choices", None)
        choice = choices[0] if choices else None
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise CompletionTransportError("response has no choices[0].message.content")

        usage = None
        if getattr(completion, "usage", None):
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
