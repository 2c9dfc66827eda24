from typing import Any

from .openai import OpenAIProvider

DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"


class DeepSeekProvider(OpenAIProvider):
    """DeepSeek provider using the OpenAI-compatible chat completions API.

    Only the defaults differ from OpenAIProvider: the endpoint and the
    model name.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "deepseek-chat",
        base_url: str = DEEPSEEK_BASE_URL,
        **client_kwargs: Any
    ):
        """Initialize DeepSeek provider.

        Args:
            api_key: DeepSeek API key
            model: Default model to use ('deepseek-chat' or 'deepseek-reasoner')
            base_url: DeepSeek API base URL
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(api_key=api_key, model=model, base_url=base_url, **client_kwargs)
