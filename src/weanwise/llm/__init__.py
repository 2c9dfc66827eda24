from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, CompletionOptions, LLMResponse
from .providers import DeepSeekProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "CompletionOptions",
    "LLMResponse",
    "DeepSeekProvider",
    "OpenAIProvider",
]
