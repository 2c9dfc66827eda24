"""
Weanwise: baby food meal plans and a nutrition chat assistant.

Each module hides a specific design decision: which completion service
answers, where users and records live, how prompts are worded.
"""

__version__ = "0.1.0"

from .conversation import ConversationSession, Message
from .errors import (
    CompletionTimeoutError,
    CompletionTransportError,
    IntakeValidationError,
    NotAuthenticatedError,
    WeanwiseError,
)
from .llm import LLMProvider, create_llm_provider
from .planning import PlanGenerator, PlanIntake, build_plan_request, summarize_intake
from .storage import IdentityContext, PlatformBackend, create_platform_backend

__all__ = [
    "CompletionTimeoutError",
    "CompletionTransportError",
    "ConversationSession",
    "IdentityContext",
    "IntakeValidationError",
    "LLMProvider",
    "Message",
    "NotAuthenticatedError",
    "PlanGenerator",
    "PlanIntake",
    "PlatformBackend",
    "WeanwiseError",
    "build_plan_request",
    "create_llm_provider",
    "create_platform_backend",
    "summarize_intake",
]
