"""Conversation module for weanwise.

Module structure:
- models.py: Message and ConversationState (append-only history)
- fallbacks.py: FailureKind -> display text tables
- completion.py: Bounded single-shot completion request
- session.py: ConversationSession (single-flight send, reset)
"""

from .completion import request_completion
from .fallbacks import CHAT_FALLBACKS, PLAN_FALLBACKS, FailureKind, FallbackTable, fallback_for
from .models import GREETING, ConversationState, Message
from .session import ConversationSession

__all__ = [
    "CHAT_FALLBACKS",
    "ConversationSession",
    "ConversationState",
    "FailureKind",
    "FallbackTable",
    "GREETING",
    "Message",
    "PLAN_FALLBACKS",
    "fallback_for",
    "request_completion",
]
