"""Fixed assistant replies substituted when a completion request fails.

Kept as data so the FailureKind -> text mapping can be checked on its own.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from ..errors import CompletionError, CompletionTimeoutError


class FailureKind(str, Enum):
    """Terminal failure outcomes of a completion request."""

    TIMEOUT = "timeout"      # Deadline exceeded, request cancelled
    TRANSPORT = "transport"  # Network error, non-2xx, malformed body

    @classmethod
    def from_error(cls, error: CompletionError) -> "FailureKind":
        if isinstance(error, CompletionTimeoutError):
            return cls.TIMEOUT
        return cls.TRANSPORT


FallbackTable = Mapping[FailureKind, str]

CHAT_FALLBACKS: FallbackTable = MappingProxyType({
    FailureKind.TIMEOUT: (
        "I apologize, but it's taking longer than expected to process your request. "
        "Please try asking a shorter or simpler question."
    ),
    FailureKind.TRANSPORT: (
        "I apologize, but I'm having trouble connecting to the service right now. "
        "Please try again in a moment."
    ),
})

PLAN_FALLBACKS: FallbackTable = MappingProxyType({
    FailureKind.TIMEOUT: "The plan generation took too long. Please try again with fewer requirements.",
    FailureKind.TRANSPORT: "Failed to generate the food plan. Please try again.",
})


def fallback_for(error: CompletionError, table: FallbackTable) -> str:
    """Look up the display text for a completion failure."""
    return table[FailureKind.from_error(error)]
