"""Data models for conversation sessions.

Messages are immutable and a conversation only ever grows by appending;
position in the sequence is the sole ordering signal.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..config import TIMESTAMP_FORMAT

GREETING = (
    "Hi!\n"
    "Welcome to Baby Nutrition Assistant.\n"
    "\n"
    "How can I help you plan your baby's food today?"
)


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class Message(BaseModel):
    """One turn in a conversation."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Raw content; may contain embedded newlines")
    is_from_user: bool = Field(description="True for human-authored turns")
    timestamp: str = Field(default_factory=_now, description="Local display time")

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls(text=text, is_from_user=True)

    @classmethod
    def from_assistant(cls, text: str) -> "Message":
        return cls(text=text, is_from_user=False)

    @property
    def role(self) -> str:
        """Completion service role for this message."""
        return "user" if self.is_from_user else "assistant"

    def lines(self) -> list[str]:
        """Split text into display lines."""
        return self.text.split("\n")


class ConversationState(BaseModel):
    """Ordered message history plus the in-flight request flag."""

    messages: list[Message] = Field(default_factory=list)
    is_waiting: bool = False

    @classmethod
    def seeded(cls, greeting: str = GREETING) -> "ConversationState":
        """Create a state holding only the assistant greeting."""
        return cls(messages=[Message.from_assistant(greeting)])

    def append(self, message: Message) -> None:
        self.messages.append(message)

    def recent(self, limit: int) -> list[Message]:
        """Return the last `limit` messages, oldest first."""
        if limit <= 0:
            return []
        return list(self.messages[-limit:])
