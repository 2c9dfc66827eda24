"""Conversation session: message history plus one request at a time."""

import logging

from ..config import (
    CHAT_MAX_TOKENS,
    CHAT_TEMPERATURE,
    CHAT_TIMEOUT,
    FREQUENCY_PENALTY,
    HISTORY_WINDOW,
    PRESENCE_PENALTY,
)
from ..errors import CompletionError, CompletionTimeoutError
from ..llm import ChatMessage, CompletionOptions, LLMProvider
from ..prompts import get_chat_system_prompt
from .completion import request_completion
from .fallbacks import CHAT_FALLBACKS, FallbackTable, fallback_for
from .models import GREETING, ConversationState, Message

logger = logging.getLogger(__name__)

DEFAULT_CHAT_OPTIONS = CompletionOptions(
    temperature=CHAT_TEMPERATURE,
    max_tokens=CHAT_MAX_TOKENS,
    presence_penalty=PRESENCE_PENALTY,
    frequency_penalty=FREQUENCY_PENALTY,
)


class ConversationSession:
    """Holds one chat's message history and mediates its requests.

    Each send settles in exactly one appended assistant message: the
    generated reply, or a fallback text from the session's table when the
    request times out or fails. Sends are rejected while a request is in
    flight, so replies can never be applied out of order.
    """

    def __init__(
        self,
        llm: LLMProvider,
        system_instruction: str | None = None,
        options: CompletionOptions = DEFAULT_CHAT_OPTIONS,
        timeout: float = CHAT_TIMEOUT,
        history_window: int = HISTORY_WINDOW,
        fallbacks: FallbackTable = CHAT_FALLBACKS,
        greeting: str = GREETING,
    ):
        self._llm = llm
        self._system_instruction = system_instruction or get_chat_system_prompt()
        self._options = options
        self._timeout = timeout
        self._history_window = history_window
        self._fallbacks = fallbacks
        self._greeting = greeting
        self._state = ConversationState.seeded(greeting)

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the message history."""
        return tuple(self._state.messages)

    @property
    def is_waiting(self) -> bool:
        return self._state.is_waiting

    @property
    def greeting(self) -> str:
        return self._greeting

    async def send(self, raw_text: str) -> Message | None:
        """Send a user message and append the assistant's reply.

        Args:
            raw_text: Text typed by the user

        Returns:
            The appended assistant message, or None when the send was
            rejected (blank text or a request already in flight)
        """
        text = raw_text.strip()
        if not text or self._state.is_waiting:
            return None

        # A reset while waiting swaps the history out; the reply then lands
        # in the discarded one. The flag always lives on the current state.
        state = self._state
        prior = state.recent(self._history_window)
        state.append(Message.from_user(text))
        state.is_waiting = True
        try:
            try:
                response = await request_completion(
                    self._llm,
                    self._build_payload(prior, text),
                    self._options,
                    self._timeout,
                )
                reply = Message.from_assistant(response.content)
            except CompletionTimeoutError as e:
                logger.warning("Chat request timed out: %s", e)
                reply = Message.from_assistant(fallback_for(e, self._fallbacks))
            except CompletionError as e:
                logger.error("Error calling completion service: %s", e)
                reply = Message.from_assistant(fallback_for(e, self._fallbacks))
            state.append(reply)
            return reply
        finally:
            self._state.is_waiting = False

    def reset(self) -> None:
        """Clear history back to the seeded greeting.

        An in-flight request keeps the session waiting until it settles.
        """
        waiting = self._state.is_waiting
        self._state = ConversationState.seeded(self._greeting)
        self._state.is_waiting = waiting

    def _build_payload(self, prior: list[Message], text: str) -> list[ChatMessage]:
        payload = [ChatMessage(role="system", content=self._system_instruction)]
        payload.extend(ChatMessage(role=msg.role, content=msg.text) for msg in prior)
        payload.append(ChatMessage(role="user", content=text))
        return payload
