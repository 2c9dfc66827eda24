"""Bounded single-shot completion requests."""

import asyncio
import logging

from ..errors import CompletionTimeoutError
from ..llm import ChatMessage, CompletionOptions, LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


async def request_completion(
    llm: LLMProvider,
    messages: list[ChatMessage],
    options: CompletionOptions,
    timeout: float,
) -> LLMResponse:
    """Issue one completion request with a deadline.

    The request is cancelled when the deadline expires; asyncio.wait_for
    releases its timer on every exit path.

    Args:
        llm: Completion service provider
        messages: Role-tagged messages, system instruction first
        options: Sampling parameters
        timeout: Deadline in seconds

    Returns:
        LLMResponse from the provider

    Raises:
        CompletionTimeoutError: If the deadline expired
        CompletionTransportError: If the provider reported a failure
    """
    logger.debug("Requesting completion: %d messages, timeout=%ss", len(messages), timeout)
    try:
        return await asyncio.wait_for(
            llm.chat_completion(
                messages,
                model=options.model,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                presence_penalty=options.presence_penalty,
                frequency_penalty=options.frequency_penalty,
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise CompletionTimeoutError(timeout) from e
