"""Single-shot plan generation session."""

import logging

from ..config import (
    FOOD_LOGS_TABLE,
    FREQUENCY_PENALTY,
    PLAN_MAX_TOKENS,
    PLAN_TEMPERATURE,
    PLAN_TIMEOUT,
    PRESENCE_PENALTY,
)
from ..conversation import PLAN_FALLBACKS, FallbackTable, fallback_for, request_completion
from ..errors import (
    CompletionError,
    CompletionTimeoutError,
    NothingToSaveError,
    NotAuthenticatedError,
    PersistenceError,
)
from ..llm import CompletionOptions, LLMProvider
from ..storage import IdentityContext, PlatformBackend
from .builder import build_plan_request
from .models import FoodLog, PlanIntake

logger = logging.getLogger(__name__)

SIGN_IN_TO_SAVE = "Please sign in to save your food plan"
SAVE_FAILED = "Failed to save the food plan"

DEFAULT_PLAN_OPTIONS = CompletionOptions(
    temperature=PLAN_TEMPERATURE,
    max_tokens=PLAN_MAX_TOKENS,
    presence_penalty=PRESENCE_PENALTY,
    frequency_penalty=FREQUENCY_PENALTY,
)


class PlanGenerator:
    """Owns one intake form, its generated plan and its error banner.

    Separate from the chat session: a longer deadline, a lower sampling
    temperature and its own fallback texts. Like chat, at most one
    generation is in flight at a time.
    """

    def __init__(
        self,
        llm: LLMProvider,
        options: CompletionOptions = DEFAULT_PLAN_OPTIONS,
        timeout: float = PLAN_TIMEOUT,
        fallbacks: FallbackTable = PLAN_FALLBACKS,
    ):
        self._llm = llm
        self._options = options
        self._timeout = timeout
        self._fallbacks = fallbacks
        self.intake = PlanIntake()
        self._plan: str | None = None
        self._error: str | None = None
        self._is_generating = False

    @property
    def plan(self) -> str | None:
        return self._plan

    @property
    def error(self) -> str | None:
        """Message for the error banner, if any."""
        return self._error

    @property
    def is_generating(self) -> bool:
        return self._is_generating

    def dismiss_error(self) -> None:
        self._error = None

    async def generate(self) -> str | None:
        """Generate a plan for the current intake.

        Returns:
            The plan text, or None when the request failed (see error), a
            generation is already running, or the intake was reset meanwhile

        Raises:
            IntakeValidationError: If mandatory fields are missing
        """
        if self._is_generating:
            return None

        intake = self.intake
        request = build_plan_request(intake)
        self._is_generating = True
        self._plan = None
        self._error = None
        try:
            response = await request_completion(
                self._llm,
                request.to_messages(),
                self._options,
                self._timeout,
            )
            plan, error = response.content, None
        except CompletionTimeoutError as e:
            logger.warning("Plan generation timed out: %s", e)
            plan, error = None, fallback_for(e, self._fallbacks)
        except CompletionError as e:
            logger.error("Error generating food plan: %s", e)
            plan, error = None, fallback_for(e, self._fallbacks)
        finally:
            self._is_generating = False

        # The intake was reset or replaced while waiting.
        if self.intake is not intake:
            logger.debug("Discarding plan generated for a replaced intake")
            return None
        self._plan, self._error = plan, error
        return plan

    def reset(self) -> None:
        """Start over with an empty intake."""
        self.intake = PlanIntake()
        self._plan = None
        self._error = None

    async def save(self, identity: IdentityContext, store: PlatformBackend) -> FoodLog:
        """Persist the intake and generated plan under the current user.

        The intake and plan stay in place on every failure, so the plan can
        still be discarded or regenerated.

        Returns:
            The stored food log

        Raises:
            NotAuthenticatedError: If nobody is signed in
            NothingToSaveError: If no plan has been generated
            PersistenceError: If the store rejects the record
        """
        try:
            user = identity.require_user(SIGN_IN_TO_SAVE)
        except NotAuthenticatedError:
            self._error = SIGN_IN_TO_SAVE
            raise

        if self._plan is None:
            raise NothingToSaveError()

        try:
            record = await store.insert_record(
                FOOD_LOGS_TABLE,
                {
                    "user_id": user.id,
                    "plan_details": {**self.intake.to_plan_details(), "plan": self._plan},
                },
            )
        except PersistenceError:
            logger.exception("Error saving plan")
            self._error = SAVE_FAILED
            raise

        return FoodLog.from_record(record)
