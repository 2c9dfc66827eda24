"""Exception hierarchy for weanwise.

Network-facing errors are caught at the conversation and persistence
boundaries and turned into visible messages; none of them is fatal.
"""


class WeanwiseError(Exception):
    """Base class for weanwise errors."""


class IntakeValidationError(WeanwiseError):
    """Plan intake is missing mandatory fields."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required intake fields: {', '.join(missing)}")
        self.missing = missing


class CompletionError(WeanwiseError):
    """Base class for completion service failures."""


class CompletionTimeoutError(CompletionError):
    """Completion request exceeded its deadline."""

    def __init__(self, timeout: float):
        super().__init__(f"Completion request timed out after {timeout:g}s")
        self.timeout = timeout


class CompletionTransportError(CompletionError):
    """Network error, non-2xx status, or malformed response body."""

    def __init__(self, message: str):
        super().__init__(f"Completion service error: {message}")


class NotAuthenticatedError(WeanwiseError):
    """Operation requires a signed-in user."""

    def __init__(self, message: str = "Please sign in to continue"):
        super().__init__(message)


class AuthError(WeanwiseError):
    """Sign-up or sign-in rejected by the platform."""


class PersistenceError(WeanwiseError):
    """Record store operation failed."""


class NothingToSaveError(WeanwiseError):
    """Save requested before a plan was generated."""

    def __init__(self):
        super().__init__("No generated plan to save")
