"""Abstract base class for identity and storage platform backends."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import AuthEvent, Record, User

AuthStateCallback = Callable[[AuthEvent, User | None], None]


class PlatformBackend(ABC):
    """
    Abstract identity and record store platform.

    Hides all platform implementation details including:
    - Credential storage and verification
    - Session persistence between runs
    - Record serialization and filtering

    Auth state subscriptions are handled here; backends report
    transitions through _emit_auth_event.
    """

    def __init__(self) -> None:
        self._listeners: list[AuthStateCallback] = []

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        """
        Subscribe to sign-in and sign-out events.

        Args:
            callback: Called with the event and the user (None on sign-out)

        Returns:
            Callable that removes the subscription
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit_auth_event(self, event: AuthEvent, user: User | None) -> None:
        for callback in list(self._listeners):
            callback(event, user)

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the backend.

        Raises:
            ConnectionError: If the backend cannot be opened
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> User:
        """
        Register a new user and sign them in.

        Raises:
            AuthError: If the email is taken or the credentials are invalid
        """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> User:
        """
        Sign in an existing user.

        Raises:
            AuthError: If the credentials are wrong
        """

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session (no-op without one)."""

    @abstractmethod
    async def get_current_user(self) -> User | None:
        """Return the signed-in user, or None."""

    @abstractmethod
    async def insert_record(self, table: str, data: dict[str, Any]) -> Record:
        """
        Insert a record.

        Args:
            table: Table name
            data: JSON-serializable payload

        Returns:
            The stored record with its id and creation time

        Raises:
            PersistenceError: If the insert fails
        """

    @abstractmethod
    async def select_records(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        descending: bool = True
    ) -> list[Record]:
        """
        Select records ordered by creation time.

        Args:
            table: Table name
            filters: Equality filters on payload fields
            descending: Newest first when True

        Returns:
            Matching records
        """

    @abstractmethod
    async def delete_record(
        self,
        table: str,
        record_id: str,
        filters: dict[str, Any] | None = None
    ) -> bool:
        """
        Delete a record by id.

        Args:
            table: Table name
            record_id: Record identifier
            filters: Equality filters the record must also match

        Returns:
            True if deleted, False if not found
        """

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
