"""Explicit identity context handed to components that need a user."""

from typing import Any

from ..errors import NotAuthenticatedError
from .base import PlatformBackend
from .models import AuthEvent, User


class IdentityContext:
    """Tracks the signed-in user of a platform backend.

    Components receive this object as a parameter instead of asking the
    platform for the current user themselves. The cached user follows the
    backend's auth state events while attached.

    Usage:
        async with IdentityContext(backend) as identity:
            user = identity.require_user()
    """

    def __init__(self, backend: PlatformBackend, user: User | None = None):
        self._backend = backend
        self._user = user
        self._unsubscribe = None

    @property
    def backend(self) -> PlatformBackend:
        return self._backend

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def refresh(self) -> User | None:
        """Re-read the current user from the backend."""
        self._user = await self._backend.get_current_user()
        return self._user

    def attach(self) -> None:
        """Start following auth state changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self._backend.on_auth_state_change(self._on_auth_state_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def require_user(self, message: str = "Please sign in to continue") -> User:
        """Return the current user.

        Raises:
            NotAuthenticatedError: If nobody is signed in
        """
        if self._user is None:
            raise NotAuthenticatedError(message)
        return self._user

    def _on_auth_state_change(self, event: AuthEvent, user: User | None) -> None:
        self._user = user if event == AuthEvent.SIGNED_IN else None

    async def __aenter__(self) -> "IdentityContext":
        self.attach()
        await self.refresh()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.detach()
