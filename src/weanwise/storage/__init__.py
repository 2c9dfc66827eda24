"""Identity and record store abstraction layer for weanwise."""

from .base import AuthStateCallback, PlatformBackend
from .factory import create_platform_backend
from .identity import IdentityContext
from .memory import InMemoryBackend
from .models import AuthEvent, Record, User
from .sqlite import SQLiteBackend

__all__ = [
    "AuthEvent",
    "AuthStateCallback",
    "IdentityContext",
    "InMemoryBackend",
    "PlatformBackend",
    "Record",
    "SQLiteBackend",
    "User",
    "create_platform_backend",
]
