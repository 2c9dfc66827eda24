"""Factory for creating platform backends."""

from typing import Any

from .base import PlatformBackend


def create_platform_backend(backend: str = "sqlite", **config: Any) -> PlatformBackend:
    """
    Create a platform backend instance.

    This factory function hides the implementation details of which
    backend is being used.

    Args:
        backend: Backend type ("sqlite" or "memory")
        **config: Backend-specific configuration
            For sqlite:
                - path: str | Path (default: ./weanwise.db)

    Returns:
        Platform backend (call connect() before use)

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> platform = create_platform_backend("sqlite", path="~/.weanwise/weanwise.db")
        >>> await platform.connect()
    """
    if backend == "memory":
        from .memory import InMemoryBackend
        return InMemoryBackend(**config)

    if backend == "sqlite":
        from .sqlite import SQLiteBackend
        return SQLiteBackend(**config)

    raise ValueError(
        f"Unsupported platform backend: {backend}. "
        f"Supported backends: sqlite, memory"
    )
