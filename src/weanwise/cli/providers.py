"""Provider factory functions for CLI.

Centralizes creation of settings, the platform backend and the LLM
provider from environment variables. Hides configuration details from
command implementations.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from ..config import Settings
from ..llm import LLMProvider, create_llm_provider
from ..llm.providers.deepseek import DEEPSEEK_BASE_URL
from ..storage import PlatformBackend, create_platform_backend

# Default console for output
_console = Console()


def get_settings() -> Settings:
    """Read settings from the environment."""
    return Settings.from_env()


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route library logging through Rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or _console, show_path=False)],
        force=True,
    )


def get_platform(settings: Settings | None = None) -> PlatformBackend:
    """Create the identity and storage backend.

    Returns:
        Platform backend (not yet connected)

    Environment variables:
        WEANWISE_BACKEND: sqlite or memory (default: sqlite)
        WEANWISE_DB_PATH: SQLite file (default: ~/.weanwise/weanwise.db)
    """
    settings = settings or get_settings()
    if settings.backend == "sqlite":
        return create_platform_backend("sqlite", path=settings.db_path)
    return create_platform_backend(settings.backend)


def get_llm(console: Console | None = None, settings: Settings | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output
        settings: Optional pre-loaded settings

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (deepseek, openai; default: deepseek)
        DEEPSEEK_API_KEY: DeepSeek API key (for deepseek provider)
        DEEPSEEK_BASE_URL: DeepSeek endpoint (default: https://api.deepseek.com/v1)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        WEANWISE_CHAT_MODEL: Model override
    """
    con = console or _console
    settings = settings or get_settings()
    model_config = {"model": settings.chat_model} if settings.chat_model else {}

    if settings.llm_provider == "deepseek":
        api_key = os.getenv("DEEPSEEK_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: DEEPSEEK_API_KEY not set, assistant disabled[/yellow]")
            return None
        return create_llm_provider(
            "deepseek",
            api_key=api_key,
            base_url=os.getenv("DEEPSEEK_BASE_URL", DEEPSEEK_BASE_URL),
            **model_config
        )

    elif settings.llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set, assistant disabled[/yellow]")
            return None
        return create_llm_provider("openai", api_key=api_key, **model_config)

    else:
        con.print(f"[red]Error: Unknown LLM provider: {settings.llm_provider}[/red]")
        return None


def require_llm(console: Console | None = None, settings: Settings | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If LLM provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(con, settings)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm
