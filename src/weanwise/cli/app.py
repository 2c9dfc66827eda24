"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..conversation import ConversationSession, Message
from ..errors import WeanwiseError
from ..planning import (
    AgeRange,
    Allergy,
    DietaryPreference,
    Goal,
    PlanGenerator,
    PlanIntake,
    Sex,
    delete_log,
    get_log,
    list_logs,
    summarize_intake,
    validate_intake,
)
from ..storage import IdentityContext
from .providers import configure_logging, get_platform, get_settings, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="weanwise",
    help="Baby food meal plans and nutrition chat assistant",
    no_args_is_help=True,
    add_completion=True,
)
logs_app = typer.Typer(help="Manage saved food plans", no_args_is_help=True)
app.add_typer(logs_app, name="logs")

# Console for rich output
console = Console()


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level: debug, info, warning or error (default: WEANWISE_LOG_LEVEL)"
    )
):
    """Configure logging before any command runs."""
    configure_logging(log_level or get_settings().log_level, console)


def _print_message(message: Message) -> None:
    speaker = "[bold yellow]You[/bold yellow]" if message.is_from_user else "[bold green]Assistant[/bold green]"
    console.print(f"{speaker} [dim]{message.timestamp}[/dim]")
    for line in message.lines():
        console.print(line, markup=False, highlight=False)
    console.print()


@app.command()
def chat():
    """Interactive chat with the baby nutrition assistant."""
    async def _chat():
        settings = get_settings()
        llm = require_llm(console, settings)
        session = ConversationSession(llm, timeout=settings.chat_timeout)

        try:
            console.print("[bold cyan]Baby Nutrition Assistant[/bold cyan]")
            console.print("[dim]Type '/reset' to start over, 'exit', 'quit', or 'q' to leave[/dim]\n")
            _print_message(session.messages[0])

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    if user_input.strip() == "/reset":
                        session.reset()
                        _print_message(session.messages[0])
                        continue

                    with console.status("[dim]Thinking...[/dim]"):
                        reply = await session.send(user_input)

                    if reply is not None:
                        _print_message(reply)

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await llm.close()

    asyncio.run(_chat())


@app.command()
def plan(
    age: AgeRange | None = typer.Option(None, "--age", help="Baby's age range in months"),
    height: float | None = typer.Option(None, "--height", help="Height in centimeters"),
    weight: float | None = typer.Option(None, "--weight", help="Weight in kilograms (3-20)"),
    sex: Sex | None = typer.Option(None, "--sex", help="Baby's sex"),
    goal: Goal | None = typer.Option(None, "--goal", "-g", help="Optional goal"),
    meals: int = typer.Option(3, "--meals", "-m", min=2, max=6, help="Meals per day"),
    allergy: list[Allergy] = typer.Option([], "--allergy", "-a", help="Allergy (repeatable)"),
    diet: DietaryPreference | None = typer.Option(None, "--diet", "-d", help="Dietary preference"),
    save: bool = typer.Option(False, "--save", "-s", help="Save the plan to your food logs"),
):
    """Generate a 3-day baby food plan."""
    try:
        intake = PlanIntake(
            age_range=age,
            height_cm=height,
            weight_kg=weight,
            sex=sex,
            goal=goal,
            meals_per_day=meals,
            allergies=allergy,
            dietary_preference=diet,
        )
        validate_intake(intake)
    except ValidationError as e:
        console.print(f"[red]Invalid intake: {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(code=1)
    except WeanwiseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    async def _plan():
        settings = get_settings()
        llm = require_llm(console, settings)
        generator = PlanGenerator(llm, timeout=settings.plan_timeout)
        generator.intake = intake

        try:
            with console.status("[dim]Generating plan...[/dim]"):
                text = await generator.generate()

            if text is None:
                console.print(f"[red]{generator.error}[/red]")
                raise typer.Exit(code=1)

            console.print(Panel(Text(text), title="Your Baby's Food Plan", border_style="yellow"))

            if save:
                platform = get_platform(settings)
                try:
                    await platform.connect()
                    async with IdentityContext(platform) as identity:
                        log = await generator.save(identity, platform)
                    console.print(f"[green]Plan saved[/green] [dim]({log.id})[/dim]")
                except ConnectionError as e:
                    console.print(f"[red]Error: {e}[/red]")
                    raise typer.Exit(code=1)
                except WeanwiseError as e:
                    console.print(f"[red]{generator.error or e}[/red]")
                    raise typer.Exit(code=1)
                finally:
                    await platform.disconnect()
        finally:
            await llm.close()

    asyncio.run(_plan())


def _run_with_identity(action):
    """Run an async action with a connected platform and identity context."""
    async def _run():
        platform = get_platform()
        try:
            await platform.connect()
            async with IdentityContext(platform) as identity:
                return await action(identity, platform)
        except (WeanwiseError, ConnectionError) as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await platform.disconnect()

    return asyncio.run(_run())


@app.command()
def signup(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
):
    """Create an account and sign in."""
    async def _signup(identity, platform):
        user = await platform.sign_up(email, password)
        console.print(f"[green]Account created. Signed in as {user.email}[/green]")

    _run_with_identity(_signup)


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Password"),
):
    """Sign in to an existing account."""
    async def _login(identity, platform):
        user = await platform.sign_in(email, password)
        console.print(f"[green]Welcome back! Signed in as {user.email}[/green]")

    _run_with_identity(_login)


@app.command()
def logout():
    """Sign out."""
    async def _logout(identity, platform):
        await platform.sign_out()
        console.print("[dim]Signed out.[/dim]")

    _run_with_identity(_logout)


@app.command()
def whoami():
    """Show the signed-in account."""
    async def _whoami(identity, platform):
        if identity.user is None:
            console.print("[dim]Not signed in.[/dim]")
        else:
            console.print(f"Signed in as [bold]{identity.user.email}[/bold]")

    _run_with_identity(_whoami)


@logs_app.command("list")
def logs_list():
    """List your saved food plans, newest first."""
    async def _list(identity, platform):
        logs = await list_logs(identity, platform)
        if not logs:
            console.print("[dim]No saved food plans yet.[/dim]")
            return

        table = Table(title="Food Logs", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Created")
        table.add_column("Age")
        table.add_column("Meals/day", justify="right")
        table.add_column("Allergies")

        for log in logs:
            details = log.plan_details
            table.add_row(
                log.id,
                log.created_at.astimezone().strftime("%Y-%m-%d %H:%M"),
                f"{details.get('age', '')} months",
                str(details.get("mealCount", "")),
                ", ".join(details.get("allergies") or []) or "None",
            )

        console.print(table)

    _run_with_identity(_list)


@logs_app.command("show")
def logs_show(log_id: str = typer.Argument(..., help="Food log ID")):
    """Show a saved food plan."""
    async def _show(identity, platform):
        log = await get_log(identity, platform, log_id)
        created = log.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
        console.print(f"[bold]Baby Food Plan[/bold] [dim]Created: {created}[/dim]\n")
        console.print("[bold]Baby Details:[/bold]")
        for line in summarize_intake(log.plan_details):
            console.print(f"  {line}", markup=False)
        console.print()
        console.print(Panel(Text(log.plan), title="Food Plan", border_style="yellow"))

    _run_with_identity(_show)


@logs_app.command("delete")
def logs_delete(
    log_id: str = typer.Argument(..., help="Food log ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete a saved food plan."""
    if not yes:
        typer.confirm(f"Delete food log {log_id}?", abort=True)

    async def _delete(identity, platform):
        await delete_log(identity, platform, log_id)
        console.print("[green]Food log deleted.[/green]")

    _run_with_identity(_delete)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
