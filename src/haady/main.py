"""
Haady - CLI Entry Point.

Usage:
    haady resolve --full-name "Sara" --step 3    Resolve a snapshot locally
    haady steps                                  Show the onboarding step table
    haady user <user_id>                         Resolve a real user from Supabase
    haady serve                                  Start the API server
    haady health                                 Check configuration
    haady --help                                 Show help
"""

import asyncio
import os

import typer
from rich.console import Console
from rich.table import Table

from haady.onboarding import (
    STEP_DEFINITIONS,
    OnboardingProgress,
    UserProfileSnapshot,
    summarize,
)

app = typer.Typer(
    name="haady",
    help="Haady - profile onboarding tools.",
    add_completion=False,
)
console = Console()


def _print_progress(progress: OnboardingProgress, username: str | None) -> None:
    target = progress.next_target
    if target.is_profile_redirect:
        where = f"[green]profile[/green] ({target.href(username)})"
    else:
        where = f"[yellow]{target.value}[/yellow]"

    console.print(f"Next:       {where}")
    console.print(f"Step:       {progress.current_step} / 5")
    console.print(f"Completion: {progress.completion_percentage}%")
    if progress.is_complete:
        console.print("[green]All onboarding steps complete[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    from haady.logging_setup import setup_logging

    setup_logging("DEBUG" if verbose else "WARNING")


@app.command()
def resolve(
    full_name: str | None = typer.Option(None, "--full-name", "-n", help="Profile full name"),
    username: str | None = typer.Option(None, "--username", "-u", help="Profile username"),
    step: int | None = typer.Option(None, "--step", "-s", help="Stored onboarding_step pointer"),
    onboarded: bool = typer.Option(False, "--onboarded", help="is_onboarded flag"),
    traits: bool = typer.Option(False, "--traits", help="Has personality traits"),
    brands: bool = typer.Option(False, "--brands", help="Has favorite brands"),
    colors: bool = typer.Option(False, "--colors", help="Has favorite colors"),
) -> None:
    """Resolve the next onboarding target for a hand-built snapshot."""
    snapshot = UserProfileSnapshot(
        full_name=full_name,
        username=username,
        onboarding_step=step,
        is_onboarded=onboarded,
        has_personality_traits=traits,
        has_favorite_brands=brands,
        has_favorite_colors=colors,
    )
    _print_progress(summarize(snapshot), username)


@app.command()
def steps() -> None:
    """Show the onboarding step table."""
    table = Table(title="Onboarding Steps")
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Skippable")
    table.add_column("Path")

    for definition in STEP_DEFINITIONS.values():
        table.add_row(
            str(int(definition.step)),
            definition.step.name.lower(),
            "yes" if definition.skippable else "no",
            definition.path or "[dim]/@{username}[/dim]",
        )

    console.print(table)


@app.command()
def user(
    user_id: str = typer.Argument(..., help="Supabase user ID"),
) -> None:
    """Fetch a user's snapshot from Supabase and resolve it."""
    from haady.db.errors import AppError
    from haady.db.users import fetch_user_profile

    try:
        snapshot = asyncio.run(fetch_user_profile(user_id))
    except AppError as e:
        console.print(f"[red]{e.code.value}: {e.message}[/red]")
        raise typer.Exit(1)

    if snapshot is None:
        console.print(f"[red]No profile found for {user_id}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{snapshot.full_name or '(no name)'}[/bold] @{snapshot.username or '-'}\n")
    _print_progress(summarize(snapshot), snapshot.username)


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    import uvicorn

    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Haady API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "haady.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from haady.config import get_settings

    console.print("\n[bold]Haady Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.haady_env}")
    console.print(f"   Log level: {settings.log_level}")

    if settings.supabase_url.startswith("https://"):
        console.print("[green]OK[/green] Supabase URL configured")
    else:
        console.print("[red]FAIL[/red] Supabase URL missing or invalid")
        raise typer.Exit(1)

    if settings.supabase_service_role_key:
        console.print("[green]OK[/green] Service role key configured")
    else:
        console.print("[yellow]WARN[/yellow] Service role key missing, falling back to anon key")

    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from haady import __version__

    console.print(f"Haady version {__version__}")


if __name__ == "__main__":
    app()
