"""
adapters.cli.main - CLI adapter for the Academic Tutor Agent.

Mirrors src/adapters/rest/ but for terminal use. Uses the same
ServiceFactory and AgentOrchestrator as the REST API so all behaviour
(rate limiting, tools, persistence) is identical.

Commands
--------
  chat           Interactive tutor session
  conversations  List your conversations
  show           Print a conversation's messages
  delete         Delete a conversation
  init-db        Create the database schema
  add-user       Add a user to the local directory (development)
  token          Issue a bearer token for the REST API (development)

The acting user is given with --user or the TUTOR_USER_ID environment
variable.

Usage
-----
  python run_cli.py init-db
  python run_cli.py add-user ana Ana Torres --career "Systems Engineering"
  python run_cli.py chat --user ana
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from domain.entities import DirectoryUser
from domain.exceptions import DomainError
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "0.1.0"

console = Console()
app = typer.Typer(
    help="Academic Tutor Agent CLI",
    add_completion=False,
    no_args_is_help=True,
)

_USER_OPTION = typer.Option(
    ..., "--user", "-u", envvar="TUTOR_USER_ID", help="Acting user id.",
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

async def _make_factory() -> ServiceFactory:
    config = Settings.from_env()
    logging.basicConfig(level=config.log_level)
    factory = ServiceFactory(config)
    await factory.initialize()
    return factory


def _fail(exc: DomainError) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"academic-tutor v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands: Tutor
# ---------------------------------------------------------------------------

@app.command()
def chat(
    user: str = _USER_OPTION,
    conversation: Optional[str] = typer.Option(
        None, "--conversation", "-c", help="Continue an existing conversation.",
    ),
) -> None:
    """Start an interactive tutor session."""

    async def _run() -> None:
        factory = await _make_factory()
        orchestrator = factory.create_orchestrator()
        conversation_id = conversation

        console.print(Panel(
            f"[bold]Academic Tutor[/bold]\n"
            f"Acting as [bold]{user}[/bold]\n"
            "Type your question, or [bold]exit[/bold] / [bold]quit[/bold] to stop.",
            border_style="cyan",
        ))

        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            if user_input.strip().lower() in ("exit", "quit", "q", "bye"):
                console.print("[dim]Goodbye![/dim]")
                break

            if not user_input.strip():
                continue

            try:
                with console.status("[bold cyan]Thinking…", spinner="dots"):
                    result = await orchestrator.send_message(user, user_input, conversation_id)
            except DomainError as exc:
                console.print(f"[bold red]{exc}[/bold red]")
                continue

            conversation_id = result.conversation_id
            subtitle = f"{result.actions_executed} action(s)" if result.actions_executed else None
            console.print()
            console.print(Panel(
                Markdown(result.message.content),
                title="Tutor",
                subtitle=subtitle,
                border_style="green",
            ))

    asyncio.run(_run())


@app.command()
def conversations(user: str = _USER_OPTION) -> None:
    """List your conversations, most recent first."""

    async def _run() -> None:
        factory = await _make_factory()
        summaries = await factory.create_orchestrator().list_conversations(user)
        if not summaries:
            console.print("[dim]No conversations yet.[/dim]")
            return

        table = Table(title="Conversations")
        table.add_column("ID", style="bold")
        table.add_column("Title")
        table.add_column("Last message", style="dim")
        table.add_column("Updated")
        for s in summaries:
            table.add_row(s.id, s.title, s.last_message_preview or "", s.updated_at[:19])
        console.print(table)

    asyncio.run(_run())


@app.command()
def show(
    conversation_id: str = typer.Argument(..., help="Conversation id."),
    user: str = _USER_OPTION,
) -> None:
    """Print every message of a conversation."""

    async def _run() -> None:
        factory = await _make_factory()
        try:
            detail = await factory.create_orchestrator().get_conversation(user, conversation_id)
        except DomainError as exc:
            _fail(exc)
            return

        console.print(Panel(f"[bold]{detail.conversation.title}[/bold]", border_style="blue"))
        for m in detail.messages:
            style = "cyan" if m.role == "user" else "green"
            console.print(f"[bold {style}]{m.role}[/bold {style}] [dim]{m.created_at[:19]}[/dim]")
            console.print(Markdown(m.content))

    asyncio.run(_run())


@app.command()
def delete(
    conversation_id: str = typer.Argument(..., help="Conversation id."),
    user: str = _USER_OPTION,
) -> None:
    """Delete a conversation and its messages."""

    async def _run() -> None:
        factory = await _make_factory()
        try:
            result = await factory.create_orchestrator().delete_conversation(user, conversation_id)
        except DomainError as exc:
            _fail(exc)
            return
        console.print(f"[green]{result['message']}[/green]")

    asyncio.run(_run())


# ---------------------------------------------------------------------------
# Commands: Setup / development
# ---------------------------------------------------------------------------

@app.command("init-db")
def init_db() -> None:
    """Create the database schema (safe to run repeatedly)."""

    async def _run() -> None:
        factory = await _make_factory()
        console.print(Panel(
            f"[bold green]Database ready[/bold green] at {factory.config.db_path}",
            border_style="green",
        ))

    asyncio.run(_run())


@app.command("add-user")
def add_user(
    user_id: str = typer.Argument(..., help="User id."),
    first_name: str = typer.Argument(...),
    last_name: str = typer.Argument(""),
    career: Optional[str] = typer.Option(None, "--career", help="Field of study."),
) -> None:
    """Add a user to the local directory."""

    async def _run() -> None:
        factory = await _make_factory()
        await factory.create_user_repository().save(DirectoryUser(
            id=user_id, first_name=first_name, last_name=last_name, career=career or "",
        ))
        console.print(f"[green]User {user_id} saved.[/green]")

    asyncio.run(_run())


@app.command()
def token(user: str = _USER_OPTION) -> None:
    """Print a bearer token for the REST API."""
    factory = ServiceFactory(Settings.from_env())
    console.print(factory.create_token_service().issue_token(user))


# ---------------------------------------------------------------------------
# Global version option
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Academic Tutor Agent CLI"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
