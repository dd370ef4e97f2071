"""Interactive terminal prompts and console chrome.

Everything here renders on stderr so stdout stays reserved for command
output (greeting lines, JSON, paths, issue summaries).
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from config.settings import settings
from schemas.issue_schemas import ProviderId, UnifiedMode
from tools.error_handler import ValidationError

console = Console(stderr=True)


def intro(section: str) -> None:
    console.print(f"[bold magenta]kirei {section}[/bold magenta]")


def outro(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")


def note(title: str, body: str) -> None:
    console.print(Panel.fit(body, title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan"))


def prompt_user_name() -> str:
    """Ask for the name to remember, re-asking until the answer is not blank."""
    while True:
        value = Prompt.ask(
            f"[bold yellow]What name should the CLI remember?[/bold yellow] [dim]({settings.name_placeholder})[/dim]",
            console=console,
        )
        if value and value.strip():
            return value.strip()
        console.print("[red]Please enter a name.[/red]")


def prompt_provider(default: ProviderId) -> ProviderId:
    choices = ", ".join(provider.value for provider in ProviderId)
    selection = Prompt.ask(
        f"[bold yellow]Provider ({choices})[/bold yellow]",
        console=console,
        default=default.value,
    )
    if not selection or not selection.strip():
        return default
    try:
        return ProviderId.parse(selection)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def prompt_operation() -> UnifiedMode:
    selection = Prompt.ask(
        "[bold yellow]Operation (list/create/targets)[/bold yellow]",
        console=console,
        default=UnifiedMode.LIST.value,
    )
    normalized = (selection or "").strip().lower()
    if normalized in ("", UnifiedMode.LIST.value):
        return UnifiedMode.LIST
    if normalized == UnifiedMode.CREATE.value:
        return UnifiedMode.CREATE
    if normalized == UnifiedMode.TARGETS.value:
        return UnifiedMode.TARGETS
    raise ValidationError(f"unknown operation '{normalized}'. choose list, create or targets")


def prompt_issue_title() -> str:
    return Prompt.ask("[bold yellow]Issue title[/bold yellow]", console=console)


def prompt_issue_body() -> Optional[str]:
    body = Prompt.ask("[bold yellow]Issue body (optional)[/bold yellow]", console=console, default="", show_default=False)
    return body if body and body.strip() else None
