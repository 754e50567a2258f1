"""Shared helpers for Trade Journal CLI commands."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from tradejournal.config import get_config, get_currency, get_db_path

console = Console()


def _get_config() -> Optional[dict]:
    """Lazily load configuration."""
    return get_config()


def get_store():
    """Get the state store instance."""
    from tradejournal.db.store import StateStore

    return StateStore(get_db_path(_get_config()))


def get_manager():
    """Get a session manager bound to the state store."""
    from tradejournal.session_manager import SessionManager

    return SessionManager(get_store())


def currency() -> str:
    """Currency label from config."""
    return get_currency(_get_config())


def signed(amount: float, unit: str = "") -> str:
    """Colored, signed amount for rich output."""
    color = "green" if amount >= 0 else "red"
    sign = "+" if amount >= 0 else ""
    suffix = f" {unit}" if unit else ""
    return f"[{color}]{sign}{amount:,.2f}{suffix}[/{color}]"


def print_error(message: str, title: str = "Error") -> None:
    """Show an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(message: str, title: str = "Error") -> None:
    """Show an error panel and exit with status 1."""
    print_error(message, title)
    raise SystemExit(1)


def warn_if_unsaved(manager) -> None:
    """Tell the user when the last state could not be written."""
    if not manager.last_save_ok:
        console.print("[yellow]Warning: state could not be saved. See logs for details.[/yellow]")
