"""Settings commands for Trade Journal CLI.

Handles config file creation and viewing or changing journal settings.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, currency, fail, get_manager, warn_if_unsaved
from tradejournal.config import get_config_path, init_config
from tradejournal.models import Settings

# (field, label) in display order
SETTING_LABELS = [
    ("starting_capital", "Starting Capital"),
    ("long_term_goal", "Long-Term Goal"),
    ("daily_target_percent", "Daily Target (%)"),
    ("daily_stop_loss_percent", "Daily Stop-Loss (%)"),
    ("max_trades", "Max Trades per Session"),
    ("min_trade", "Minimum Trade"),
    ("payout_percent", "Payout (%)"),
    ("optional_stop_on_wins", "Pause After Wins"),
    ("wins_to_stop", "Wins to Pause"),
    ("optional_stop_on_losses", "Pause After Losses"),
    ("losses_to_stop", "Consecutive Losses to Pause"),
]


def render_settings(settings: Settings, unit: str) -> Table:
    """Build the settings table."""
    table = Table(title="Settings", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")

    for field, label in SETTING_LABELS:
        value = getattr(settings, field)
        if isinstance(value, bool):
            shown = "[green]on[/green]" if value else "[dim]off[/dim]"
        elif field in ("starting_capital", "long_term_goal", "min_trade"):
            shown = f"{value:,.2f} {unit}"
        else:
            shown = str(value)
        table.add_row(label, shown)
    return table


@click.command()
def init() -> None:
    """Create the config file.

    \b
    Examples:
      tradejournal init
    """
    existed = get_config_path().exists()
    path = init_config()

    if existed:
        console.print(f"[dim]Config already exists at {path}[/dim]")
        return

    console.print(Panel(
        f"[green]Config created at {path}[/green]\n\n"
        "Add your OpenAI API key under [cyan]\\[openai][/cyan] to enable AI features.",
        title="[bold green]Initialized[/bold green]",
        border_style="green",
    ))


@click.group()
def settings() -> None:
    """View or change journal settings.

    \b
    Commands:
      show  - Display current settings
      set   - Change one or more settings
    """
    pass


@settings.command()
def show() -> None:
    """Display current settings."""
    manager = get_manager()
    console.print(render_settings(manager.state.settings, currency()))


@settings.command(name="set")
@click.option("--starting-capital", type=float, default=None, help="Starting capital.")
@click.option("--long-term-goal", type=float, default=None, help="Long-term capital goal.")
@click.option("--daily-target-percent", type=float, default=None, help="Daily target %.")
@click.option("--daily-stop-loss-percent", type=float, default=None, help="Daily stop-loss %.")
@click.option("--max-trades", type=int, default=None, help="Max trades per session.")
@click.option("--min-trade", type=float, default=None, help="Minimum stake.")
@click.option("--payout-percent", type=float, default=None, help="Payout % on a win.")
@click.option("--pause-on-wins/--no-pause-on-wins", "optional_stop_on_wins", default=None)
@click.option("--wins-to-stop", type=int, default=None, help="Wins before pausing.")
@click.option("--pause-on-losses/--no-pause-on-losses", "optional_stop_on_losses", default=None)
@click.option("--losses-to-stop", type=int, default=None, help="Consecutive losses before pausing.")
@click.option("--confirm", is_flag=True, help="Skip confirmation when the session will reset.")
def set_settings(confirm: bool, **changes: Optional[float]) -> None:
    """Change one or more settings.

    Changing the starting capital resets the current session.
    Other changes apply from the next recorded result.

    \b
    Examples:
      tradejournal settings set --payout-percent 80
      tradejournal settings set --starting-capital 50000 --confirm
    """
    updates = {k: v for k, v in changes.items() if v is not None}
    if not updates:
        console.print("[dim]Nothing to change.[/dim]")
        return

    manager = get_manager()
    current = manager.state.settings

    try:
        new_settings = Settings(**{**current.model_dump(), **updates})
    except ValidationError as e:
        fail("\n".join(err["msg"] for err in e.errors()), title="Invalid Settings")

    capital_changed = new_settings.starting_capital != current.starting_capital
    if capital_changed and manager.state.current_session.trades and not confirm:
        if not click.confirm("Changing starting capital resets the current session. Continue?"):
            console.print("[dim]Cancelled.[/dim]")
            return

    state = manager.update_settings(new_settings)
    console.print("[green]Settings saved.[/green]")
    if capital_changed:
        console.print("[yellow]Starting capital changed; a new session was started.[/yellow]")
    console.print(render_settings(state.settings, currency()))
    warn_if_unsaved(manager)
