"""Session commands for Trade Journal CLI.

Handles adding trades, recording results, and starting or archiving
sessions.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    currency,
    fail,
    get_manager,
    get_store,
    signed,
    warn_if_unsaved,
)
from tradejournal.core.errors import InvalidInputError
from tradejournal.core.progress import session_progress, status_color, status_label
from tradejournal.core.status import accepts_results, is_terminal
from tradejournal.models import AppState, Session, TradeResult

RESULT_COLORS = {
    TradeResult.WIN: "green",
    TradeResult.LOSS: "red",
    TradeResult.PENDING: "yellow",
}


def render_status(state: AppState, unit: str) -> Panel:
    """Build the session summary panel."""
    settings = state.settings
    session = state.current_session
    stats = state.stats
    progress = session_progress(state)
    color = status_color(session.status)
    next_stake = (
        f"{stats.next_stake:,.2f}" if not is_terminal(session.status) else "-"
    )

    text = (
        f"Net Profit:      {signed(session.net_profit, unit)}\n"
        f"Wins:            {stats.wins}\n"
        f"Capital:         {session.current_capital:,.2f} {unit}\n"
        f"Status:          [{color}]{status_label(session.status, settings)}[/{color}]\n"
        f"{'─' * 40}\n"
        f"Daily Target:    {progress['daily_target']:,.2f} {unit} "
        f"([green]{progress['profit_bar']:.1f}%[/green])\n"
        f"Stop-Loss:       {progress['daily_stop_loss']:,.2f} {unit} "
        f"([red]{progress['loss_bar']:.1f}%[/red])\n"
        f"Long-Term Goal:  {settings.long_term_goal:,.2f} {unit} "
        f"([cyan]{progress['long_term_bar']:.1f}%[/cyan])\n"
        f"{'─' * 40}\n"
        f"Wins Needed:     {stats.wins_needed}\n"
        f"Next Stake:      {next_stake}"
    )
    return Panel(text, title="[bold cyan]Session Summary[/bold cyan]", border_style="cyan")


def render_trades(session: Session, unit: str) -> Table:
    """Build the trade log table."""
    table = Table(title="Trade Log", show_header=True, header_style="bold")

    table.add_column("#", justify="center")
    table.add_column(f"Stake ({unit})", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("P/L", justify="right")
    table.add_column("Cumulative", justify="right")
    table.add_column("Pattern / Reason")

    for trade in session.trades:
        color = RESULT_COLORS[trade.result]
        table.add_row(
            str(trade.trade_number),
            f"{trade.stake:,.2f}",
            f"[{color}]{trade.result.value}[/{color}]",
            f"[{color}]{trade.profit_loss:,.2f}[/{color}]",
            signed(trade.cumulative_profit),
            trade.pattern,
        )
    return table


@click.command()
def status() -> None:
    """Show the current session summary.

    \b
    Examples:
      tradejournal status
    """
    manager = get_manager()
    console.print(render_status(manager.state, currency()))


@click.command()
def trades() -> None:
    """Show the current session's trade log.

    \b
    Examples:
      tradejournal trades
    """
    manager = get_manager()
    session = manager.state.current_session

    if not session.trades:
        console.print("[dim]No trades in this session yet.[/dim]")
        return

    console.print(render_trades(session, currency()))


@click.command()
@click.argument("pattern")
@click.option(
    "--stake",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stake amount. Defaults to the suggested next stake.",
)
def add(pattern: str, stake: Optional[float]) -> None:
    """Add a pending trade to the current session.

    PATTERN is the setup or reason behind the trade.

    \b
    Examples:
      tradejournal add "Bullish Engulfing"
      tradejournal add "Doji" --stake 500
    """
    manager = get_manager()
    state = manager.state

    if is_terminal(state.current_session.status):
        fail("Session has ended. No further trades allowed.", title="Session Ended")

    amount = stake if stake is not None else state.stats.next_stake

    try:
        trade = manager.add_trade(amount, pattern)
    except InvalidInputError as e:
        fail(str(e), title="Invalid Trade")

    console.print(
        f"[green]Added trade #{trade.trade_number}[/green]: "
        f"{trade.stake:,.2f} {currency()} on '{trade.pattern}'"
    )
    warn_if_unsaved(manager)


def _record(trade_number: int, result: TradeResult) -> None:
    """Record a result for the trade with the given number."""
    manager = get_manager()
    session = manager.state.current_session
    trade = session.find_trade(trade_number)

    if trade is None:
        fail(f"No trade #{trade_number} in the current session.", title="Unknown Trade")
    if not trade.is_pending:
        fail(f"Trade #{trade_number} is already recorded as {trade.result.value}.")
    if not accepts_results(session.status):
        fail(
            f"Session is closed ({status_label(session.status, manager.state.settings)}).",
            title="Session Ended",
        )

    try:
        state = manager.update_trade_result(trade.id, result)
    except InvalidInputError as e:
        fail(str(e))

    resolved = state.current_session.find_trade(trade_number)
    console.print(
        f"Trade #{trade_number}: {signed(resolved.profit_loss, currency())} "
        f"(cumulative {signed(resolved.cumulative_profit)})"
    )
    console.print(render_status(state, currency()))
    warn_if_unsaved(manager)


@click.command()
@click.argument("trade_number", type=click.IntRange(min=1))
def win(trade_number: int) -> None:
    """Record a trade as a win.

    \b
    Examples:
      tradejournal win 3
    """
    _record(trade_number, TradeResult.WIN)


@click.command()
@click.argument("trade_number", type=click.IntRange(min=1))
def loss(trade_number: int) -> None:
    """Record a trade as a loss.

    \b
    Examples:
      tradejournal loss 3
    """
    _record(trade_number, TradeResult.LOSS)


@click.command()
def archive() -> None:
    """Archive the current session and start the next one.

    The next session starts from the archived session's ending capital.

    \b
    Examples:
      tradejournal archive
    """
    manager = get_manager()
    session = manager.state.current_session

    if not session.trades:
        console.print("[dim]Current session has no trades. Nothing to archive.[/dim]")
        return

    state = manager.archive_current_session()
    console.print(Panel(
        f"[green]Session archived.[/green]\n\n"
        f"Net Profit: {signed(session.net_profit, currency())}\n"
        f"Next session capital: {state.current_session.starting_capital:,.2f} {currency()}",
        title="[bold green]Archived[/bold green]",
        border_style="green",
    ))
    warn_if_unsaved(manager)


@click.command()
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def new(confirm: bool) -> None:
    """Discard the current session and start a new one.

    Trades are not archived and capital restarts from the configured
    starting capital.

    \b
    Examples:
      tradejournal new
      tradejournal new --confirm
    """
    manager = get_manager()
    trade_count = len(manager.state.current_session.trades)

    if trade_count and not confirm:
        if not click.confirm(f"Discard {trade_count} trade(s) without archiving?"):
            console.print("[dim]Cancelled.[/dim]")
            return

    state = manager.start_new_session()
    console.print(
        f"[green]New session started[/green] with "
        f"{state.current_session.starting_capital:,.2f} {currency()}."
    )
    warn_if_unsaved(manager)


@click.command()
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def reset(confirm: bool) -> None:
    """Delete all stored data: settings, session and history.

    \b
    Examples:
      tradejournal reset --confirm
    """
    if not confirm:
        if not click.confirm("Are you sure you want to delete all journal data?"):
            console.print("[dim]Reset cancelled.[/dim]")
            return

    store = get_store()
    if not store.usable:
        fail(
            f"Database {store.db_path} is unreadable. Move or delete it, then run reset again.",
            title="Reset Failed",
        )

    store.clear()
    console.print(Panel(
        "[green]Journal data has been reset to defaults.[/green]",
        title="[bold green]Reset Complete[/bold green]",
        border_style="green",
    ))
