"""History commands for Trade Journal CLI.

Handles listing archived sessions and attaching AI summaries to them.
"""

from typing import Optional

import click
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    _get_config,
    console,
    currency,
    fail,
    get_manager,
    signed,
    warn_if_unsaved,
)
from tradejournal.core.lifecycle import find_historical_session


@click.command()
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show only the N most recent.")
def history(limit: Optional[int]) -> None:
    """List archived sessions, most recent first.

    \b
    Examples:
      tradejournal history
      tradejournal history --limit 5
    """
    manager = get_manager()
    sessions = manager.state.historical_sessions
    if limit:
        sessions = sessions[:limit]

    if not sessions:
        console.print(Panel(
            "[dim]No archived sessions.[/dim]",
            title="[bold]History[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Archived Sessions", show_header=True, header_style="bold cyan")
    table.add_column("Session", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Net Profit", justify="right")
    table.add_column("AI Summary", max_width=50)

    for session in sessions:
        table.add_row(
            session.id,
            session.date.strftime("%b %d, %Y"),
            str(len(session.trades)),
            signed(session.net_profit, currency()),
            session.ai_summary or "[dim]-[/dim]",
        )

    console.print(table)


@click.command()
@click.argument("session_id")
def summarize(session_id: str) -> None:
    """Generate an AI summary for an archived session.

    SESSION_ID is shown by the history command.

    \b
    Examples:
      tradejournal summarize session-1a2b3c4d5e6f
    """
    from tradejournal.agents.base import AIServiceError
    from tradejournal.agents.coach import PatternCoachAgent
    from tradejournal.config import apply_openai_env

    manager = get_manager()
    session = find_historical_session(manager.state, session_id)
    if session is None:
        fail(f"No archived session with id '{session_id}'.", title="Unknown Session")

    config = _get_config()
    apply_openai_env(config)

    console.print("[dim]Generating AI summary...[/dim]")
    try:
        summary = PatternCoachAgent(currency=currency()).summarize_session(session)
    except AIServiceError as e:
        fail(str(e), title="AI Summary Failed")

    manager.add_session_summary(session_id, summary)
    console.print(Panel(
        Markdown(summary),
        title="[bold cyan]AI Summary[/bold cyan]",
        border_style="cyan",
    ))
    warn_if_unsaved(manager)
