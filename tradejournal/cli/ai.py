"""AI commands for Trade Journal CLI.

Handles pattern statistics with recommendations and chart screenshot
analysis.
"""

from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import _get_config, console, fail, get_manager
from tradejournal.core.patterns import sort_for_display
from tradejournal.models import MarketAnalysis

# Shown when the recommendation request fails
SUGGESTION_ERROR = "Error getting suggestion."


def render_patterns(stats) -> Table:
    """Build the pattern statistics table, most used first."""
    table = Table(title="Pattern Stats", show_header=True, header_style="bold cyan")
    table.add_column("Pattern", style="bold")
    table.add_column("Wins/Total", justify="right")
    table.add_column("Accuracy", justify="right")

    for stat in sort_for_display(stats):
        color = "green" if stat.accuracy >= 50 else "red"
        table.add_row(
            stat.name,
            f"{stat.wins}/{stat.total}",
            f"[{color}]{stat.accuracy:.1f}%[/{color}]",
        )
    return table


def render_analysis(analysis: MarketAnalysis) -> Panel:
    """Build the chart analysis panel."""
    prediction = analysis.prediction
    direction_color = {
        "Uptrend": "green",
        "Downtrend": "red",
    }.get(prediction.direction, "yellow")

    lines = [
        "[bold]Prediction[/bold]",
        f"Direction:   [{direction_color}]{prediction.direction}[/{direction_color}]"
        f" ({prediction.confidence:.0f}% confidence)",
        f"Entry:       {prediction.entry}",
        f"Stop-Loss:   [red]{prediction.stop_loss}[/red]",
        f"Take-Profit: [green]{prediction.take_profit}[/green]",
        "",
        "[bold]Trend[/bold]",
        f"1m: {analysis.trend.one_minute}   "
        f"5m: {analysis.trend.five_minute}   "
        f"15m: {analysis.trend.fifteen_minute}",
    ]
    if analysis.patterns:
        lines += ["", "[bold]Identified Patterns[/bold]"]
        lines += [f"• [cyan]{p.name}[/cyan]: {p.description}" for p in analysis.patterns]

    return Panel(
        "\n".join(lines),
        title="[bold cyan]Analysis Result[/bold cyan]",
        border_style="cyan",
    )


@click.command()
@click.option("--recommend", is_flag=True, help="Ask the AI which pattern to trade next.")
def patterns(recommend: bool) -> None:
    """Show win statistics per pattern for the current session.

    \b
    Examples:
      tradejournal patterns
      tradejournal patterns --recommend
    """
    manager = get_manager()
    stats = manager.state.stats.pattern_stats

    if stats:
        console.print(render_patterns(stats))
    else:
        console.print("[dim]No pattern data for this session yet.[/dim]")

    if not recommend:
        return

    from tradejournal.agents.base import AIServiceError
    from tradejournal.agents.coach import PatternCoachAgent
    from tradejournal.config import apply_openai_env

    apply_openai_env(_get_config())
    try:
        suggestion = PatternCoachAgent().recommend_pattern(stats)
    except AIServiceError as e:
        console.print(f"[dim]{e}[/dim]")
        suggestion = SUGGESTION_ERROR

    console.print(Panel(
        suggestion,
        title="[bold cyan]Suggested Pattern[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def analyze(image: Path) -> None:
    """Analyze a market chart screenshot with AI.

    IMAGE must be a PNG, JPG or JPEG file.

    \b
    Examples:
      tradejournal analyze ~/Desktop/chart.png
    """
    from tradejournal.agents.analyst import MarketAnalystAgent
    from tradejournal.agents.base import AIServiceError
    from tradejournal.config import apply_openai_env

    apply_openai_env(_get_config())

    console.print(f"[dim]Analyzing {image.name}...[/dim]")
    try:
        analysis = MarketAnalystAgent().analyze_image(image)
    except AIServiceError as e:
        fail(str(e), title="Analysis Failed")

    console.print(render_analysis(analysis))
