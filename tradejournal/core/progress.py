"""Display helpers for session progress and status labels."""

from tradejournal.core.status import daily_stop_loss, daily_target
from tradejournal.models import AppState, SessionStatus, Settings


def clamp_percent(value: float) -> float:
    """Clamp a percentage into 0..100 for progress bars."""
    return max(0.0, min(value, 100.0))


def status_label(status: SessionStatus, settings: Settings) -> str:
    """Human-readable status label."""
    if status == SessionStatus.TARGET_REACHED:
        return "Target Reached"
    if status == SessionStatus.STOP_LOSS_HIT:
        return "Stop Loss Hit"
    if status == SessionStatus.PAUSED_WINS:
        return f"Paused ({settings.wins_to_stop} Wins)"
    if status == SessionStatus.PAUSED_LOSSES:
        return f"Paused ({settings.losses_to_stop} Losses)"
    return "In Progress"


def status_color(status: SessionStatus) -> str:
    """Rich color for a status."""
    return {
        SessionStatus.TARGET_REACHED: "green",
        SessionStatus.STOP_LOSS_HIT: "red",
        SessionStatus.PAUSED_WINS: "yellow",
        SessionStatus.PAUSED_LOSSES: "dark_orange",
    }.get(status, "cyan")


def session_progress(state: AppState) -> dict:
    """Progress towards the daily target, stop-loss and long-term goal.

    Args:
        state: Current application state.

    Returns:
        Dictionary with the thresholds, raw percentages and the same
        percentages clamped to 0..100 for progress bars.
    """
    settings = state.settings
    session = state.current_session
    target = daily_target(settings)
    stop_loss = daily_stop_loss(settings)
    net = session.net_profit

    profit_progress = (net / target) * 100 if target > 0 else 0.0
    loss_progress = (abs(min(0.0, net)) / stop_loss) * 100 if stop_loss > 0 else 0.0

    goal_span = settings.long_term_goal - settings.starting_capital
    if goal_span != 0:
        long_term_progress = (
            (session.current_capital - settings.starting_capital) / goal_span
        ) * 100
    else:
        long_term_progress = 0.0

    return {
        "daily_target": target,
        "daily_stop_loss": stop_loss,
        "profit_progress": profit_progress,
        "loss_progress": loss_progress,
        "long_term_progress": long_term_progress,
        "profit_bar": clamp_percent(profit_progress),
        "loss_bar": clamp_percent(loss_progress),
        "long_term_bar": clamp_percent(long_term_progress),
    }
