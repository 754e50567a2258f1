"""Session status evaluation.

Every status other than IN_PROGRESS ends the session. Checks run in a fixed
priority order and the first match wins.
"""

from tradejournal.models import SessionStatus, Settings


def daily_target(settings: Settings) -> float:
    """Profit that ends the session as TARGET_REACHED."""
    return (settings.starting_capital * settings.daily_target_percent) / 100


def daily_stop_loss(settings: Settings) -> float:
    """Loss (as a positive amount) that ends the session as STOP_LOSS_HIT."""
    return (settings.starting_capital * settings.daily_stop_loss_percent) / 100


def evaluate_status(
    cumulative_profit: float,
    wins: int,
    consecutive_losses: int,
    trade_count: int,
    settings: Settings,
) -> SessionStatus:
    """Derive the session status from profit, counters and settings.

    Args:
        cumulative_profit: Session profit through the last trade.
        wins: Total winning trades in the session.
        consecutive_losses: Current loss streak.
        trade_count: Number of trades in the session, pending included.
        settings: Active settings.

    Returns:
        The first matching status.
    """
    if cumulative_profit >= daily_target(settings):
        return SessionStatus.TARGET_REACHED
    if cumulative_profit <= -daily_stop_loss(settings):
        return SessionStatus.STOP_LOSS_HIT
    if settings.optional_stop_on_wins and wins >= settings.wins_to_stop:
        return SessionStatus.PAUSED_WINS
    if settings.optional_stop_on_losses and consecutive_losses >= settings.losses_to_stop:
        return SessionStatus.PAUSED_LOSSES
    # The trade cap shares PAUSED_WINS; there is no dedicated status for it.
    if trade_count >= settings.max_trades:
        return SessionStatus.PAUSED_WINS
    return SessionStatus.IN_PROGRESS


def is_terminal(status: SessionStatus) -> bool:
    """Whether the session no longer accepts new trades."""
    return status != SessionStatus.IN_PROGRESS


def accepts_results(status: SessionStatus) -> bool:
    """Whether pending trades may still be resolved."""
    return status not in (SessionStatus.TARGET_REACHED, SessionStatus.STOP_LOSS_HIT)
