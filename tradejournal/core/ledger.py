"""Ledger recompute engine.

Adding a trade only appends. Recording a result replays the whole trade list
from scratch, so cached aggregates can never drift from the trades.
"""

import math
import uuid
from typing import Optional, Union

from tradejournal.core.errors import InvalidInputError
from tradejournal.core.patterns import aggregate_patterns
from tradejournal.core.staking import next_stake, profit_loss
from tradejournal.core.status import daily_target, evaluate_status
from tradejournal.models import AppState, SessionStats, Settings, Trade, TradeResult


def new_trade_id() -> str:
    """Generate a unique trade identifier."""
    return uuid.uuid4().hex[:12]


def wins_needed(cumulative_profit: float, settings: Settings) -> int:
    """Estimate the wins still needed to reach the daily target.

    Assumes every remaining trade is placed at ``min_trade`` with the current
    payout, so it understates the stakes a ramping session would use.
    """
    per_win = settings.min_trade * (settings.payout_percent / 100)
    remaining = daily_target(settings) - cumulative_profit
    return max(0, math.ceil(remaining / per_win))


def add_trade(state: AppState, stake: float, pattern: str) -> AppState:
    """Append a pending trade to the current session.

    Args:
        state: Current application state.
        stake: Amount to commit, must be positive.
        pattern: Pattern / reason label, must be non-empty.

    Returns:
        New state with the trade appended.

    Raises:
        InvalidInputError: If the stake or pattern is invalid.
    """
    if isinstance(stake, bool) or not isinstance(stake, (int, float)):
        raise InvalidInputError(f"Stake must be a number, got {stake!r}")
    if not math.isfinite(stake) or stake <= 0:
        raise InvalidInputError(f"Stake must be positive, got {stake}")
    label = (pattern or "").strip()
    if not label:
        raise InvalidInputError("Pattern must not be empty")

    session = state.current_session
    trade = Trade(
        id=new_trade_id(),
        trade_number=len(session.trades) + 1,
        stake=stake,
        payout_percent=state.settings.payout_percent,
        result=TradeResult.PENDING,
        profit_loss=0.0,
        cumulative_profit=session.net_profit,
        pattern=label,
    )
    return state.model_copy(
        update={
            "current_session": session.model_copy(update={"trades": [*session.trades, trade]}),
        }
    )


def _coerce_result(result: Union[TradeResult, str]) -> TradeResult:
    try:
        value = TradeResult(result)
    except ValueError:
        raise InvalidInputError(f"Unknown trade result: {result!r}") from None
    if value == TradeResult.PENDING:
        raise InvalidInputError("A trade result must be a win or a loss")
    return value


def set_result(
    state: AppState,
    trade_id: str,
    result: Union[TradeResult, str],
) -> AppState:
    """Record a win or loss for one trade and recompute the session.

    Args:
        state: Current application state.
        trade_id: ID of the trade to resolve.
        result: WIN or LOSS.

    Returns:
        New state with trades, session totals, status and stats recomputed.

    Raises:
        InvalidInputError: If the result is not WIN/LOSS or the trade is unknown.
    """
    value = _coerce_result(result)
    if not any(t.id == trade_id for t in state.current_session.trades):
        raise InvalidInputError(f"No trade with id {trade_id!r} in the current session")
    return recompute(state, trade_id=trade_id, result=value)


def recompute(
    state: AppState,
    trade_id: Optional[str] = None,
    result: Optional[TradeResult] = None,
) -> AppState:
    """Replay the current session's trades and rebuild every derived value.

    Args:
        state: Current application state.
        trade_id: Optional trade whose result is replaced during the pass.
        result: Result to apply to ``trade_id``.

    Returns:
        New state with the recomputed session and stats.
    """
    settings = state.settings
    session = state.current_session

    cumulative = 0.0
    wins = losses = 0
    consecutive_wins = consecutive_losses = 0
    trades: list[Trade] = []

    for trade in session.trades:
        if trade_id is not None and trade.id == trade_id:
            trade = trade.model_copy(
                update={
                    "result": result,
                    "profit_loss": profit_loss(trade.stake, trade.payout_percent, result),
                }
            )

        cumulative += trade.profit_loss
        trade = trade.model_copy(update={"cumulative_profit": cumulative})

        if trade.result == TradeResult.WIN:
            wins += 1
            consecutive_wins += 1
            consecutive_losses = 0
        elif trade.result == TradeResult.LOSS:
            losses += 1
            consecutive_losses += 1
            consecutive_wins = 0

        trades.append(trade)

    last_completed = next((t for t in reversed(trades) if not t.is_pending), None)
    if last_completed is not None:
        stake = next_stake(
            last_completed.stake, last_completed.result, consecutive_wins, settings.min_trade
        )
    else:
        stake = settings.min_trade

    status = evaluate_status(cumulative, wins, consecutive_losses, len(trades), settings)

    stats = SessionStats(
        wins=wins,
        losses=losses,
        consecutive_wins=consecutive_wins,
        consecutive_losses=consecutive_losses,
        next_stake=stake,
        wins_needed=wins_needed(cumulative, settings),
        pattern_stats=aggregate_patterns(trades),
    )
    new_session = session.model_copy(
        update={
            "trades": trades,
            "net_profit": cumulative,
            "current_capital": session.starting_capital + cumulative,
            "status": status,
        }
    )
    return state.model_copy(update={"current_session": new_session, "stats": stats})
