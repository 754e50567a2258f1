"""Stake sizing and per-trade profit/loss.

Stakes grow after a win (1.5x plus a streak bonus of 5% per consecutive win,
capped at 20%) and shrink to 0.75x after a loss, never dropping below the
configured minimum trade.
"""

import math

from tradejournal.models import TradeResult

WIN_MULTIPLIER = 1.5
STREAK_BONUS_STEP = 0.05
STREAK_BONUS_CAP = 0.20
LOSS_MULTIPLIER = 0.75


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves rounding up."""
    return math.floor(value + 0.5)


def stake_multiplier(previous_result: TradeResult, consecutive_wins: int) -> float:
    """Get the multiplier applied to the previous stake.

    Args:
        previous_result: Result of the last completed trade.
        consecutive_wins: Current win streak, including that trade.

    Returns:
        Multiplier, or 1.0 when there is no completed trade.
    """
    if previous_result == TradeResult.WIN:
        return WIN_MULTIPLIER + min(consecutive_wins * STREAK_BONUS_STEP, STREAK_BONUS_CAP)
    if previous_result == TradeResult.LOSS:
        return LOSS_MULTIPLIER
    return 1.0


def next_stake(
    previous_stake: float,
    previous_result: TradeResult,
    consecutive_wins: int,
    min_trade: float,
) -> float:
    """Calculate the stake for the next trade.

    Args:
        previous_stake: Stake of the last completed trade.
        previous_result: Result of the last completed trade.
        consecutive_wins: Win streak after the last completed trade.
        min_trade: Minimum allowed stake.

    Returns:
        Whole-unit stake, never below ``min_trade``.
    """
    if previous_result not in (TradeResult.WIN, TradeResult.LOSS):
        return min_trade

    multiplier = stake_multiplier(previous_result, consecutive_wins)
    raw_stake = round_half_up(previous_stake * multiplier)
    return float(max(min_trade, raw_stake))


def profit_loss(stake: float, payout_percent: float, result: TradeResult) -> float:
    """Profit or loss of a trade with the given result."""
    if result == TradeResult.WIN:
        return stake * (payout_percent / 100)
    if result == TradeResult.LOSS:
        return -stake
    return 0.0
