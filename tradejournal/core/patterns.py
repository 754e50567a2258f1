"""Per-pattern win statistics."""

from typing import Iterable

from tradejournal.models import PatternStat, Trade, TradeResult


def accuracy(wins: int, total: int) -> float:
    """Win percentage, 0 for an empty group."""
    return (wins / total) * 100 if total > 0 else 0.0


def aggregate_patterns(trades: Iterable[Trade]) -> list[PatternStat]:
    """Group trades by pattern label and count wins.

    Labels are compared exactly (case-sensitive). Pending trades count
    towards ``total`` but never towards ``wins``.

    Args:
        trades: Trades in session order.

    Returns:
        One PatternStat per label, in first-seen order.
    """
    counts: dict[str, list[int]] = {}
    for trade in trades:
        if not trade.pattern:
            continue
        bucket = counts.setdefault(trade.pattern, [0, 0])
        bucket[0] += 1
        if trade.result == TradeResult.WIN:
            bucket[1] += 1

    return [
        PatternStat(name=name, total=total, wins=wins, accuracy=accuracy(wins, total))
        for name, (total, wins) in counts.items()
    ]


def sort_for_display(stats: Iterable[PatternStat]) -> list[PatternStat]:
    """Most used patterns first."""
    return sorted(stats, key=lambda s: s.total, reverse=True)
