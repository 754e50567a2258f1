"""Data models for Trade Journal."""

from tradejournal.models.settings import Settings
from tradejournal.models.trade import Trade, TradeResult
from tradejournal.models.session import Session, SessionStatus
from tradejournal.models.stats import PatternStat, SessionStats
from tradejournal.models.state import AppState
from tradejournal.models.analysis import (
    MarketAnalysis,
    MarketPattern,
    MarketTrend,
    TradePrediction,
)

__all__ = [
    "Settings",
    "Trade",
    "TradeResult",
    "Session",
    "SessionStatus",
    "PatternStat",
    "SessionStats",
    "AppState",
    "MarketAnalysis",
    "MarketPattern",
    "MarketTrend",
    "TradePrediction",
]
