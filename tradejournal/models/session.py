"""Session data model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from tradejournal.models.trade import Trade, TradeResult


class SessionStatus(str, Enum):
    """Lifecycle state of a trading session."""

    IN_PROGRESS = "IN_PROGRESS"
    TARGET_REACHED = "TARGET_REACHED"
    STOP_LOSS_HIT = "STOP_LOSS_HIT"
    PAUSED_WINS = "PAUSED_WINS"
    PAUSED_LOSSES = "PAUSED_LOSSES"


class Session(BaseModel):
    """A bounded sequence of trades sharing one starting-capital baseline."""

    id: str = Field(..., min_length=1, description="Session identifier")
    date: datetime = Field(default_factory=datetime.now, description="Creation timestamp")
    starting_capital: float = Field(..., ge=0, description="Capital at session start")
    current_capital: float = Field(..., description="Starting capital plus net profit")
    trades: list[Trade] = Field(default_factory=list, description="Trades, in sequence order")
    net_profit: float = Field(default=0.0, description="Cumulative profit of the last trade")
    status: SessionStatus = Field(default=SessionStatus.IN_PROGRESS, description="Session status")
    ai_summary: Optional[str] = Field(default=None, description="AI-generated narrative")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @property
    def wins(self) -> int:
        return sum(1 for t in self.trades if t.result == TradeResult.WIN)

    @property
    def losses(self) -> int:
        return sum(1 for t in self.trades if t.result == TradeResult.LOSS)

    def find_trade(self, trade_number: int) -> Optional[Trade]:
        """Look up a trade by its sequence number."""
        for trade in self.trades:
            if trade.trade_number == trade_number:
                return trade
        return None
