"""Trade data model."""

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TradeResult(str, Enum):
    """Outcome of a binary trade."""

    WIN = "W"
    LOSS = "L"
    PENDING = "PENDING"


class Trade(BaseModel):
    """Represents a single trade within a session."""

    id: str = Field(..., min_length=1, description="Trade identifier")
    trade_number: int = Field(..., ge=1, description="1-based sequence number in the session")
    stake: float = Field(..., gt=0, description="Amount committed to the trade")
    payout_percent: float = Field(..., ge=0, description="Payout % captured at creation")
    result: TradeResult = Field(default=TradeResult.PENDING, description="Trade result")
    profit_loss: float = Field(default=0.0, description="Profit/loss, 0 while pending")
    cumulative_profit: float = Field(default=0.0, description="Session profit through this trade")
    pattern: str = Field(..., min_length=1, description="Pattern / reason label")

    # Older journals stored numeric trade ids
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @property
    def is_pending(self) -> bool:
        return self.result == TradeResult.PENDING
