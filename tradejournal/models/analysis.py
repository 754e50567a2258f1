"""Market analysis models returned by the chart analyst agent."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class MarketPattern(BaseModel):
    """A candlestick pattern spotted on a chart."""

    name: str = Field(..., description="e.g. 'Bullish Engulfing', 'Doji'")
    description: str = Field(..., description="A brief explanation of the pattern")


class MarketTrend(BaseModel):
    """Trend read for the three short timeframes."""

    one_minute: str = Field(..., alias="1m", description="Trend for 1-minute timeframe")
    five_minute: str = Field(..., alias="5m", description="Trend for 5-minute timeframe")
    fifteen_minute: str = Field(..., alias="15m", description="Trend for 15-minute timeframe")

    model_config = {"populate_by_name": True}


class TradePrediction(BaseModel):
    """A concrete trade suggestion derived from the analysis."""

    direction: Literal["Uptrend", "Downtrend", "Sideways"]
    confidence: float = Field(..., ge=0, le=100, description="Confidence percentage")
    entry: str = Field(..., description="Suggested entry price level")
    stop_loss: str = Field(..., description="Suggested stop-loss price level")
    take_profit: str = Field(..., description="Suggested take-profit price level")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class MarketAnalysis(BaseModel):
    """Structured analysis of a market chart screenshot."""

    patterns: list[MarketPattern]
    trend: MarketTrend
    prediction: TradePrediction
