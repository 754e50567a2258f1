"""PatternStat and SessionStats data models."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class PatternStat(BaseModel):
    """Win statistics for one pattern label."""

    name: str = Field(..., description="Pattern name")
    total: int = Field(..., ge=0, description="Trades using the pattern")
    wins: int = Field(..., ge=0, description="Winning trades using the pattern")
    accuracy: float = Field(..., ge=0, le=100, description="Win percentage")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class SessionStats(BaseModel):
    """Aggregates derived from the current session's trades."""

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    consecutive_wins: int = Field(default=0, ge=0)
    consecutive_losses: int = Field(default=0, ge=0)
    next_stake: float = Field(default=280, ge=0, description="Suggested stake for the next trade")
    wins_needed: int = Field(default=0, ge=0, description="Min-stake wins needed to hit target")
    pattern_stats: list[PatternStat] = Field(default_factory=list)

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}
