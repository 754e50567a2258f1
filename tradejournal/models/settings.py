"""Settings data model."""

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class Settings(BaseModel):
    """Capital, risk and staking rules that drive a session."""

    starting_capital: float = Field(default=30000, ge=0, description="Starting capital")
    daily_target_percent: float = Field(
        default=5, ge=0, description="Daily profit target as % of starting capital"
    )
    daily_stop_loss_percent: float = Field(
        default=3, ge=0, description="Daily stop-loss as % of starting capital"
    )
    max_trades: int = Field(default=10, ge=1, description="Max trades per session")
    min_trade: float = Field(default=280, gt=0, description="Minimum stake")
    payout_percent: float = Field(default=85, gt=0, description="Payout % on a win")
    long_term_goal: float = Field(default=60000, ge=0, description="Long-term capital goal")
    optional_stop_on_wins: bool = Field(default=True, description="Pause after N wins")
    wins_to_stop: int = Field(default=3, description="Wins before pausing")
    optional_stop_on_losses: bool = Field(
        default=True, description="Pause after N consecutive losses"
    )
    losses_to_stop: int = Field(default=3, description="Consecutive losses before pausing")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @model_validator(mode="after")
    def _check_pause_thresholds(self) -> "Settings":
        if self.optional_stop_on_wins and self.wins_to_stop < 1:
            raise ValueError("wins_to_stop must be a positive integer when enabled")
        if self.optional_stop_on_losses and self.losses_to_stop < 1:
            raise ValueError("losses_to_stop must be a positive integer when enabled")
        return self
