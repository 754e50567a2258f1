"""AppState data model."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from tradejournal.models.session import Session
from tradejournal.models.settings import Settings
from tradejournal.models.stats import SessionStats


class AppState(BaseModel):
    """Settings, the live session, archived sessions and derived stats.

    This is the unit of persistence: the whole object is stored as one blob.
    """

    settings: Settings
    current_session: Session
    historical_sessions: list[Session] = Field(
        default_factory=list, description="Archived sessions, most recent first"
    )
    stats: SessionStats = Field(default_factory=SessionStats)

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _default_stats(cls, data: Any) -> Any:
        """Seed missing stats from the settings' minimum trade."""
        if not isinstance(data, dict) or data.get("stats") is not None:
            return data

        settings = data.get("settings")
        if isinstance(settings, dict):
            try:
                settings = Settings.model_validate(settings)
            except ValidationError:
                # Field validation reports the bad settings
                return data
        if isinstance(settings, Settings):
            return {**data, "stats": SessionStats(next_stake=settings.min_trade)}
        return data

    def to_json(self) -> str:
        """Serialize using the camelCase persisted shape."""
        return self.model_dump_json(by_alias=True)
