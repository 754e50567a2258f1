"""Events accepted by the journal and the reducer that applies them.

``apply_event`` is a pure ``(state, event) -> state`` transition; callers
submit events one at a time, in order.
"""

from typing import Union

from pydantic import BaseModel, Field

from tradejournal.core import ledger, lifecycle
from tradejournal.core.errors import InvalidInputError
from tradejournal.models import AppState, Settings, TradeResult


class AddTrade(BaseModel):
    """Append a pending trade."""

    stake: float = Field(..., description="Amount to commit")
    pattern: str = Field(..., description="Pattern / reason label")

    model_config = {"frozen": True}


class SetResult(BaseModel):
    """Resolve a trade as a win or loss."""

    trade_id: str = Field(..., description="Trade identifier")
    result: Union[TradeResult, str] = Field(..., description="WIN or LOSS")

    model_config = {"frozen": True}


class ArchiveCurrentSession(BaseModel):
    """Move the current session into history."""

    model_config = {"frozen": True}


class StartNewSession(BaseModel):
    """Discard the current session without archiving it."""

    model_config = {"frozen": True}


class UpdateSettings(BaseModel):
    """Replace the settings."""

    settings: Settings

    model_config = {"frozen": True}


class AttachSummary(BaseModel):
    """Attach an AI narrative to an archived session."""

    session_id: str
    summary: str

    model_config = {"frozen": True}


Event = Union[
    AddTrade,
    SetResult,
    ArchiveCurrentSession,
    StartNewSession,
    UpdateSettings,
    AttachSummary,
]


def apply_event(state: AppState, event: Event) -> AppState:
    """Apply one event to the state.

    Args:
        state: Current application state.
        event: Event to apply.

    Returns:
        The next state. The input state is never modified.

    Raises:
        InvalidInputError: If the event is unknown or carries invalid data.
    """
    if isinstance(event, AddTrade):
        return ledger.add_trade(state, event.stake, event.pattern)
    if isinstance(event, SetResult):
        return ledger.set_result(state, event.trade_id, event.result)
    if isinstance(event, ArchiveCurrentSession):
        return lifecycle.archive_current_session(state)
    if isinstance(event, StartNewSession):
        return lifecycle.start_new_session(state)
    if isinstance(event, UpdateSettings):
        return lifecycle.update_settings(state, event.settings)
    if isinstance(event, AttachSummary):
        return lifecycle.attach_summary(state, event.session_id, event.summary)
    raise InvalidInputError(f"Unknown event: {type(event).__name__}")
