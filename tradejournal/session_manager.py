"""Sequential event loop around the journal reducer.

The manager owns the current AppState, applies events one at a time and
hands each new snapshot to the store.
"""

import logging
from typing import Optional, Union

from pydantic import ValidationError

from tradejournal.core.errors import InvalidInputError
from tradejournal.core.events import (
    AddTrade,
    ArchiveCurrentSession,
    AttachSummary,
    Event,
    SetResult,
    StartNewSession,
    UpdateSettings,
    apply_event,
)
from tradejournal.core.lifecycle import default_app_state
from tradejournal.db.store import StateStore
from tradejournal.models import AppState, Settings, Trade, TradeResult

logger = logging.getLogger(__name__)


def _build(event_type: type, **fields) -> Event:
    """Construct an event, reporting bad payloads as InvalidInputError."""
    try:
        return event_type(**fields)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid {event_type.__name__}: {e}") from e


class SessionManager:
    """Apply journal events in order and persist every transition."""

    def __init__(self, store: Optional[StateStore] = None, state: Optional[AppState] = None):
        """Initialize the manager.

        Args:
            store: Optional store. The initial state is loaded from it and
                every new state is saved to it.
            state: Optional initial state, overriding whatever is stored.
        """
        self._store = store
        if state is not None:
            self._state = state
        elif store is not None:
            self._state = store.load_or_default()
        else:
            self._state = default_app_state()
        self.last_save_ok = True

    @property
    def state(self) -> AppState:
        """The current state snapshot."""
        return self._state

    def dispatch(self, event: Event) -> AppState:
        """Apply an event and persist the result.

        Args:
            event: Event to apply.

        Returns:
            The new state.

        Raises:
            InvalidInputError: If the event is rejected. The state is unchanged.
        """
        logger.debug("Applying %s", type(event).__name__)
        new_state = apply_event(self._state, event)
        self._state = new_state

        if self._store is not None:
            self.last_save_ok = self._store.save(new_state)
            if not self.last_save_ok:
                logger.warning("State was updated but could not be saved")
        return new_state

    def add_trade(self, stake: float, pattern: str) -> Trade:
        """Add a pending trade and return it."""
        state = self.dispatch(_build(AddTrade, stake=stake, pattern=pattern))
        return state.current_session.trades[-1]

    def update_trade_result(self, trade_id: str, result: Union[TradeResult, str]) -> AppState:
        """Record a win or loss for a trade."""
        return self.dispatch(_build(SetResult, trade_id=trade_id, result=result))

    def archive_current_session(self) -> AppState:
        """Archive the current session if it has trades."""
        return self.dispatch(ArchiveCurrentSession())

    def start_new_session(self) -> AppState:
        """Discard the current session and start over."""
        return self.dispatch(StartNewSession())

    def update_settings(self, settings: Settings) -> AppState:
        """Replace the settings."""
        return self.dispatch(_build(UpdateSettings, settings=settings))

    def add_session_summary(self, session_id: str, summary: str) -> AppState:
        """Attach an AI narrative to an archived session."""
        return self.dispatch(_build(AttachSummary, session_id=session_id, summary=summary))
