"""Session creation, archiving and settings changes."""

import uuid
from datetime import datetime
from typing import Optional

from tradejournal.models import AppState, Session, SessionStats, SessionStatus, Settings


def new_session_id() -> str:
    """Generate a unique session identifier."""
    return f"session-{uuid.uuid4().hex[:12]}"


def default_stats(settings: Settings) -> SessionStats:
    """Stats for a session with no resolved trades."""
    return SessionStats(next_stake=settings.min_trade)


def create_session(settings: Settings, starting_capital: Optional[float] = None) -> Session:
    """Create an empty IN_PROGRESS session.

    Args:
        settings: Active settings.
        starting_capital: Capital to start from. Defaults to the configured
            starting capital.

    Returns:
        New session.
    """
    capital = settings.starting_capital if starting_capital is None else starting_capital
    return Session(
        id=new_session_id(),
        date=datetime.now(),
        starting_capital=capital,
        current_capital=capital,
        trades=[],
        net_profit=0.0,
        status=SessionStatus.IN_PROGRESS,
    )


def default_app_state(settings: Optional[Settings] = None) -> AppState:
    """Fresh state with default (or given) settings and no history."""
    settings = settings or Settings()
    return AppState(
        settings=settings,
        current_session=create_session(settings),
        historical_sessions=[],
        stats=default_stats(settings),
    )


def archive_current_session(state: AppState) -> AppState:
    """Move the current session into history and start the next one.

    The next session starts from the archived session's ending capital.
    A session without trades is left in place.
    """
    session = state.current_session
    if not session.trades:
        return state

    return state.model_copy(
        update={
            "current_session": create_session(state.settings, session.current_capital),
            "historical_sessions": [session, *state.historical_sessions],
            "stats": default_stats(state.settings),
        }
    )


def start_new_session(state: AppState) -> AppState:
    """Discard the current session and restart from the configured capital."""
    return state.model_copy(
        update={
            "current_session": create_session(state.settings),
            "stats": default_stats(state.settings),
        }
    )


def update_settings(state: AppState, settings: Settings) -> AppState:
    """Replace settings, resetting the session when the capital changes.

    Other changes apply from the next recompute onward.
    """
    update: dict = {"settings": settings}
    if settings.starting_capital != state.settings.starting_capital:
        update["current_session"] = create_session(settings)
        update["stats"] = default_stats(settings)
    return state.model_copy(update=update)


def attach_summary(state: AppState, session_id: str, summary: str) -> AppState:
    """Set the AI narrative on one archived session."""
    if not any(s.id == session_id for s in state.historical_sessions):
        return state

    return state.model_copy(
        update={
            "historical_sessions": [
                s.model_copy(update={"ai_summary": summary}) if s.id == session_id else s
                for s in state.historical_sessions
            ],
        }
    )


def find_historical_session(state: AppState, session_id: str) -> Optional[Session]:
    """Look up an archived session by ID."""
    for session in state.historical_sessions:
        if session.id == session_id:
            return session
    return None
