"""Tests for session lifecycle and the event reducer.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.core import InvalidInputError
from tradejournal.core.events import (
    AddTrade,
    ArchiveCurrentSession,
    AttachSummary,
    SetResult,
    StartNewSession,
    UpdateSettings,
    apply_event,
)
from tradejournal.core.lifecycle import (
    archive_current_session,
    attach_summary,
    default_app_state,
    find_historical_session,
    start_new_session,
    update_settings,
)
from tradejournal.core.progress import session_progress, status_label
from tradejournal.models import SessionStatus, Settings, TradeResult


def play(state, stake, result, pattern="Doji"):
    state = apply_event(state, AddTrade(stake=stake, pattern=pattern))
    trade_id = state.current_session.trades[-1].id
    return apply_event(state, SetResult(trade_id=trade_id, result=result))


@pytest.fixture
def state():
    return default_app_state()


class TestArchive:
    """Archiving moves the session into history and compounds capital."""

    def test_empty_session_is_not_archived(self, state):
        assert archive_current_session(state) is state

    def test_archive_compounds_capital(self, state):
        state = play(state, 280, TradeResult.WIN)
        archived_id = state.current_session.id
        state = archive_current_session(state)

        assert state.historical_sessions[0].id == archived_id
        assert state.current_session.id != archived_id
        assert state.current_session.starting_capital == pytest.approx(30238.0)
        assert state.current_session.trades == []
        assert state.current_session.status == SessionStatus.IN_PROGRESS
        assert state.stats.next_stake == state.settings.min_trade

    def test_most_recent_first(self, state):
        state = archive_current_session(play(state, 280, TradeResult.WIN))
        first = state.historical_sessions[0].id
        state = archive_current_session(play(state, 280, TradeResult.LOSS))

        assert state.historical_sessions[1].id == first
        assert len(state.historical_sessions) == 2

    def test_second_session_ledger_uses_own_baseline(self, state):
        state = archive_current_session(play(state, 280, TradeResult.WIN))
        state = play(state, 280, TradeResult.WIN)

        assert state.current_session.current_capital == pytest.approx(30238.0 + 238.0)

    def test_pending_trades_are_archived(self, state):
        state = apply_event(state, AddTrade(stake=280, pattern="Doji"))
        state = archive_current_session(state)

        assert state.historical_sessions[0].trades[0].result == TradeResult.PENDING


class TestNewSessionAndSettings:
    """Starting over and changing settings."""

    def test_start_new_discards(self, state):
        state = play(state, 280, TradeResult.WIN)
        old_id = state.current_session.id
        state = start_new_session(state)

        assert state.current_session.id != old_id
        assert state.current_session.starting_capital == 30000
        assert state.historical_sessions == []

    def test_capital_change_resets_session(self, state):
        state = play(state, 280, TradeResult.WIN)
        state = update_settings(state, Settings(starting_capital=50000))

        assert state.current_session.trades == []
        assert state.current_session.starting_capital == 50000
        assert state.stats.wins == 0

    def test_other_changes_keep_session(self, state):
        state = play(state, 280, TradeResult.WIN)
        session = state.current_session
        state = update_settings(state, Settings(payout_percent=90))

        assert state.current_session == session
        assert state.settings.payout_percent == 90

    def test_new_min_trade_applies_to_default_stats(self, state):
        state = update_settings(state, Settings(starting_capital=1000, min_trade=50))
        assert state.stats.next_stake == 50


class TestSummaries:
    """AI narratives attach to archived sessions only."""

    def test_attach(self, state):
        state = archive_current_session(play(state, 280, TradeResult.WIN))
        session_id = state.historical_sessions[0].id
        state = attach_summary(state, session_id, "Steady session.")

        assert find_historical_session(state, session_id).ai_summary == "Steady session."

    def test_unknown_id_is_noop(self, state):
        state = archive_current_session(play(state, 280, TradeResult.WIN))
        assert attach_summary(state, "missing", "text") is state

    def test_current_session_not_targetable(self, state):
        state = play(state, 280, TradeResult.WIN)
        after = attach_summary(state, state.current_session.id, "text")
        assert after.current_session.ai_summary is None


class TestApplyEvent:
    """
    **Feature: trade-journal, Property 7: Pure Reducer**

    *For any* event sequence, applying events never mutates the input
    state and always yields a valid state.
    """

    def test_dispatch_all_events(self, state):
        state = play(state, 280, TradeResult.WIN)
        state = apply_event(state, ArchiveCurrentSession())
        session_id = state.historical_sessions[0].id
        state = apply_event(state, AttachSummary(session_id=session_id, summary="ok"))
        state = apply_event(state, UpdateSettings(settings=Settings(max_trades=5)))
        state = apply_event(state, StartNewSession())

        assert state.historical_sessions[0].ai_summary == "ok"
        assert state.settings.max_trades == 5

    def test_unknown_event(self, state):
        with pytest.raises(InvalidInputError):
            apply_event(state, object())

    def test_invalid_result_raises_journal_error(self, state):
        state = apply_event(state, AddTrade(stake=280, pattern="Doji"))
        trade_id = state.current_session.trades[0].id
        with pytest.raises(InvalidInputError):
            apply_event(state, SetResult(trade_id=trade_id, result="maybe"))

    @given(
        results=st.lists(st.sampled_from([TradeResult.WIN, TradeResult.LOSS]), max_size=8)
    )
    @settings(max_examples=30, deadline=None)
    def test_input_never_mutated(self, results):
        state = default_app_state()
        for result in results:
            before = state.model_dump()
            state_after = play(state, 280, result)
            assert state.model_dump() == before
            state = state_after


class TestProgress:
    """Display progress helpers."""

    def test_fresh_session(self, state):
        progress = session_progress(state)

        assert progress["daily_target"] == 1500
        assert progress["daily_stop_loss"] == 900
        assert progress["profit_progress"] == 0
        assert progress["long_term_progress"] == 0

    def test_loss_progress(self, state):
        state = play(state, 450, TradeResult.LOSS)
        assert session_progress(state)["loss_progress"] == pytest.approx(50.0)

    def test_bars_are_clamped(self, state):
        state = play(state, 2000, TradeResult.WIN)
        progress = session_progress(state)

        assert progress["profit_progress"] > 100
        assert progress["profit_bar"] == 100
        assert progress["loss_bar"] == 0

    def test_goal_equal_to_capital(self):
        state = default_app_state(Settings(starting_capital=1000, long_term_goal=1000))
        assert session_progress(state)["long_term_progress"] == 0

    def test_status_labels(self):
        defaults = Settings()
        assert status_label(SessionStatus.PAUSED_WINS, defaults) == "Paused (3 Wins)"
        assert status_label(SessionStatus.PAUSED_LOSSES, defaults) == "Paused (3 Losses)"
        assert status_label(SessionStatus.IN_PROGRESS, defaults) == "In Progress"
