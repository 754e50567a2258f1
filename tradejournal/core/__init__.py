"""Session ledger core: staking, status, pattern stats and the reducer."""

from tradejournal.core.errors import InvalidInputError, JournalError
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
from tradejournal.core.ledger import add_trade, recompute, set_result, wins_needed
from tradejournal.core.lifecycle import (
    archive_current_session,
    attach_summary,
    create_session,
    default_app_state,
    default_stats,
    start_new_session,
    update_settings,
)
from tradejournal.core.patterns import aggregate_patterns, sort_for_display
from tradejournal.core.staking import next_stake, profit_loss
from tradejournal.core.status import (
    accepts_results,
    daily_stop_loss,
    daily_target,
    evaluate_status,
    is_terminal,
)

__all__ = [
    "JournalError",
    "InvalidInputError",
    # Events
    "AddTrade",
    "SetResult",
    "ArchiveCurrentSession",
    "StartNewSession",
    "UpdateSettings",
    "AttachSummary",
    "Event",
    "apply_event",
    # Ledger
    "add_trade",
    "set_result",
    "recompute",
    "wins_needed",
    # Lifecycle
    "create_session",
    "default_app_state",
    "default_stats",
    "archive_current_session",
    "start_new_session",
    "update_settings",
    "attach_summary",
    # Pure helpers
    "aggregate_patterns",
    "sort_for_display",
    "next_stake",
    "profit_loss",
    "daily_target",
    "daily_stop_loss",
    "evaluate_status",
    "is_terminal",
    "accepts_results",
]
