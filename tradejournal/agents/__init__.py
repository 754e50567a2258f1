"""AI agents for Trade Journal.

This module provides AI helpers that sit outside the ledger:
- MarketAnalystAgent: Chart screenshot analysis
- PatternCoachAgent: Pattern recommendations and session summaries
"""

from tradejournal.agents.base import (
    AIServiceError,
    AIUnavailableError,
    create_agent,
    run_agent_sync,
    run_agent_async,
    get_model,
    get_api_key,
)
from tradejournal.agents.analyst import MarketAnalystAgent
from tradejournal.agents.coach import NOT_ENOUGH_DATA, PatternCoachAgent

__all__ = [
    # Base utilities
    "AIServiceError",
    "AIUnavailableError",
    "create_agent",
    "run_agent_sync",
    "run_agent_async",
    "get_model",
    "get_api_key",
    # Agents
    "MarketAnalystAgent",
    "PatternCoachAgent",
    "NOT_ENOUGH_DATA",
]
