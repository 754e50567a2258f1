"""Pattern Coach Agent for pattern recommendations and session reviews."""

import json
from typing import Iterable, Optional

from agents import Agent

from tradejournal.agents.base import (
    AIServiceError,
    create_agent,
    require_api_key,
    run_agent_async,
    run_agent_sync,
)
from tradejournal.models import PatternStat, Session


# Returned instead of calling the model when there are no stats
NOT_ENOUGH_DATA = "Not enough data for a recommendation."


PATTERN_COACH_INSTRUCTIONS = """You are a trading coach reviewing a trader's own journal.
You recommend setups based on their recorded results and summarize finished sessions.

Be concise, factual and encouraging. Base every statement on the data provided.
"""


def build_recommendation_prompt(stats: Iterable[PatternStat]) -> str:
    """Build the prompt asking for the best pattern for the next trade."""
    data = json.dumps(
        [s.model_dump(by_alias=True) for s in stats],
        indent=2,
    )
    return f"""Based on the following trade pattern performance data, recommend the most profitable and reliable pattern for the next trade. Consider both win rate (accuracy) and number of trades. Provide only the name of the recommended pattern.

Data:
{data}
"""


def format_trade_log(session: Session, currency: str = "PKR") -> str:
    """One line per trade: number, pattern, result and P/L."""
    return "\n".join(
        f"- Trade #{t.trade_number}: Pattern '{t.pattern}', Result: {t.result.value}, "
        f"P/L: {t.profit_loss:.2f} {currency}"
        for t in session.trades
    )


def build_session_summary_prompt(session: Session, currency: str = "PKR") -> str:
    """Build the prompt asking for a short narrative of a session."""
    return f"""Analyze the following trading session and provide a brief, insightful summary (2-3 sentences).

**Session Data:**
- Final Net Profit: {session.net_profit:.2f} {currency}
- Total Trades: {len(session.trades)}
- Wins: {session.wins}
- Losses: {session.losses}

**Trade Log:**
{format_trade_log(session, currency)}

Your summary should highlight the overall performance, mention any notable patterns (either successful or unsuccessful), and provide a concluding thought or area for improvement. Be concise and encouraging."""


class PatternCoachAgent:
    """Agent that recommends patterns and writes session summaries."""

    def __init__(self, model: Optional[str] = None, currency: str = "PKR"):
        """Initialize the Pattern Coach Agent.

        Args:
            model: Optional model override.
            currency: Currency label used in prompts.
        """
        self._model = model
        self._currency = currency
        self._agent: Optional[Agent] = None

    def _get_agent(self) -> Agent:
        """Create the underlying agent on first use."""
        if self._agent is None:
            self._agent = create_agent(
                name="Pattern Coach Agent",
                instructions=PATTERN_COACH_INSTRUCTIONS,
                model=self._model,
            )
        return self._agent

    def _ask(self, prompt: str, failure: str) -> str:
        require_api_key()
        try:
            output = run_agent_sync(self._get_agent(), prompt)
        except Exception as e:
            raise AIServiceError(f"{failure}: {e}") from e
        return str(output).strip()

    async def _ask_async(self, prompt: str, failure: str) -> str:
        require_api_key()
        try:
            output = await run_agent_async(self._get_agent(), prompt)
        except Exception as e:
            raise AIServiceError(f"{failure}: {e}") from e
        return str(output).strip()

    def recommend_pattern(self, stats: list[PatternStat]) -> str:
        """Recommend a pattern for the next trade.

        Args:
            stats: Pattern statistics for the current session.

        Returns:
            The recommended pattern name, or NOT_ENOUGH_DATA.
        """
        if not stats:
            return NOT_ENOUGH_DATA
        return self._ask(build_recommendation_prompt(stats), "Pattern recommendation failed")

    async def recommend_pattern_async(self, stats: list[PatternStat]) -> str:
        """Async variant of :meth:`recommend_pattern`."""
        if not stats:
            return NOT_ENOUGH_DATA
        return await self._ask_async(
            build_recommendation_prompt(stats), "Pattern recommendation failed"
        )

    def summarize_session(self, session: Session) -> str:
        """Write a 2-3 sentence narrative of a finished session."""
        return self._ask(
            build_session_summary_prompt(session, self._currency),
            "Failed to generate summary",
        )

    async def summarize_session_async(self, session: Session) -> str:
        """Async variant of :meth:`summarize_session`."""
        return await self._ask_async(
            build_session_summary_prompt(session, self._currency),
            "Failed to generate summary",
        )
