"""Tests for the AI agents.

The model is never called: ``run_agent_sync`` is patched in each agent module.

**Feature: trade-journal**
"""

import asyncio
import base64
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.agents import (
    NOT_ENOUGH_DATA,
    AIServiceError,
    AIUnavailableError,
    MarketAnalystAgent,
    PatternCoachAgent,
    get_model,
)
from tradejournal.agents.analyst import build_image_input, image_mime_type
from tradejournal.agents.coach import (
    build_recommendation_prompt,
    build_session_summary_prompt,
    format_trade_log,
)
from tradejournal.models import (
    MarketAnalysis,
    PatternStat,
    Session,
    Trade,
    TradeResult,
)


SAMPLE_ANALYSIS = {
    "patterns": [{"name": "Doji", "description": "Indecision candle at resistance"}],
    "trend": {"1m": "Up", "5m": "Sideways", "15m": "Down"},
    "prediction": {
        "direction": "Uptrend",
        "confidence": 72,
        "entry": "1.0850",
        "stopLoss": "1.0830",
        "takeProfit": "1.0890",
    },
}


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def chart_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "chart.png"
        path.write_bytes(b"\x89PNG fake image")
        yield path


def sample_session() -> Session:
    trades = [
        Trade(id="a", trade_number=1, stake=280, payout_percent=85,
              result=TradeResult.WIN, profit_loss=238, cumulative_profit=238, pattern="Doji"),
        Trade(id="b", trade_number=2, stake=434, payout_percent=85,
              result=TradeResult.LOSS, profit_loss=-434, cumulative_profit=-196, pattern="Hammer"),
    ]
    return Session(
        id="session-1",
        date=datetime(2024, 6, 10, 9, 30),
        starting_capital=30000,
        current_capital=29804,
        trades=trades,
        net_profit=-196,
    )


class TestPrompts:
    """Prompt builders embed the journal data."""

    def test_recommendation_prompt_has_stats(self):
        prompt = build_recommendation_prompt(
            [PatternStat(name="Doji", total=4, wins=3, accuracy=75)]
        )
        assert '"name": "Doji"' in prompt
        assert '"accuracy": 75' in prompt
        assert "Provide only the name" in prompt

    def test_trade_log_lines(self):
        log = format_trade_log(sample_session(), "PKR")
        assert log.splitlines() == [
            "- Trade #1: Pattern 'Doji', Result: W, P/L: 238.00 PKR",
            "- Trade #2: Pattern 'Hammer', Result: L, P/L: -434.00 PKR",
        ]

    def test_summary_prompt_totals(self):
        prompt = build_session_summary_prompt(sample_session(), "USD")
        assert "Final Net Profit: -196.00 USD" in prompt
        assert "Total Trades: 2" in prompt
        assert "Wins: 1" in prompt
        assert "Losses: 1" in prompt

    @given(name=st.text(min_size=1, max_size=50))
    @settings(max_examples=50)
    def test_any_pattern_name_is_embedded(self, name):
        prompt = build_recommendation_prompt(
            [PatternStat(name=name, total=1, wins=0, accuracy=0)]
        )
        assert "Data:" in prompt


class TestPatternCoachAgent:
    """Recommendations and summaries."""

    def test_empty_stats_short_circuit(self, no_api_key):
        with patch("tradejournal.agents.coach.run_agent_sync") as run:
            assert PatternCoachAgent().recommend_pattern([]) == NOT_ENOUGH_DATA
            run.assert_not_called()

    def test_missing_key(self, no_api_key):
        stats = [PatternStat(name="Doji", total=1, wins=1, accuracy=100)]
        with pytest.raises(AIUnavailableError, match="API key is not configured."):
            PatternCoachAgent().recommend_pattern(stats)

    def test_recommendation_is_stripped(self, api_key):
        stats = [PatternStat(name="Doji", total=1, wins=1, accuracy=100)]
        with patch("tradejournal.agents.coach.run_agent_sync", return_value="  Doji\n") as run:
            assert PatternCoachAgent().recommend_pattern(stats) == "Doji"
            run.assert_called_once()

    def test_summary(self, api_key):
        with patch("tradejournal.agents.coach.run_agent_sync", return_value="A mixed session."):
            assert PatternCoachAgent().summarize_session(sample_session()) == "A mixed session."

    def test_failure_wrapped(self, api_key):
        with patch("tradejournal.agents.coach.run_agent_sync", side_effect=RuntimeError("boom")):
            with pytest.raises(AIServiceError, match="Failed to generate summary: boom"):
                PatternCoachAgent().summarize_session(sample_session())

    def test_async_summary(self, api_key):
        with patch(
            "tradejournal.agents.coach.run_agent_async",
            new=AsyncMock(return_value="Async summary."),
        ):
            result = asyncio.run(PatternCoachAgent().summarize_session_async(sample_session()))
        assert result == "Async summary."


    def test_async_recommendation(self, api_key):
        stats = [PatternStat(name="Doji", total=2, wins=2, accuracy=100)]
        with patch(
            "tradejournal.agents.coach.run_agent_async",
            new=AsyncMock(return_value=" Doji "),
        ) as run:
            result = asyncio.run(PatternCoachAgent().recommend_pattern_async(stats))

        assert result == "Doji"
        run.assert_awaited_once()

    def test_async_recommendation_empty_stats(self, no_api_key):
        with patch("tradejournal.agents.coach.run_agent_async", new=AsyncMock()) as run:
            result = asyncio.run(PatternCoachAgent().recommend_pattern_async([]))

        assert result == NOT_ENOUGH_DATA
        run.assert_not_awaited()

    def test_async_recommendation_failure_wrapped(self, api_key):
        stats = [PatternStat(name="Doji", total=1, wins=0, accuracy=0)]
        with patch(
            "tradejournal.agents.coach.run_agent_async",
            new=AsyncMock(side_effect=RuntimeError("timeout")),
        ):
            with pytest.raises(AIServiceError, match="Pattern recommendation failed: timeout"):
                asyncio.run(PatternCoachAgent().recommend_pattern_async(stats))

    def test_async_recommendation_missing_key(self, no_api_key):
        stats = [PatternStat(name="Doji", total=1, wins=1, accuracy=100)]
        with pytest.raises(AIUnavailableError):
            asyncio.run(PatternCoachAgent().recommend_pattern_async(stats))


class TestMarketAnalystAgent:
    """Chart screenshot analysis."""

    def test_mime_types(self):
        assert image_mime_type(Path("a.PNG")) == "image/png"
        assert image_mime_type(Path("a.jpeg")) == "image/jpeg"

    def test_unsupported_suffix(self):
        with pytest.raises(AIServiceError, match="Unsupported image type"):
            image_mime_type(Path("chart.gif"))

    def test_image_input_is_data_url(self, chart_file):
        message = build_image_input(chart_file)
        content = message[0]["content"]

        assert message[0]["role"] == "user"
        assert content[0]["type"] == "input_text"
        encoded = base64.b64encode(chart_file.read_bytes()).decode("ascii")
        assert content[1]["image_url"] == f"data:image/png;base64,{encoded}"

    def test_raw_bytes_default_jpeg(self):
        message = build_image_input(b"abc")
        assert message[0]["content"][1]["image_url"].startswith("data:image/jpeg;base64,")

    def test_missing_key(self, no_api_key, chart_file):
        with pytest.raises(AIUnavailableError):
            MarketAnalystAgent().analyze_image(chart_file)

    def test_structured_output(self, api_key, chart_file):
        analysis = MarketAnalysis.model_validate(SAMPLE_ANALYSIS)
        with patch("tradejournal.agents.analyst.run_agent_sync", return_value=analysis):
            result = MarketAnalystAgent().analyze_image(chart_file)

        assert result.prediction.direction == "Uptrend"
        assert result.trend.five_minute == "Sideways"

    def test_json_text_output(self, api_key, chart_file):
        raw = MarketAnalysis.model_validate(SAMPLE_ANALYSIS).model_dump_json(by_alias=True)
        with patch("tradejournal.agents.analyst.run_agent_sync", return_value=raw):
            result = MarketAnalystAgent().analyze_image(chart_file)

        assert result.prediction.stop_loss == "1.0830"

    def test_invalid_output(self, api_key, chart_file):
        with patch("tradejournal.agents.analyst.run_agent_sync", return_value="not json"):
            with pytest.raises(AIServiceError, match="Received invalid JSON from AI analysis."):
                MarketAnalystAgent().analyze_image(chart_file)

    def test_request_failure(self, api_key, chart_file):
        with patch("tradejournal.agents.analyst.run_agent_sync", side_effect=RuntimeError("503")):
            with pytest.raises(AIServiceError, match="Market analysis failed: 503"):
                MarketAnalystAgent().analyze_image(chart_file)


    def test_async_structured_output(self, api_key, chart_file):
        analysis = MarketAnalysis.model_validate(SAMPLE_ANALYSIS)
        with patch(
            "tradejournal.agents.analyst.run_agent_async",
            new=AsyncMock(return_value=analysis),
        ) as run:
            result = asyncio.run(MarketAnalystAgent().analyze_image_async(chart_file))

        assert result.prediction.take_profit == "1.0890"
        message = run.await_args.args[1]
        assert message[0]["content"][1]["type"] == "input_image"

    def test_async_request_failure(self, api_key, chart_file):
        with patch(
            "tradejournal.agents.analyst.run_agent_async",
            new=AsyncMock(side_effect=RuntimeError("503")),
        ):
            with pytest.raises(AIServiceError, match="Market analysis failed: 503"):
                asyncio.run(MarketAnalystAgent().analyze_image_async(chart_file))

    def test_async_invalid_output(self, api_key, chart_file):
        with patch(
            "tradejournal.agents.analyst.run_agent_async",
            new=AsyncMock(return_value="{}"),
        ):
            with pytest.raises(AIServiceError, match="Received invalid JSON"):
                asyncio.run(MarketAnalystAgent().analyze_image_async(chart_file))

    def test_async_missing_key(self, no_api_key, chart_file):
        with pytest.raises(AIUnavailableError):
            asyncio.run(MarketAnalystAgent().analyze_image_async(chart_file))


class TestModelSelection:
    """Model comes from the environment with a default."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
        assert get_model() == "gpt-test"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        assert get_model() == "gpt-5.2"
