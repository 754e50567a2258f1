"""Chart Analyst Agent for market screenshot analysis.

This agent reads a chart screenshot and returns candlestick patterns,
a three-timeframe trend read and a concrete trade prediction.
"""

import base64
from pathlib import Path
from typing import Any, Optional, Union

from agents import Agent, ModelBehaviorError

from tradejournal.agents.base import (
    AIServiceError,
    create_agent,
    require_api_key,
    run_agent_async,
    run_agent_sync,
)
from tradejournal.models import MarketAnalysis


# Accepted screenshot types
IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


CHART_ANALYST_INSTRUCTIONS = """You are a technical analyst reading short-timeframe market charts.
Your role is to turn a chart screenshot into a structured trade idea.

When analyzing a chart:
1. Identify key candlestick patterns, trend lines, and support/resistance levels
2. Read the trend on the 1m, 5m and 15m timeframes
3. Suggest one trade with entry, stop-loss and take-profit levels

The prediction direction must be one of: Uptrend, Downtrend, Sideways.
Confidence is a percentage between 0 and 100.
"""

ANALYZE_PROMPT = (
    "Analyze this market chart screenshot. Identify key candlestick patterns, "
    "trend lines, and support/resistance levels. Provide trend predictions for "
    "1m, 5m, and 15m timeframes. Based on your analysis, suggest a trade with "
    "entry, stop-loss, and take-profit levels, and include a confidence percentage."
)


def image_mime_type(path: Path) -> str:
    """Get the MIME type of a screenshot file.

    Raises:
        AIServiceError: If the file is not a PNG or JPEG image.
    """
    mime = IMAGE_MIME_TYPES.get(path.suffix.lower())
    if mime is None:
        raise AIServiceError(
            f"Unsupported image type '{path.suffix}'. Use PNG, JPG or JPEG."
        )
    return mime


def build_image_input(image: Union[Path, bytes], mime_type: Optional[str] = None) -> list[dict[str, Any]]:
    """Build the agent input for an image analysis request.

    Args:
        image: Path to a screenshot, or raw image bytes.
        mime_type: MIME type for raw bytes (default image/jpeg).

    Returns:
        A single user message carrying the prompt and the image as a data URL.
    """
    if isinstance(image, Path):
        mime_type = image_mime_type(image)
        try:
            data = image.read_bytes()
        except OSError as e:
            raise AIServiceError(f"Could not read image {image}: {e}") from e
    else:
        data = image
        mime_type = mime_type or "image/jpeg"

    encoded = base64.b64encode(data).decode("ascii")
    return [
        {
            "role": "user",
            "content": [
                {"type": "input_text", "text": ANALYZE_PROMPT},
                {
                    "type": "input_image",
                    "image_url": f"data:{mime_type};base64,{encoded}",
                    "detail": "auto",
                },
            ],
        }
    ]


class MarketAnalystAgent:
    """Agent for analyzing market chart screenshots."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Market Analyst Agent.

        Args:
            model: Optional model override.
        """
        self._model = model
        self._agent: Optional[Agent] = None

    def _get_agent(self) -> Agent:
        """Create the underlying agent on first use."""
        if self._agent is None:
            self._agent = create_agent(
                name="Chart Analyst Agent",
                instructions=CHART_ANALYST_INSTRUCTIONS,
                output_type=MarketAnalysis,
                model=self._model,
            )
        return self._agent

    @staticmethod
    def _check_output(output: Any) -> MarketAnalysis:
        if isinstance(output, MarketAnalysis):
            return output
        try:
            return MarketAnalysis.model_validate_json(str(output))
        except ValueError as e:
            raise AIServiceError("Received invalid JSON from AI analysis.") from e

    def analyze_image(
        self,
        image: Union[Path, bytes],
        mime_type: Optional[str] = None,
    ) -> MarketAnalysis:
        """Analyze a chart screenshot.

        Args:
            image: Path to a screenshot, or raw image bytes.
            mime_type: MIME type for raw bytes.

        Returns:
            Structured market analysis.

        Raises:
            AIServiceError: On missing credentials, bad input or a failed request.
        """
        require_api_key()
        message = build_image_input(image, mime_type)
        try:
            output = run_agent_sync(self._get_agent(), message)
        except ModelBehaviorError as e:
            raise AIServiceError("Received invalid JSON from AI analysis.") from e
        except Exception as e:
            raise AIServiceError(f"Market analysis failed: {e}") from e
        return self._check_output(output)

    async def analyze_image_async(
        self,
        image: Union[Path, bytes],
        mime_type: Optional[str] = None,
    ) -> MarketAnalysis:
        """Async variant of :meth:`analyze_image`."""
        require_api_key()
        message = build_image_input(image, mime_type)
        try:
            output = await run_agent_async(self._get_agent(), message)
        except ModelBehaviorError as e:
            raise AIServiceError("Received invalid JSON from AI analysis.") from e
        except Exception as e:
            raise AIServiceError(f"Market analysis failed: {e}") from e
        return self._check_output(output)
