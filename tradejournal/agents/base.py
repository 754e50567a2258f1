"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import os
from typing import Any, Optional, Union

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner

from tradejournal.core.errors import JournalError


# Default model to use for agents
DEFAULT_MODEL = "gpt-5.2"

# Message shown when no API key is available
MISSING_KEY_MESSAGE = "API key is not configured."


class AIServiceError(JournalError):
    """An AI request failed. The message is safe to show to the user."""


class AIUnavailableError(AIServiceError):
    """AI features are disabled because no credentials are configured."""


def get_model() -> str:
    """Get the model to use for agents.

    Checks OPENAI_MODEL environment variable, falls back to default.

    Returns:
        Model name string.
    """
    return os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)


def get_api_key() -> Optional[str]:
    """Get the OpenAI API key.

    Returns:
        API key string or None if not configured.
    """
    return os.environ.get("OPENAI_API_KEY")


def require_api_key() -> str:
    """Get the OpenAI API key or fail with a readable error.

    Raises:
        AIUnavailableError: If no key is configured.
    """
    key = get_api_key()
    if not key:
        raise AIUnavailableError(MISSING_KEY_MESSAGE)
    return key


def create_agent(
    name: str,
    instructions: str,
    output_type: Optional[type] = None,
    model: Optional[str] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        output_type: Optional pydantic model for structured output.
        model: Optional model override. Uses default if not specified.

    Returns:
        Configured Agent instance.
    """
    agent_model = model or get_model()

    return Agent(
        name=name,
        instructions=instructions,
        output_type=output_type,
        model=agent_model,
    )


def _log_agent_call(agent: Agent) -> None:
    """Log agent call info to terminal.

    Args:
        agent: The agent being called.
    """
    from rich.console import Console

    console = Console(stderr=True)
    console.print(f"[dim]🤖 Agent: {agent.name} | Model: {agent.model}[/dim]")


def run_agent_sync(
    agent: Agent,
    message: Union[str, list[dict[str, Any]]],
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """Run an agent synchronously and return its final output.

    Args:
        agent: The agent to run.
        message: User message, or a list of input items (text and images).
        context: Optional context dictionary to pass to the agent.

    Returns:
        Agent's final output: a string, or an ``output_type`` instance.
    """
    _log_agent_call(agent)
    result = Runner.run_sync(agent, message, context=context)
    return result.final_output


async def run_agent_async(
    agent: Agent,
    message: Union[str, list[dict[str, Any]]],
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """Run an agent asynchronously and return its final output.

    Args:
        agent: The agent to run.
        message: User message, or a list of input items (text and images).
        context: Optional context dictionary to pass to the agent.

    Returns:
        Agent's final output: a string, or an ``output_type`` instance.
    """
    _log_agent_call(agent)
    result = await Runner.run(agent, message, context=context)
    return result.final_output
