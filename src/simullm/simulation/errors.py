"""Simulation errors."""

from __future__ import annotations

from typing import Any


class SimulationError(Exception):
    """Base class for errors raised by the simulation engine."""


class DuplicateAgentError(SimulationError, ValueError):
    """Raised when two agents registered with one simulation share an id."""

    def __init__(self, agent_id: str):
        super().__init__(f"Agent id {agent_id!r} is registered more than once")
        self.agent_id = agent_id


class AgentHandlerError(SimulationError):
    """Raised when one or more agent handlers failed while processing an action.

    Raised only after every handler for the action has settled. Chained to the
    first failure in registration order.

    Attributes:
        agent_id: First failing agent in registration order.
        action: The action being processed.
        failures: agent_id -> exception for every failed handler.
    """

    def __init__(self, agent_id: str, action: Any, failures: dict[str, Exception]):
        others = len(failures) - 1
        suffix = f" (and {others} more)" if others else ""
        super().__init__(f"Agent {agent_id!r} failed to handle {describe_action(action)}{suffix}")
        self.agent_id = agent_id
        self.action = action
        self.failures = failures


def describe_action(action: Any) -> str:
    """Short human-readable label for an action, used in logs and errors.

    Uses a "type" key or attribute when present, else the class name.
    """
    if isinstance(action, dict):
        tag = action.get("type")
    else:
        tag = getattr(action, "type", None)
    if isinstance(tag, str):
        return tag
    return type(action).__name__
