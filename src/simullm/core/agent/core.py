"""Agent constructors.

Usage:
    # Functional form
    counter = create_agent("counter", on_counter_action, {"count": 0})

    # Decorator form, the function becomes the action handler
    @agent("observer")
    async def observer(action, ctx):
        if action.type == "START":
            ctx.dispatch(Increment(amount=1))

    simulation = create_simulation(0, [counter, observer], should_exit)
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from simullm.core.agent.models import AgentDefinition
from simullm.core.types import ActionHandler


def create_agent(
    id: str,
    on_action: ActionHandler,
    initial_internal_state: Any = None,
) -> AgentDefinition:
    """Create an agent definition.

    Args:
        id: Unique identifier of the agent within a simulation.
        on_action: Handler called as `on_action(action, context)` for every
            processed action. Plain functions and coroutine functions are both
            accepted.
        initial_internal_state: Private state the agent starts with. None means
            the agent has no internal state until it first updates it.

    Returns:
        Immutable AgentDefinition.

    Raises:
        ValueError: If id is empty.
        TypeError: If id is not a string or on_action is not callable.
    """
    if not isinstance(id, str):
        raise TypeError(f"Agent id must be a string, got {type(id).__name__}")
    if not id:
        raise ValueError("Agent id must not be empty")
    if not callable(on_action):
        raise TypeError(f"Action handler for agent {id!r} is not callable")

    return AgentDefinition(
        id=id,
        on_action=on_action,
        initial_internal_state=initial_internal_state,
        is_async=inspect.iscoroutinefunction(on_action),
    )


def agent(
    id: str,
    initial_state: Any = None,
) -> Callable[[ActionHandler], AgentDefinition]:
    """Decorator turning an action handler into an AgentDefinition.

    Usage:
        @agent("trader", initial_state=TraderState(capital=1_000))
        def trader(action, ctx): ...
    """

    def decorator(fn: ActionHandler) -> AgentDefinition:
        return create_agent(id, fn, initial_state)

    return decorator
