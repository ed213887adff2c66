"""Agent context handed to action handlers.

Usage:
    def on_action(action, ctx: AgentContext) -> None:
        match action:
            case Increment(amount=amount):
                ctx.update_global_state(lambda total: total + amount)
                ctx.update_internal_state(lambda s: {**s, "seen": s["seen"] + 1})
            case Start():
                ctx.dispatch(Increment(amount=1))

        # Snapshot fields are frozen when the context is built
        before = ctx.global_state
        # Live reads reflect every update made so far, including this handler's
        after = ctx.get_global_state()

        # Peer view: identical for every agent handling this action
        for peer in ctx.all_agents:
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from simullm.core.agent import AgentSnapshot
from simullm.core.types import Copy, StateTransform

if TYPE_CHECKING:
    from simullm.simulation.simulation import EventSimulation


class AgentContext[G]:
    """Per-(agent, action) view of the simulation.

    Built fresh for every handler invocation and never reused. Exposes
    snapshots of the state at construction time plus functions that act on
    the live simulation. An agent can only update its own internal state;
    peers are visible through the read-only `all_agents` snapshot.

    Args:
        simulation: Owning simulation.
        agent_id: Agent receiving the action.
        action: Action being processed.
        global_state: Global state snapshot.
        internal_state: Snapshot of this agent's internal state.
        all_agents: Peer snapshot shared by every agent for this action.
    """

    def __init__(
        self,
        simulation: EventSimulation[G],
        agent_id: str,
        action: Any,
        global_state: Copy[G],
        internal_state: Copy[Any],
        all_agents: tuple[AgentSnapshot, ...],
    ):
        self._simulation = simulation
        self._agent_id = agent_id
        self._action = action
        self._global_state = global_state
        self._internal_state = internal_state
        self._all_agents = all_agents

    @property
    def agent_id(self) -> str:
        """Id of the agent this context belongs to."""
        return self._agent_id

    @property
    def action(self) -> Any:
        """The action being processed."""
        return self._action

    @property
    def global_state(self) -> Copy[G]:
        """Global state when this context was built. Not refreshed by updates."""
        return self._global_state

    @property
    def internal_state(self) -> Copy[Any]:
        """This agent's internal state when the context was built, None if absent."""
        return self._internal_state

    @property
    def all_agents(self) -> tuple[AgentSnapshot, ...]:
        """Every registered agent's internal state at the start of this action.

        Captured before any handler for the action ran, in registration order.
        """
        return self._all_agents

    def dispatch(self, action: Any) -> None:
        """Queue an action for processing.

        Safe to call from inside the handler and from callbacks that fire
        later (timers, I/O completions); if no drain loop is active, one is
        started on the running event loop. No-op once the simulation exited.

        Raises:
            SimulationError: If a drain has to be started but no event loop
                is running in this thread (e.g. a threading.Timer callback).
        """
        self._simulation._enqueue(action)

    def update_global_state(self, transform: StateTransform[G]) -> None:
        """Replace the global state with transform(current global state)."""
        self._simulation._apply_global_transform(transform)

    def update_internal_state(self, transform: StateTransform[Any]) -> None:
        """Replace this agent's internal state with transform(current internal state).

        The transform receives None if the agent has no internal state yet.
        """
        self._simulation._apply_internal_transform(self._agent_id, transform)

    def get_global_state(self) -> Copy[G]:
        """Live read of the current global state."""
        return self._simulation.get_global_state()

    def get_internal_state(self) -> Copy[Any]:
        """Live read of this agent's current internal state."""
        return self._simulation.get_agent_internal_state(self._agent_id)

    def get_peer_state(self, agent_id: str) -> Any:
        """Internal state of an agent from the `all_agents` snapshot.

        Returns:
            The snapshot value, or None for unknown agents and agents without
            internal state.
        """
        for peer in self._all_agents:
            if peer.id == agent_id:
                return peer.internal_state
        return None
