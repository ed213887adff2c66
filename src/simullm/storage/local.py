"""Local in-memory state storage.

Simple dict-based storage suitable for single-process use and testing.

Usage:
    store = LocalStateStore(initial_global_state={"price": 100.0})
    store.set_internal_state("trader-1", {"capital": 1_000})
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class LocalStateStore:
    """In-memory storage for one simulation run.

    Structure:
        _global_state = value
        _internal_states[agent_id] = value

    Agents without an entry in `_internal_states` have no internal state,
    which is distinct from an agent whose stored internal state is None.

    Args:
        initial_global_state: Starting global state value.
    """

    def __init__(self, initial_global_state: Any = None):
        self._global_state = initial_global_state
        self._internal_states: dict[str, Any] = {}

    def get_global_state(self) -> Any:
        return self._global_state

    def set_global_state(self, state: Any) -> None:
        self._global_state = state

    def get_internal_state(self, agent_id: str) -> Any:
        return self._internal_states.get(agent_id)

    def set_internal_state(self, agent_id: str, state: Any) -> None:
        self._internal_states[agent_id] = state

    def has_internal_state(self, agent_id: str) -> bool:
        return agent_id in self._internal_states

    def internal_states(self, agent_ids: Iterable[str]) -> dict[str, Any]:
        """Collect internal states for the given ids.

        Args:
            agent_ids: Agent ids to look up, typically in registration order.

        Returns:
            Dict preserving the order of agent_ids; agents without internal
            state map to None.
        """
        return {agent_id: self._internal_states.get(agent_id) for agent_id in agent_ids}
