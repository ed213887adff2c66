"""State storage protocol for swappable backends.

The storage layer owns the global state value and every agent's internal
state. The engine reads and replaces them only through this interface, so
callers never hold a mutable handle into engine state.

Usage:
    store = LocalStateStore(initial_global_state=0)
    simulation = EventSimulation(config, store=store)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StateStore(Protocol):
    """Abstract state container. Implementations hold the actual values."""

    def get_global_state(self) -> Any:
        """Current global state value."""
        ...

    def set_global_state(self, state: Any) -> None:
        """Replace the global state wholesale."""
        ...

    def get_internal_state(self, agent_id: str) -> Any:
        """Internal state of an agent, or None if it has none."""
        ...

    def set_internal_state(self, agent_id: str, state: Any) -> None:
        """Replace an agent's internal state wholesale."""
        ...

    def has_internal_state(self, agent_id: str) -> bool:
        """Check whether an internal state was ever stored for the agent."""
        ...

    def internal_states(self, agent_ids: Iterable[str]) -> dict[str, Any]:
        """Internal states keyed by id, in the order given. Absent ones map to None."""
        ...
