"""Agent models: definitions and peer snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from simullm.core.types import ActionHandler


@dataclass(frozen=True)
class AgentDefinition:
    """Metadata about a registered agent."""

    id: str
    on_action: ActionHandler
    initial_internal_state: Any = None
    is_async: bool = field(default=False, compare=False)

    def has_initial_state(self) -> bool:
        """Check whether the agent seeds an internal state at construction.

        Returns:
            False when `initial_internal_state` is None (no internal state).
        """
        return self.initial_internal_state is not None


@dataclass(frozen=True, slots=True)
class AgentSnapshot:
    """Read-only view of one agent's internal state at the start of an action."""

    id: str
    internal_state: Any = None
