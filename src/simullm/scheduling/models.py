"""Scheduling models for handler fan-out.

One action is delivered to every registered agent as a group of handler
invocations. All invocations of a group start before any is awaited; the
group completes only when every invocation has settled (join barrier).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from simullm.core.agent import AgentDefinition
    from simullm.simulation.context import AgentContext


@dataclass(frozen=True, slots=True)
class HandlerInvocation:
    """One agent handler call for one action."""

    agent: AgentDefinition
    action: Any
    context: AgentContext


@dataclass(frozen=True, slots=True)
class HandlerOutcome:
    """Settled result of a handler invocation.

    A failed invocation keeps its exception instead of raising, so sibling
    invocations are never aborted by it.
    """

    agent_id: str
    duration_ms: float
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
