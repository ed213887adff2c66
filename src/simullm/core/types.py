"""Core type definitions for simullm."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from simullm.simulation.context import AgentContext
    from simullm.simulation.models import ExitContext

type Copy[T] = T
"""Type alias indicating a value is a copy that won't auto-persist.

When you see `Copy[T]` in a return type, the returned value is a deep copy if
`SimulationSettings.copy_snapshots` is enabled, otherwise the stored value
itself. Either way, treat it as read-only: to persist changes, go through
`update_global_state()` or `update_internal_state()` on the agent context.
"""

type StateTransform[S] = Callable[[S], S]
"""Pure function receiving the current state and returning its replacement."""

type ActionHandler = Callable[[Any, AgentContext], Awaitable[None] | None]
"""Agent callback: `(action, context)`. May be a plain or an async function."""

type ExitPredicate = Callable[[ExitContext], bool]
"""Decides after every processed action whether the simulation has concluded."""
