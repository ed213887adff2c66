"""Simulation engine and agent context.

Architecture Note:
    simulation/ is the stateful service layer: it owns the action queue, the
    drain loop and exit bookkeeping, and hands agents an AgentContext.
    Unlike core/ (stateless primitives), it maintains runtime state.
"""

from simullm.simulation.context import AgentContext
from simullm.simulation.errors import (
    AgentHandlerError,
    DuplicateAgentError,
    SimulationError,
    describe_action,
)
from simullm.simulation.models import ExitContext, ExitState, SimulationConfig
from simullm.simulation.queue import ActionQueue
from simullm.simulation.simulation import EventSimulation, create_simulation

__all__ = [
    "EventSimulation",
    "create_simulation",
    "SimulationConfig",
    "AgentContext",
    "ExitContext",
    "ExitState",
    "ActionQueue",
    "SimulationError",
    "AgentHandlerError",
    "DuplicateAgentError",
    "describe_action",
]
