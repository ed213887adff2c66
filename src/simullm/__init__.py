"""simullm: event-driven agent-based simulation engine.

Usage:
    from dataclasses import dataclass

    from simullm import create_agent, create_simulation

    @dataclass(frozen=True)
    class Increment:
        amount: int

    def on_action(action, ctx):
        match action:
            case Increment(amount=amount):
                ctx.update_global_state(lambda total: total + amount)

    simulation = create_simulation(
        initial_global_state=0,
        agents=[create_agent("adder", on_action)],
        should_exit=lambda ctx: ctx.action_count >= 2,
    )
    await simulation.dispatch(Increment(5))
    await simulation.dispatch(Increment(8))
    await simulation.exit()
    assert simulation.get_global_state() == 13
"""

__version__ = "0.1.0"

# Core primitives
from simullm.core import (
    ActionHandler,
    AgentDefinition,
    AgentSnapshot,
    Copy,
    ExitPredicate,
    StateTransform,
    agent,
    create_agent,
)

# Configuration
from simullm.config import SimulationSettings

# Scheduling
from simullm.scheduling import (
    FanOutBackend,
    GatherFanOut,
)

# Simulation
from simullm.simulation import (
    AgentContext,
    AgentHandlerError,
    DuplicateAgentError,
    EventSimulation,
    ExitContext,
    SimulationConfig,
    SimulationError,
    create_simulation,
)

# Storage
from simullm.storage import (
    LocalStateStore,
    StateStore,
)

# Tracing (optional)
from simullm.tracing import (
    ActionRecord,
    HistoryStore,
    InMemoryHistoryStore,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "create_agent",
    "agent",
    "AgentDefinition",
    "AgentSnapshot",
    "Copy",
    "StateTransform",
    "ActionHandler",
    "ExitPredicate",
    # Simulation
    "EventSimulation",
    "create_simulation",
    "SimulationConfig",
    "AgentContext",
    "ExitContext",
    "SimulationError",
    "AgentHandlerError",
    "DuplicateAgentError",
    # Config
    "SimulationSettings",
    # Storage
    "StateStore",
    "LocalStateStore",
    # Scheduling
    "FanOutBackend",
    "GatherFanOut",
    # Tracing
    "HistoryStore",
    "ActionRecord",
    "InMemoryHistoryStore",
]
