"""Simulation models: configuration, exit state and exit context."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from simullm.core.agent import AgentDefinition
from simullm.core.types import ExitPredicate


@dataclass
class SimulationConfig[G]:
    """Everything needed to construct a simulation.

    Attributes:
        initial_global_state: Starting value of the shared global state.
        agents: Agent definitions; their order is the fan-out order.
        should_exit: Predicate evaluated after each processed action.
    """

    initial_global_state: G
    agents: Sequence[AgentDefinition]
    should_exit: ExitPredicate

    def __post_init__(self) -> None:
        if not callable(self.should_exit):
            raise TypeError("should_exit must be a callable returning bool")
        self.agents = list(self.agents)


@dataclass
class ExitState:
    """Exit bookkeeping for one simulation run.

    `has_exited` never goes back to False once set; `processed_action_count`
    only grows, by one per action that cleared the join barrier.
    """

    has_exited: bool = False
    processed_action_count: int = 0


@dataclass(frozen=True)
class ExitContext[G]:
    """Input of the exit predicate, describing the state after an action.

    Attributes:
        global_state: Global state after all handlers settled.
        agent_states: agent_id -> internal state for every registered agent
            (None for agents without internal state).
        last_action: The action just processed.
        action_count: Processed-action count including last_action.
    """

    global_state: G
    agent_states: dict[str, Any]
    last_action: Any
    action_count: int
