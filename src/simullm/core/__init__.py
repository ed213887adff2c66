"""Core functionalities: stateless primitives.

Architecture Note:
    core/ contains pure, stateless building blocks (agent definitions, type
    aliases) with no runtime state mutation. For stateful services, see
    simulation/, storage/, and scheduling/.
"""

from simullm.core.agent import AgentDefinition, AgentSnapshot, agent, create_agent
from simullm.core.types import ActionHandler, Copy, ExitPredicate, StateTransform

__all__ = [
    # Types
    "Copy",
    "StateTransform",
    "ActionHandler",
    "ExitPredicate",
    # Agent
    "agent",
    "create_agent",
    "AgentDefinition",
    "AgentSnapshot",
]
