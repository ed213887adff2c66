"""Agent functionality: definitions, snapshots and constructors."""

from simullm.core.agent.core import agent, create_agent
from simullm.core.agent.models import AgentDefinition, AgentSnapshot

__all__ = [
    # Models
    "AgentDefinition",
    "AgentSnapshot",
    # Core
    "agent",
    "create_agent",
]
