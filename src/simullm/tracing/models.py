"""Data models for tracing infrastructure.

These models are storage-agnostic. Actions and states are stored as given;
`to_dict` output is JSON-serializable only when they are.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ActionRecord:
    """Record of a single processed action for history storage.

    Captures the action together with the state it left behind, enabling
    debugging and analysis of a simulation run.

    Attributes:
        index: Processed-action count after this action (1-based).
        timestamp: Unix timestamp when processing completed.
        action: The action that was processed.
        global_state: Global state after all handlers settled.
        agent_states: agent_id -> internal state after all handlers settled.
        handler_timings: Optional dict of agent_id -> handler time in ms.
        metadata: Optional arbitrary metadata for annotations.

    Example:
        record = ActionRecord(
            index=3,
            timestamp=1704067200.0,
            action={"type": "INCREMENT", "amount": 1},
            global_state=4,
            agent_states={"counter": {"count": 2}},
            handler_timings={"counter": 0.02},
        )
    """

    index: int
    timestamp: float
    action: Any
    global_state: Any
    agent_states: dict[str, Any] = field(default_factory=dict)
    handler_timings: dict[str, float] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        result: dict[str, Any] = {
            "index": self.index,
            "timestamp": self.timestamp,
            "action": self.action,
            "global_state": self.global_state,
            "agent_states": self.agent_states,
        }
        if self.handler_timings is not None:
            result["handler_timings"] = self.handler_timings
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            index=data["index"],
            timestamp=data["timestamp"],
            action=data["action"],
            global_state=data["global_state"],
            agent_states=data.get("agent_states", {}),
            handler_timings=data.get("handler_timings"),
            metadata=data.get("metadata"),
        )
