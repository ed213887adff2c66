"""Tracing infrastructure for recording simulation history.

Usage:
    from simullm.tracing import InMemoryHistoryStore

    history = InMemoryHistoryStore(max_records=500)
    simulation = create_simulation(state, agents, should_exit, history=history)

    # Implement HistoryStore for other backends
    class MyHistoryStore:
        def record_action(self, record: ActionRecord) -> None:
            ...
"""

from simullm.tracing.memory import InMemoryHistoryStore
from simullm.tracing.models import ActionRecord
from simullm.tracing.protocol import HistoryStore

__all__ = [
    "HistoryStore",
    "ActionRecord",
    "InMemoryHistoryStore",
]
