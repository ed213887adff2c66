"""Protocols for tracing infrastructure.

These protocols define the interface for history storage backends,
allowing different implementations (in-memory, file, database).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from simullm.tracing.models import ActionRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for storing and retrieving processed-action history.

    The engine calls `record_action` once per processed action, after every
    handler settled and before the exit predicate runs.

    Usage:
        store = InMemoryHistoryStore(max_records=1000)
        simulation = create_simulation(0, agents, should_exit, history=store)
        await simulation.dispatch(Start())

        record = store.get_record(1)
        prices = [r.global_state.price for r in store.get_records(1, 10)]
    """

    def record_action(self, record: ActionRecord) -> None:
        """Record a processed action.

        Args:
            record: Complete record of the processed action.

        Note:
            Implementations may have bounded storage (e.g., last N records).
            Older records may be evicted when the limit is reached.
        """
        ...

    def get_record(self, index: int) -> ActionRecord | None:
        """Get the record for a processed-action index, None if not stored."""
        ...

    def get_records(self, start_index: int, end_index: int) -> list[ActionRecord]:
        """Get stored records in an index range (inclusive), oldest first."""
        ...

    def get_index_range(self) -> tuple[int, int] | None:
        """Get available index range as (min, max), None if empty."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def record_count(self) -> int:
        """Number of records currently stored."""
        ...
