"""In-memory history store.

Bounded buffer suitable for development, tests and short runs.
"""

from __future__ import annotations

from collections import deque

from simullm.tracing.models import ActionRecord


class InMemoryHistoryStore:
    """HistoryStore keeping the most recent records in memory.

    Args:
        max_records: Maximum number of records kept. None keeps everything.
    """

    def __init__(self, max_records: int | None = None) -> None:
        if max_records is not None and max_records < 1:
            raise ValueError(f"max_records must be positive, got {max_records}")
        self._records: deque[ActionRecord] = deque(maxlen=max_records)

    def record_action(self, record: ActionRecord) -> None:
        self._records.append(record)

    def get_record(self, index: int) -> ActionRecord | None:
        for record in self._records:
            if record.index == index:
                return record
        return None

    def get_records(self, start_index: int, end_index: int) -> list[ActionRecord]:
        return [r for r in self._records if start_index <= r.index <= end_index]

    def get_index_range(self) -> tuple[int, int] | None:
        if not self._records:
            return None
        return self._records[0].index, self._records[-1].index

    def clear(self) -> None:
        self._records.clear()

    @property
    def record_count(self) -> int:
        return len(self._records)
