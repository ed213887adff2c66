"""FIFO queue of actions waiting to be processed."""

from __future__ import annotations

from collections import deque
from typing import Any


class ActionQueue:
    """Ordered queue holding actions by value until the drain loop takes them."""

    def __init__(self) -> None:
        self._actions: deque[Any] = deque()

    def push(self, action: Any) -> None:
        """Append an action at the back."""
        self._actions.append(action)

    def pop(self) -> Any:
        """Remove and return the front action.

        Raises:
            IndexError: If the queue is empty.
        """
        return self._actions.popleft()

    def clear(self) -> int:
        """Discard every queued action. Returns how many were dropped."""
        dropped = len(self._actions)
        self._actions.clear()
        return dropped

    def __len__(self) -> int:
        return len(self._actions)
