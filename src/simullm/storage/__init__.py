"""State storage backends."""

from simullm.storage.local import LocalStateStore
from simullm.storage.protocol import StateStore

__all__ = [
    "StateStore",
    "LocalStateStore",
]
