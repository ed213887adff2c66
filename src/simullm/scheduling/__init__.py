"""Handler fan-out and join barrier."""

from simullm.scheduling.fanout import FanOutBackend, GatherFanOut
from simullm.scheduling.models import HandlerInvocation, HandlerOutcome

__all__ = [
    # Backends
    "GatherFanOut",
    # Models
    "HandlerInvocation",
    "HandlerOutcome",
    # Protocols
    "FanOutBackend",
]
