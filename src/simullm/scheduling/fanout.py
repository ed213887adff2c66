"""Concurrent handler fan-out with a join barrier.

Usage:
    fan_out = GatherFanOut(timeout=30.0)
    outcomes = await fan_out.execute(invocations)
    failed = [o for o in outcomes if o.failed]
"""

from __future__ import annotations

import asyncio
import inspect
import time
from typing import Protocol, runtime_checkable

from simullm.scheduling.models import HandlerInvocation, HandlerOutcome


@runtime_checkable
class FanOutBackend(Protocol):
    """Protocol for pluggable handler fan-out backends.

    Implementations must start every invocation before awaiting any of them,
    wait until all have settled, and report failures in the returned outcomes
    instead of raising.
    """

    async def execute(self, invocations: list[HandlerInvocation]) -> list[HandlerOutcome]:
        """Run invocations concurrently, returning outcomes in invocation order."""
        ...


class GatherFanOut:
    """Default fan-out using asyncio.gather().

    Plain handlers run to completion when their task first runs; coroutine
    handlers interleave at their await points. Outcomes come back in
    invocation (registration) order regardless of completion order.

    Args:
        timeout: Optional per-handler time limit in seconds. A handler that
            exceeds it is cancelled and reported with a TimeoutError.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    async def execute(self, invocations: list[HandlerInvocation]) -> list[HandlerOutcome]:
        if not invocations:
            return []
        tasks = [self._invoke(invocation) for invocation in invocations]
        return list(await asyncio.gather(*tasks))

    async def _invoke(self, invocation: HandlerInvocation) -> HandlerOutcome:
        """Run one handler, converting its failure into an outcome."""
        agent_id = invocation.agent.id
        started = time.perf_counter()
        try:
            if self._timeout is None:
                await self._run_handler(invocation)
            else:
                await asyncio.wait_for(self._run_handler(invocation), self._timeout)
        except Exception as e:
            return HandlerOutcome(agent_id, _elapsed_ms(started), error=e)
        return HandlerOutcome(agent_id, _elapsed_ms(started))

    async def _run_handler(self, invocation: HandlerInvocation) -> None:
        agent = invocation.agent
        if agent.is_async:
            await agent.on_action(invocation.action, invocation.context)
            return

        # e.g. a lambda returning a coroutine
        returned = agent.on_action(invocation.action, invocation.context)
        if inspect.isawaitable(returned):
            await returned


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
