"""EventSimulation: action queue, agent fan-out and exit control.

Usage:
    counter = create_agent("counter", on_counter_action, {"count": 0})

    simulation = create_simulation(
        initial_global_state=0,
        agents=[counter],
        should_exit=lambda ctx: ctx.action_count >= 10,
    )

    await simulation.dispatch(Start())
    await simulation.exit()  # resolves once should_exit returned True

    print(simulation.get_global_state(), simulation.get_action_count())
"""

from __future__ import annotations

import asyncio
import copy
import logging
import time
from collections.abc import Sequence
from typing import Any

from simullm.config import SimulationSettings
from simullm.core.agent import AgentDefinition, AgentSnapshot
from simullm.core.types import Copy, ExitPredicate, StateTransform
from simullm.scheduling import FanOutBackend, GatherFanOut, HandlerInvocation, HandlerOutcome
from simullm.simulation.context import AgentContext
from simullm.simulation.errors import (
    AgentHandlerError,
    DuplicateAgentError,
    SimulationError,
    describe_action,
)
from simullm.simulation.models import ExitContext, ExitState, SimulationConfig
from simullm.simulation.queue import ActionQueue
from simullm.storage import LocalStateStore, StateStore
from simullm.tracing import ActionRecord, HistoryStore

logger = logging.getLogger(__name__)


class EventSimulation[G]:
    """Event-driven simulation engine.

    Every dispatched action is queued and delivered to all agents in
    registration order. Handlers for one action run concurrently; the engine
    waits for all of them (join barrier) before counting the action and
    evaluating the exit predicate. A single drain loop processes the queue at
    any time, and actions dispatched by agents join that same loop.

    Args:
        config: Initial global state, agents and exit predicate.
        settings: Engine settings. Defaults to SimulationSettings() which also
            reads SIMULLM_* environment variables.
        store: State container. Defaults to LocalStateStore.
        history: Optional history store receiving one record per processed action.
        fan_out: Handler fan-out backend. Defaults to GatherFanOut configured
            with settings.handler_timeout.

    Raises:
        DuplicateAgentError: If two agents share an id.
    """

    def __init__(
        self,
        config: SimulationConfig[G],
        settings: SimulationSettings | None = None,
        store: StateStore | None = None,
        history: HistoryStore | None = None,
        fan_out: FanOutBackend | None = None,
    ):
        self._settings = settings or SimulationSettings()
        self._store = store or LocalStateStore()
        self._history = history
        self._fan_out = fan_out or GatherFanOut(timeout=self._settings.handler_timeout)
        self._should_exit: ExitPredicate = config.should_exit

        self._store.set_global_state(config.initial_global_state)
        self._agents: dict[str, AgentDefinition] = {}
        for definition in config.agents:
            if definition.id in self._agents:
                raise DuplicateAgentError(definition.id)
            self._agents[definition.id] = definition
            if definition.has_initial_state():
                self._store.set_internal_state(definition.id, definition.initial_internal_state)

        self._queue = ActionQueue()
        self._draining = False
        self._background_drains: set[asyncio.Task[None]] = set()
        self._exit_state = ExitState()
        self._exit_waiters: set[asyncio.Future[None]] = set()

    @property
    def agent_ids(self) -> tuple[str, ...]:
        """Registered agent ids in fan-out order."""
        return tuple(self._agents)

    @property
    def settings(self) -> SimulationSettings:
        return self._settings

    # Dispatch and drain loop

    async def dispatch(self, action: Any) -> None:
        """Submit an action for processing.

        If no drain loop is active, this call runs it and returns once the
        queue is empty or the simulation exited. If a loop is already active,
        the action is queued and this call returns immediately. After exit the
        action is dropped silently.

        Raises:
            AgentHandlerError: If a handler failed while this call was draining.
            Exception: Whatever the exit predicate raised while this call was
                draining.
        """
        if self._exit_state.has_exited:
            logger.debug("Simulation has exited, dropping %s", describe_action(action))
            return

        self._queue.push(action)
        logger.debug("Queued %s (%d pending)", describe_action(action), len(self._queue))
        if self._draining:
            return

        self._draining = True
        await self._drain()

    def _enqueue(self, action: Any) -> None:
        """Queue an action on behalf of an agent, restarting the drain if idle.

        Raises:
            SimulationError: If no drain is active and no event loop is
                running in this thread. Nothing is queued in that case.
        """
        if self._exit_state.has_exited:
            logger.debug("Simulation has exited, dropping %s", describe_action(action))
            return

        loop = None
        if not self._draining:
            # Called after the previous drain finished, e.g. from a timer callback
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise SimulationError(
                    f"Cannot dispatch {describe_action(action)}: no running event loop "
                    "to restart the drain; dispatch from within the simulation's loop"
                ) from e

        self._queue.push(action)
        logger.debug("Agent queued %s (%d pending)", describe_action(action), len(self._queue))
        if loop is None:
            return

        self._draining = True
        task = loop.create_task(self._drain())
        self._background_drains.add(task)
        task.add_done_callback(self._on_background_drain_done)

    def _on_background_drain_done(self, task: asyncio.Task[None]) -> None:
        self._background_drains.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Background drain failed", exc_info=error)

    async def _drain(self) -> None:
        """Process queued actions until the queue is empty or the simulation exits.

        The caller must have set `_draining`; it is cleared here on every exit
        path, so actions left queued after a failure are picked up by the next
        dispatch.
        """
        logger.debug("Drain started with %d queued action(s)", len(self._queue))
        try:
            while len(self._queue) and not self._exit_state.has_exited:
                action = self._queue.pop()
                await self._process_action(action)

                if self._exit_state.has_exited:
                    break
                if len(self._queue) and self._settings.yield_between_actions:
                    await asyncio.sleep(0)
        finally:
            self._draining = False
            logger.debug("Drain stopped after %d processed action(s)", self.get_action_count())

    async def _process_action(self, action: Any) -> None:
        """Deliver one action to every agent, then count it and check for exit."""
        logger.debug("Processing %s", describe_action(action))
        peers = self._peer_snapshot()
        invocations = [
            HandlerInvocation(
                agent=definition,
                action=action,
                context=self._build_context(agent_id, action, peers),
            )
            for agent_id, definition in self._agents.items()
        ]
        outcomes = await self._fan_out.execute(invocations)
        self._raise_on_failures(action, outcomes)

        self._exit_state.processed_action_count += 1
        count = self._exit_state.processed_action_count

        if self._history is not None:
            self._history.record_action(
                ActionRecord(
                    index=count,
                    timestamp=time.time(),
                    action=action,
                    global_state=self._copy(self._store.get_global_state()),
                    agent_states=self._copy(self._store.internal_states(self._agents)),
                    handler_timings={o.agent_id: o.duration_ms for o in outcomes},
                )
            )

        exit_context = ExitContext(
            global_state=self._copy(self._store.get_global_state()),
            agent_states=self._copy(self._store.internal_states(self._agents)),
            last_action=action,
            action_count=count,
        )
        if self._should_exit(exit_context):
            dropped = self._queue.clear()
            self._exit_state.has_exited = True
            self._resolve_exit_waiters()
            logger.info(
                "Simulation exited after %d action(s), %d queued action(s) dropped",
                count,
                dropped,
            )

    def _raise_on_failures(self, action: Any, outcomes: Sequence[HandlerOutcome]) -> None:
        failures = {o.agent_id: o.error for o in outcomes if o.error is not None}
        if not failures:
            return

        for agent_id, error in failures.items():
            logger.warning(
                "Agent %r failed to handle %s: %r", agent_id, describe_action(action), error
            )
        agent_id, first_error = next(iter(failures.items()))
        raise AgentHandlerError(agent_id, action, failures) from first_error

    # Context factory

    def _peer_snapshot(self) -> tuple[AgentSnapshot, ...]:
        states = self._copy(self._store.internal_states(self._agents))
        return tuple(
            AgentSnapshot(id=agent_id, internal_state=state) for agent_id, state in states.items()
        )

    def _build_context(
        self,
        agent_id: str,
        action: Any,
        peers: tuple[AgentSnapshot, ...],
    ) -> AgentContext[G]:
        return AgentContext(
            simulation=self,
            agent_id=agent_id,
            action=action,
            global_state=self._copy(self._store.get_global_state()),
            internal_state=self._copy(self._store.get_internal_state(agent_id)),
            all_agents=peers,
        )

    def _apply_global_transform(self, transform: StateTransform[G]) -> None:
        self._store.set_global_state(transform(self._store.get_global_state()))

    def _apply_internal_transform(self, agent_id: str, transform: StateTransform[Any]) -> None:
        current = self._store.get_internal_state(agent_id)
        self._store.set_internal_state(agent_id, transform(current))

    def _copy[T](self, value: T) -> Copy[T]:
        if self._settings.copy_snapshots:
            return copy.deepcopy(value)
        return value

    # Queries

    def get_global_state(self) -> Copy[G]:
        """Current global state."""
        return self._copy(self._store.get_global_state())

    def get_agent_internal_state(self, agent_id: str) -> Copy[Any]:
        """Internal state of an agent, None if unknown or without internal state."""
        if agent_id not in self._agents:
            return None
        return self._copy(self._store.get_internal_state(agent_id))

    def get_all_agent_states(self) -> dict[str, Any]:
        """Internal states of every registered agent, keyed by id in registration order."""
        return self._copy(self._store.internal_states(self._agents))

    def get_action_count(self) -> int:
        """Number of actions that completed processing."""
        return self._exit_state.processed_action_count

    def has_simulation_exited(self) -> bool:
        return self._exit_state.has_exited

    def queued_action_count(self) -> int:
        """Number of actions waiting to be processed."""
        return len(self._queue)

    async def exit(self) -> None:
        """Wait until the simulation has exited.

        Any number of callers may wait concurrently; returns immediately if
        the simulation already exited. Waiters are futures on the caller's
        running loop, so a simulation can be awaited across successive
        asyncio.run() calls.
        """
        if self._exit_state.has_exited:
            return
        waiter = asyncio.get_running_loop().create_future()
        self._exit_waiters.add(waiter)
        try:
            await waiter
        finally:
            self._exit_waiters.discard(waiter)

    def _resolve_exit_waiters(self) -> None:
        for waiter in self._exit_waiters:
            if not waiter.done():
                waiter.set_result(None)

    # Runners

    async def run(self, *actions: Any, timeout: float | None = None) -> None:
        """Dispatch actions in order, then wait for the simulation to exit.

        Args:
            actions: Initial actions.
            timeout: Maximum seconds to wait for exit after dispatching.

        Raises:
            TimeoutError: If the simulation did not exit within timeout.
        """
        for action in actions:
            await self.dispatch(action)
        async with asyncio.timeout(timeout):
            await self.exit()

    def run_sync(self, *actions: Any, timeout: float | None = None) -> None:
        """Synchronous wrapper for run().

        For simple scripts. Prefer run() in async contexts.
        """
        asyncio.run(self.run(*actions, timeout=timeout))


def create_simulation[G](
    initial_global_state: G,
    agents: Sequence[AgentDefinition],
    should_exit: ExitPredicate,
    *,
    settings: SimulationSettings | None = None,
    history: HistoryStore | None = None,
) -> EventSimulation[G]:
    """Create a simulation.

    Args:
        initial_global_state: Starting value of the shared global state.
        agents: Agent definitions, fan-out order is the list order.
        should_exit: Predicate receiving an ExitContext after each processed action.
        settings: Optional engine settings.
        history: Optional history store.

    Returns:
        A new EventSimulation.

    Raises:
        TypeError: If should_exit is not callable.
        DuplicateAgentError: If two agents share an id.
    """
    config = SimulationConfig(
        initial_global_state=initial_global_state,
        agents=agents,
        should_exit=should_exit,
    )
    return EventSimulation(config, settings=settings, history=history)
