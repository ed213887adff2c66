"""Tests for AgentContext snapshots, live reads and state isolation.

Critical Invariants:
- all_agents is captured once per action, before any handler runs
- Snapshot fields never change; live reads see every update so far
- Sequential updates inside one handler compose
- State is handed out by reference unless copy_snapshots is enabled
"""

import asyncio
import threading

import pytest

from simullm import (
    AgentContext,
    AgentSnapshot,
    SimulationSettings,
    create_agent,
    create_simulation,
)


def never_exit(ctx) -> bool:
    return False


@pytest.mark.asyncio
async def test_context_identifies_agent_and_action():
    contexts: list[AgentContext] = []

    def keep(action, ctx) -> None:
        contexts.append(ctx)

    simulation = create_simulation(0, [create_agent("keeper", keep)], never_exit)
    await simulation.dispatch("PING")

    (ctx,) = contexts
    assert ctx.agent_id == "keeper"
    assert ctx.action == "PING"


@pytest.mark.asyncio
async def test_contexts_are_fresh_per_action():
    contexts: list[AgentContext] = []

    def keep(action, ctx) -> None:
        contexts.append(ctx)

    simulation = create_simulation(0, [create_agent("keeper", keep)], never_exit)
    await simulation.dispatch("A")
    await simulation.dispatch("B")

    assert contexts[0] is not contexts[1]
    assert [c.action for c in contexts] == ["A", "B"]


@pytest.mark.asyncio
async def test_all_agents_lists_every_agent_in_order():
    seen = []

    def coordinator(action, ctx) -> None:
        seen.extend(ctx.all_agents)

    simulation = create_simulation(
        0,
        [
            create_agent("coordinator", coordinator),
            create_agent("worker1", lambda a, c: None, {"role": "worker", "status": "idle"}),
            create_agent("worker2", lambda a, c: None, {"role": "worker", "status": "busy"}),
        ],
        never_exit,
    )

    await simulation.dispatch("START")

    assert seen == [
        AgentSnapshot("coordinator", None),
        AgentSnapshot("worker1", {"role": "worker", "status": "idle"}),
        AgentSnapshot("worker2", {"role": "worker", "status": "busy"}),
    ]


@pytest.mark.asyncio
async def test_all_agents_snapshot_is_consistent_across_action_processing():
    """CRITICAL: all_agents reflects state at the start of each action.

    Why: Agents reasoning about peers within one action must see a stable
    world, even after the counter updated itself.
    """
    snapshots = []

    def observer(action, ctx) -> None:
        snapshots.append(ctx.all_agents)
        if action == "START":
            ctx.dispatch("INCREMENT")

    def counter(action, ctx) -> None:
        if action == "INCREMENT":
            snapshots.append(ctx.all_agents)
            ctx.update_internal_state(lambda s: {"count": s["count"] + 1})
            ctx.update_global_state(lambda total: total + 1)

    simulation = create_simulation(
        0,
        [create_agent("observer", observer), create_agent("counter", counter, {"count": 0})],
        lambda ctx: ctx.action_count >= 2,
    )

    await simulation.dispatch("START")

    # observer@START, observer@INCREMENT, counter@INCREMENT
    assert len(snapshots) == 3
    for snapshot in snapshots:
        assert AgentSnapshot("counter", {"count": 0}) in snapshot
    assert simulation.get_agent_internal_state("counter") == {"count": 1}


@pytest.mark.asyncio
async def test_all_agents_identical_for_every_agent_of_an_action():
    """Earlier agents mutating their own state do not change later agents' peer view."""
    views = {}

    def make(agent_id):
        def on_action(action, ctx) -> None:
            views[agent_id] = ctx.all_agents
            ctx.update_internal_state(lambda s: s + 1)

        return create_agent(agent_id, on_action, 0)

    simulation = create_simulation(0, [make("a"), make("b"), make("c")], never_exit)

    await simulation.dispatch("TICK")

    assert views["a"] is views["b"] is views["c"]
    assert [p.internal_state for p in views["c"]] == [0, 0, 0]
    assert simulation.get_all_agent_states() == {"a": 1, "b": 1, "c": 1}


@pytest.mark.asyncio
async def test_snapshot_fields_frozen_while_live_reads_update():
    """global_state/internal_state stay as built; get_*() read live values."""
    observed = {}

    def on_action(action, ctx) -> None:
        ctx.update_global_state(lambda total: total + 1)
        ctx.update_global_state(lambda total: total + 1)
        ctx.update_internal_state(lambda s: {"steps": s["steps"] + 1})

        observed["snapshot_global"] = ctx.global_state
        observed["live_global"] = ctx.get_global_state()
        observed["snapshot_internal"] = ctx.internal_state
        observed["live_internal"] = ctx.get_internal_state()

    simulation = create_simulation(
        10, [create_agent("stepper", on_action, {"steps": 0})], never_exit
    )

    await simulation.dispatch("STEP")

    assert observed == {
        "snapshot_global": 10,
        "live_global": 12,
        "snapshot_internal": {"steps": 0},
        "live_internal": {"steps": 1},
    }
    assert simulation.get_global_state() == 12


@pytest.mark.asyncio
async def test_concurrent_global_updates_do_not_lose_writes():
    """Updates from handlers interleaving at await points all apply.

    Why: Each update reads the live value at mutation time.
    """

    async def adder(action, ctx) -> None:
        for _ in range(3):
            await asyncio.sleep(0)
            ctx.update_global_state(lambda total: total + 1)

    agents = [create_agent(f"adder-{i}", adder) for i in range(4)]
    simulation = create_simulation(0, agents, never_exit)

    await simulation.dispatch("GO")

    assert simulation.get_global_state() == 12


@pytest.mark.asyncio
async def test_update_internal_state_only_touches_own_agent():
    def bump(action, ctx) -> None:
        if ctx.agent_id == "a":
            ctx.update_internal_state(lambda s: s + 1)

    simulation = create_simulation(
        0, [create_agent("a", bump, 0), create_agent("b", bump, 100)], never_exit
    )

    await simulation.dispatch("BUMP")

    assert simulation.get_all_agent_states() == {"a": 1, "b": 100}


@pytest.mark.asyncio
async def test_update_internal_state_from_absent():
    """The transform receives None when the agent had no internal state."""
    received = []

    def first_state(action, ctx) -> None:
        def transform(state):
            received.append(state)
            return "created"

        ctx.update_internal_state(transform)

    simulation = create_simulation(0, [create_agent("fresh", first_state)], never_exit)

    await simulation.dispatch("GO")

    assert received == [None]
    assert simulation.get_agent_internal_state("fresh") == "created"


@pytest.mark.asyncio
async def test_get_peer_state():
    peers = {}

    def reader(action, ctx) -> None:
        peers["dispatcher"] = ctx.get_peer_state("dispatcher")
        peers["missing"] = ctx.get_peer_state("missing")

    simulation = create_simulation(
        0,
        [
            create_agent("reader", reader),
            create_agent("dispatcher", lambda a, c: None, {"queue": ["task1"]}),
        ],
        never_exit,
    )

    await simulation.dispatch("READ")

    assert peers == {"dispatcher": {"queue": ["task1"]}, "missing": None}


@pytest.mark.asyncio
async def test_state_shared_by_reference_by_default():
    shared = {"items": []}
    simulation = create_simulation(shared, [], never_exit)

    assert simulation.get_global_state() is shared


@pytest.mark.asyncio
async def test_state_that_cannot_be_deep_copied_is_accepted():
    """CRITICAL: state is opaque; the engine must not require it to be copyable.

    Why: Simulations routinely keep locks or client handles in state.
    """
    lock = threading.Lock()
    seen = []

    def on_action(action, ctx) -> None:
        seen.append(ctx.global_state["lock"] is lock)
        ctx.update_internal_state(lambda s: {"lock": lock, "calls": s["calls"] + 1})

    simulation = create_simulation(
        {"lock": lock},
        [create_agent("holder", on_action, {"lock": lock, "calls": 0})],
        lambda ctx: ctx.agent_states["holder"]["calls"] >= 2,
    )

    await simulation.dispatch("GO")
    await simulation.dispatch("GO")

    assert seen == [True, True]
    assert simulation.has_simulation_exited()
    assert simulation.get_agent_internal_state("holder")["lock"] is lock


@pytest.mark.asyncio
async def test_copy_snapshots_isolates_engine_state():
    """With copy_snapshots, mutating a handed-out value does not reach engine state."""

    def mutate_snapshot(action, ctx) -> None:
        ctx.global_state["items"].append("from-snapshot")
        ctx.all_agents[0].internal_state["tags"].append("from-peer-view")

    simulation = create_simulation(
        {"items": []},
        [create_agent("mutator", mutate_snapshot, {"tags": []})],
        never_exit,
        settings=SimulationSettings(copy_snapshots=True),
    )

    await simulation.dispatch("GO")
    simulation.get_global_state()["items"].append("from-query")

    assert simulation.get_global_state() == {"items": []}
    assert simulation.get_agent_internal_state("mutator") == {"tags": []}
