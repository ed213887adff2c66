"""Turn-based counter simulation.

Demonstrates:
- Tagged action dataclasses matched with `match`
- A facilitator agent with private internal state driving turns
- Agents cascading actions through ctx.dispatch()
- Exit condition over an agent's internal state
"""

import asyncio
from dataclasses import dataclass, replace

from simullm import AgentContext, EventSimulation, create_agent, create_simulation


@dataclass(frozen=True, slots=True)
class CounterState:
    value: int
    history: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class FacilitatorState:
    turn_order: tuple[str, ...]
    max_turns: int
    current_turn_index: int = 0
    completed_turns: int = 0


# Actions


@dataclass(frozen=True, slots=True)
class Start:
    pass


@dataclass(frozen=True, slots=True)
class TurnStart:
    agent_id: str


@dataclass(frozen=True, slots=True)
class TurnComplete:
    agent_id: str


@dataclass(frozen=True, slots=True)
class Increment:
    pass


@dataclass(frozen=True, slots=True)
class Double:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


def _append(state: CounterState, value: int) -> CounterState:
    return replace(state, value=value, history=(*state.history, value))


def facilitator_action(action: object, ctx: AgentContext[CounterState]) -> None:
    """Hand out turns in order and count completed rounds."""
    state: FacilitatorState = ctx.internal_state
    match action:
        case Start():
            ctx.dispatch(TurnStart(state.turn_order[0]))
        case TurnComplete():
            next_index = (state.current_turn_index + 1) % len(state.turn_order)
            ctx.update_internal_state(
                lambda s: replace(
                    s,
                    current_turn_index=next_index,
                    completed_turns=s.completed_turns + (1 if next_index == 0 else 0),
                )
            )

            updated: FacilitatorState = ctx.get_internal_state()
            if updated.completed_turns < updated.max_turns:
                ctx.dispatch(TurnStart(state.turn_order[next_index]))


def increment_action(action: object, ctx: AgentContext[CounterState]) -> None:
    match action:
        case TurnStart(agent_id="increment"):
            ctx.dispatch(Increment())
            ctx.dispatch(TurnComplete("increment"))
        case Increment():
            ctx.update_global_state(lambda s: _append(s, s.value + 1))


def double_action(action: object, ctx: AgentContext[CounterState]) -> None:
    match action:
        case TurnStart(agent_id="double"):
            ctx.dispatch(Double())
            ctx.dispatch(TurnComplete("double"))
        case Double():
            ctx.update_global_state(lambda s: _append(s, s.value * 2))


def reset_action(action: object, ctx: AgentContext[CounterState]) -> None:
    match action:
        case TurnStart(agent_id="reset"):
            ctx.dispatch(Reset())
            ctx.dispatch(TurnComplete("reset"))
        case Reset():
            ctx.update_global_state(lambda s: _append(s, 0))


@dataclass
class CounterResult:
    final_state: CounterState
    facilitator_state: FacilitatorState
    action_count: int
    agent_ids: tuple[str, ...]


def build_counter_simulation(max_turns: int = 5) -> EventSimulation[CounterState]:
    """Create the counter simulation with a facilitator and three worker agents."""
    facilitator = create_agent(
        "facilitator",
        facilitator_action,
        FacilitatorState(turn_order=("increment", "double", "reset"), max_turns=max_turns),
    )
    return create_simulation(
        initial_global_state=CounterState(value=1, history=(1,)),
        agents=[
            facilitator,
            create_agent("increment", increment_action),
            create_agent("double", double_action),
            create_agent("reset", reset_action),
        ],
        should_exit=lambda ctx: (
            ctx.agent_states["facilitator"].completed_turns
            >= ctx.agent_states["facilitator"].max_turns
        ),
    )


async def run_counter_example(max_turns: int = 5) -> CounterResult:
    """Run the counter simulation to completion."""
    simulation = build_counter_simulation(max_turns)
    await simulation.dispatch(Start())

    return CounterResult(
        final_state=simulation.get_global_state(),
        facilitator_state=simulation.get_agent_internal_state("facilitator"),
        action_count=simulation.get_action_count(),
        agent_ids=simulation.agent_ids,
    )


def main():
    result = asyncio.run(run_counter_example())
    print("Counter Simulation Result:")
    print(f"  Final value: {result.final_state.value}")
    print(f"  History: {list(result.final_state.history)}")
    print(f"  Total turns: {result.facilitator_state.completed_turns}")
    print(f"  Actions processed: {result.action_count}")


if __name__ == "__main__":
    main()
