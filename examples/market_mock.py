"""Mock boom/bust commodity market.

Demonstrates:
- Async agent handlers awaiting an external decision call (a deterministic
  stand-in for an LLM, so the example runs offline)
- Traders with private internal state reading the shared market state
- A clock agent coordinating turns from the trades it observes
- History tracing with InMemoryHistoryStore
"""

import asyncio
import logging
from dataclasses import dataclass, replace

from simullm import (
    AgentContext,
    AgentDefinition,
    EventSimulation,
    InMemoryHistoryStore,
    SimulationSettings,
    create_agent,
    create_simulation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MarketState:
    price: float
    volume: float
    turn: int = 0
    price_history: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class TraderState:
    name: str
    strategy: str
    capital: float
    position: int = 0
    memory: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ClockState:
    trades_this_turn: int = 0


@dataclass(frozen=True, slots=True)
class Decision:
    action: str
    reasoning: str
    price_change: float = 0.0
    volume_change: float = 0.0


# Actions


@dataclass(frozen=True, slots=True)
class Tick:
    turn: int


@dataclass(frozen=True, slots=True)
class Trade:
    trader: str
    decision: Decision


@dataclass(frozen=True, slots=True)
class MarketClose:
    pass


async def mock_decide(trader: TraderState, market: MarketState) -> Decision:
    """Deterministic replacement for an LLM trading decision."""
    await asyncio.sleep(0)

    if trader.strategy == "bullish":
        if market.price < 120:
            return Decision("buy", "Price below target, buying opportunity", 3.0, 100.0)
        return Decision("hold", "Price getting high, waiting for pullback")
    if trader.strategy == "bearish":
        if market.price > 80:
            return Decision("sell", "Price above fair value, selling", -2.0, 60.0)
        return Decision("hold", "Price already low, waiting for recovery")
    return Decision("hold", "No clear signal")


def make_trader(trader_id: str, name: str, strategy: str, capital: float) -> AgentDefinition:
    async def on_action(action: object, ctx: AgentContext[MarketState]) -> None:
        if not isinstance(action, Tick):
            return

        decision = await mock_decide(ctx.internal_state, ctx.global_state)
        step = {"buy": 1, "sell": -1}.get(decision.action, 0)
        ctx.update_internal_state(
            lambda s: replace(
                s,
                position=s.position + step,
                memory=(*s.memory, f"turn {action.turn}: {decision.action}"),
            )
        )
        ctx.dispatch(Trade(trader_id, decision))

    return create_agent(trader_id, on_action, TraderState(name, strategy, capital))


def market_action(action: object, ctx: AgentContext[MarketState]) -> None:
    """Apply trades to price and volume."""
    match action:
        case Tick(turn=turn):
            ctx.update_global_state(lambda s: replace(s, turn=turn))
        case Trade(decision=decision):
            ctx.update_global_state(
                lambda s: replace(
                    s,
                    price=s.price + decision.price_change,
                    volume=s.volume + decision.volume_change,
                    price_history=(*s.price_history, s.price + decision.price_change),
                )
            )


def make_clock(trader_count: int, max_turns: int) -> AgentDefinition:
    def on_action(action: object, ctx: AgentContext[MarketState]) -> None:
        if not isinstance(action, Trade):
            return

        ctx.update_internal_state(lambda s: replace(s, trades_this_turn=s.trades_this_turn + 1))
        clock: ClockState = ctx.get_internal_state()
        if clock.trades_this_turn < trader_count:
            return

        ctx.update_internal_state(lambda s: replace(s, trades_this_turn=0))
        turn = ctx.get_global_state().turn
        if turn < max_turns:
            ctx.dispatch(Tick(turn + 1))
        else:
            ctx.dispatch(MarketClose())

    return create_agent("clock", on_action, ClockState())


def build_market_simulation(
    max_turns: int = 10,
    history: InMemoryHistoryStore | None = None,
) -> EventSimulation[MarketState]:
    traders = [
        make_trader("bull", "Bullish Bob", "bullish", 10_000.0),
        make_trader("bear", "Bearish Betty", "bearish", 10_000.0),
    ]
    return create_simulation(
        initial_global_state=MarketState(price=100.0, volume=1_000.0),
        agents=[
            create_agent("market", market_action),
            *traders,
            make_clock(len(traders), max_turns),
        ],
        should_exit=lambda ctx: isinstance(ctx.last_action, MarketClose),
        settings=SimulationSettings(handler_timeout=30.0),
        history=history,
    )


async def run_market_example(max_turns: int = 10) -> tuple[MarketState, InMemoryHistoryStore]:
    history = InMemoryHistoryStore()
    simulation = build_market_simulation(max_turns, history)
    await simulation.run(Tick(1), timeout=10.0)

    final = simulation.get_global_state()
    logger.info("Market closed at %.2f after %d turns", final.price, final.turn)
    return final, history


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    final, history = asyncio.run(run_market_example())
    print(f"Final price: {final.price:.2f}, volume: {final.volume:.0f}")
    print(f"Price history: {list(final.price_history)}")
    print(f"Recorded actions: {history.record_count}")


if __name__ == "__main__":
    main()
