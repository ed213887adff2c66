"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from simullm import AgentContext, SimulationSettings, create_agent


@pytest.fixture(autouse=True)
def _clean_simullm_env(monkeypatch):
    """Keep SIMULLM_* variables from the developer shell out of the tests."""
    for name in (
        "SIMULLM_YIELD_BETWEEN_ACTIONS",
        "SIMULLM_HANDLER_TIMEOUT",
        "SIMULLM_COPY_SNAPSHOTS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> SimulationSettings:
    """Default engine settings."""
    return SimulationSettings()


@pytest.fixture
def recording_agent():
    """Factory for agents that record (agent_id, action) into a shared list."""

    def make(agent_id: str, log: list, initial_state=None):
        def on_action(action, ctx: AgentContext) -> None:
            log.append((ctx.agent_id, action))

        return create_agent(agent_id, on_action, initial_state)

    return make
