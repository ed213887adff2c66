"""Configuration module using Pydantic Settings.

Usage:
    from simullm.config import SimulationSettings

    settings = SimulationSettings(handler_timeout=10.0)
    simulation = create_simulation(0, agents, should_exit, settings=settings)
"""

from simullm.config.settings import SimulationSettings

__all__ = [
    "SimulationSettings",
]
