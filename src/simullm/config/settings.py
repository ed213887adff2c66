"""Configuration settings using Pydantic Settings.

Provides typed engine configuration with environment variable support.

Usage:
    from simullm.config import SimulationSettings

    # Load from environment variables (SIMULLM_*)
    settings = SimulationSettings()

    # Or override with explicit values
    settings = SimulationSettings(handler_timeout=30.0, copy_snapshots=True)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the simulation engine.

    Attributes:
        yield_between_actions: Yield to the event loop once between queued
            actions so callbacks scheduled by agents (timers, I/O completions)
            can enqueue further actions.
        handler_timeout: Per-handler time limit in seconds. None disables it.
            A handler exceeding it counts as a failed handler.
        copy_snapshots: Deep-copy state handed out as snapshots (context
            fields, peer snapshots, exit context, query results, history).
            Off by default: state is handed out by reference and may hold
            values that cannot be deep-copied (locks, client handles).

    Environment Variables:
        SIMULLM_YIELD_BETWEEN_ACTIONS
        SIMULLM_HANDLER_TIMEOUT
        SIMULLM_COPY_SNAPSHOTS
    """

    model_config = SettingsConfigDict(
        env_prefix="SIMULLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    yield_between_actions: bool = True
    handler_timeout: float | None = Field(default=None, gt=0)
    copy_snapshots: bool = False
