"""Configuration settings using Pydantic Settings.

Provides typed, validated purge configuration with environment variable
support.

Usage:
    from chunkpurge.config import PurgeSettings

    # Load from environment variables (CHUNKPURGE_*)
    settings = PurgeSettings()

    # Or override with explicit values
    settings = PurgeSettings(purge_interval=200, debug=True)

    # Assignment is validated too
    settings.purge_interval = 0  # raises pydantic.ValidationError
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PurgeSettings(BaseSettings):  # type: ignore[misc]
    """Operator-tunable purge and save-handling configuration.

    Attributes:
        auto_purge_enabled: Run the periodic purge.
        purge_interval: Ticks between purge scans (>= 1).
        debug: Log purge summaries and save transitions at INFO.
        command_name: Name the operator command is registered under.
        proximity_radius: Extra retention radius around an observer, on top
            of the host view distance.
        keepalive_radius: Retention radius around a keep-alive cell.
        origin_radius: Retention radius around the grid origin.
        auto_save_enabled: Toggle saving from the eviction backlog.
        save_high_water: Backlog size at which saving is turned back on.
        backup_probe: Import target ("module:callable") reporting whether a
            backup is running. None disables backup awareness.

    Radii of zero or less mean unbounded.

    Environment Variables:
        CHUNKPURGE_AUTO_PURGE_ENABLED
        CHUNKPURGE_PURGE_INTERVAL
        CHUNKPURGE_DEBUG
        CHUNKPURGE_COMMAND_NAME
        CHUNKPURGE_PROXIMITY_RADIUS
        CHUNKPURGE_KEEPALIVE_RADIUS
        CHUNKPURGE_ORIGIN_RADIUS
        CHUNKPURGE_AUTO_SAVE_ENABLED
        CHUNKPURGE_SAVE_HIGH_WATER
        CHUNKPURGE_BACKUP_PROBE
    """

    model_config = SettingsConfigDict(
        env_prefix="CHUNKPURGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    auto_purge_enabled: bool = True
    purge_interval: int = Field(default=600, ge=1)
    debug: bool = False
    command_name: str = "chunkpurge"

    proximity_radius: int = 4
    keepalive_radius: int = 5
    origin_radius: int = 3

    auto_save_enabled: bool = True
    save_high_water: int = Field(default=100, ge=0)

    backup_probe: str | None = None
