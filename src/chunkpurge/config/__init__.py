"""Configuration module using Pydantic Settings.

Provides typed purge configuration with environment variable support, and
the operator command that edits it at runtime.

Usage:
    from chunkpurge.config import ConfigCommand, PurgeSettings

    settings = PurgeSettings(debug=True)
    command = ConfigCommand(settings)
    command.execute(["pradius", "6"])
"""

from chunkpurge.config.commands import CommandError, ConfigCommand, ConfigSubcommand
from chunkpurge.config.settings import PurgeSettings

__all__ = [
    "PurgeSettings",
    "ConfigCommand",
    "ConfigSubcommand",
    "CommandError",
]
