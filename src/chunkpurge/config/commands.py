"""Operator command for inspecting and tuning purge settings at runtime.

The host registers the command under settings.command_name and forwards
its arguments. Input is parsed and validated here, so the purge logic
only ever sees valid settings.

Usage:
    command = ConfigCommand(settings)
    command.execute(["purgeinterval", "200"])
    # 'Updated purgeinterval from 600 to 200'
    command.tab_completions(["enable"])
    # ['enablepurge', 'enablesave']

    # write every update to a dotenv file read at startup
    command = ConfigCommand(settings, env_file=".env")
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import set_key
from pydantic import ValidationError

from chunkpurge.config.settings import PurgeSettings

BOOLEAN_COMPLETIONS = ("true", "false")


class CommandError(Exception):
    """Raised when an operator supplies a value the settings cannot accept."""


class ConfigSubcommand(Enum):
    """Settable option: (settings field, usage example, value type)."""

    enablepurge = ("auto_purge_enabled", "[true|false]", bool)
    purgeinterval = ("purge_interval", "[ticks]", int)
    debug = ("debug", "[true|false]", bool)
    pradius = ("proximity_radius", "[cells]", int)
    kradius = ("keepalive_radius", "[cells]", int)
    oradius = ("origin_radius", "[cells]", int)
    enablesave = ("auto_save_enabled", "[true|false]", bool)
    savehighwater = ("save_high_water", "[cells]", int)

    def __init__(self, field: str, usage_example: str, value_type: type) -> None:
        self.field = field
        self.usage_example = usage_example
        self.value_type = value_type

    @property
    def completions(self) -> tuple[str, ...]:
        return BOOLEAN_COMPLETIONS if self.value_type is bool else ()

    def parse(self, raw: str) -> Any:
        """Parse a raw argument into this option's value type.

        Raises:
            CommandError: If raw is not a valid literal for the type.
        """
        if self.value_type is bool:
            lowered = raw.strip().lower()
            if lowered not in BOOLEAN_COMPLETIONS:
                msg = f"{self.name} expects true or false, got {raw!r}"
                raise CommandError(msg)
            return lowered == "true"
        try:
            return int(raw.strip())
        except ValueError as e:
            msg = f"{self.name} expects an integer, got {raw!r}"
            raise CommandError(msg) from e

    @classmethod
    def lookup(cls, name: str) -> ConfigSubcommand | None:
        return cls.__members__.get(name)


class ConfigCommand:
    """Operator-facing `<name> <subcommand> <value>` command.

    Args:
        settings: Live settings object; updates are applied in place.
        env_file: Dotenv file each update is written to, so it survives a
            restart. None keeps updates in memory only.
    """

    def __init__(self, settings: PurgeSettings, env_file: str | Path | None = None) -> None:
        self._settings = settings
        self._env_file = env_file

    @property
    def name(self) -> str:
        return self._settings.command_name

    def usage(self) -> str:
        """One example line per subcommand."""
        return "\n".join(
            f"/{self.name} {sub.name} {sub.usage_example}" for sub in ConfigSubcommand
        )

    def execute(self, args: Sequence[str]) -> str:
        """Apply `<subcommand> <value>` and return the reply for the operator.

        Raises:
            CommandError: If the value cannot be parsed or is out of range.
        """
        if len(args) < 2:
            return f"Usage:\n{self.usage()}"
        subcommand = ConfigSubcommand.lookup(args[0])
        if subcommand is None:
            return f"Usage:\n{self.usage()}"

        new_value = subcommand.parse(args[1])
        old_value = getattr(self._settings, subcommand.field)
        if old_value == new_value:
            return f"No change; {subcommand.name} is already {_format(old_value)}"

        try:
            setattr(self._settings, subcommand.field, new_value)
        except ValidationError as e:
            msg = f"Invalid value for {subcommand.name}: {args[1]!r}"
            raise CommandError(msg) from e
        self._persist(subcommand, new_value)
        return (
            f"Updated {subcommand.name} from {_format(old_value)} to {_format(new_value)}"
        )

    def _persist(self, subcommand: ConfigSubcommand, value: Any) -> None:
        if self._env_file is None:
            return
        key = f"{self._settings.model_config.get('env_prefix', '')}{subcommand.field}".upper()
        set_key(str(self._env_file), key, _format(value))

    def tab_completions(self, args: Sequence[str]) -> list[str]:
        """Complete a subcommand name, then that subcommand's value."""
        if len(args) <= 1:
            prefix = args[0] if args else ""
            return [sub.name for sub in ConfigSubcommand if sub.name.startswith(prefix)]

        subcommand = ConfigSubcommand.lookup(args[0])
        if subcommand is None:
            return []
        return [c for c in subcommand.completions if c.startswith(args[1])]


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
