"""Best-effort external signals that degrade instead of failing.

An integration that raises once is assumed to be broken for good: the
failure is logged a single time, latched, and the signal reports its
default value from then on. It is never retried.

Usage:
    probe = BackupStatusProbe("backup_mod.thread:is_backup_running")
    if probe.is_backup_running():
        ...
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from chunkpurge.storage.protocol import BackupStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BestEffortSignal(Generic[T]):
    """Callable wrapper that latches to a default after its first failure.

    Args:
        name: Human-readable name used in the single failure log line.
        query: Callable producing the signal value.
        default: Value reported when the query fails, now or later.
    """

    def __init__(self, name: str, query: Callable[[], T], default: T) -> None:
        self._name = name
        self._query = query
        self._default = default
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    def __call__(self) -> T:
        if self._failed:
            return self._default
        try:
            return self._query()
        except Exception:
            self._failed = True
            logger.error(
                "Could not read %s, ignoring it from now on.", self._name, exc_info=True
            )
            return self._default


def resolve_import_target(target: str) -> Callable[[], object]:
    """Import "package.module:attribute.path" and return the attribute.

    Raises:
        ValueError: If target has no ":" separator.
        ImportError, AttributeError: If the module or attribute is missing.
        TypeError: If the attribute is not callable.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Import target must look like 'module:callable', got {target!r}")

    obj: object = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise TypeError(f"Import target {target!r} is not callable")
    return obj


class BackupStatusProbe:
    """Lazily resolved backup-status capability.

    The target is resolved on first use. Resolution and query failures are
    both latched: afterwards the probe reports that no backup is running.

    Args:
        target: Object with an is_backup_running() method, callable
            returning True while a backup runs, an import target string
            naming one, or None for no backup awareness.
    """

    def __init__(self, target: BackupStatus | str | Callable[[], object] | None = None) -> None:
        self._target = target
        self._query: Callable[[], object] | None = None
        self._signal: BestEffortSignal[bool] = BestEffortSignal(
            "backup running status", self._is_running, default=False
        )

    @classmethod
    def wrap(
        cls, status: BackupStatus | str | Callable[[], object] | None
    ) -> BackupStatusProbe:
        """Return status as a latching probe, wrapping host objects as needed."""
        if isinstance(status, BackupStatusProbe):
            return status
        return cls(status)

    @property
    def enabled(self) -> bool:
        return self._target is not None and not self._signal.failed

    def _is_running(self) -> bool:
        if self._query is None:
            if isinstance(self._target, str):
                self._query = resolve_import_target(self._target)
            elif hasattr(self._target, "is_backup_running"):
                self._query = self._target.is_backup_running  # type: ignore[union-attr]
            else:
                self._query = self._target  # type: ignore[assignment]
        return bool(self._query())  # type: ignore[misc]

    def is_backup_running(self) -> bool:
        if self._target is None:
            return False
        return self._signal()
