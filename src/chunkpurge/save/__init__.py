"""Save handling: hysteresis controller, tick state and best-effort signals."""

from chunkpurge.save.controller import SaveStateController
from chunkpurge.save.models import SaveState, TickState, TickStateRegistry
from chunkpurge.save.signals import BackupStatusProbe, BestEffortSignal, resolve_import_target

__all__ = [
    "SaveStateController",
    "SaveState",
    "TickState",
    "TickStateRegistry",
    "BackupStatusProbe",
    "BestEffortSignal",
    "resolve_import_target",
]
