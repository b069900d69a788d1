"""Tick scheduling: the host-facing periodic driver."""

from chunkpurge.scheduling.driver import PeriodicDriver

__all__ = [
    "PeriodicDriver",
]
