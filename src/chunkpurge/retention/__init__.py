"""Retention: anchor classification and eviction planning."""

from chunkpurge.retention.classifier import AnchorClassifier
from chunkpurge.retention.engine import RetentionEngine, compute_eviction_set
from chunkpurge.retention.models import EvictionPlan, PurgeReport, RetainedRegions

__all__ = [
    "AnchorClassifier",
    "RetentionEngine",
    "compute_eviction_set",
    "EvictionPlan",
    "PurgeReport",
    "RetainedRegions",
]
