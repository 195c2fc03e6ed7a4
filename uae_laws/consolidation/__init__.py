"""
Consolidation engine for the instrument registry.

This package provides functionality to:
1. Resolve instrument identities and merge configured seeds
2. Infer amendment and repeal relationships between instruments
3. Derive lifecycle status
4. Diff successive snapshots
"""

from .models import Diff, Instrument, InstrumentChange, Snapshot
from .identity import merge_seeds, slug_from_title
from .relationships import RelationshipInferencer, infer_relationships
from .status import derive_statuses
from .diff_engine import compute_diff

__all__ = [
    "Diff",
    "Instrument",
    "InstrumentChange",
    "Snapshot",
    "merge_seeds",
    "slug_from_title",
    "RelationshipInferencer",
    "infer_relationships",
    "derive_statuses",
    "compute_diff",
]
