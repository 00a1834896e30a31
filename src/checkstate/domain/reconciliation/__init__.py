"""Reconciliation core for stored synthetic check definitions.

Layered flow:
1) fetch the remote document through the fetch port
2) normalize stored and fetched text under the ignore policy
3) compare the normalized trees
4) return a verdict telling the caller what to persist
"""

from __future__ import annotations

from .compare import Difference, differences, equivalent
from .engine import SyntheticCheckReconciler, decide, reconcile
from .normalize import NormalizeResult, normalize, normalize_tree
from .policy import DEFAULT_POLICY, IgnorePolicy

__all__ = [
    "DEFAULT_POLICY",
    "Difference",
    "IgnorePolicy",
    "NormalizeResult",
    "SyntheticCheckReconciler",
    "decide",
    "differences",
    "equivalent",
    "normalize",
    "normalize_tree",
    "reconcile",
]
