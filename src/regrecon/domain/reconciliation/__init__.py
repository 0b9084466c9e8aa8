"""Cross-source reconciliation core.

Flow for one query:
1) fetch the authoritative source, classify its records as high confidence
2) fall back to lower-priority sources only while nothing was emitted
3) upgrade fallback records confirmed by the authoritative set
4) collapse to one entry per tax id, keeping first-appearance order
5) summarize counts per confidence tier
"""

from __future__ import annotations

from .confidence import classify, outranks, precedence
from .deduplicate import deduplicate_companies
from .engine import ReconciliationEngine, ReconciliationResult, cross_validate
from .summary import ResultSummary, summarize

__all__ = [
    "ReconciliationEngine",
    "ReconciliationResult",
    "ResultSummary",
    "classify",
    "cross_validate",
    "deduplicate_companies",
    "outranks",
    "precedence",
    "summarize",
]
