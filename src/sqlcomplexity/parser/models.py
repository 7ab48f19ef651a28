"""
Plan step model.

A PlanStep is one row of a MySQL-style EXPLAIN: the access method the
engine will use for one table, plus the embedded query text for
subquery rows. Steps are immutable once parsed; the analyzer only reads
them.

MySQL EXPLAIN fields carried here:
- type: Access type (ALL, index, range, ref, eq_ref, const, ...)
- query: Embedded query text (subquery rows only)
- table: Table name
- select_type: SIMPLE, PRIMARY, SUBQUERY, etc.
- rows: Estimated rows to examine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

SUBQUERY_ACCESS_METHOD = "subquery"


@dataclass(frozen=True)
class PlanStep:
    """A single row of an execution plan."""

    access_method: str  # 'type' in MySQL, renamed to avoid Python keyword
    nested_query: str | None = None
    table: str | None = None
    select_type: str | None = None
    rows: int | None = None

    # Original raw data
    raw: dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def is_subquery(self) -> bool:
        """Check if this step must be resolved through its nested query."""
        return self.access_method == SUBQUERY_ACCESS_METHOD


# An ordered sequence of steps. Order only affects report rendering.
ExecutionPlan = Sequence[PlanStep]
