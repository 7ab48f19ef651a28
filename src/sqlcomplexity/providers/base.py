"""
Base interface for EXPLAIN providers.

A provider turns a query string into its execution plan. The analyzer
only calls it for subquery steps, so any implementation (a live
database, a fixture file, an in-memory mapping) can back the analysis.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from sqlcomplexity.parser.models import PlanStep

# What get_plan may return: parsed steps, or raw EXPLAIN rows/documents
# that parse_plan() understands.
RawPlan = Sequence[PlanStep] | Sequence[Mapping[str, Any]] | Mapping[str, Any]


class ExplainProvider(ABC):
    """Base class for anything that can explain a query."""

    @abstractmethod
    def get_plan(self, query: str) -> RawPlan:
        """
        Return the ordered execution plan for a query.

        Args:
            query: SQL text to explain

        Returns:
            The plan steps, or raw EXPLAIN output accepted by parse_plan()

        Raises:
            ProviderError: If no plan can be produced (bad syntax,
                connection loss, permission error)
        """
        pass
