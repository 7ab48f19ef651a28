"""
In-memory EXPLAIN provider.

Serves plans from a mapping of query text to EXPLAIN output. Used for
offline analysis of captured plans and in tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from sqlcomplexity.exceptions import ParseError, ProviderError
from sqlcomplexity.parser.parser import load_source
from sqlcomplexity.providers.base import ExplainProvider, RawPlan

logger = logging.getLogger(__name__)


class StaticExplainProvider(ExplainProvider):
    """Provider backed by a fixed {query: plan} mapping."""

    def __init__(self, plans: Mapping[str, RawPlan] | None = None) -> None:
        self._plans: dict[str, RawPlan] = dict(plans or {})
        self.calls: list[str] = []

    @classmethod
    def from_file(cls, path: str | Path) -> "StaticExplainProvider":
        """
        Load a provider from a JSON file mapping query text to plans.

        Raises:
            ParseError: If the file is unreadable or not a JSON object
        """
        data: Any = load_source(Path(path))
        if not isinstance(data, Mapping):
            raise ParseError(
                f"Subquery plan file must be a JSON object, got {type(data).__name__}",
                source="structure",
            )
        return cls(data)

    def get_plan(self, query: str) -> RawPlan:
        self.calls.append(query)
        try:
            return self._plans[query]
        except KeyError:
            logger.warning("No plan registered for query: %s", query[:80])
            raise ProviderError(f"No plan available for query: {query}", query=query) from None

    def __len__(self) -> int:
        return len(self._plans)
