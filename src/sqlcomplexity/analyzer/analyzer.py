"""
Complexity analyzer.

Classifies each step of an execution plan by its access method and
reduces the per-step classes to one dominant class. Subquery steps are
resolved by asking the ExplainProvider for the nested plan and running
the same analysis on it; the nested dominant class is what the subquery
step contributes.

The analyzer keeps no state between calls, so one instance can serve
concurrent callers. Provider errors are never caught here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from sqlcomplexity.analyzer.classification import classify
from sqlcomplexity.analyzer.models import AnalysisResult, ComplexityClass, StepEstimate
from sqlcomplexity.config import MAX_SUBQUERY_DEPTH_LIMIT, Config, get_config
from sqlcomplexity.exceptions import ConfigurationError, RecursionLimitError
from sqlcomplexity.output.renderers import render_text
from sqlcomplexity.parser.models import PlanStep
from sqlcomplexity.parser.parser import parse_plan
from sqlcomplexity.providers.base import ExplainProvider

logger = logging.getLogger(__name__)


class ComplexityAnalyzer:
    """
    Estimates the asymptotic complexity of a query from its plan.

    Example:
        analyzer = ComplexityAnalyzer()
        result = analyzer.estimate_complexity(
            [{"type": "ALL"}, {"type": "const"}],
            provider,
        )
        result.dominant_class  # ComplexityClass.LINEAR
        print(result.report)

    Args:
        max_depth: Maximum subquery nesting depth. Defaults to the
            configured ``max_subquery_depth``.
        detect_cycles: Fail as soon as a subquery resolves back to a
            query already being resolved. Defaults to the config value.
        config: Configuration to read defaults from (uses get_config()
            when omitted).
    """

    def __init__(
        self,
        max_depth: int | None = None,
        detect_cycles: bool | None = None,
        config: Config | None = None,
    ) -> None:
        config = config or get_config()

        self.max_depth = config.max_subquery_depth if max_depth is None else max_depth
        if not 1 <= self.max_depth <= MAX_SUBQUERY_DEPTH_LIMIT:
            raise ConfigurationError(
                f"max_depth must be between 1 and {MAX_SUBQUERY_DEPTH_LIMIT}, got {self.max_depth}",
                config_key="max_subquery_depth",
            )
        self.detect_cycles = config.detect_cycles if detect_cycles is None else detect_cycles

    def estimate_complexity(
        self,
        plan: Iterable[PlanStep] | Any,
        provider: ExplainProvider,
    ) -> AnalysisResult:
        """
        Estimate the complexity of an execution plan.

        Args:
            plan: Plan steps, or raw EXPLAIN output accepted by parse_plan()
            provider: Used only to fetch plans for subquery steps

        Returns:
            AnalysisResult with per-step estimates and the dominant class

        Raises:
            MalformedPlanError: If a step lacks its access method
            ProviderError: If a subquery plan cannot be fetched
            RecursionLimitError: If subquery nesting is too deep or cyclic
        """
        return self._estimate(plan, provider, query_path=())

    def _estimate(
        self,
        plan: Any,
        provider: ExplainProvider,
        query_path: tuple[str, ...],
    ) -> AnalysisResult:
        if not isinstance(plan, (str, Path, Mapping, list, tuple)):
            plan = list(plan)
        steps = parse_plan(plan)

        estimates = [self._estimate_step(step, provider, query_path) for step in steps]
        result = AnalysisResult.from_steps(estimates)

        logger.debug(
            "Estimated %d step(s) at depth %d: dominant %s",
            len(estimates),
            len(query_path),
            result.dominant_class.value,
        )
        return result

    def _estimate_step(
        self,
        step: PlanStep,
        provider: ExplainProvider,
        query_path: tuple[str, ...],
    ) -> StepEstimate:
        if step.is_subquery:
            return self._estimate_subquery(step, provider, query_path)

        rule = classify(step.access_method)
        if rule is None:
            logger.info(
                "Unrecognized access method %r on %s, classifying as %s",
                step.access_method,
                step.table or "<no table>",
                ComplexityClass.UNKNOWN.value,
            )
            return StepEstimate(
                access_method=step.access_method,
                complexity=ComplexityClass.UNKNOWN,
                token=ComplexityClass.UNKNOWN.value,
                table=step.table,
            )

        logger.debug("Classified %r as %s", step.access_method, rule.complexity.value)
        return StepEstimate(
            access_method=step.access_method,
            complexity=rule.complexity,
            description=rule.description,
            token=rule.complexity.value,
            table=step.table,
        )

    def _estimate_subquery(
        self,
        step: PlanStep,
        provider: ExplainProvider,
        query_path: tuple[str, ...],
    ) -> StepEstimate:
        # parse_step() guarantees subquery steps carry their query text
        query: str = step.nested_query  # type: ignore[assignment]
        depth = len(query_path) + 1

        if self.detect_cycles and query in query_path:
            raise RecursionLimitError(
                f"Subquery resolves back to itself after {len(query_path)} level(s): {query}",
                depth=depth,
                max_depth=self.max_depth,
                query_path=query_path + (query,),
            )
        if depth > self.max_depth:
            raise RecursionLimitError(
                f"Subquery nesting exceeds maximum depth of {self.max_depth}",
                depth=depth,
                max_depth=self.max_depth,
                query_path=query_path + (query,),
            )

        logger.debug("Resolving subquery at depth %d: %s", depth, query[:80])
        nested_plan = provider.get_plan(query)
        nested = self._estimate(nested_plan, provider, query_path + (query,))
        nested_report = render_text(nested)

        return StepEstimate(
            access_method=step.access_method,
            complexity=nested.dominant_class,
            description=f"Subquery: ({nested_report})",
            token=nested_report,
            table=step.table,
            nested_query=query,
            subquery=nested,
        )


def estimate_complexity(
    plan: Iterable[PlanStep] | Any,
    provider: ExplainProvider,
    max_depth: int | None = None,
) -> AnalysisResult:
    """Convenience wrapper: estimate with a fresh ComplexityAnalyzer."""
    return ComplexityAnalyzer(max_depth=max_depth).estimate_complexity(plan, provider)
