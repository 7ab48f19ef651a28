"""
Output renderers for different formats.

Separates presentation logic from analysis logic. The text format is
the canonical report; its exact layout (including the trailing space on
the first line and the period closing the Description line) is relied
on by existing consumers and must not change.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlcomplexity.output.schema import ComplexityReportSchema, ReportEnvelopeSchema, StepSchema

if TYPE_CHECKING:
    from sqlcomplexity.analyzer.models import AnalysisResult

STEP_SEPARATOR = " + "


class OutputFormat(str, Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"


def render(result: "AnalysisResult", format: OutputFormat = OutputFormat.TEXT) -> str:
    """
    Render an analysis result in the specified format.

    Args:
        result: Analysis result to render
        format: Output format (text, json)

    Returns:
        Formatted string
    """
    if format == OutputFormat.TEXT:
        return render_text(result)
    elif format == OutputFormat.JSON:
        return render_json(result)
    else:
        raise ValueError(f"Unknown output format: {format}")


def render_text(result: "AnalysisResult") -> str:
    """
    Render the canonical text report.

    Subquery steps appear with their complete nested report, both in
    the Description line and on the Complexity line.
    """
    return (
        "Estimated Complexity. \n"
        f"Description:\t{STEP_SEPARATOR.join(result.descriptions)}.\n"
        f"Complexity:\t{STEP_SEPARATOR.join(result.tokens)}\n"
        f"Dominant Complexity: {result.dominant_class.value}\n"
    )


def render_json(result: "AnalysisResult", indent: int | None = 2) -> str:
    """Render result as JSON via the schema models."""
    envelope = ReportEnvelopeSchema(report=_result_to_schema(result))
    return envelope.model_dump_json(indent=indent)


def _result_to_schema(result: "AnalysisResult") -> ComplexityReportSchema:
    """Convert AnalysisResult to the Pydantic schema model."""
    return ComplexityReportSchema(
        dominant_complexity=result.dominant_class.value,
        steps=[
            StepSchema(
                access_method=step.access_method,
                complexity=step.complexity.value,
                description="Subquery" if step.subquery is not None else step.description,
                table=step.table,
                nested_query=step.nested_query,
                subquery=_result_to_schema(step.subquery) if step.subquery is not None else None,
            )
            for step in result.steps
        ],
    )
