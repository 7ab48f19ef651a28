"""
JSON Schema definitions for stable output.

The schema is stable across minor versions.
Breaking changes only in major versions.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = "1.0"


class StepSchema(BaseModel):
    """Schema for one classified plan step."""

    model_config = ConfigDict(frozen=True)

    access_method: str = Field(..., description="Access method tag from the plan")
    complexity: str = Field(..., description="Complexity class contributed by the step")
    description: str | None = Field(None, description="Access strategy ('Subquery' for subqueries), null when unrecognized")
    table: str | None = Field(None, description="Table accessed, if known")
    nested_query: str | None = Field(None, description="Subquery text for subquery steps")
    subquery: ComplexityReportSchema | None = Field(None, description="Nested report for subquery steps")


class ComplexityReportSchema(BaseModel):
    """Schema for a complete complexity report."""

    model_config = ConfigDict(frozen=True)

    dominant_complexity: str = Field(..., description="Most severe class across all steps")
    steps: list[StepSchema] = Field(default_factory=list, description="Per-step estimates in plan order")


class ReportEnvelopeSchema(BaseModel):
    """Top-level JSON document."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(SCHEMA_VERSION, description="Output schema version")
    report: ComplexityReportSchema = Field(..., description="Complexity report")


StepSchema.model_rebuild()
