"""
Data models for the analyzer module.

These models represent the output of complexity estimation. They're
designed to be:
- Immutable (frozen=True): results don't change after creation
- Serializable: Easy JSON output for --json flag
- Ordered: ComplexityClass compares by severity, not by label text
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class ComplexityClass(str, Enum):
    """
    Asymptotic bound for one plan step or a whole plan.

    Ordered by severity: O(1) < O(log n) < O(n) < O(n log n) < O(n^2) < Unknown.
    UNKNOWN means at least one step could not be classified, so it
    dominates everything else.

    O(n log n) and O(n^2) are produced by no access method today; they
    only exist in the ordering.
    """

    CONSTANT = "O(1)"
    LOGARITHMIC = "O(log n)"
    LINEAR = "O(n)"
    LINEARITHMIC = "O(n log n)"
    QUADRATIC = "O(n^2)"
    UNKNOWN = "Unknown"

    @property
    def severity(self) -> int:
        """Position in SEVERITY_ORDER (0 = least severe)."""
        return SEVERITY_ORDER.index(self)

    # str defines all four comparisons, so each one is overridden here
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.severity >= other.severity

    def __str__(self) -> str:
        return self.value


SEVERITY_ORDER: tuple[ComplexityClass, ...] = (
    ComplexityClass.CONSTANT,
    ComplexityClass.LOGARITHMIC,
    ComplexityClass.LINEAR,
    ComplexityClass.LINEARITHMIC,
    ComplexityClass.QUADRATIC,
    ComplexityClass.UNKNOWN,
)


def dominant_class(classes: Iterable[ComplexityClass]) -> ComplexityClass:
    """
    Reduce complexity classes to the most severe one.

    Order-independent. An empty input yields O(1), the identity of the
    reduction.
    """
    return max(classes, key=lambda c: c.severity, default=ComplexityClass.CONSTANT)


class StepEstimate(BaseModel):
    """
    Classification of one top-level plan step.

    For a subquery step, ``complexity`` is the nested plan's dominant
    class, ``token`` is the full nested report and ``subquery`` holds the
    nested result. ``description`` is None for unrecognized access methods.
    """

    model_config = ConfigDict(frozen=True)

    access_method: str = Field(..., description="Access method tag from the plan")
    complexity: ComplexityClass = Field(..., description="Class contributed to the reduction")
    description: str | None = Field(
        default=None,
        description="Human-readable access strategy, None when unrecognized",
    )
    token: str = Field(..., description="Text shown on the report's Complexity line")
    table: str | None = Field(default=None, description="Table accessed, if known")
    nested_query: str | None = Field(default=None, description="Subquery text")
    subquery: AnalysisResult | None = Field(
        default=None,
        description="Nested result for subquery steps",
    )


class AnalysisResult(BaseModel):
    """
    Complete result of estimating a plan's complexity.

    Created fresh per call and never mutated. ``dominant_class`` is
    always the most severe class among ``steps``.
    """

    model_config = ConfigDict(frozen=True)

    steps: tuple[StepEstimate, ...] = Field(
        default_factory=tuple,
        description="Per-step estimates in plan order",
    )

    dominant_class: ComplexityClass = Field(
        default=ComplexityClass.CONSTANT,
        description="Most severe class across all steps",
    )

    @classmethod
    def from_steps(cls, steps: Iterable[StepEstimate]) -> "AnalysisResult":
        """Build a result, reducing the step classes to the dominant one."""
        steps = tuple(steps)
        return cls(
            steps=steps,
            dominant_class=dominant_class(step.complexity for step in steps),
        )

    @property
    def classes(self) -> list[ComplexityClass]:
        """Per-step complexity classes."""
        return [step.complexity for step in self.steps]

    @property
    def descriptions(self) -> list[str]:
        """Per-step descriptions, skipping unrecognized steps."""
        return [step.description for step in self.steps if step.description is not None]

    @property
    def tokens(self) -> list[str]:
        """Per-step tokens for the Complexity line."""
        return [step.token for step in self.steps]

    @property
    def has_unknown(self) -> bool:
        """Check if any step could not be classified."""
        return self.dominant_class == ComplexityClass.UNKNOWN

    @property
    def report(self) -> str:
        """Canonical text report."""
        from sqlcomplexity.output.renderers import render_text

        return render_text(self)


StepEstimate.model_rebuild()
AnalysisResult.model_rebuild()
