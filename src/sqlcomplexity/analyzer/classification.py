"""
Access-method classification table.

Maps MySQL EXPLAIN access types to complexity classes. Matching is exact
and case-sensitive. The 'subquery' access type has no entry: its class
comes from resolving the nested plan.

Access type hierarchy (cheapest to most expensive):
- const: Single row (constant)
- ref / eq_ref: Index lookup per row
- range: Index range scan
- index: Full index scan
- ALL: Full table scan
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlcomplexity.analyzer.models import ComplexityClass


@dataclass(frozen=True)
class AccessMethodRule:
    """Classification for one access method tag."""

    access_method: str
    complexity: ComplexityClass
    label: str

    @property
    def description(self) -> str:
        """Step description as shown in reports, e.g. 'O(n) Full Table Scan'."""
        return f"{self.complexity.value} {self.label}"


ACCESS_METHOD_RULES: tuple[AccessMethodRule, ...] = (
    AccessMethodRule("ALL", ComplexityClass.LINEAR, "Full Table Scan"),
    AccessMethodRule("index", ComplexityClass.LOGARITHMIC, "Index Scan"),
    AccessMethodRule("range", ComplexityClass.LOGARITHMIC, "Range Scan"),
    AccessMethodRule("ref", ComplexityClass.CONSTANT, "Index Lookup"),
    AccessMethodRule("eq_ref", ComplexityClass.CONSTANT, "Index Lookup"),
    AccessMethodRule("const", ComplexityClass.CONSTANT, "Constant Lookup"),
)

_RULES_BY_METHOD: dict[str, AccessMethodRule] = {
    rule.access_method: rule for rule in ACCESS_METHOD_RULES
}


def classify(access_method: str) -> AccessMethodRule | None:
    """Look up the rule for an access method, or None if unrecognized."""
    return _RULES_BY_METHOD.get(access_method)
