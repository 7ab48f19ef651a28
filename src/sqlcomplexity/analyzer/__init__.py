"""
Complexity estimation for execution plans.

Usage:
    from sqlcomplexity.analyzer import ComplexityAnalyzer

    result = ComplexityAnalyzer().estimate_complexity(plan, provider)
    print(result.report)
"""

from sqlcomplexity.analyzer.analyzer import ComplexityAnalyzer, estimate_complexity
from sqlcomplexity.analyzer.classification import ACCESS_METHOD_RULES, AccessMethodRule, classify
from sqlcomplexity.analyzer.models import (
    SEVERITY_ORDER,
    AnalysisResult,
    ComplexityClass,
    StepEstimate,
    dominant_class,
)

__all__ = [
    "ComplexityAnalyzer",
    "estimate_complexity",
    "AccessMethodRule",
    "ACCESS_METHOD_RULES",
    "classify",
    "AnalysisResult",
    "ComplexityClass",
    "SEVERITY_ORDER",
    "StepEstimate",
    "dominant_class",
]
