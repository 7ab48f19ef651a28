"""SQLComplexity - Asymptotic complexity estimates from SQL execution plans."""

__version__ = "0.1.0"
__license__ = "MIT"

# Exception hierarchy (import first so other modules can use it)
from sqlcomplexity.exceptions import (
    SQLComplexityError,
    AnalyzerError,
    MalformedPlanError,
    RecursionLimitError,
    ConfigurationError,
    ParseError,
    ProviderError,
)

# Public API exports
from sqlcomplexity.analyzer import (
    AnalysisResult,
    ComplexityAnalyzer,
    ComplexityClass,
    StepEstimate,
    dominant_class,
    estimate_complexity,
)
from sqlcomplexity.config import (
    Config,
    get_config,
)
from sqlcomplexity.output import OutputFormat, render
from sqlcomplexity.parser import ExecutionPlan, PlanStep, parse_plan
from sqlcomplexity.providers import (
    DatabaseExplainProvider,
    ExplainProvider,
    StaticExplainProvider,
)

__all__ = [
    # Exception hierarchy
    "SQLComplexityError",
    "AnalyzerError",
    "MalformedPlanError",
    "RecursionLimitError",
    "ConfigurationError",
    "ParseError",
    "ProviderError",
    # Core
    "ComplexityAnalyzer",
    "estimate_complexity",
    "parse_plan",
    # Models
    "AnalysisResult",
    "ComplexityClass",
    "ExecutionPlan",
    "PlanStep",
    "StepEstimate",
    "dominant_class",
    # Providers
    "ExplainProvider",
    "DatabaseExplainProvider",
    "StaticExplainProvider",
    # Output
    "OutputFormat",
    "render",
    # Configuration
    "Config",
    "get_config",
    # Metadata
    "__version__",
    "__license__",
]
