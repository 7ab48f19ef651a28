"""MySQL EXPLAIN parsing module."""

from sqlcomplexity.exceptions import MalformedPlanError, ParseError
from sqlcomplexity.parser.models import SUBQUERY_ACCESS_METHOD, ExecutionPlan, PlanStep
from sqlcomplexity.parser.parser import parse_plan, parse_step

__all__ = [
    "ExecutionPlan",
    "PlanStep",
    "SUBQUERY_ACCESS_METHOD",
    "parse_plan",
    "parse_step",
    "ParseError",
    "MalformedPlanError",
]
