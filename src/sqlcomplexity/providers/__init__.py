"""
EXPLAIN providers.

The analyzer calls a provider to fetch plans for subquery steps:
- StaticExplainProvider: in-memory {query: plan} mapping
- DatabaseExplainProvider: live database via SQLAlchemy
"""

from sqlcomplexity.providers.base import ExplainProvider, RawPlan
from sqlcomplexity.providers.database import DatabaseExplainProvider
from sqlcomplexity.providers.static import StaticExplainProvider

__all__ = [
    "ExplainProvider",
    "RawPlan",
    "DatabaseExplainProvider",
    "StaticExplainProvider",
]
