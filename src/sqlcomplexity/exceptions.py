"""
Package-level exception hierarchy for SQLComplexity.

All exceptions inherit from SQLComplexityError, enabling:
- Catching all SQLComplexity errors with a single except clause
- Rich context fields for debugging (query, field, depth, etc.)
- Structured serialization via to_dict() for JSON error responses

Hierarchy:
    SQLComplexityError
    ├── AnalyzerError          – Errors during complexity estimation
    │   ├── MalformedPlanError – A plan step lacks a required field
    │   ├── RecursionLimitError – Subquery nesting too deep or cyclic
    │   └── ConfigurationError – Invalid analyzer configuration
    ├── ParseError             – Failed to read EXPLAIN input
    └── ProviderError          – An ExplainProvider could not produce a plan

An unrecognized access method is NOT an error: it is classified as
``Unknown`` and reported in the result.
"""

from __future__ import annotations

from typing import Any


class SQLComplexityError(Exception):
    """
    Base exception for all SQLComplexity errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON error responses."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
        }


# ── Analysis Errors ──────────────────────────────────────────────────────


class AnalyzerError(SQLComplexityError):
    """Errors during complexity estimation."""
    pass


class MalformedPlanError(AnalyzerError):
    """
    A plan step is missing a field the analyzer needs.

    Raised for a step without an access method, or a subquery step
    without its nested query text.

    Attributes:
        field: Name of the missing or invalid field.
        step: The offending raw step, if available.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        step: Any = None,
    ) -> None:
        self.field = field
        self.step = step
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        return result


class RecursionLimitError(AnalyzerError):
    """
    Subquery resolution exceeded the nesting bound or looped back on itself.

    Attributes:
        depth: Nesting depth at which resolution stopped.
        max_depth: The configured bound.
        query_path: Queries being resolved, outermost first.
    """

    def __init__(
        self,
        message: str,
        depth: int,
        max_depth: int,
        query_path: tuple[str, ...] = (),
    ) -> None:
        self.depth = depth
        self.max_depth = max_depth
        self.query_path = query_path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["depth"] = self.depth
        result["max_depth"] = self.max_depth
        result["query_path"] = list(self.query_path)
        return result


class ConfigurationError(AnalyzerError):
    """
    Error in analyzer configuration.

    Attributes:
        config_key: The configuration key that caused the error (if known).
    """

    def __init__(self, message: str, config_key: str | None = None) -> None:
        self.config_key = config_key
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["config_key"] = self.config_key
        return result


# ── Parse Errors ─────────────────────────────────────────────────────────


class ParseError(SQLComplexityError):
    """
    Failed to read EXPLAIN input.

    Raised when the input is not valid JSON or not a recognized
    EXPLAIN layout.

    Attributes:
        detail: Technical details for debugging (optional).
        source: Where the error occurred (e.g., "file_read", "json_decode").
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        source: str | None = None,
    ) -> None:
        self.detail = detail
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}\n\nDetails: {self.detail}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["detail"] = self.detail
        result["source"] = self.source
        return result


# ── Provider Errors ──────────────────────────────────────────────────────


class ProviderError(SQLComplexityError):
    """
    An ExplainProvider failed to produce a plan.

    Covers bad syntax, connection loss and permission errors. The
    analyzer never recovers from this; it reaches the caller unchanged.

    Attributes:
        query: The query that could not be explained.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        query: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.query = query
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["query"] = self.query
        result["original_error_type"] = (
            self.original_error.__class__.__name__ if self.original_error else None
        )
        return result
