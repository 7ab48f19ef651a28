"""
Tests for ExplainProvider implementations.

The database provider is exercised against in-memory SQLite. SQLite's
own EXPLAIN output has no MySQL-style access types, so most tests
override build_statement() to read canned plan rows from a table.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.sql.elements import TextClause

from sqlcomplexity.analyzer import ComplexityAnalyzer, ComplexityClass
from sqlcomplexity.exceptions import MalformedPlanError, ParseError, ProviderError
from sqlcomplexity.providers import DatabaseExplainProvider, ExplainProvider, StaticExplainProvider

OUTER_QUERY = "SELECT * FROM customers WHERE id IN (SELECT customer_id FROM orders)"
INNER_QUERY = "SELECT customer_id FROM orders"


class CannedPlanProvider(DatabaseExplainProvider):
    """Reads plan rows from the explain_rows table instead of running EXPLAIN."""

    def build_statement(self, query: str) -> TextClause:
        return text(
            'SELECT type, query, tbl AS "table" FROM explain_rows '
            "WHERE for_query = :q ORDER BY id"
        ).bindparams(q=query)


@pytest.fixture
def sqlite_provider() -> Iterator[CannedPlanProvider]:
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE explain_rows ("
            "id INTEGER PRIMARY KEY, for_query TEXT, type TEXT, query TEXT, tbl TEXT)"
        ))
        conn.execute(
            text(
                "INSERT INTO explain_rows (for_query, type, query, tbl) "
                "VALUES (:for_query, :type, :query, :tbl)"
            ),
            [
                {"for_query": OUTER_QUERY, "type": "eq_ref", "query": None, "tbl": "customers"},
                {"for_query": OUTER_QUERY, "type": "subquery", "query": INNER_QUERY, "tbl": "orders"},
                {"for_query": INNER_QUERY, "type": "index", "query": None, "tbl": "orders"},
            ],
        )

    provider = CannedPlanProvider(engine)
    yield provider
    provider.dispose()


class TestStaticExplainProvider:
    """Tests for the in-memory provider."""

    def test_returns_registered_plan(self) -> None:
        plan = [{"type": "ALL"}]
        provider = StaticExplainProvider({"SELECT 1": plan})

        assert provider.get_plan("SELECT 1") is plan
        assert provider.calls == ["SELECT 1"]
        assert len(provider) == 1

    def test_unknown_query(self) -> None:
        provider = StaticExplainProvider({"SELECT 1": []})

        with pytest.raises(ProviderError) as exc_info:
            provider.get_plan("SELECT 2")

        assert exc_info.value.query == "SELECT 2"
        assert exc_info.value.to_dict()["original_error_type"] is None

    def test_is_an_explain_provider(self) -> None:
        assert isinstance(StaticExplainProvider(), ExplainProvider)

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "subqueries.json"
        path.write_text(json.dumps({INNER_QUERY: [{"type": "range"}]}))

        provider = StaticExplainProvider.from_file(path)

        assert provider.get_plan(INNER_QUERY) == [{"type": "range"}]

    def test_from_file_requires_object(self, tmp_path: Path) -> None:
        path = tmp_path / "subqueries.json"
        path.write_text(json.dumps([{"type": "range"}]))

        with pytest.raises(ParseError, match="must be a JSON object"):
            StaticExplainProvider.from_file(path)

    def test_from_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError):
            StaticExplainProvider.from_file(tmp_path / "missing.json")

    def test_cannot_instantiate_base(self) -> None:
        with pytest.raises(TypeError):
            ExplainProvider()  # type: ignore[abstract]


class TestDatabaseExplainProvider:
    """Tests for the SQLAlchemy-backed provider."""

    def test_get_plan_parses_rows(self, sqlite_provider) -> None:
        steps = sqlite_provider.get_plan(OUTER_QUERY)

        assert [s.access_method for s in steps] == ["eq_ref", "subquery"]
        assert steps[0].table == "customers"
        assert steps[1].nested_query == INNER_QUERY

    def test_end_to_end_with_subquery(self, sqlite_provider) -> None:
        analyzer = ComplexityAnalyzer(max_depth=4)

        result = analyzer.estimate_complexity(sqlite_provider.get_plan(OUTER_QUERY), sqlite_provider)

        assert result.dominant_class == ComplexityClass.LOGARITHMIC
        assert result.steps[1].subquery is not None
        assert result.steps[1].subquery.descriptions == ["O(log n) Index Scan"]

    def test_default_statement_is_explain(self) -> None:
        provider = DatabaseExplainProvider(create_engine("sqlite://"))

        assert str(provider.build_statement("SELECT 1")) == "EXPLAIN SELECT 1"
        provider.dispose()

    def test_syntax_error_is_provider_error(self) -> None:
        provider = DatabaseExplainProvider(create_engine("sqlite://"))

        with pytest.raises(ProviderError) as exc_info:
            provider.get_plan("SELEC nonsense FROM")

        assert exc_info.value.query == "SELEC nonsense FROM"
        assert exc_info.value.original_error is not None
        provider.dispose()

    def test_rows_without_access_type(self) -> None:
        """SQLite's EXPLAIN yields bytecode rows, not MySQL access types."""
        provider = DatabaseExplainProvider(create_engine("sqlite://"))

        with pytest.raises(MalformedPlanError):
            provider.get_plan("SELECT 1")
        provider.dispose()

    def test_from_url(self) -> None:
        provider = DatabaseExplainProvider.from_url("sqlite://")

        assert provider.engine.dialect.name == "sqlite"
        provider.dispose()

    def test_from_invalid_url(self) -> None:
        with pytest.raises(ProviderError, match="Could not create database engine"):
            DatabaseExplainProvider.from_url("not a url")
