"""
Tests for report rendering.

The text report layout is consumed verbatim by other tools, so these
tests compare whole strings.
"""

from __future__ import annotations

import json

import pytest

from sqlcomplexity.analyzer import AnalysisResult, ComplexityClass, StepEstimate
from sqlcomplexity.output import OutputFormat, render, render_json, render_text
from sqlcomplexity.output.schema import SCHEMA_VERSION
from sqlcomplexity.providers import StaticExplainProvider


def _step(access_method: str, cls: ComplexityClass, description: str | None) -> StepEstimate:
    return StepEstimate(
        access_method=access_method,
        complexity=cls,
        description=description,
        token=cls.value,
    )


class TestRenderText:
    """Tests for the canonical text report."""

    def test_single_step(self) -> None:
        result = AnalysisResult.from_steps([
            _step("range", ComplexityClass.LOGARITHMIC, "O(log n) Range Scan"),
        ])

        assert render_text(result) == (
            "Estimated Complexity. \n"
            "Description:\tO(log n) Range Scan.\n"
            "Complexity:\tO(log n)\n"
            "Dominant Complexity: O(log n)\n"
        )

    def test_steps_joined_with_plus(self) -> None:
        result = AnalysisResult.from_steps([
            _step("index", ComplexityClass.LOGARITHMIC, "O(log n) Index Scan"),
            _step("eq_ref", ComplexityClass.CONSTANT, "O(1) Index Lookup"),
            _step("ALL", ComplexityClass.LINEAR, "O(n) Full Table Scan"),
        ])

        lines = render_text(result).split("\n")
        assert lines[1] == (
            "Description:\tO(log n) Index Scan + O(1) Index Lookup + O(n) Full Table Scan."
        )
        assert lines[2] == "Complexity:\tO(log n) + O(1) + O(n)"
        assert lines[3] == "Dominant Complexity: O(n)"

    def test_unknown_step_has_token_only(self) -> None:
        result = AnalysisResult.from_steps([
            _step("ref", ComplexityClass.CONSTANT, "O(1) Index Lookup"),
            _step("weird_tag", ComplexityClass.UNKNOWN, None),
        ])

        assert render_text(result) == (
            "Estimated Complexity. \n"
            "Description:\tO(1) Index Lookup.\n"
            "Complexity:\tO(1) + Unknown\n"
            "Dominant Complexity: Unknown\n"
        )

    def test_only_unknown(self) -> None:
        result = AnalysisResult.from_steps([_step("weird_tag", ComplexityClass.UNKNOWN, None)])

        assert render_text(result) == (
            "Estimated Complexity. \n"
            "Description:\t.\n"
            "Complexity:\tUnknown\n"
            "Dominant Complexity: Unknown\n"
        )

    def test_empty(self) -> None:
        assert render_text(AnalysisResult.from_steps([])) == (
            "Estimated Complexity. \n"
            "Description:\t.\n"
            "Complexity:\t\n"
            "Dominant Complexity: O(1)\n"
        )

    def test_report_property_matches(self, analyzer, empty_provider) -> None:
        result = analyzer.estimate_complexity([{"type": "const"}], empty_provider)

        assert result.report == render_text(result)
        assert render(result) == render_text(result)


class TestRenderJson:
    """Tests for the JSON report."""

    @pytest.fixture
    def subquery_result(self, analyzer) -> AnalysisResult:
        provider = StaticExplainProvider({"SELECT 1 FROM t": [{"type": "ALL", "table": "t"}]})
        return analyzer.estimate_complexity(
            [
                {"type": "const", "table": "settings"},
                {"type": "subquery", "query": "SELECT 1 FROM t"},
                {"type": "weird_tag"},
            ],
            provider,
        )

    def test_envelope(self, subquery_result) -> None:
        data = json.loads(render_json(subquery_result))

        assert data["version"] == SCHEMA_VERSION
        assert data["report"]["dominant_complexity"] == "Unknown"
        assert len(data["report"]["steps"]) == 3

    def test_plain_step(self, subquery_result) -> None:
        step = json.loads(render_json(subquery_result))["report"]["steps"][0]

        assert step == {
            "access_method": "const",
            "complexity": "O(1)",
            "description": "O(1) Constant Lookup",
            "table": "settings",
            "nested_query": None,
            "subquery": None,
        }

    def test_subquery_step_nests_report(self, subquery_result) -> None:
        step = json.loads(render_json(subquery_result))["report"]["steps"][1]

        assert step["description"] == "Subquery"
        assert step["complexity"] == "O(n)"
        assert step["nested_query"] == "SELECT 1 FROM t"
        assert step["subquery"]["dominant_complexity"] == "O(n)"
        assert step["subquery"]["steps"][0]["description"] == "O(n) Full Table Scan"

    def test_unknown_step_has_null_description(self, subquery_result) -> None:
        step = json.loads(render_json(subquery_result))["report"]["steps"][2]

        assert step["complexity"] == "Unknown"
        assert step["description"] is None

    def test_compact(self, subquery_result) -> None:
        assert "\n" not in render_json(subquery_result, indent=None)

    def test_render_dispatch(self, subquery_result) -> None:
        assert render(subquery_result, OutputFormat.JSON) == render_json(subquery_result)
