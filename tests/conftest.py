"""Shared fixtures for the SQLComplexity test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

import pytest

from sqlcomplexity.analyzer import ComplexityAnalyzer
from sqlcomplexity.config import Config, reset_config
from sqlcomplexity.providers import StaticExplainProvider

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "mysql"


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from SQLCOMPLEXITY_* variables and the config cache."""
    for key in (
        "SQLCOMPLEXITY_MAX_SUBQUERY_DEPTH",
        "SQLCOMPLEXITY_DETECT_CYCLES",
        "SQLCOMPLEXITY_LOG_LEVEL",
        "SQLCOMPLEXITY_CONFIG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mysql_plans() -> dict:
    """Load MySQL test fixtures."""
    with open(FIXTURES_DIR / "explain_plans.json") as f:
        return json.load(f)


@pytest.fixture
def analyzer() -> ComplexityAnalyzer:
    return ComplexityAnalyzer(config=Config())


@pytest.fixture
def empty_provider() -> StaticExplainProvider:
    """Provider that knows no queries; any subquery lookup fails."""
    return StaticExplainProvider()
