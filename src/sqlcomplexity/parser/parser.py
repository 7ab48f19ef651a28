"""
Parser for MySQL EXPLAIN output.

Supports:
- Traditional EXPLAIN format (list of rows with a 'type' column)
- EXPLAIN FORMAT=JSON (document with a 'query_block')
- JSON strings and file paths holding either of the above
- Already-parsed PlanStep objects (validated, then passed through)

Subquery rows use the 'subquery' access type and carry the embedded
query text in a 'query' column. The analyzer resolves those through an
ExplainProvider.

Error handling philosophy: a step without an access method is malformed
and rejected; we never guess a default classification for it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Mapping

from sqlcomplexity.exceptions import MalformedPlanError, ParseError
from sqlcomplexity.parser.models import PlanStep

ACCESS_METHOD_FIELD = "type"
NESTED_QUERY_FIELD = "query"

# MySQL prints NULL for steps that touch no table (e.g. "Impossible WHERE")
NULL_ACCESS_METHOD = "NULL"

# Keys in a FORMAT=JSON document that may hold table entries or query blocks
_JSON_CONTAINERS = (
    "nested_loop",
    "ordering_operation",
    "grouping_operation",
    "duplicates_removal",
    "windowing",
    "materialized_from_subquery",
    "query_specifications",
    "attached_subqueries",
    "optimized_away_subqueries",
    "select_list_subqueries",
    "having_subqueries",
    "order_by_subqueries",
    "group_by_subqueries",
)


def parse_plan(
    source: str | Path | Mapping[str, Any] | list[Any] | tuple[Any, ...],
) -> tuple[PlanStep, ...]:
    """
    Parse MySQL EXPLAIN output into an ordered tuple of PlanStep.

    Args:
        source: EXPLAIN output as rows, a FORMAT=JSON document, a JSON
            string, or a file path.

    Returns:
        The plan steps in EXPLAIN order.

    Raises:
        ParseError: If the input cannot be loaded or has an unknown layout.
        MalformedPlanError: If a step lacks its access method.

    Example:
        >>> parse_plan([{"type": "ALL", "table": "orders"}])
        >>> parse_plan('{"query_block": {"table": {...}}}')
        >>> parse_plan(Path("explain.json"))
    """
    data = load_source(source)

    if isinstance(data, Mapping):
        if "query_block" in data:
            return _parse_json(data)
        raise ParseError(
            "Unknown MySQL EXPLAIN format",
            detail=f"Expected a list of rows or a 'query_block' document, got keys {sorted(data)}",
            source="structure",
        )

    return tuple(parse_step(row) for row in data)


def parse_step(row: PlanStep | Mapping[str, Any]) -> PlanStep:
    """
    Convert one traditional EXPLAIN row into a PlanStep.

    Raises:
        MalformedPlanError: If the access method is missing or not text,
            or a subquery row has no query text.
    """
    if isinstance(row, PlanStep):
        if not isinstance(row.access_method, str):
            raise MalformedPlanError(
                "Plan step access method must be a string, "
                f"got {type(row.access_method).__name__}",
                field=ACCESS_METHOD_FIELD,
                step=row,
            )
        _check_subquery(row, row)
        return row

    if not isinstance(row, Mapping):
        raise MalformedPlanError(
            f"Plan step must be a mapping, got {type(row).__name__}",
            step=row,
        )

    if ACCESS_METHOD_FIELD not in row:
        raise MalformedPlanError(
            f"Plan step is missing the '{ACCESS_METHOD_FIELD}' field",
            field=ACCESS_METHOD_FIELD,
            step=row,
        )

    access_method = row[ACCESS_METHOD_FIELD]
    if access_method is None:
        access_method = NULL_ACCESS_METHOD
    elif not isinstance(access_method, str):
        raise MalformedPlanError(
            f"Plan step '{ACCESS_METHOD_FIELD}' must be a string, "
            f"got {type(access_method).__name__}",
            field=ACCESS_METHOD_FIELD,
            step=row,
        )

    step = PlanStep(
        access_method=access_method,
        nested_query=row.get(NESTED_QUERY_FIELD),
        table=row.get("table"),
        select_type=row.get("select_type"),
        rows=_parse_int(row.get("rows")),
        raw=dict(row),
    )
    _check_subquery(step, row)
    return step


def _check_subquery(step: PlanStep, row: Any) -> None:
    """Reject subquery steps that cannot be resolved."""
    if step.is_subquery and not isinstance(step.nested_query, str):
        raise MalformedPlanError(
            f"Subquery step is missing the '{NESTED_QUERY_FIELD}' field",
            field=NESTED_QUERY_FIELD,
            step=row,
        )


def _parse_json(json_output: Mapping[str, Any]) -> tuple[PlanStep, ...]:
    """
    Parse EXPLAIN FORMAT=JSON output.

    MySQL JSON EXPLAIN has nested structure:
    - query_block: Root of the plan
    - table: Single table access
    - nested_loop: Array of joined tables
    - ordering_operation: ORDER BY handling (wraps table or nested_loop)
    - grouping_operation: GROUP BY handling
    - union_result: UNION temporary table plus one query block per branch
    - materialized_from_subquery: Derived table, under its table entry
    - attached_subqueries (and friends): Subqueries evaluated per row

    Every entry carrying an 'access_type' must become a step. A layout
    this walker does not know raises ParseError rather than dropping
    tables and under-reporting the cost.
    """
    query_block = json_output["query_block"]
    if not isinstance(query_block, Mapping):
        raise ParseError("'query_block' must be an object", source="structure")

    steps = tuple(_parse_json_table(table) for table in _iter_json_tables(query_block))

    expected = _count_access_types(query_block)
    if expected != len(steps):
        raise ParseError(
            "Unrecognized MySQL EXPLAIN FORMAT=JSON structure",
            detail=f"Found {expected} table access(es) but could only place {len(steps)} in the plan",
            source="structure",
        )
    return steps


def _iter_json_tables(block: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Yield table entries in plan order, descending through wrappers, unions and subqueries."""
    nested_block = block.get("query_block")
    if isinstance(nested_block, Mapping):
        yield from _iter_json_tables(nested_block)

    if "table" in block:
        table = block["table"]
        yield table
        # Derived tables and attached subqueries hang off the table entry
        if isinstance(table, Mapping):
            yield from _iter_json_tables(table)

    union = block.get("union_result")
    if isinstance(union, Mapping):
        if "access_type" in union:
            yield union
        yield from _iter_json_tables(union)

    for key in _JSON_CONTAINERS:
        if key not in block:
            continue
        container = block[key]
        if isinstance(container, list):
            for item in container:
                if isinstance(item, Mapping):
                    yield from _iter_json_tables(item)
        elif isinstance(container, Mapping):
            yield from _iter_json_tables(container)


def _count_access_types(data: Any) -> int:
    """Count entries with an 'access_type' anywhere in a JSON EXPLAIN document."""
    if isinstance(data, Mapping):
        own = 1 if "access_type" in data else 0
        return own + sum(_count_access_types(value) for value in data.values())
    if isinstance(data, list):
        return sum(_count_access_types(item) for item in data)
    return 0


def _parse_json_table(table_data: Mapping[str, Any]) -> PlanStep:
    """Parse a single table from JSON EXPLAIN output."""
    if "access_type" not in table_data:
        raise MalformedPlanError(
            "JSON EXPLAIN table entry is missing the 'access_type' field",
            field="access_type",
            step=table_data,
        )

    # JSON format uses different row field names
    rows = table_data.get("rows_examined_per_scan") or table_data.get("rows")

    row: dict[str, Any] = {
        ACCESS_METHOD_FIELD: table_data["access_type"],
        "table": table_data.get("table_name"),
        "rows": rows,
    }
    if NESTED_QUERY_FIELD in table_data:
        row[NESTED_QUERY_FIELD] = table_data[NESTED_QUERY_FIELD]

    return parse_step(row)


def load_source(source: Any) -> Mapping[str, Any] | list[Any] | tuple[Any, ...]:
    """
    Load source into a Python mapping or sequence.

    Handles file paths, JSON strings, and already-parsed data.
    """
    # Already parsed
    if isinstance(source, (Mapping, list, tuple)):
        return source

    # File path
    if isinstance(source, Path):
        return _load_json_file(source)

    # String - could be file path or JSON
    if isinstance(source, str):
        stripped = source.strip()
        if stripped.startswith(("{", "[")):
            return _parse_json_string(stripped)

        return _load_json_file(Path(source))

    raise ParseError(
        f"Unsupported source type: {type(source).__name__}",
        detail="Expected file path, JSON string, dict, or list",
        source="type_check",
    )


def _load_json_file(path: Path) -> Mapping[str, Any] | list[Any]:
    """Load and parse a JSON file."""
    if not path.exists():
        raise ParseError(
            f"File not found: {path}",
            source="file_read",
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(
            f"Cannot read file: {path}",
            detail=str(e),
            source="file_read",
        ) from e

    return _parse_json_string(content)


def _parse_json_string(content: str) -> Mapping[str, Any] | list[Any]:
    """Parse a JSON string."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(
            "Invalid JSON format",
            detail=f"Line {e.lineno}, column {e.colno}: {e.msg}",
            source="json_decode",
        ) from e

    if not isinstance(data, (dict, list)):
        raise ParseError(
            f"Expected JSON object or array, got {type(data).__name__}",
            source="json_decode",
        )

    return data


def _parse_int(value: Any) -> int | None:
    """Parse integer field that might be string or None."""
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None
