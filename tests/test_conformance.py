"""Conformance tests driven by the YAML fixtures in tests/fixtures/.

Match fixtures pin is_match and the structural predicate side by side;
config fixtures run plugin declarations through parse → load → select.

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

from typing import Any

import pytest
from conftest import FixtureCase, load_config_fixtures, load_match_fixtures

from hiermatch import (
    ConfigParseError,
    MatcherError,
    RegistryBuilder,
    build_predicate,
    describe_predicate,
    is_match,
    parse_registry_config,
)
from hiermatch.testing import build_graph

_match_cases = load_match_fixtures()


@pytest.mark.parametrize("case", _match_cases, ids=[c.id for c in _match_cases])
def test_is_match(case: FixtureCase) -> None:
    actual = is_match(case.target, case.spec)
    assert actual is case.expect, (
        f"{case.id}: expected is_match={case.expect}, got {actual} "
        f"for {case.spec.required_ancestors!r} on {case.target.name}"
    )


_predicate_cases = [c for c in _match_cases if c.expect_predicate is not None]


@pytest.mark.parametrize("case", _predicate_cases, ids=[c.id for c in _predicate_cases])
def test_predicate(case: FixtureCase) -> None:
    predicate = build_predicate(case.spec)
    actual = predicate.evaluate(case.target)
    assert actual is case.expect_predicate, (
        f"{case.id}: expected {describe_predicate(predicate)} = "
        f"{case.expect_predicate}, got {actual}"
    )


def test_fixtures_found() -> None:
    assert len(_match_cases) >= 20


# ─── Registry config fixtures ───────────────────────────────────────────────


def _fixture_id(fixture: dict[str, Any]) -> str:
    return f"{fixture.get('_source', 'unknown')}::{fixture.get('name', 'unnamed')}"


_all_fixtures = load_config_fixtures()
_positive_fixtures = [f for f in _all_fixtures if not f.get("expect_error", False)]
_error_fixtures = [f for f in _all_fixtures if f.get("expect_error", False)]


@pytest.mark.parametrize(
    "fixture", _positive_fixtures, ids=[_fixture_id(f) for f in _positive_fixtures]
)
def test_config_positive(fixture: dict[str, Any]) -> None:
    """Positive config fixture: parse, load and select must succeed."""
    registry = RegistryBuilder().load(parse_registry_config(fixture["config"])).build()
    graph = build_graph(fixture["types"])

    for case in fixture["cases"]:
        actual = registry.select(graph[case["target"]])
        assert actual == case["expect"], (
            f"Fixture '{fixture['name']}' case '{case['name']}': "
            f"expected {case['expect']!r}, got {actual!r}"
        )


@pytest.mark.parametrize(
    "fixture", _error_fixtures, ids=[_fixture_id(f) for f in _error_fixtures]
)
def test_config_error(fixture: dict[str, Any]) -> None:
    """Error config fixture: parse, load or build must fail."""
    with pytest.raises((ConfigParseError, MatcherError)):
        RegistryBuilder().load(parse_registry_config(fixture["config"])).build()
