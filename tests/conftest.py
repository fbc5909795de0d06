"""Conformance fixture loader for hiermatch.

Loads YAML fixtures from tests/fixtures/ and converts them to hiermatch
types for parametrized testing. Each document declares a type graph and a
list of cases naming a target type, a match spec and the expected results.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from hiermatch import MatchSpec, parse_match_spec
from hiermatch.testing import TypeNode, build_graph

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    target: TypeNode
    spec: MatchSpec
    expect: bool
    expect_predicate: bool | None

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── Host adapters ──────────────────────────────────────────────────────────


class FreshWrapper:
    """Adapter that builds a new wrapper object on every ancestor access.

    Mirrors a host that wraps its own type objects lazily: no wrapper is
    kept alive after the caller drops it, so object ids get reused.
    """

    def __init__(self, node: TypeNode) -> None:
        self._node = node

    @property
    def name(self) -> str:
        return self._node.name

    @property
    def interfaces(self) -> tuple[FreshWrapper, ...]:
        return tuple(FreshWrapper(i) for i in self._node.interfaces)

    @property
    def superclass(self) -> FreshWrapper | None:
        sc = self._node.superclass
        return FreshWrapper(sc) if sc is not None else None

    @property
    def declared_methods(self) -> frozenset[str]:
        return self._node.declared_methods

    @property
    def is_interface(self) -> bool:
        return self._node.is_interface


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_match_fixtures() -> list[FixtureCase]:
    """Load all match fixtures (files starting with a two-digit prefix)."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("[0-9][0-9]_*.yaml")):
        cases.extend(_load_match_file(yaml_file))
    return cases


def _load_match_file(path: Path) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            graph = build_graph(doc["types"])
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        target=graph[case["target"]],
                        spec=parse_match_spec(case["spec"]),
                        expect=case["expect"],
                        expect_predicate=case.get("expect_predicate"),
                    )
                )
    return cases


def load_config_fixtures() -> list[dict[str, Any]]:
    """Load registry config fixtures (config_*.yaml) as raw documents."""
    fixtures: list[dict[str, Any]] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("config_*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                doc["_source"] = yaml_file.name
                fixtures.append(doc)
    return fixtures
