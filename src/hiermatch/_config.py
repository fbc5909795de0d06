"""Config types for plugin and predicate declarations.

Config-driven construction path:
  dict → parse_registry_config() → PluginConfig → RegistryBuilder.load() → Registry

Accepted shape (JSON or YAML)::

    plugins:
      - name: jdk-threading-callable
        ancestors: [java.util.concurrent.Callable]
        methods: [call]
        guard:
          type: name
          match: {Prefix: com.example.}

| Config type            | Runtime type      |
|------------------------|-------------------|
| PluginConfig           | PluginMatch       |
| PredicateConfig        | Predicate         |
| HasAncestorConfig      | HasAncestor       |
| ConcreteConfig         | IsConcreteClass   |
| NameMatchConfig        | SinglePredicate   |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hiermatch._spec import MatchSpec

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class HasAncestorConfig:
    """Some ancestor of the type must carry this name."""

    name: str


@dataclass(frozen=True, slots=True)
class ConcreteConfig:
    """The type must not be an interface."""


@dataclass(frozen=True, slots=True)
class NameMatchConfig:
    """Match the type's own name.

    The variant follows the serde-style format:
    { "Exact": "a.B" }, { "Prefix": ["com.example.", "org.acme."] },
    { "Regex": "Task$" }. Exact and Prefix take one name or a list; Regex
    takes a single pattern.
    """

    variant: str
    values: tuple[str, ...]
    ignore_case: bool = False


@dataclass(frozen=True, slots=True)
class AndPredicateConfig:
    """All child predicates must match (logical AND)."""

    predicates: tuple[PredicateConfig, ...]


@dataclass(frozen=True, slots=True)
class OrPredicateConfig:
    """Any child predicate must match (logical OR)."""

    predicates: tuple[PredicateConfig, ...]


@dataclass(frozen=True, slots=True)
class NotPredicateConfig:
    """Inverts the inner predicate (logical NOT)."""

    predicate: PredicateConfig


type PredicateConfig = (
    HasAncestorConfig
    | ConcreteConfig
    | NameMatchConfig
    | AndPredicateConfig
    | OrPredicateConfig
    | NotPredicateConfig
)


@dataclass(frozen=True, slots=True)
class PluginConfig:
    """One plugin: a name, its MatchSpec and an optional guard predicate."""

    name: str
    spec: MatchSpec
    guard: PredicateConfig | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_NAME_MATCH_VARIANTS = frozenset({"Exact", "Prefix", "Regex"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_registry_config(data: dict[str, Any]) -> tuple[PluginConfig, ...]:
    """Parse a top-level ``{"plugins": [...]}`` dict.

    This is the main entry point for config loading.

    Raises:
        ConfigParseError: If the dict is malformed.
        InvalidSpecificationError: If a plugin lists no ancestors.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_plugins = data.get("plugins")
    if raw_plugins is None:
        msg = "missing required field 'plugins'"
        raise ConfigParseError(msg)
    if not isinstance(raw_plugins, list):
        msg = f"'plugins' must be a list, got {type(raw_plugins).__name__}"
        raise ConfigParseError(msg)

    return tuple(parse_plugin_config(p) for p in raw_plugins)


def parse_plugin_config(data: dict[str, Any]) -> PluginConfig:
    """Parse a single plugin entry."""
    if not isinstance(data, dict):
        msg = f"plugin must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    name = data.get("name")
    if not isinstance(name, str) or not name:
        msg = "plugin requires a non-empty 'name' field (string)"
        raise ConfigParseError(msg)

    spec = parse_match_spec(data)

    guard = None
    if "guard" in data:
        guard = parse_predicate_config(data["guard"])

    return PluginConfig(name=name, spec=spec, guard=guard)


def parse_match_spec(data: dict[str, Any]) -> MatchSpec:
    """Parse ``ancestors`` (required) and ``methods`` (optional) into a MatchSpec."""
    if not isinstance(data, dict):
        msg = f"match spec must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "ancestors" not in data:
        msg = "match spec missing required field 'ancestors'"
        raise ConfigParseError(msg)
    ancestors = _parse_name_list(data["ancestors"], "ancestors")
    methods = _parse_name_list(data.get("methods", []), "methods")

    return MatchSpec(required_ancestors=ancestors, candidate_methods=frozenset(methods))


def parse_predicate_config(data: dict[str, Any]) -> PredicateConfig:
    """Parse a predicate config dict.

    Uses 'type' discriminant: has_ancestor, concrete, name, and, or, not.
    """
    if not isinstance(data, dict):
        msg = f"predicate must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    pred_type = data.get("type")
    if pred_type is None:
        msg = "predicate missing required field 'type'"
        raise ConfigParseError(msg)

    if pred_type == "has_ancestor":
        name = data.get("name")
        if not isinstance(name, str) or not name:
            msg = "has_ancestor predicate requires a non-empty 'name' field"
            raise ConfigParseError(msg)
        return HasAncestorConfig(name=name)
    if pred_type == "concrete":
        return ConcreteConfig()
    if pred_type == "name":
        return _parse_name_match(data)
    if pred_type in ("and", "or"):
        children = data.get("predicates", [])
        if not isinstance(children, list):
            msg = f"'predicates' must be a list, got {type(children).__name__}"
            raise ConfigParseError(msg)
        parsed = tuple(parse_predicate_config(p) for p in children)
        if pred_type == "and":
            return AndPredicateConfig(predicates=parsed)
        return OrPredicateConfig(predicates=parsed)
    if pred_type == "not":
        if "predicate" not in data:
            msg = "not predicate missing required field 'predicate'"
            raise ConfigParseError(msg)
        return NotPredicateConfig(predicate=parse_predicate_config(data["predicate"]))

    msg = f"unknown predicate type: {pred_type!r}"
    raise ConfigParseError(msg)


def _parse_name_match(data: dict[str, Any]) -> NameMatchConfig:
    """Parse ``{"type": "name", "match": {"Prefix": ["...", ...]}}``."""
    match_data = data.get("match")
    if not isinstance(match_data, dict):
        msg = "name predicate requires a 'match' dict"
        raise ConfigParseError(msg)

    ignore_case = data.get("ignore_case", False)
    if not isinstance(ignore_case, bool):
        msg = f"ignore_case must be a bool, got {type(ignore_case).__name__}"
        raise ConfigParseError(msg)

    present = sorted(_NAME_MATCH_VARIANTS.intersection(match_data))
    if not present:
        expected = sorted(_NAME_MATCH_VARIANTS)
        msg = f"match must contain one of {expected}, got keys: {sorted(match_data.keys())}"
        raise ConfigParseError(msg)
    if len(present) > 1:
        msg = f"match must contain exactly one variant, got {present}"
        raise ConfigParseError(msg)

    variant = present[0]
    raw = match_data[variant]
    if isinstance(raw, str):
        values: tuple[str, ...] = (raw,)
    elif variant != "Regex" and isinstance(raw, list) and raw:
        values = _parse_name_list(raw, f"match {variant}")
    else:
        expected = "a string" if variant == "Regex" else "a string or non-empty list of strings"
        msg = f"match {variant} value must be {expected}, got {type(raw).__name__}"
        raise ConfigParseError(msg)
    return NameMatchConfig(variant=variant, values=values, ignore_case=ignore_case)


def _parse_name_list(raw: Any, field_name: str) -> tuple[str, ...]:
    if not isinstance(raw, list):
        msg = f"'{field_name}' must be a list, got {type(raw).__name__}"
        raise ConfigParseError(msg)
    for item in raw:
        if not isinstance(item, str):
            msg = f"'{field_name}' entries must be strings, got {type(item).__name__}"
            raise ConfigParseError(msg)
    return tuple(raw)
