"""Plugin registry — named MatchSpecs selected against candidate types.

- RegistryBuilder → .build() → Registry (immutable)
- Each PluginMatch pairs a MatchSpec with an optional guard predicate
- Registry.select() is authoritative: guard AND HierarchyMatcher.is_match
- Registry.prefilter() is the cheap structural pass: guard AND build_predicate

Example::

    builder = RegistryBuilder()
    builder.plugin(
        "jdk-threading-callable",
        MatchSpec.with_method_fallback(["call"], "java.util.concurrent.Callable"),
    )
    registry = builder.build()
    registry.select(descriptor)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from hiermatch._config import (
    AndPredicateConfig,
    ConcreteConfig,
    HasAncestorConfig,
    NameMatchConfig,
    NotPredicateConfig,
    OrPredicateConfig,
)
from hiermatch._matcher import HierarchyMatcher, MatcherError
from hiermatch._predicate import (
    And,
    HasAncestor,
    IsConcreteClass,
    Not,
    Or,
    SinglePredicate,
    build_predicate,
    describe_predicate,
    predicate_depth,
)
from hiermatch._string_matchers import ClassNameMatcher, PrefixMatcher, RegexMatcher
from hiermatch._types import ROOT_TYPE_NAME, NameInput

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hiermatch._config import PluginConfig, PredicateConfig
    from hiermatch._predicate import Predicate
    from hiermatch._spec import MatchSpec
    from hiermatch._types import InputMatcher, TypeDescriptor

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_DEPTH = 32
MAX_PREDICATES_PER_COMPOUND = 256
MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidConfigError(MatcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class DuplicatePluginError(MatcherError):
    """Two plugins were registered under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate plugin name: {name!r}")


class TooManyPredicatesError(MatcherError):
    """Compound predicate has too many children (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(
            f"too many predicates in compound: {count} exceeds maximum {max_}"
        )


class PatternTooLongError(MatcherError):
    """A name pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Plugin match
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PluginMatch:
    """A plugin's targeting rule.

    guard narrows the candidates before the hierarchy check, e.g. to a
    package prefix. predicate is the structural pre-filter derived from spec.
    """

    name: str
    spec: MatchSpec
    guard: Predicate | None = None
    matcher: HierarchyMatcher = field(default_factory=HierarchyMatcher)
    predicate: And = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "predicate", build_predicate(self.spec, self.matcher.root)
        )

    def matches(self, type_: TypeDescriptor) -> bool:
        """Authoritative decision, including the method fallback."""
        if self.guard is not None and not self.guard.evaluate(type_):
            return False
        return self.matcher.is_match(type_, self.spec)

    def prefilter(self, type_: TypeDescriptor) -> bool:
        """Structural pre-check. May reject types that matches() accepts."""
        if self.guard is not None and not self.guard.evaluate(type_):
            return False
        return self.predicate.evaluate(type_)


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register plugins by name, then call build() to produce an immutable
    Registry. Registration order is preserved and used by select().
    """

    def __init__(self, root: str = ROOT_TYPE_NAME) -> None:
        self._matcher = HierarchyMatcher(root)
        self._plugins: list[PluginMatch] = []

    def plugin(
        self, name: str, spec: MatchSpec, guard: Predicate | None = None
    ) -> RegistryBuilder:
        """Register a plugin's MatchSpec under ``name``."""
        self._plugins.append(
            PluginMatch(name=name, spec=spec, guard=guard, matcher=self._matcher)
        )
        return self

    def load(self, configs: Iterable[PluginConfig]) -> RegistryBuilder:
        """Register every plugin from parsed config.

        Raises:
            InvalidConfigError: guard config semantically invalid
            TooManyPredicatesError: too many compound predicate children
            PatternTooLongError: pattern exceeds length limit
            MatcherError: guard depth exceeded
        """
        for config in configs:
            guard = None
            if config.guard is not None:
                guard = load_predicate(config.guard, self._matcher.root)
            self.plugin(config.name, config.spec, guard)
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible.

        Raises:
            DuplicatePluginError: If a name was registered twice.
        """
        plugins: dict[str, PluginMatch] = {}
        for plugin in self._plugins:
            if plugin.name in plugins:
                raise DuplicatePluginError(plugin.name)
            plugins[plugin.name] = plugin
        logger.debug("built plugin registry with %d plugins", len(plugins))
        return Registry(_plugins=MappingProxyType(plugins))


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable set of named plugin matches.

    Constructed via RegistryBuilder.
    """

    _plugins: MappingProxyType[str, PluginMatch] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def select(self, type_: TypeDescriptor) -> list[str]:
        """Names of plugins whose rule accepts ``type_``, in registration order."""
        selected = [name for name, p in self._plugins.items() if p.matches(type_)]
        if selected:
            logger.debug("type %s selected by plugins %s", type_.name, selected)
        return selected

    def prefilter(self, type_: TypeDescriptor) -> list[str]:
        """Names of plugins whose structural pre-filter accepts ``type_``."""
        return [name for name, p in self._plugins.items() if p.prefilter(type_)]

    def get(self, name: str) -> PluginMatch | None:
        return self._plugins.get(name)

    def names(self) -> list[str]:
        """Registered plugin names in registration order."""
        return list(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins


# ═══════════════════════════════════════════════════════════════════════════════
# Predicate loading
# ═══════════════════════════════════════════════════════════════════════════════


def load_predicate(config: PredicateConfig, root: str = ROOT_TYPE_NAME) -> Predicate:
    """Compile a predicate config into a runtime predicate.

    Raises:
        InvalidConfigError: unknown name-match variant or invalid regex
        TooManyPredicatesError: too many compound predicate children
        PatternTooLongError: pattern exceeds length limit
        MatcherError: depth exceeded
    """
    predicate = _load(config, root)
    depth = predicate_depth(predicate)
    if depth > MAX_DEPTH:
        msg = f"predicate depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
        raise MatcherError(msg)
    logger.debug("loaded predicate %s", describe_predicate(predicate))
    return predicate


def _load(config: PredicateConfig, root: str) -> Predicate:
    match config:
        case HasAncestorConfig(name=name):
            return HasAncestor(name, root)
        case ConcreteConfig():
            return IsConcreteClass()
        case NameMatchConfig(variant=variant, values=values, ignore_case=ignore_case):
            return SinglePredicate(NameInput(), _compile_name_match(variant, values, ignore_case))
        case AndPredicateConfig(predicates=children):
            _check_width(len(children))
            return And(tuple(_load(p, root) for p in children))
        case OrPredicateConfig(predicates=children):
            _check_width(len(children))
            return Or(tuple(_load(p, root) for p in children))
        case NotPredicateConfig(predicate=inner):
            return Not(_load(inner, root))
        case _:  # pragma: no cover
            msg = f"unknown predicate config type: {type(config).__name__}"
            raise InvalidConfigError(msg)


def _check_width(count: int) -> None:
    if count > MAX_PREDICATES_PER_COMPOUND:
        raise TooManyPredicatesError(count, MAX_PREDICATES_PER_COMPOUND)


def _compile_name_match(
    variant: str, values: tuple[str, ...], ignore_case: bool
) -> InputMatcher:
    """Compile a name match variant into an InputMatcher."""
    limit = MAX_REGEX_PATTERN_LENGTH if variant == "Regex" else MAX_PATTERN_LENGTH
    for value in values:
        if len(value) > limit:
            raise PatternTooLongError(len(value), limit)

    match variant:
        case "Exact":
            return ClassNameMatcher(values, ignore_case=ignore_case)
        case "Prefix":
            return PrefixMatcher(values, ignore_case=ignore_case)
        case "Regex" if len(values) == 1:
            try:
                return RegexMatcher(values[0], ignore_case=ignore_case)
            except MatcherError as e:
                msg = f"invalid regex pattern: {e}"
                raise InvalidConfigError(msg) from e
        case "Regex":
            msg = f"Regex takes exactly one pattern, got {len(values)}"
            raise InvalidConfigError(msg)
        case _:
            msg = f"unknown name match variant: {variant!r}"
            raise InvalidConfigError(msg)
