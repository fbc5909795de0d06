"""hiermatch — select types by their ancestor hierarchy.

Decides whether a type descriptor satisfies a MatchSpec (required ancestor
names plus an optional method-name fallback), and builds structural
pre-filter predicates for host matching engines.

All public types are exported from this module for flat imports:

    from hiermatch import MatchSpec, HierarchyMatcher, build_predicate
"""

__version__ = "0.1.0"

# Config types — see hiermatch._config for details
from hiermatch._config import (
    AndPredicateConfig,
    ConcreteConfig,
    ConfigParseError,
    HasAncestorConfig,
    NameMatchConfig,
    NotPredicateConfig,
    OrPredicateConfig,
    PluginConfig,
    PredicateConfig,
    parse_match_spec,
    parse_plugin_config,
    parse_predicate_config,
    parse_registry_config,
)

# Matcher
from hiermatch._matcher import (
    HierarchyMatcher,
    InvalidSpecificationError,
    MatcherError,
    ancestor_names,
    is_match,
    iter_ancestors,
)

# Predicates
from hiermatch._predicate import (
    And,
    HasAncestor,
    IsConcreteClass,
    Not,
    Or,
    Predicate,
    SinglePredicate,
    and_predicate,
    build_predicate,
    describe_predicate,
    or_predicate,
    predicate_depth,
)

# Registry — see hiermatch._registry for details
from hiermatch._registry import (
    MAX_DEPTH,
    MAX_PATTERN_LENGTH,
    MAX_PREDICATES_PER_COMPOUND,
    MAX_REGEX_PATTERN_LENGTH,
    DuplicatePluginError,
    InvalidConfigError,
    PatternTooLongError,
    PluginMatch,
    Registry,
    RegistryBuilder,
    TooManyPredicatesError,
    load_predicate,
)
from hiermatch._spec import MatchSpec

# Name matchers
from hiermatch._string_matchers import ClassNameMatcher, PrefixMatcher, RegexMatcher
from hiermatch._types import (
    ROOT_TYPE_NAME,
    DataInput,
    InputMatcher,
    MatchingData,
    NameInput,
    TypeDescriptor,
    direct_ancestors,
)

__all__ = [
    # Protocols
    "TypeDescriptor",
    "DataInput",
    "InputMatcher",
    "MatchingData",
    "NameInput",
    "ROOT_TYPE_NAME",
    "direct_ancestors",
    # Spec + matcher
    "MatchSpec",
    "HierarchyMatcher",
    "is_match",
    "iter_ancestors",
    "ancestor_names",
    "MatcherError",
    "InvalidSpecificationError",
    # Predicates
    "HasAncestor",
    "IsConcreteClass",
    "SinglePredicate",
    "And",
    "Or",
    "Not",
    "Predicate",
    "build_predicate",
    "and_predicate",
    "or_predicate",
    "predicate_depth",
    "describe_predicate",
    # Name matchers
    "ClassNameMatcher",
    "PrefixMatcher",
    "RegexMatcher",
    # Config types
    "HasAncestorConfig",
    "ConcreteConfig",
    "NameMatchConfig",
    "AndPredicateConfig",
    "OrPredicateConfig",
    "NotPredicateConfig",
    "PredicateConfig",
    "PluginConfig",
    "ConfigParseError",
    "parse_match_spec",
    "parse_plugin_config",
    "parse_predicate_config",
    "parse_registry_config",
    # Registry
    "PluginMatch",
    "RegistryBuilder",
    "Registry",
    "load_predicate",
    "InvalidConfigError",
    "DuplicatePluginError",
    "TooManyPredicatesError",
    "PatternTooLongError",
    "MAX_DEPTH",
    "MAX_PREDICATES_PER_COMPOUND",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
]
