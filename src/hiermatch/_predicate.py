"""Predicate composition — Boolean logic over type descriptors.

Leaves:
- HasAncestor checks the ancestor closure for a name
- IsConcreteClass rejects interfaces
- SinglePredicate combines a DataInput (extract) with an InputMatcher (match)

And, Or, Not compose predicates with short-circuit evaluation. The
Predicate union type is pattern-matchable via match/case.

build_predicate() turns a MatchSpec into a cheap structural pre-filter. It
is necessary but not sufficient: it never consults the method fallback, and
each HasAncestor leaf is an independent existence check, so duplicate names
and diamond shapes do not behave as they do in HierarchyMatcher.is_match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hiermatch._matcher import InvalidSpecificationError, iter_ancestors
from hiermatch._types import ROOT_TYPE_NAME

if TYPE_CHECKING:
    from hiermatch._spec import MatchSpec
    from hiermatch._types import DataInput, InputMatcher, TypeDescriptor


@dataclass(frozen=True, slots=True)
class HasAncestor:
    """True when some ancestor of the type is named ``name``.

    The type's own name does not count. The root sentinel is reachable but
    never expanded.
    """

    name: str
    root: str = ROOT_TYPE_NAME

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        return any(node.name == self.name for node in iter_ancestors(ctx, self.root))


@dataclass(frozen=True, slots=True)
class IsConcreteClass:
    """True when the type itself is not an interface."""

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        return not ctx.is_interface


@dataclass(frozen=True, slots=True)
class SinglePredicate:
    """A single predicate: extract data, then match.

    If the DataInput returns None the predicate is False and the matcher is
    never consulted.
    """

    input: DataInput
    matcher: InputMatcher

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        value = self.input.get(ctx)
        if value is None:
            return False
        return self.matcher.matches(value)


@dataclass(frozen=True, slots=True)
class And:
    """All predicates must match. Empty And is True."""

    predicates: tuple[Predicate, ...]

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        return all(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or:
    """Any predicate must match. Empty Or is False."""

    predicates: tuple[Predicate, ...]

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        return any(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Not:
    """Inverts the inner predicate."""

    predicate: Predicate

    def evaluate(self, ctx: TypeDescriptor) -> bool:
        return not self.predicate.evaluate(ctx)


type Predicate = HasAncestor | IsConcreteClass | SinglePredicate | And | Or | Not


def build_predicate(spec: MatchSpec, root: str = ROOT_TYPE_NAME) -> And:
    """Build the structural pre-filter for ``spec``.

    One HasAncestor leaf per required name (duplicates kept), ANDed with
    IsConcreteClass.

    Raises:
        InvalidSpecificationError: If the spec has no required ancestors.
    """
    names = tuple(spec.required_ancestors)
    if not names:
        msg = "cannot build a predicate without required ancestors"
        raise InvalidSpecificationError(msg)
    leaves: list[Predicate] = [HasAncestor(name, root) for name in names]
    leaves.append(IsConcreteClass())
    return And(tuple(leaves))


def and_predicate(predicates: list[Predicate], catch_all: Predicate) -> Predicate:
    """Compose predicates with AND semantics.

    - Empty -> catch_all
    - Single -> unwrapped
    - Multiple -> And(predicates)
    """
    if not predicates:
        return catch_all
    if len(predicates) == 1:
        return predicates[0]
    return And(tuple(predicates))


def or_predicate(predicates: list[Predicate], catch_all: Predicate) -> Predicate:
    """Compose predicates with OR semantics. Symmetric with and_predicate."""
    if not predicates:
        return catch_all
    if len(predicates) == 1:
        return predicates[0]
    return Or(tuple(predicates))


def predicate_depth(p: Predicate) -> int:
    """Calculate the nesting depth of a predicate tree."""
    match p:
        case HasAncestor() | IsConcreteClass() | SinglePredicate():
            return 1
        case And(predicates=ps) | Or(predicates=ps):
            return 1 + max((predicate_depth(sub) for sub in ps), default=0)
        case Not(predicate=inner):
            return 1 + predicate_depth(inner)
        case _:  # pragma: no cover
            return 0


def describe_predicate(p: Predicate) -> str:
    """Render a predicate tree as compact text, e.g. for log lines.

    >>> describe_predicate(And((HasAncestor("a.B"), IsConcreteClass())))
    "and(has_ancestor('a.B'), concrete)"
    """
    match p:
        case HasAncestor(name=name):
            return f"has_ancestor({name!r})"
        case IsConcreteClass():
            return "concrete"
        case SinglePredicate(input=input_, matcher=matcher):
            return f"{input_!r} ~ {matcher!r}"
        case And(predicates=ps):
            return f"and({', '.join(describe_predicate(sub) for sub in ps)})"
        case Or(predicates=ps):
            return f"or({', '.join(describe_predicate(sub) for sub in ps)})"
        case Not(predicate=inner):
            return f"not({describe_predicate(inner)})"
        case _:  # pragma: no cover
            return repr(p)