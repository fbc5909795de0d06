"""HierarchyMatcher — decides whether a type satisfies a MatchSpec.

Evaluation semantics:
- Direct interfaces are visited depth-first in declaration order, then the
  superclass chain
- Each visited node consumes at most one matching entry of the checklist
- A branch stops as soon as the checklist is empty
- The root sentinel is visited but never expanded
- If entries remain, the starting type's own declared methods are checked
  against the spec's candidate methods (when the spec has any)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hiermatch._types import ROOT_TYPE_NAME, direct_ancestors

if TYPE_CHECKING:
    from collections.abc import Iterator

    from hiermatch._spec import MatchSpec
    from hiermatch._types import TypeDescriptor


class MatcherError(Exception):
    """Errors from matcher, predicate and registry validation."""


class InvalidSpecificationError(MatcherError):
    """A match specification has no required ancestors or a malformed name."""


@dataclass(frozen=True, slots=True)
class HierarchyMatcher:
    """Matches type descriptors against MatchSpecs.

    Holds no state besides the root sentinel name, so one instance can be
    shared by any number of threads.
    """

    root: str = ROOT_TYPE_NAME

    def is_match(self, type_: TypeDescriptor, spec: MatchSpec) -> bool:
        """Return True if ``type_`` satisfies ``spec``.

        Raises:
            TypeError: If ``type_`` is None.
        """
        if type_ is None:
            msg = "type descriptor must not be None"
            raise TypeError(msg)

        if not self.remaining(type_, spec.required_ancestors):
            return True
        if spec.candidate_methods:
            return not spec.candidate_methods.isdisjoint(type_.declared_methods)
        return False

    def remaining(
        self, type_: TypeDescriptor, checklist: tuple[str, ...]
    ) -> tuple[str, ...]:
        """Walk the ancestors of ``type_`` and return the unconsumed names.

        The starting type's own name is never consumed.
        """
        for ancestor in direct_ancestors(type_, self.root):
            if not checklist:
                break
            checklist = self._visit(ancestor, checklist)
        return checklist

    def _visit(
        self, node: TypeDescriptor, checklist: tuple[str, ...]
    ) -> tuple[str, ...]:
        checklist = _consume(checklist, node.name)
        for ancestor in direct_ancestors(node, self.root):
            if not checklist:
                break
            checklist = self._visit(ancestor, checklist)
        return checklist


def _consume(checklist: tuple[str, ...], name: str) -> tuple[str, ...]:
    """Drop the first occurrence of ``name``, if any."""
    try:
        i = checklist.index(name)
    except ValueError:
        return checklist
    return checklist[:i] + checklist[i + 1 :]


_DEFAULT = HierarchyMatcher()


def is_match(type_: TypeDescriptor, spec: MatchSpec) -> bool:
    """Match with the default ``java.lang.Object`` root sentinel."""
    return _DEFAULT.is_match(type_, spec)


def iter_ancestors(
    type_: TypeDescriptor, root: str = ROOT_TYPE_NAME
) -> Iterator[TypeDescriptor]:
    """Yield every distinct ancestor of ``type_``, depth-first.

    Ancestors are told apart by name, so adapters may build a fresh wrapper
    on every ``interfaces``/``superclass`` access. A name reachable along
    several paths is yielded once. The starting type itself is not yielded.
    """
    seen: set[str] = set()
    stack = list(reversed(tuple(direct_ancestors(type_, root))))
    while stack:
        node = stack.pop()
        if node.name in seen:
            continue
        seen.add(node.name)
        yield node
        stack.extend(reversed(tuple(direct_ancestors(node, root))))


def ancestor_names(type_: TypeDescriptor, root: str = ROOT_TYPE_NAME) -> frozenset[str]:
    """Return the ancestor closure of ``type_`` as a set of names."""
    return frozenset(node.name for node in iter_ancestors(type_, root))
