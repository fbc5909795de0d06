"""Core protocols and type aliases for hiermatch.

- TypeDescriptor is the read-only view of one node in an ancestor graph,
  supplied by whatever reflection or bytecode layer the host uses
- DataInput extracts a value from a TypeDescriptor
- InputMatcher matches that value, independent of where it came from
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence, Set

# Upward traversal never expands past a node with this name.
ROOT_TYPE_NAME = "java.lang.Object"

# None means "data not available" and makes a SinglePredicate evaluate False.
MatchingData = str | int | bool | bytes | None


@runtime_checkable
class TypeDescriptor(Protocol):
    """Read-only description of a single type.

    Only direct relationships are exposed: the interfaces the type itself
    declares (in declaration order), its superclass link, and the method
    names it declares. Anything inherited is reached by walking the graph.
    """

    @property
    def name(self) -> str: ...

    @property
    def interfaces(self) -> Sequence[TypeDescriptor]: ...

    @property
    def superclass(self) -> TypeDescriptor | None: ...

    @property
    def declared_methods(self) -> Set[str]: ...

    @property
    def is_interface(self) -> bool: ...


@runtime_checkable
class DataInput(Protocol):
    """Extract a value from a type descriptor."""

    def get(self, ctx: TypeDescriptor, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against an extracted value."""

    def matches(self, value: MatchingData, /) -> bool: ...


@dataclass(frozen=True, slots=True)
class NameInput:
    """Extracts the type's own fully-qualified name."""

    def get(self, ctx: TypeDescriptor, /) -> MatchingData:
        return ctx.name


def direct_ancestors(
    node: TypeDescriptor, root: str = ROOT_TYPE_NAME
) -> Iterator[TypeDescriptor]:
    """Yield the nodes one step up from ``node``.

    Interfaces come first in declaration order, then the superclass. The
    root sentinel has no expandable ancestors.
    """
    if node.name == root:
        return
    yield from node.interfaces
    if node.superclass is not None:
        yield node.superclass
