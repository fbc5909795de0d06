"""Test utilities for hiermatch.

Provides an in-memory TypeDescriptor and a builder for whole type graphs
declared as dicts. These are NOT reflection adapters: they exist to reduce
boilerplate in tests and examples.

For real hosts, adapt your reflection or bytecode layer to TypeDescriptor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hiermatch._types import ROOT_TYPE_NAME


@dataclass(frozen=True, slots=True)
class TypeNode:
    """Simplest possible TypeDescriptor.

    >>> from hiermatch import MatchSpec, is_match
    >>> from hiermatch.testing import TypeNode, interface
    >>> is_match(TypeNode("Foo", interfaces=(interface("X"),)), MatchSpec.ancestors_only("X"))
    True
    """

    name: str
    interfaces: tuple[TypeNode, ...] = ()
    superclass: TypeNode | None = None
    declared_methods: frozenset[str] = field(default_factory=frozenset)
    is_interface: bool = False


OBJECT = TypeNode(ROOT_TYPE_NAME)


def interface(name: str, *extends: TypeNode, methods: tuple[str, ...] = ()) -> TypeNode:
    """An interface extending ``extends`` (interfaces have no superclass)."""
    return TypeNode(
        name,
        interfaces=extends,
        declared_methods=frozenset(methods),
        is_interface=True,
    )


def klass(
    name: str,
    superclass: TypeNode | None = OBJECT,
    interfaces: tuple[TypeNode, ...] = (),
    methods: tuple[str, ...] = (),
) -> TypeNode:
    """A concrete class. Defaults to extending ``java.lang.Object``."""
    return TypeNode(
        name,
        interfaces=interfaces,
        superclass=superclass,
        declared_methods=frozenset(methods),
    )


def build_graph(types: dict[str, dict[str, Any]]) -> dict[str, TypeNode]:
    """Build TypeNodes from dict declarations, keyed by name.

    Each entry may carry ``kind`` (``class`` or ``interface``), ``extends``
    (superclass name for classes, list of names for interfaces),
    ``implements`` (list of names) and ``methods``. Classes without
    ``extends`` get ``java.lang.Object`` as superclass (``extends: null``
    means none). Names that are referenced but not declared become empty
    interfaces, or empty classes when used as a superclass. A name
    referenced from several places resolves to the same node.

    Raises:
        ValueError: If the declarations reference each other cyclically.
    """
    built: dict[str, TypeNode] = {}
    resolving: set[str] = set()

    def resolve(name: str, kind: str = "interface") -> TypeNode:
        if name in built:
            return built[name]
        if name in resolving:
            msg = f"cyclic type declaration involving {name!r}"
            raise ValueError(msg)
        resolving.add(name)
        decl = types.get(name)
        if decl is None:
            if name == ROOT_TYPE_NAME:
                node = OBJECT
            elif kind == "class":
                node = klass(name)
            else:
                node = interface(name)
        else:
            node = _build_node(name, decl, resolve)
        resolving.discard(name)
        built[name] = node
        return node

    for name in types:
        resolve(name)
    return built


def _name_list(decl: dict[str, Any], key: str, name: str) -> list[str]:
    value = decl.get(key, [])
    if not isinstance(value, list):
        msg = f"{key!r} of type {name!r} must be a list, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _build_node(name: str, decl: dict[str, Any], resolve: Any) -> TypeNode:
    kind = decl.get("kind", "class")
    methods = tuple(_name_list(decl, "methods", name))
    if kind == "interface":
        extends = _name_list(decl, "extends", name)
        return interface(name, *(resolve(n) for n in extends), methods=methods)
    if kind != "class":
        msg = f"unknown kind {kind!r} for type {name!r}"
        raise ValueError(msg)

    default_parent = None if name == ROOT_TYPE_NAME else ROOT_TYPE_NAME
    parent = decl.get("extends", default_parent)
    if parent is not None and not isinstance(parent, str):
        msg = f"class {name!r} extends a single class name, got {type(parent).__name__}"
        raise ValueError(msg)
    superclass = None if parent is None else resolve(parent, "class")
    return klass(
        name,
        superclass=superclass,
        interfaces=tuple(resolve(n) for n in _name_list(decl, "implements", name)),
        methods=methods,
    )
