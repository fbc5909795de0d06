"""Class-name matchers for guard predicates.

A guard narrows a plugin to part of the class name space before the
hierarchy walk runs. Agents usually configure it as a list of package
prefixes ("com.example., org.acme.") or a list of fully qualified names,
so both matchers accept several values and succeed on any of them.

Every matcher implements the InputMatcher protocol and rejects values that
are not strings. Regex uses ``google-re2``: RE2 syntax has no backreferences
or lookaround, and such patterns fail when the matcher is constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from hiermatch._matcher import MatcherError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hiermatch._types import MatchingData


def _names(values: str | Iterable[str]) -> tuple[str, ...]:
    # A lone string is one name, not a sequence of characters.
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _fold(name: str, ignore_case: bool) -> str:
    return name.casefold() if ignore_case else name


@dataclass(frozen=True, slots=True)
class ClassNameMatcher:
    """The class name equals one of ``names``."""

    names: tuple[str, ...]
    ignore_case: bool = False
    _keys: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        names = _names(self.names)
        object.__setattr__(self, "names", names)
        object.__setattr__(
            self, "_keys", frozenset(_fold(n, self.ignore_case) for n in names)
        )

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and _fold(value, self.ignore_case) in self._keys


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """The class name starts with one of ``prefixes``.

    An empty prefix list matches nothing; an empty prefix matches every name.
    """

    prefixes: tuple[str, ...]
    ignore_case: bool = False
    _keys: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        prefixes = _names(self.prefixes)
        object.__setattr__(self, "prefixes", prefixes)
        object.__setattr__(
            self, "_keys", tuple(_fold(p, self.ignore_case) for p in prefixes)
        )

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str) or not self._keys:
            return False
        return _fold(value, self.ignore_case).startswith(self._keys)


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """An RE2 pattern found anywhere in the class name.

    ``ignore_case`` is applied as an inline ``(?i)`` flag.

    Raises:
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    ignore_case: bool = False
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        source = f"(?i){self.pattern}" if self.ignore_case else self.pattern
        try:
            object.__setattr__(self, "_compiled", re2.compile(source))
        except re2.error as e:
            msg = f"invalid regex pattern {self.pattern!r}: {e}"
            raise MatcherError(msg) from e

    def matches(self, value: MatchingData, /) -> bool:
        return isinstance(value, str) and self._compiled.search(value) is not None
