"""MatchSpec — one plugin's targeting rule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hiermatch._matcher import InvalidSpecificationError

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class MatchSpec:
    """Required ancestor names plus an optional method-name fallback.

    required_ancestors is ordered and may contain duplicates; each entry must
    be satisfied by its own node visit during matching. An empty
    candidate_methods disables the fallback.

    Raises:
        InvalidSpecificationError: If required_ancestors is empty or holds
            anything other than non-empty strings, or if either field is a
            bare string rather than a collection of names.
    """

    required_ancestors: tuple[str, ...]
    candidate_methods: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for field_name in ("required_ancestors", "candidate_methods"):
            if isinstance(getattr(self, field_name), str):
                msg = f"{field_name} must be a collection of names, not a single string"
                raise InvalidSpecificationError(msg)
        names = tuple(self.required_ancestors)
        if not names:
            msg = "required_ancestors must not be empty"
            raise InvalidSpecificationError(msg)
        for name in names:
            if not isinstance(name, str) or not name:
                msg = f"ancestor names must be non-empty strings, got {name!r}"
                raise InvalidSpecificationError(msg)
        object.__setattr__(self, "required_ancestors", names)
        object.__setattr__(self, "candidate_methods", frozenset(self.candidate_methods))

    @classmethod
    def ancestors_only(cls, *names: str) -> MatchSpec:
        """Match types whose ancestors include every name in ``names``."""
        return cls(required_ancestors=names)

    @classmethod
    def with_method_fallback(cls, methods: Iterable[str], *names: str) -> MatchSpec:
        """Like ancestors_only, but also accept types declaring any of ``methods``."""
        return cls(required_ancestors=names, candidate_methods=methods)

    @property
    def has_fallback(self) -> bool:
        return bool(self.candidate_methods)
