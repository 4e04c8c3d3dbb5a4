"""Type matchers that scope a convention to the parts it applies to.

Matchers are pure predicates over a type. Parameterized aliases such as
``Repository[User]`` are distinct identities: they match themselves exactly,
and a class derives from one only if the alias appears among the generic
bases of the class or one of its ancestors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class TypeMatcher(Protocol):
    """Protocol for deciding whether a convention applies to a type."""

    def matches(self, candidate: Any) -> bool:
        """Return True if the convention applies to ``candidate``."""
        ...


@dataclass(frozen=True)
class ExactTypeMatcher:
    """Matches one type identity."""

    target: Any

    def matches(self, candidate: Any) -> bool:
        return candidate == self.target


@dataclass(frozen=True)
class DerivedFromMatcher:
    """Matches the target and every type deriving from or implementing it."""

    target: Any

    def matches(self, candidate: Any) -> bool:
        if candidate == self.target:
            return True
        if not isinstance(candidate, type):
            return False
        if isinstance(self.target, type):
            try:
                return issubclass(candidate, self.target)
            except TypeError:
                # Plain protocols and protocols with data members refuse
                # issubclass(); only explicit inheritance counts for them
                return self.target in candidate.__mro__
        return any(
            self.target in getattr(klass, "__orig_bases__", ()) for klass in candidate.__mro__
        )


@dataclass(frozen=True)
class PredicateMatcher:
    """Matches types accepted by an arbitrary predicate."""

    predicate: Callable[[Any], bool]

    def matches(self, candidate: Any) -> bool:
        return bool(self.predicate(candidate))
