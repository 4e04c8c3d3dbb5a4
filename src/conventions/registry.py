"""Registration of export conventions.

A `ConventionBuilder` is an ordered, append-only list of conventions. Each
``for_*`` call returns a `PartConventionBuilder` bound to a type matcher;
calling ``export`` on it registers one convention:

    conventions = ConventionBuilder()
    conventions.for_type(FooImpl).export_as(IFoo)
    conventions.for_types_derived_from(IFoo).export(
        lambda e: e.as_contract_name("hey").as_contract_type(IFoo)
    )
    conventions.for_types_matching(lambda t: t.__name__.endswith("Handler")).export()

Nothing is validated at registration time. Configure functions run lazily when
a `SynthesisEngine` is asked for a type's markers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .builder import ExportConventionBuilder
from .matchers import DerivedFromMatcher, ExactTypeMatcher, PredicateMatcher, TypeMatcher

if TYPE_CHECKING:
    from collections.abc import Callable

    from .descriptors import Marker
    from .introspection import Member

    ConfigureExport = Callable[[ExportConventionBuilder], Any]
    MemberFilter = Callable[[Member], bool]


@dataclass(frozen=True)
class ExportConvention:
    """One registered convention.

    ``member_filter`` is None for type-level conventions. Member-level
    conventions use ``all_members`` when every declared member applies.
    """

    matcher: TypeMatcher
    configure: ConfigureExport | None = None
    member_filter: MemberFilter | None = None

    @property
    def is_member_level(self) -> bool:
        return self.member_filter is not None

    def applies_to(self, part_type: Any, member: Member | None = None) -> bool:
        """Check if this convention applies to a type, or a member of it."""
        if (member is None) == self.is_member_level:
            return False
        if not self.matcher.matches(part_type):
            return False
        return member is None or bool(self.member_filter(member))  # type: ignore[misc]

    def materialize(self, target: Any) -> list[Marker]:
        """Run the configure function on a fresh builder and build it for ``target``."""
        builder = ExportConventionBuilder()
        if self.configure is not None:
            self.configure(builder)
        return builder.build(target)


def all_members(member: Member) -> bool:
    """Member filter accepting every declared member."""
    return True


class PartConventionBuilder:
    """Registration handle for the types accepted by one matcher."""

    def __init__(self, owner: ConventionBuilder, matcher: TypeMatcher) -> None:
        self._owner = owner
        self.matcher = matcher

    def export(self, configure: ConfigureExport | None = None) -> PartConventionBuilder:
        """Export matching types, optionally configuring the export.

        Each call registers an independent convention; calling ``export``
        twice yields two exports per matching type.
        """
        self._owner.add(ExportConvention(self.matcher, configure))
        return self

    def export_as(self, contract_type: Any) -> PartConventionBuilder:
        """Export matching types under ``contract_type``."""
        return self.export(lambda e: e.as_contract_type(contract_type))

    def export_properties(
        self,
        member_filter: MemberFilter | None = None,
        configure: ConfigureExport | None = None,
    ) -> PartConventionBuilder:
        """Export the declared members of matching types.

        Args:
            member_filter: Selects members to export (default: all declared members)
            configure: Configures each member export; deferred values receive the `Member`
        """
        self._owner.add(ExportConvention(self.matcher, configure, member_filter or all_members))
        return self


class ConventionBuilder:
    """Ordered registry of export conventions."""

    def __init__(self) -> None:
        self._conventions: list[ExportConvention] = []

    def __len__(self) -> int:
        return len(self._conventions)

    @property
    def conventions(self) -> tuple[ExportConvention, ...]:
        """All conventions in registration order."""
        return tuple(self._conventions)

    def add(self, convention: ExportConvention) -> None:
        """Append a convention."""
        self._conventions.append(convention)

    def for_type(self, part_type: Any) -> PartConventionBuilder:
        """Scope conventions to exactly ``part_type``."""
        return PartConventionBuilder(self, ExactTypeMatcher(part_type))

    def for_types_derived_from(self, base: Any) -> PartConventionBuilder:
        """Scope conventions to ``base`` and every type deriving from it."""
        return PartConventionBuilder(self, DerivedFromMatcher(base))

    def for_types_matching(self, predicate: Callable[[Any], bool]) -> PartConventionBuilder:
        """Scope conventions to the types accepted by ``predicate``."""
        return PartConventionBuilder(self, PredicateMatcher(predicate))

    def conventions_for(
        self, part_type: Any, member: Member | None = None
    ) -> list[ExportConvention]:
        """Get the conventions applying to a type or member, in registration order."""
        return [c for c in self._conventions if c.applies_to(part_type, member)]
