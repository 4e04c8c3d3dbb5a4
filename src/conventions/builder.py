"""Fluent builder for the markers one export convention produces.

A convention's configure function receives a fresh builder and declares what
the export looks like:

    conventions.for_types_derived_from(IRepository).export(
        lambda e: e.as_contract_type(IRepository)
        .as_contract_name(lambda t: f"repo:{t.__name__}")
        .add_metadata("lifetime", "shared")
    )

Values are either literals or functions of the target (the matched type, or
a `Member` for member-level conventions). Classes, parameterized aliases,
``NewType`` and ``type X = ...`` aliases are always literals even though some
are callable; any other callable is
deferred and evaluated once per `build`.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .descriptors import ExportDescriptor, MetadataDescriptor

if TYPE_CHECKING:
    from .descriptors import Marker


@dataclass(frozen=True)
class _Value:
    """A literal value or a function computing it from the target."""

    value: Any
    deferred: bool = False

    @classmethod
    def of(cls, value: Any) -> _Value:
        return cls(value, deferred=callable(value) and not is_type_handle(value))

    def resolve(self, target: Any) -> Any:
        return self.value(target) if self.deferred else self.value


def is_type_handle(value: Any) -> bool:
    """Check if a value names a type rather than computing one."""
    if isinstance(value, (type, typing.NewType, typing.TypeAliasType)):
        return True
    return typing.get_origin(value) is not None


class ExportConventionBuilder:
    """Accumulates the contract and metadata for one export.

    Contract type and contract name are last-write-wins. Metadata is
    append-only: adding the same name twice keeps both entries.
    """

    def __init__(self) -> None:
        self._contract_type: _Value | None = None
        self._contract_name: _Value | None = None
        self._metadata: list[tuple[str, _Value]] = []

    def as_contract_type(self, contract_type: Any) -> ExportConventionBuilder:
        """Export under a contract type, or a function of the target returning one."""
        self._contract_type = _Value.of(contract_type)
        return self

    def as_contract_name(self, contract_name: Any) -> ExportConventionBuilder:
        """Export under a contract name, or a function of the target returning one."""
        self._contract_name = _Value.of(contract_name)
        return self

    def add_metadata(self, name: str, value: Any) -> ExportConventionBuilder:
        """Add a metadata entry; ``value`` may be a function of the target."""
        self._metadata.append((name, _Value.of(value)))
        return self

    def build(self, target: Any) -> list[Marker]:
        """Materialize the export followed by its metadata, in declaration order."""
        export = ExportDescriptor(
            contract_type=self._contract_type.resolve(target) if self._contract_type else None,
            contract_name=self._contract_name.resolve(target) if self._contract_name else None,
        )
        markers: list[Marker] = [export]
        for name, value in self._metadata:
            markers.append(MetadataDescriptor(name=name, value=value.resolve(target)))
        return markers
