"""Marker types produced by convention synthesis.

A marker stands in for an annotation that would otherwise be written on a
part by hand. There are two kinds:

- **ExportDescriptor**: offers the part under a contract (type and/or name)
- **MetadataDescriptor**: attaches a name/value pair to the preceding export

Markers are frozen; a synthesized list can be cached and shared freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Iterable


class MarkerKind(Enum):
    """Kind tag carried by every marker."""

    EXPORT = "export"
    METADATA = "metadata"


@dataclass(frozen=True)
class ExportDescriptor:
    """An export of the part under a contract.

    Leaving both fields unset means the contract type is inferred from the
    part itself (see `resolve_contract_type`).
    """

    contract_type: Any = None
    contract_name: str | None = None

    kind: ClassVar[MarkerKind] = MarkerKind.EXPORT

    def resolve_contract_type(self, default: Any) -> Any:
        """Return the contract type, falling back to the exporting part."""
        return self.contract_type if self.contract_type is not None else default

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "contract_type": _type_name(self.contract_type),
            "contract_name": self.contract_name,
        }


@dataclass(frozen=True)
class MetadataDescriptor:
    """A metadata entry for the export it follows."""

    name: str
    value: Any

    kind: ClassVar[MarkerKind] = MarkerKind.METADATA

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"kind": self.kind.value, "name": self.name, "value": self.value}


Marker = ExportDescriptor | MetadataDescriptor


def filter_markers[M](markers: Iterable[Marker], kind: type[M]) -> list[M]:
    """Select markers of one kind, keeping their relative order."""
    return [m for m in markers if isinstance(m, kind)]


def _type_name(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)
