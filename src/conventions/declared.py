"""Hand-declared markers.

Parts can carry markers directly instead of relying on conventions:

    @export(IFoo, contract_name="primary")
    @export_metadata("lifetime", "shared")
    class FooImpl(IFoo): ...

Markers are stored on the decorated class only (subclasses do not inherit
them) and are read back in source order, top decorator first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .descriptors import ExportDescriptor, MetadataDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable

    from .descriptors import Marker

MARKERS_ATTRIBUTE = "__declared_markers__"


def _prepend(cls: type, marker: Marker) -> type:
    # Decorators apply bottom-up; prepending restores source order
    existing: tuple[Marker, ...] = vars(cls).get(MARKERS_ATTRIBUTE, ())
    setattr(cls, MARKERS_ATTRIBUTE, (marker, *existing))
    return cls


def export(
    contract_type: Any = None, *, contract_name: str | None = None
) -> Callable[[type], type]:
    """Declare an export on a class."""
    marker = ExportDescriptor(contract_type=contract_type, contract_name=contract_name)

    def decorator(cls: type) -> type:
        return _prepend(cls, marker)

    return decorator


def export_metadata(name: str, value: Any) -> Callable[[type], type]:
    """Declare a metadata entry on a class."""
    marker = MetadataDescriptor(name=name, value=value)

    def decorator(cls: type) -> type:
        return _prepend(cls, marker)

    return decorator


def declared_markers(cls: type) -> tuple[Marker, ...]:
    """Get the markers declared directly on ``cls``."""
    return vars(cls).get(MARKERS_ATTRIBUTE, ())
