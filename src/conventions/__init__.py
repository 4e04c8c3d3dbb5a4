"""Convention-based export metadata for composition containers.

Register conventions once and every matching type carries the export and
metadata markers a composition container looks for, without editing the
type itself.

Quick Start:

    from conventions import ConventionBuilder, SynthesisEngine

    conventions = ConventionBuilder()
    conventions.for_types_derived_from(IFoo).export(
        lambda e: e.as_contract_type(IFoo).add_metadata("name", lambda t: t.__name__)
    )

    engine = SynthesisEngine(conventions)
    engine.descriptors_for(FooImpl)
    # (ExportDescriptor(contract_type=IFoo, contract_name=None),
    #  MetadataDescriptor(name='name', value='FooImpl'))

Member Conventions:

    conventions.for_type(Settings).export_properties(
        lambda m: not m.name.startswith("_"),
        lambda e: e.as_contract_name(lambda m: f"setting.{m.name}"),
    )
    engine.descriptors_for(Settings, "timeout")

Hand-declared Markers:

    @export(IFoo)
    @export_metadata("lifetime", "shared")
    class FooImpl(IFoo): ...

    engine.markers_for(FooImpl)  # declared markers, then synthesized ones
"""

from .builder import ExportConventionBuilder, is_type_handle
from .config import load_conventions, load_conventions_from_config, resolve_reference
from .declared import declared_markers, export, export_metadata
from .descriptors import (
    ExportDescriptor,
    Marker,
    MarkerKind,
    MetadataDescriptor,
    filter_markers,
)
from .engine import CacheStats, EngineConfig, SynthesisEngine
from .errors import (
    ConventionConfigError,
    ConventionError,
    ErrorCategory,
    ErrorResult,
    MissingDependencyError,
    ReferenceResolutionError,
)
from .introspection import Member, declared_members, get_member
from .matchers import DerivedFromMatcher, ExactTypeMatcher, PredicateMatcher, TypeMatcher
from .registry import (
    ConventionBuilder,
    ExportConvention,
    PartConventionBuilder,
    all_members,
)

__all__ = [
    "CacheStats",
    "ConventionBuilder",
    "ConventionConfigError",
    "ConventionError",
    "DerivedFromMatcher",
    "EngineConfig",
    "ErrorCategory",
    "ErrorResult",
    "ExactTypeMatcher",
    "ExportConvention",
    "ExportConventionBuilder",
    "ExportDescriptor",
    "Marker",
    "MarkerKind",
    "Member",
    "MetadataDescriptor",
    "MissingDependencyError",
    "PartConventionBuilder",
    "PredicateMatcher",
    "ReferenceResolutionError",
    "SynthesisEngine",
    "TypeMatcher",
    "all_members",
    "declared_markers",
    "declared_members",
    "export",
    "export_metadata",
    "filter_markers",
    "get_member",
    "is_type_handle",
    "load_conventions",
    "load_conventions_from_config",
    "resolve_reference",
]
