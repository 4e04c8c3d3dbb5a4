"""Synthesis engine: turns registered conventions into markers for a type.

The engine answers "which markers does this part carry?" for the
composition container:

    engine = SynthesisEngine(conventions)
    markers = engine.descriptors_for(FooImpl)          # synthesized only
    markers = engine.markers_for(FooImpl)              # hand-declared + synthesized
    exports = engine.exports_for(FooImpl)

Results are cached per (type, member). The cache assumes the convention
registry is complete before the first query; registering afterwards is
allowed but logged, since earlier answers are not recomputed. The cache is
not synchronized: hosts sharing one engine across threads must guard it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .declared import declared_markers
from .descriptors import ExportDescriptor, MetadataDescriptor, filter_markers
from .introspection import Member, get_member
from .logging import get_logger

if TYPE_CHECKING:
    from .descriptors import Marker
    from .registry import ConventionBuilder

logger = get_logger("engine")

CacheKey = tuple[Any, str | None]


@dataclass
class EngineConfig:
    """Configuration for the synthesis engine."""

    # Keep synthesized markers per (type, member)
    cache_enabled: bool = True
    # Include @export/@export_metadata markers in markers_for()
    include_declared: bool = True


@dataclass
class CacheStats:
    """Statistics for the marker cache."""

    hits: int = 0
    misses: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "entries": self.entries,
            "hit_rate": f"{self.hit_rate:.2%}",
        }


class SynthesisEngine:
    """Evaluates conventions for types and members, caching the results."""

    def __init__(
        self,
        conventions: ConventionBuilder,
        config: EngineConfig | None = None,
    ) -> None:
        self.conventions = conventions
        self.config = config or EngineConfig()
        self._cache: dict[CacheKey, tuple[Marker, ...]] = {}
        self._stats = CacheStats()
        # Registry size when the first query ran; None until then
        self._registered_at_first_query: int | None = None
        self._warned_late_registration = False

    @property
    def stats(self) -> CacheStats:
        """Get cache statistics."""
        self._stats.entries = len(self._cache)
        return self._stats

    def clear_cache(self) -> None:
        """Drop every cached result and reset statistics."""
        self._cache.clear()
        self._stats = CacheStats()
        self._registered_at_first_query = None
        self._warned_late_registration = False

    def descriptors_for(
        self, part_type: Any, member: str | Member | None = None
    ) -> tuple[Marker, ...]:
        """Get the synthesized markers for a type, or for one of its members.

        Conventions are applied in registration order. Each contributes its
        export descriptor followed by that export's metadata. Exceptions from
        configure functions, deferred values or matchers propagate, and
        nothing is cached for the failed key.

        Args:
            part_type: The type being composed
            member: A member name or `Member` for member-level conventions.
                A `Member` is looked up by name on ``part_type``; deferred
                values always see the declared member.

        Returns:
            Ordered markers; empty when no convention applies
        """
        self._check_registry()
        member_name = member.name if isinstance(member, Member) else member
        key: CacheKey = (part_type, member_name)

        cached = self._cache.get(key)
        if cached is not None:
            self._stats.hits += 1
            return cached

        self._stats.misses += 1
        markers = self._synthesize(part_type, member_name)

        if self.config.cache_enabled:
            self._cache[key] = markers
        return markers

    def markers_for(self, part_type: Any, member: str | Member | None = None) -> list[Marker]:
        """Get hand-declared markers followed by synthesized ones."""
        markers: list[Marker] = []
        if self.config.include_declared and member is None and isinstance(part_type, type):
            markers.extend(declared_markers(part_type))
        markers.extend(self.descriptors_for(part_type, member))
        return markers

    def exports_for(
        self, part_type: Any, member: str | Member | None = None
    ) -> list[ExportDescriptor]:
        """Get only the export descriptors, in order."""
        return filter_markers(self.markers_for(part_type, member), ExportDescriptor)

    def metadata_for(
        self, part_type: Any, member: str | Member | None = None
    ) -> list[MetadataDescriptor]:
        """Get only the metadata descriptors, in order."""
        return filter_markers(self.markers_for(part_type, member), MetadataDescriptor)

    def _synthesize(self, part_type: Any, member_name: str | None) -> tuple[Marker, ...]:
        log = logger.with_operation("synthesize")
        target: Any = part_type
        resolved: Member | None = None

        if member_name is not None:
            resolved = _lookup_member(part_type, member_name)
            if resolved is None:
                log.debug("Member not declared", part=_describe(part_type), member=member_name)
                return ()
            target = resolved

        markers: list[Marker] = []
        applied = 0
        for convention in self.conventions.conventions_for(part_type, resolved):
            markers.extend(convention.materialize(target))
            applied += 1

        if log.is_enabled_for(logging.DEBUG):
            log.debug(
                "Synthesized markers",
                part=_describe(part_type),
                member=member_name,
                conventions=applied,
                markers=len(markers),
            )
        return tuple(markers)

    def _check_registry(self) -> None:
        registered = len(self.conventions)
        if self._registered_at_first_query is None:
            self._registered_at_first_query = registered
            return
        if registered != self._registered_at_first_query and not self._warned_late_registration:
            self._warned_late_registration = True
            logger.with_operation("register").warning(
                "Conventions registered after synthesis began; cached results may be stale",
                registered_before=self._registered_at_first_query,
                registered_now=registered,
            )


def _lookup_member(part_type: Any, name: str) -> Member | None:
    if not isinstance(part_type, type):
        return None
    return get_member(part_type, name)


def _describe(part_type: Any) -> str:
    if isinstance(part_type, type):
        return part_type.__qualname__
    return repr(part_type)
