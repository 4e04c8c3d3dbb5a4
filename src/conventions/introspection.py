"""Minimal view of a class's declared members.

Member-level conventions need to know which members a class declares. Only
members declared directly on the class count (inherited ones belong to the
base class), properties first, then class-level annotated
attributes, each in definition order.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Member:
    """A member declared on a class."""

    owner: type
    name: str
    annotation: Any = None

    @property
    def qualname(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"


def declared_members(cls: type) -> list[Member]:
    """List the members declared directly on ``cls``."""
    annotations = inspect.get_annotations(cls)
    members: dict[str, Member] = {}

    for name, value in vars(cls).items():
        if isinstance(value, property):
            members[name] = Member(cls, name, _property_annotation(value))

    for name, annotation in annotations.items():
        if name not in members:
            members[name] = Member(cls, name, annotation)

    return list(members.values())


def get_member(cls: type, name: str) -> Member | None:
    """Get a declared member by name."""
    for member in declared_members(cls):
        if member.name == name:
            return member
    return None


def _property_annotation(prop: property) -> Any:
    if prop.fget is None:
        return None
    return inspect.get_annotations(prop.fget).get("return")
