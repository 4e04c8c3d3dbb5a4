"""Errors raised by the conventions package itself.

Exceptions raised by user code during synthesis (configure functions,
deferred values, predicates) are not wrapped: they reach the caller of
`SynthesisEngine.descriptors_for` unchanged. The classes here cover problems
the package detects on its own, mostly while loading convention files.

Usage:
    from conventions.errors import ConventionError

    try:
        load_conventions(path)
    except ConventionError as e:
        print(e.to_result().to_compact())
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling."""

    CONFIG = auto()  # Malformed convention files
    IMPORT_ERROR = auto()  # module:attr references that do not resolve
    DEPENDENCY = auto()  # Optional library not installed
    INTERNAL = auto()


@dataclass
class ErrorResult:
    """Structured error result with context and suggestions."""

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category.name,
            "message": self.message,
            "suggestion": self.suggestion,
            "context": self.context,
        }

    def to_compact(self) -> str:
        """Format as compact string."""
        parts = [f"[{self.category.name}] {self.message}"]
        if self.suggestion:
            parts.append(f"  Try: {self.suggestion}")
        return "\n".join(parts)


class ConventionError(Exception):
    """Base exception for the conventions package."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        suggestion: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.suggestion = suggestion
        self.context = context or {}

    def to_result(self) -> ErrorResult:
        """Convert to ErrorResult."""
        return ErrorResult(
            category=self.category,
            message=str(self),
            suggestion=self.suggestion,
            context=self.context,
        )


class ConventionConfigError(ConventionError):
    """A convention file or entry is malformed."""

    def __init__(self, message: str, path: str | Path | None = None, **context: Any):
        if path is not None:
            context["path"] = str(path)
        super().__init__(
            message,
            category=ErrorCategory.CONFIG,
            suggestion="Check the [[conventions]] entries against the documented keys",
            context=context,
        )


class ReferenceResolutionError(ConventionError):
    """A ``module:attribute`` reference could not be imported."""

    def __init__(self, reference: str, reason: str):
        super().__init__(
            f"Cannot resolve '{reference}': {reason}",
            category=ErrorCategory.IMPORT_ERROR,
            suggestion="Use 'package.module:Name' and make sure the module is importable",
            context={"reference": reference},
        )
        self.reference = reference


class MissingDependencyError(ConventionError):
    """An optional library needed for a feature is not installed."""

    def __init__(self, package: str, feature: str):
        super().__init__(
            f"{package} is required for {feature}",
            category=ErrorCategory.DEPENDENCY,
            suggestion=f"pip install {package}",
            context={"package": package},
        )
