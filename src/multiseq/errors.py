"""Structured error types for traversal validation failures."""

from __future__ import annotations

from dataclasses import dataclass


class MultiSeqError(Exception):
    """Base class for structured multiseq errors."""


class NotApplicableError(MultiSeqError, TypeError):
    """Arguments do not match any supported call shape or exceed the arity ceiling."""


@dataclass(frozen=True)
class UnknownOptionError(MultiSeqError, KeyError):
    """An option key is absent from the closed template key set."""

    key: object
    allowed: tuple[object, ...] = ()

    def __str__(self) -> str:
        allowed = ", ".join(repr(item) for item in self.allowed) or "none"
        return f"unknown option {self.key!r}; allowed keys: {allowed}"


@dataclass(frozen=True)
class TupleArityMismatchError(MultiSeqError, ValueError):
    """A row handed to unzip/flat_unzip is not a tuple of the expected arity."""

    index: int
    expected: int
    found: int | None = None

    def __str__(self) -> str:
        if self.found is None:
            return f"row {self.index} is not a tuple; expected a {self.expected}-tuple"
        return f"row {self.index} has arity {self.found}; expected {self.expected}"


class StepTypeError(MultiSeqError, TypeError):
    """A combinator returned a value of the wrong shape for its primitive."""
