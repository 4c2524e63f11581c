"""Sequence value model and validators for the traversal engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import jax

from .errors import MultiSeqError, NotApplicableError, StepTypeError


def is_array(value: object) -> bool:
    return isinstance(value, jax.Array) and value.ndim >= 1


def is_sequence(value: object) -> bool:
    if is_array(value):
        return True
    if isinstance(value, Mapping):
        return False
    return isinstance(value, Sequence)


def length_of(value: object) -> int:
    if is_array(value):
        return int(value.shape[0])
    return len(value)


def validate_sequence(value: object, *, where: str = "value") -> None:
    if is_sequence(value):
        return
    raise NotApplicableError(f"{where} must be a sequence, got {type(value).__name__}")


def validate_callable(value: object, *, where: str = "combinator") -> None:
    if callable(value):
        return
    raise NotApplicableError(f"{where} must be callable, got {type(value).__name__}")


def extend_from(
    out: list[object],
    values: object,
    *,
    where: str,
    error: type[MultiSeqError] = StepTypeError,
) -> None:
    """Append the items of ``values`` to ``out`` in order, or raise ``error``."""
    if isinstance(values, (list, tuple)):
        out.extend(values)
        return
    if not is_sequence(values):
        raise error(f"{where} must produce a sequence, got {type(values).__name__}")
    out.extend(values)
