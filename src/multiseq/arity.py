"""Arity ceiling and shape checks shared by every traversal entry point."""

from __future__ import annotations

import os
from typing import Final

from .errors import NotApplicableError
from .values import is_sequence, length_of, validate_sequence

MAX_ARITY: Final[int] = max(1, int(os.environ.get("MULTISEQ_MAX_ARITY", "25")))


def max_arity() -> int:
    """Return the arity ceiling fixed at import time."""
    return MAX_ARITY


def applicable(value: object) -> bool:
    """Return whether ``value`` is a collection of between 1 and ``max_arity()`` items."""
    if not is_sequence(value):
        return False
    return 1 <= length_of(value) <= MAX_ARITY


def check_arity(arity: int, *, where: str) -> int:
    if isinstance(arity, bool) or not isinstance(arity, int):
        raise NotApplicableError(f"{where} arity must be an integer, got {type(arity).__name__}")
    if arity < 1:
        raise NotApplicableError(f"{where} requires at least one sequence")
    if arity > MAX_ARITY:
        raise NotApplicableError(f"{where} arity {arity} exceeds the configured maximum of {MAX_ARITY}")
    return arity


def require_arity(seqs: object, *, where: str) -> int:
    """Validate ``seqs`` as a list/tuple of N sequences and return N."""
    if not isinstance(seqs, (list, tuple)):
        raise NotApplicableError(f"{where} expects a list or tuple of sequences, got {type(seqs).__name__}")
    arity = check_arity(len(seqs), where=where)
    for index, seq in enumerate(seqs):
        validate_sequence(seq, where=f"{where} argument {index}")
    return arity
