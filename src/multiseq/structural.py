"""Structural combinators: zip, unzip, flat_unzip and transpose."""

from __future__ import annotations

from collections.abc import Sequence

import jax
import jax.numpy as jnp

from .arity import check_arity, require_arity
from .errors import NotApplicableError
from .specialize import kernels_for
from .values import validate_sequence


def zip(seqs: Sequence[Sequence[object]]) -> list[tuple[object, ...]]:
    """Return one N-tuple per aligned position, stopping at the shortest sequence."""
    return kernels_for(require_arity(seqs, where="zip")).zip(seqs)


def _row_arity(rows: Sequence[object], arity: int | None, *, where: str) -> int:
    validate_sequence(rows, where=f"{where} rows")
    if arity is not None:
        return check_arity(arity, where=where)
    if len(rows) == 0:
        raise NotApplicableError(f"{where} cannot infer an arity from empty rows; pass arity=")
    first = rows[0]
    if not isinstance(first, tuple):
        raise NotApplicableError(f"{where} rows must be tuples, got {type(first).__name__}")
    return check_arity(len(first), where=where)


def unzip(rows: Sequence[tuple[object, ...]], arity: int | None = None) -> tuple[list[object], ...]:
    """Split a sequence of M-tuples into M lists.

    M is ``arity`` when given, otherwise the length of the first row. Every
    row must be a tuple of exactly M items.
    """
    m = _row_arity(rows, arity, where="unzip")
    return kernels_for(m).unzip(rows)


def flat_unzip(rows: Sequence[tuple[Sequence[object], ...]], arity: int | None = None) -> tuple[list[object], ...]:
    """Like ``unzip`` but each slot holds a sequence; slot i is concatenated across rows."""
    m = _row_arity(rows, arity, where="flat_unzip")
    return kernels_for(m).flat_unzip(rows)


def transpose(rows):
    """Return the columns of ``rows``, truncated to the shortest row.

    ``rows`` is a list or tuple of N row sequences and the result is a list
    of lists, each of length N. A JAX array of rank >= 2 is already
    rectangular and comes back with its two leading axes swapped.

    The row count is the arity, so zero rows or more than ``max_arity()``
    rows raise ``NotApplicableError``; transposing back a result with no
    columns or too many columns fails the same way.
    """
    if isinstance(rows, jax.Array):
        if rows.ndim < 2:
            raise NotApplicableError(f"transpose of an array requires rank >= 2, got rank {rows.ndim}")
        check_arity(int(rows.shape[0]), where="transpose")
        return jnp.swapaxes(rows, 0, 1)
    return kernels_for(require_arity(rows, where="transpose")).transpose(rows)
