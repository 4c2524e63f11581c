"""Per-arity kernel bundles for the traversal primitives and combinators."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from itertools import islice
from typing import Callable, Final

from .arity import MAX_ARITY, check_arity
from .errors import NotApplicableError, StepTypeError, TupleArityMismatchError
from .steps import Continue, Halt
from .values import extend_from, length_of

logger = logging.getLogger(__name__)

_USE_FIXED_ARITY_FAST_PATH: Final[bool] = os.environ.get("MULTISEQ_DISABLE_FIXED_ARITY_FAST_PATH", "0") != "1"
_FIXED_ARITIES: Final[frozenset[int]] = frozenset({1, 2})
_HALTED: Final = object()


@dataclass(frozen=True)
class ArityKernels:
    arity: int
    fixed: bool
    map: Callable
    flat_map: Callable
    reduce: Callable
    map_reduce: Callable
    flat_map_reduce: Callable
    each: Callable
    zip: Callable
    unzip: Callable
    flat_unzip: Callable
    transpose: Callable


def _pair(result: object) -> tuple[object, object]:
    if isinstance(result, tuple) and len(result) == 2:
        return result
    raise StepTypeError(f"map_reduce combinator must return a (value, acc) pair, got {type(result).__name__}")


def _advance(out: list[object], step: object) -> object:
    """Apply one flat_map_reduce step to ``out``; return the new acc or ``_HALTED``."""
    if isinstance(step, Continue):
        extend_from(out, step.values, where="Continue")
        return step.acc
    if isinstance(step, Halt):
        return _HALTED
    raise StepTypeError(f"flat_map_reduce combinator must return Continue or Halt, got {type(step).__name__}")


def _check_row(index: int, row: object, arity: int) -> None:
    if not isinstance(row, tuple):
        raise TupleArityMismatchError(index=index, expected=arity)
    if len(row) != arity:
        raise TupleArityMismatchError(index=index, expected=arity, found=len(row))


def _bounded(seqs) -> list[islice]:
    """Cut every sequence to the shortest length so no cursor reads past it."""
    n = min(length_of(seq) for seq in seqs)
    return [islice(seq, n) for seq in seqs]


# Generic kernels: lockstep walk over any number of sequences.


def _map(seqs, func):
    return list(map(func, *_bounded(seqs)))


def _flat_map(seqs, func):
    out: list[object] = []
    for values in map(func, *_bounded(seqs)):
        extend_from(out, values, where="flat_map combinator")
    return out


def _reduce(seqs, acc, func):
    for items in zip(*_bounded(seqs)):
        acc = func(*items, acc)
    return acc


def _map_reduce(seqs, acc, func):
    values: list[object] = []
    for items in zip(*_bounded(seqs)):
        value, acc = _pair(func(*items, acc))
        values.append(value)
    return values, acc


def _flat_map_reduce(seqs, acc, func):
    out: list[object] = []
    for items in zip(*_bounded(seqs)):
        step = func(*items, acc)
        nxt = _advance(out, step)
        if nxt is _HALTED:
            return out, step.acc
        acc = nxt
    return out, acc


def _each(seqs, func):
    for items in zip(*_bounded(seqs)):
        func(*items)


def _zip(seqs):
    return list(zip(*_bounded(seqs)))


def _transpose(rows):
    return [list(column) for column in zip(*_bounded(rows))]


def _make_unzip(arity: int):
    def unzip(rows):
        columns: tuple[list[object], ...] = tuple([] for _ in range(arity))
        for index, row in enumerate(rows):
            _check_row(index, row, arity)
            for column, item in zip(columns, row):
                column.append(item)
        return columns

    return unzip


def _make_flat_unzip(arity: int):
    def flat_unzip(rows):
        columns: tuple[list[object], ...] = tuple([] for _ in range(arity))
        for index, row in enumerate(rows):
            _check_row(index, row, arity)
            for slot, (column, values) in enumerate(zip(columns, row)):
                extend_from(column, values, where=f"flat_unzip row {index} slot {slot}", error=NotApplicableError)
        return columns

    return flat_unzip


# Fixed-arity kernels: unrolled argument passing for the most common arities.


def _reduce_1(seqs, acc, func):
    (s1,) = _bounded(seqs)
    for a in s1:
        acc = func(a, acc)
    return acc


def _reduce_2(seqs, acc, func):
    s1, s2 = _bounded(seqs)
    for a, b in zip(s1, s2):
        acc = func(a, b, acc)
    return acc


def _map_reduce_1(seqs, acc, func):
    (s1,) = _bounded(seqs)
    values: list[object] = []
    for a in s1:
        value, acc = _pair(func(a, acc))
        values.append(value)
    return values, acc


def _map_reduce_2(seqs, acc, func):
    s1, s2 = _bounded(seqs)
    values: list[object] = []
    for a, b in zip(s1, s2):
        value, acc = _pair(func(a, b, acc))
        values.append(value)
    return values, acc


def _flat_map_reduce_1(seqs, acc, func):
    (s1,) = _bounded(seqs)
    out: list[object] = []
    for a in s1:
        step = func(a, acc)
        nxt = _advance(out, step)
        if nxt is _HALTED:
            return out, step.acc
        acc = nxt
    return out, acc


def _flat_map_reduce_2(seqs, acc, func):
    s1, s2 = _bounded(seqs)
    out: list[object] = []
    for a, b in zip(s1, s2):
        step = func(a, b, acc)
        nxt = _advance(out, step)
        if nxt is _HALTED:
            return out, step.acc
        acc = nxt
    return out, acc


def _each_1(seqs, func):
    (s1,) = _bounded(seqs)
    for a in s1:
        func(a)


def _each_2(seqs, func):
    s1, s2 = _bounded(seqs)
    for a, b in zip(s1, s2):
        func(a, b)


def _unzip_2(rows):
    left: list[object] = []
    right: list[object] = []
    for index, row in enumerate(rows):
        _check_row(index, row, 2)
        a, b = row
        left.append(a)
        right.append(b)
    return left, right


_FIXED_KERNELS: Final[dict[int, dict[str, Callable]]] = {
    1: {
        "reduce": _reduce_1,
        "map_reduce": _map_reduce_1,
        "flat_map_reduce": _flat_map_reduce_1,
        "each": _each_1,
    },
    2: {
        "reduce": _reduce_2,
        "map_reduce": _map_reduce_2,
        "flat_map_reduce": _flat_map_reduce_2,
        "each": _each_2,
        "unzip": _unzip_2,
    },
}


@lru_cache(maxsize=MAX_ARITY)
def _build_kernels(arity: int) -> ArityKernels:
    kernels: dict[str, Callable] = {
        "map": _map,
        "flat_map": _flat_map,
        "reduce": _reduce,
        "map_reduce": _map_reduce,
        "flat_map_reduce": _flat_map_reduce,
        "each": _each,
        "zip": _zip,
        "unzip": _make_unzip(arity),
        "flat_unzip": _make_flat_unzip(arity),
        "transpose": _transpose,
    }
    fixed = _USE_FIXED_ARITY_FAST_PATH and arity in _FIXED_ARITIES
    if fixed:
        kernels.update(_FIXED_KERNELS[arity])
    logger.debug("built kernels for arity %d (fixed=%s)", arity, fixed)
    return ArityKernels(arity=arity, fixed=fixed, **kernels)


def kernels_for(arity: int) -> ArityKernels:
    """Return the kernel bundle for ``arity``, building it on first use."""
    return _build_kernels(check_arity(arity, where="kernels_for"))


def specializer_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    info = _build_kernels.cache_info()
    total = info.hits + info.misses
    stats: dict[str, float | int] = {
        "hits": int(info.hits),
        "misses": int(info.misses),
        "size": int(info.currsize),
        "max_size": int(info.maxsize) if info.maxsize is not None else 0,
        "hit_rate": float(info.hits / total) if total else 0.0,
    }
    if reset:
        _build_kernels.cache_clear()
    return stats
