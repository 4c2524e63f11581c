"""Traversal primitives over N aligned sequences.

Every primitive takes the N sequences as one list or tuple, walks them in
lockstep and stops as soon as the shortest one is exhausted. Combinators are
called positionally with one element from each sequence, followed by the
accumulator for the folding primitives.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .arity import require_arity
from .specialize import kernels_for
from .steps import Step
from .values import validate_callable


def _prepare(seqs: Sequence[Sequence[object]], func: object, *, where: str):
    arity = require_arity(seqs, where=where)
    validate_callable(func, where=f"{where} combinator")
    return kernels_for(arity)


def map(seqs: Sequence[Sequence[object]], func: Callable[..., object]) -> list[object]:
    """Return ``[func(e_1, ..., e_N), ...]`` for each aligned position."""
    return _prepare(seqs, func, where="map").map(seqs, func)


def flat_map(seqs: Sequence[Sequence[object]], func: Callable[..., Sequence[object]]) -> list[object]:
    """Concatenate the sequences ``func`` returns for each aligned position."""
    return _prepare(seqs, func, where="flat_map").flat_map(seqs, func)


def reduce(seqs: Sequence[Sequence[object]], acc: object, func: Callable[..., object]) -> object:
    """Left fold: ``acc = func(e_1, ..., e_N, acc)`` for each aligned position."""
    return _prepare(seqs, func, where="reduce").reduce(seqs, acc, func)


def map_reduce(
    seqs: Sequence[Sequence[object]],
    acc: object,
    func: Callable[..., tuple[object, object]],
) -> tuple[list[object], object]:
    """Map and fold in one pass; ``func`` returns ``(value, acc)``."""
    return _prepare(seqs, func, where="map_reduce").map_reduce(seqs, acc, func)


def flat_map_reduce(
    seqs: Sequence[Sequence[object]],
    acc: object,
    func: Callable[..., Step],
) -> tuple[list[object], object]:
    """Flat-map and fold in one pass with caller-driven early exit.

    ``func`` returns ``Continue(values, acc)`` to append ``values`` and move
    on, or ``Halt(acc)`` to stop immediately. After a halt ``func`` is not
    called again and the unvisited elements of every sequence are dropped.
    The result is ``(values_so_far, final_acc)`` in both cases.
    """
    return _prepare(seqs, func, where="flat_map_reduce").flat_map_reduce(seqs, acc, func)


def each(seqs: Sequence[Sequence[object]], func: Callable[..., object]) -> None:
    """Call ``func(e_1, ..., e_N)`` for its side effects at each aligned position."""
    _prepare(seqs, func, where="each").each(seqs, func)
