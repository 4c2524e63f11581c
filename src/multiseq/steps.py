"""Step outcomes returned by ``flat_map_reduce`` combinators."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

A = TypeVar("A")


@dataclass(frozen=True)
class Continue(Generic[A]):
    """Append ``values`` to the output and advance every cursor."""

    values: Sequence[object]
    acc: A


@dataclass(frozen=True)
class Halt(Generic[A]):
    """Stop the traversal now with ``acc`` as the final accumulator."""

    acc: A


Step = Union[Continue[A], Halt[A]]
