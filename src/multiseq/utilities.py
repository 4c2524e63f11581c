"""Single-sequence helpers: bounded split and closed option-set extraction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeVar

from .errors import NotApplicableError, UnknownOptionError
from .values import length_of, validate_sequence

S = TypeVar("S")


def split(seq: S, count: int) -> tuple[S, S]:
    """Return ``(seq[:k], seq[k:])`` with ``k`` clamped to ``[0, len(seq)]``.

    Both halves keep the input's sequence type, so lists split into lists,
    strings into strings and JAX arrays into arrays.
    """
    validate_sequence(seq, where="split")
    if isinstance(count, bool) or not isinstance(count, int):
        raise NotApplicableError(f"split count must be an integer, got {type(count).__name__}")
    k = min(max(count, 0), length_of(seq))
    return seq[:k], seq[k:]


def _pairs(value: object, *, where: str) -> list[tuple[object, object]]:
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise NotApplicableError(f"{where} must be a mapping or a sequence of (key, value) pairs")

    pairs: list[tuple[object, object]] = []
    for index, item in enumerate(value):
        if not isinstance(item, (tuple, list)) or len(item) != 2:
            raise NotApplicableError(f"{where}[{index}] must be a (key, value) pair")
        try:
            hash(item[0])
        except TypeError as exc:
            raise NotApplicableError(f"{where}[{index}] key must be hashable, got {type(item[0]).__name__}") from exc
        pairs.append((item[0], item[1]))
    return pairs


def take_opts(opts, template):
    """Project ``opts`` onto the closed key set defined by ``template``.

    The result has exactly one entry per template key, in template order:
    the value from ``opts`` when the key is present there (first occurrence
    wins), the template default otherwise. A key in ``opts`` that the
    template does not name raises ``UnknownOptionError``.

    Returns a list of ``(key, value)`` pairs, or a dict when ``template`` is
    a mapping.
    """
    defaults = _pairs(template, where="take_opts template")
    allowed = tuple(dict.fromkeys(key for key, _ in defaults))
    if len(allowed) != len(defaults):
        raise NotApplicableError("take_opts template must not repeat a key")
    allowed_set = frozenset(allowed)

    supplied: dict[object, object] = {}
    for key, value in _pairs(opts, where="take_opts opts"):
        if key not in allowed_set:
            raise UnknownOptionError(key=key, allowed=allowed)
        supplied.setdefault(key, value)

    out = [(key, supplied.get(key, default)) for key, default in defaults]
    if isinstance(template, Mapping):
        return dict(out)
    return out
