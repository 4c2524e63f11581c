"""multiseq public API."""

from .arity import applicable, max_arity
from .errors import (
    MultiSeqError,
    NotApplicableError,
    StepTypeError,
    TupleArityMismatchError,
    UnknownOptionError,
)
from .primitives import each, flat_map, flat_map_reduce, map, map_reduce, reduce
from .specialize import ArityKernels, kernels_for, specializer_cache_stats
from .steps import Continue, Halt, Step
from .structural import flat_unzip, transpose, unzip, zip
from .utilities import split, take_opts

__all__ = [
    "map",
    "flat_map",
    "reduce",
    "map_reduce",
    "flat_map_reduce",
    "each",
    "zip",
    "unzip",
    "flat_unzip",
    "transpose",
    "split",
    "take_opts",
    "applicable",
    "max_arity",
    "kernels_for",
    "specializer_cache_stats",
    "ArityKernels",
    "Continue",
    "Halt",
    "Step",
    "MultiSeqError",
    "NotApplicableError",
    "StepTypeError",
    "TupleArityMismatchError",
    "UnknownOptionError",
]
