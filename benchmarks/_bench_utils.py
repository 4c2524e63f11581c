"""Shared benchmark runtime helpers."""

from __future__ import annotations

import math
import os
import platform
import time
from typing import Any

import jax

import multiseq


def host_metadata() -> dict[str, Any]:
    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": getattr(jax, "__version__", "unknown"),
        "cpu_count": os.cpu_count(),
        "max_arity": multiseq.max_arity(),
        "fast_path_disabled": os.environ.get("MULTISEQ_DISABLE_FIXED_ARITY_FAST_PATH", "0") == "1",
    }


def percentile(values: list[float], q: float) -> float:
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    pos = (len(ordered) - 1) * q
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    if lo == hi:
        return ordered[lo]
    alpha = pos - lo
    return ordered[lo] * (1.0 - alpha) + ordered[hi] * alpha


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    var = sum((v - m) ** 2 for v in values) / (len(values) - 1)
    return math.sqrt(var)


def sample_ms(fn, args: tuple[object, ...], *, repeats: int, warmup: int, samples: int) -> list[float]:
    for _ in range(max(0, warmup)):
        fn(*args)

    rows: list[float] = []
    for _ in range(samples):
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            fn(*args)
        elapsed_ns = time.perf_counter_ns() - start_ns
        rows.append((elapsed_ns / repeats) / 1e6)
    return rows
