"""Time multiseq traversals against plain zip/slicing baselines."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable

import multiseq
from _bench_utils import host_metadata, mean, percentile, sample_ms, stddev


@dataclass(frozen=True)
class Case:
    name: str
    baseline: str
    fn: Callable[..., object]
    build_args: Callable[[int], tuple[object, ...]]
    repeats: int


@dataclass(frozen=True)
class Row:
    name: str
    baseline: str
    n: int
    mean_ms: float
    stdev_ms: float
    p50_ms: float
    p95_ms: float
    repeats: int
    samples: int


def _three_lists(n: int) -> tuple[list[int], list[int], list[int]]:
    return list(range(n)), list(range(n)), list(range(n))


def _add3(a, b, c):
    return a + b + c


def _multiseq_map(l1, l2, l3):
    return multiseq.map([l1, l2, l3], _add3)


def _zip_with(l1, l2, l3):
    return [_add3(a, b, c) for a, b, c in zip(l1, l2, l3)]


def _multiseq_reduce(l1, l2, l3):
    return multiseq.reduce([l1, l2, l3], 0, lambda a, b, c, acc: acc + a + b + c)


def _zip_reduce(l1, l2, l3):
    acc = 0
    for a, b, c in zip(l1, l2, l3):
        acc = acc + a + b + c
    return acc


def _multiseq_split(seq, count):
    return multiseq.split(seq, count)


def _slice_split(seq, count):
    return seq[:count], seq[count:]


def _cases() -> list[Case]:
    return [
        Case("multiseq.map/3", "multiseq", _multiseq_map, _three_lists, repeats=20),
        Case("zip_with/3", "baseline", _zip_with, _three_lists, repeats=20),
        Case("multiseq.reduce/3", "multiseq", _multiseq_reduce, _three_lists, repeats=20),
        Case("zip_reduce/3", "baseline", _zip_reduce, _three_lists, repeats=20),
        Case("multiseq.split", "multiseq", _multiseq_split, lambda n: (list(range(n)), 5), repeats=2000),
        Case("slice_split", "baseline", _slice_split, lambda n: (list(range(n)), 5), repeats=2000),
    ]


def _run_case(case: Case, n: int, *, samples: int, warmup: int) -> Row:
    args = case.build_args(n)
    rows = sample_ms(case.fn, args, repeats=case.repeats, warmup=warmup, samples=samples)
    return Row(
        name=case.name,
        baseline=case.baseline,
        n=n,
        mean_ms=mean(rows),
        stdev_ms=stddev(rows),
        p50_ms=percentile(rows, 0.50),
        p95_ms=percentile(rows, 0.95),
        repeats=case.repeats,
        samples=samples,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ns", default="100,10000", help="comma-separated sizes")
    parser.add_argument("--samples", type=int, default=5, help="timing samples")
    parser.add_argument("--warmup", type=int, default=1, help="untimed warmup calls")
    parser.add_argument("--json-out", default="", help="optional output JSON")
    args = parser.parse_args()

    ns = [int(x.strip()) for x in args.ns.split(",") if x.strip()]
    rows: list[Row] = []
    print("Traversal benchmark")
    for n in ns:
        for case in _cases():
            row = _run_case(case, n, samples=args.samples, warmup=args.warmup)
            rows.append(row)
            print(f"{case.name:18} n={n:6d} mean={row.mean_ms:9.4f}ms p95={row.p95_ms:9.4f}ms")

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "host": host_metadata(),
            "sizes": ns,
            "samples": args.samples,
            "rows": [asdict(row) for row in rows],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON: {outpath}")


if __name__ == "__main__":
    main()
