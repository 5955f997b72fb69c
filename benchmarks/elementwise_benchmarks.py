"""Profile elementwise dispatch on numeric and boxed storage.

Run once as-is and once with NDKIT_DISABLE_VECTORIZED_FAST_PATH=1 to compare
the jitted path against the cell-by-cell path.
"""

from __future__ import annotations

import argparse
import json
import math
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable

from ndkit import Complex, NDArray, add, dot, mul, range as nd_range
from ndkit.config import USE_VECTORIZED_FAST_PATH, x64_enabled


@dataclass(frozen=True)
class Case:
    name: str
    build: Callable[[int], tuple]
    op: Callable[..., object]
    repeats: int


@dataclass(frozen=True)
class Row:
    name: str
    n: int
    mean_ms: float
    p50_ms: float
    p95_ms: float
    min_ms: float
    max_ms: float
    repeats: int
    samples: int


def _percentile(values: list[float], q: float) -> float:
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


def _numeric(n: int) -> NDArray:
    return NDArray(nd_range(n).data, datatype="f64")


def _boxed(n: int) -> NDArray:
    return NDArray(list(range(n)))


def _run_case(case: Case, n: int, *, samples: int) -> Row:
    args = case.build(n)
    case.op(*args)

    rows: list[float] = []
    for _ in range(samples):
        start = time.perf_counter()
        for _ in range(case.repeats):
            case.op(*args)
        end = time.perf_counter()
        rows.append((end - start) * 1e3 / case.repeats)
    return Row(
        name=case.name,
        n=n,
        mean_ms=sum(rows) / len(rows),
        p50_ms=_percentile(rows, 0.50),
        p95_ms=_percentile(rows, 0.95),
        min_ms=min(rows),
        max_ms=max(rows),
        repeats=case.repeats,
        samples=samples,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ns", default="16,128,1024", help="comma-separated sizes")
    parser.add_argument("--samples", type=int, default=3, help="timing samples")
    parser.add_argument("--json-out", default="", help="optional output JSON")
    args = parser.parse_args()

    ns = [int(x.strip()) for x in args.ns.split(",") if x.strip()]
    cases = [
        Case("numeric_add_scalar", lambda n: (_numeric(n), 1.5), add, repeats=100),
        Case("numeric_add_array", lambda n: (_numeric(n), _numeric(n)), add, repeats=100),
        Case("numeric_dot", lambda n: (_numeric(n), _numeric(n)), dot, repeats=100),
        Case("boxed_add_scalar", lambda n: (_boxed(n), 1.5), add, repeats=50),
        Case("boxed_mul_complex", lambda n: (_boxed(n), Complex(0, 1)), mul, repeats=50),
    ]

    rows: list[Row] = []
    print(f"Elementwise benchmark (fast_path={USE_VECTORIZED_FAST_PATH}, x64={x64_enabled()})")
    for n in ns:
        for case in cases:
            row = _run_case(case, n, samples=args.samples)
            rows.append(row)
            print(f"{case.name:18} n={n:5d} mean={row.mean_ms:8.3f}ms p95={row.p95_ms:8.3f}ms")

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "fast_path": USE_VECTORIZED_FAST_PATH,
            "sizes": ns,
            "samples": args.samples,
            "rows": [asdict(row) for row in rows],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON: {outpath}")


if __name__ == "__main__":
    main()
