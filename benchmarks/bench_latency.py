"""Benchmark: expression evaluation latency (p50/p95/mean).

Measures per-call latency of ``scicalc.evaluate`` on short, medium and
long expressions.  The calculator may be re-run on every keystroke, so
each call needs to stay well under a millisecond.
"""
from __future__ import annotations

import json
import time
from pathlib import Path

import scicalc

_WARMUP: int = 100
_ITERATIONS: int = 2_000

EXPRESSIONS: dict[str, str] = {
    "short": "2+3×4",
    "medium": "sin(30) + cos(60) × 2^3^2 - sqrt(16) ÷ (1 + ln(e))",
    "long": " + ".join(["(1.5 × 2 - sqrt(9)²) ÷ 4"] * 12),
}


def bench_evaluate_latency(
    size: str = "medium", iterations: int = _ITERATIONS
) -> dict[str, object]:
    """Benchmark evaluation latency for one of the ``EXPRESSIONS``.

    Returns
    -------
    dict with keys: operation, characters, iterations, total_seconds,
    ops_per_second, avg_latency_ms, p50_ms, p95_ms.
    """
    expression = EXPRESSIONS[size]
    for _ in range(min(_WARMUP, iterations)):
        scicalc.evaluate(expression)

    latencies_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        scicalc.evaluate(expression)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": f"evaluate_latency_{size}",
        "characters": len(expression),
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1) if total else 0.0,
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']} ({result['characters']} chars): "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    results = [bench_evaluate_latency(size) for size in EXPRESSIONS]
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
