"""Timing harness for key pair generation across key sizes and worker counts.

Typical usage example:

    results = benchmark_key_generation([1024, 2048], [2, 4], repeats=3)
    print(format_results(results))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pathlib
import time
import typing

from bigrsa import config
from bigrsa import rsa


def time_key_generation(bits: int, n_threads: int) -> float:
    """Generate one key pair and return the elapsed wall time in milliseconds."""
    start = time.perf_counter()
    rsa.generate_key_pair(bits, n_threads)
    return (time.perf_counter() - start) * 1000


def benchmark_key_generation(bit_sizes: typing.Iterable[int],
                             thread_counts: typing.Iterable[int],
                             repeats: int = 1,
                             prntr: typing.Callable | None = None) -> dict[tuple[int, int], float]:
    """Time key pair generation for every combination of size and worker count.

    Args:
        bit_sizes: Key sizes to benchmark. Each has to be a valid bit size.
        thread_counts: Worker counts to benchmark. Each has to be at least 2.
        repeats: How often each combination runs, the average is reported.
        prntr: Optional callable receiving a progress line per run.

    Returns:
        Average milliseconds per (bits, threads) combination.

    Raises:
        ParameterError: If any size or worker count is invalid, checked before anything runs.
    """
    bit_sizes = [config.check_bit_size(b) for b in bit_sizes]
    thread_counts = [config.check_thread_count(t) for t in thread_counts]
    if repeats < 1:
        raise config.ParameterError(f"Repeats must be at least 1, got {repeats}.")
    totals: dict[tuple[int, int], float] = {(b, t): 0.0 for b in bit_sizes for t in thread_counts}
    for i in range(repeats):
        if prntr:
            prntr(f"{repeats - i} repeats left")
        for bits in bit_sizes:
            for n_threads in thread_counts:
                elapsed = time_key_generation(bits, n_threads)
                if prntr:
                    prntr(f"Created {bits} bit key pair in {elapsed:.0f} ms, with {n_threads} threads")
                totals[(bits, n_threads)] += elapsed
    return {key: total / repeats for key, total in totals.items()}


def format_results(results: dict[tuple[int, int], float]) -> str:
    """Render benchmark averages grouped by key size."""
    lines = ["===Results==="]
    for bits in sorted({b for b, _ in results}):
        lines.append("")
        lines.append(f"{bits} bits:")
        for (b, n_threads), avg in sorted(results.items()):
            if b == bits:
                lines.append(f"\t{n_threads} Threads: {avg:.0f} ms")
    return "\n".join(lines)


def save_results(results: dict[tuple[int, int], float], file: pathlib.Path) -> None:
    """Write the formatted results to `file`."""
    with open(file, "w", encoding="utf-8") as f:
        f.write(format_results(results) + "\n")
