"""Defaults and input validation shared by the key generator, the benchmark harness and the CLI.

Every tunable of the package lives here as a module constant. There are no configuration files; callers and the
command line override these values by passing arguments explicitly.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import os

SIEVE_BOUND: int = 10000
MILLER_RABIN_ROUNDS: int = 23
MIN_BIT_SIZE: int = 128
MAX_BIT_SIZE: int = 8192
DEFAULT_BIT_SIZE: int = 2048
DEFAULT_THREADS: int = max(2, os.cpu_count() or 2)
KEY_PART_SEPARATOR: str = "\n=======\n"
BENCHMARK_FILE: str = "bm.txt"


class ParameterError(ValueError):
    """Raised when a bit size or thread count is outside of the accepted domain."""


def is_valid_bit_size(n: int) -> bool:
    """Check whether `n` is an accepted key size.

    Accepted sizes are powers of two between `MIN_BIT_SIZE` and `MAX_BIT_SIZE` inclusive.

    Args:
        n: The requested key size in bits.

    Returns:
        True if the size can be used for key generation, False otherwise.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        return False
    # A power of two has exactly one bit set.
    return MIN_BIT_SIZE <= n <= MAX_BIT_SIZE and n & (n - 1) == 0


def is_valid_thread_count(n: int) -> bool:
    """Check whether `n` worker threads can race for primes. At least two are required."""
    if isinstance(n, bool) or not isinstance(n, int):
        return False
    return n >= 2


def check_bit_size(n: int) -> int:
    """Validate a key size, returning it unchanged.

    Raises:
        ParameterError: If `n` is not a power of two within the accepted range.
    """
    if not is_valid_bit_size(n):
        raise ParameterError(f"Key size must be a power of two in range [{MIN_BIT_SIZE}, {MAX_BIT_SIZE}], got {n}.")
    return n


def check_thread_count(n: int) -> int:
    """Validate a worker thread count, returning it unchanged.

    Raises:
        ParameterError: If fewer than two threads are requested.
    """
    if not is_valid_thread_count(n):
        raise ParameterError(f"At least 2 worker threads are required, got {n}.")
    return n
