"""Core Key Generation Utility, mainly focusing on the concurrent search for random large primes.

Candidates are filtered by trial division against a table of small primes before the far more expensive
Miller-Rabin test runs. Several worker threads race each other for primes of the requested size, the first two
discoveries win and the rest of the workers are told to stop.

Typical usage example:

    sieve = Sieve(10000)
    is_prime(9973, sieve)
    p, q = generate_p_q(1024, 4)
    e = generate_e(calculate_n_phi(p, q))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import queue
import secrets
import threading

from bigrsa import config
from bigrsa.numtheory import find_inverse
from bigrsa.numtheory import gcd
from bigrsa.numtheory import pow_mod

# How long a worker waits on a full result queue before looking at the cancellation flag again.
_PUT_RETRY_SECONDS: float = 0.05


def create_sieve(n: int) -> list[bool]:
    """Implements the Sieve of Eratosthenes.

    Index `i` of the returned table stands for the integer `i + 2`, so the table covers `2..n` inclusive.

    Args:
        n: The number up to which to sieve.

    Returns:
        A table with True for every prime and False for every composite.
    """
    if n < 2:
        return []
    size = n - 1
    sieve = [True] * size
    for i in range(2, math.isqrt(n) + 1):
        if sieve[i - 2]:
            for j in range(i * i - 2, size, i):
                sieve[j] = False
    return sieve


def get_primes(n: int) -> list[int]:
    """List all primes up to and including `n`."""
    return [no + 2 for no, ele in enumerate(create_sieve(n)) if ele]


class Sieve:
    """An immutable table of small primes used as a cheap compositeness filter.

    Attributes:
        bound: The number up to which primes were sieved.
        primes: The primes up to `bound` in ascending order.
    """

    def __init__(self, bound: int = config.SIEVE_BOUND) -> None:
        if bound < 0:
            raise ValueError("Sieve bound must be >= 0.")
        self.bound = bound
        self.primes: tuple[int, ...] = tuple(get_primes(bound))

    def __len__(self) -> int:
        return len(self.primes)

    def __repr__(self) -> str:
        return f"Sieve(bound={self.bound})"

    def is_prime_candidate(self, n: int) -> bool:
        """Check the provided `n` against the known small primes.

        Not a proof of primality, only a fast rejection of numbers with a small factor.

        Args:
            n: The number to check.

        Returns:
            False if some small prime divides `n` and `n` is not that prime itself, True otherwise.
        """
        for prime in self.primes:
            if n % prime == 0 and n != prime:
                return False
            if prime * prime > n:
                break
        return True


def _decompose(n: int) -> tuple[int, int]:
    """Rewrite `n - 1` as `2**s * d` with `d` odd, returning (s, d)."""
    d = n - 1
    s = 0
    while d & 1 == 0:
        s += 1
        d >>= 1
    return s, d


def _miller_rabin_round(n: int, s: int, d: int, rng: secrets.SystemRandom) -> bool:
    """One round of Miller-Rabin with a fresh random base.

    `n` is a strong probable prime to base `a` if a**d = 1 (mod n) or a**(2**r * d) = -1 (mod n) for some r < s.
    The powers for increasing r are reached by repeated squaring.
    """
    a = rng.randrange(2, n - 1)
    z = pow_mod(a, d, n)
    if z == 1 or z == n - 1:
        return True
    for _ in range(1, s):
        z = pow_mod(z, 2, n)
        if z == n - 1:
            return True
        if z == 1:
            return False
    return False


def is_prime(n: int, sieve: Sieve, rounds: int = config.MILLER_RABIN_ROUNDS,
             rng: secrets.SystemRandom | None = None) -> bool:
    """Performs a composite primality test, trial division by the sieve first and Miller-Rabin second.

    Even numbers and numbers with a small factor are rejected without a single modular exponentiation. Numbers within
    the sieve are answered from the table directly. Everything else has to pass `rounds` Miller-Rabin rounds, which
    bounds the chance of accepting a composite by 4**-rounds.

    Args:
        n: The candidate prime to test.
        sieve: Small prime table to trial divide with.
        rounds: Number of Miller-Rabin rounds. Defaults to 23.
        rng: Random source for the bases. A fresh `SystemRandom` if not provided.

    Returns:
        True if `n` is probably prime, False otherwise.
    """
    if n < 2:
        return False
    if n & 1 == 0:
        return n == 2
    if n == 3:
        return True
    if not sieve.is_prime_candidate(n):
        return False
    if n <= sieve.bound:
        return True
    if rng is None:
        rng = secrets.SystemRandom()
    s, d = _decompose(n)
    for _ in range(rounds):
        if not _miller_rabin_round(n, s, d, rng):
            return False
    return True


def _search_primes(bits: int, sieve: Sieve, found: threading.Event, channel: queue.Queue) -> None:
    """Worker loop drawing `bits` sized candidates until `found` is set.

    Every prime discovered is offered to `channel`. The search goes on after a successful send, only the
    cancellation flag ends it. A send waiting on a full channel gives up once the flag is set.
    """
    rng = secrets.SystemRandom()
    lower_bound = 1 << (bits - 1)
    while not found.is_set():
        candidate = rng.getrandbits(bits - 1) + lower_bound
        if not is_prime(candidate, sieve, rng=rng):
            continue
        while not found.is_set():
            try:
                channel.put(candidate, timeout=_PUT_RETRY_SECONDS)
                break
            except queue.Full:
                continue


def generate_p_q(bits: int, n_threads: int) -> tuple[int, int]:
    """Race `n_threads` workers for two primes of exactly `bits` bits.

    The sieve is built once and shared by every worker. The first two primes to arrive are returned in arrival order
    and the remaining workers are signalled to stop. Workers are daemon threads and never joined, they wind down on
    their own after their current candidate. Nothing guarantees that p and q differ.

    Args:
        bits: Bit length of each prime. The top bit is always set.
        n_threads: Number of concurrent workers. Must be at least 2.

    Returns:
        A pair of probable primes (p, q).

    Raises:
        ParameterError: If `n_threads` < 2 or `bits` < 2.
    """
    config.check_thread_count(n_threads)
    if bits < 2:
        raise config.ParameterError(f"Primes need at least 2 bits, got {bits}.")
    sieve = Sieve(config.SIEVE_BOUND)
    found = threading.Event()
    channel: queue.Queue = queue.Queue(maxsize=n_threads)
    for idx in range(n_threads):
        worker = threading.Thread(target=_search_primes,
                                  args=(bits, sieve, found, channel),
                                  name=f"bigrsa-prime-search-{idx}",
                                  daemon=True)
        worker.start()
    p = channel.get()
    q = channel.get()
    found.set()
    return p, q


def calculate_n_phi(p: int, q: int) -> int:
    """Euler's totient of p * q for primes p and q."""
    return (p - 1) * (q - 1)


def generate_e(n_phi: int) -> int:
    """Draw a random public exponent below `n_phi` that is coprime to it.

    Plain rejection sampling without a retry cap, for RSA sized totients a coprime draw comes up quickly.

    Args:
        n_phi: Euler's totient of the modulus.

    Returns:
        The public exponent.
    """
    while True:
        e = secrets.randbelow(n_phi)
        if gcd(n_phi, e) == 1:
            return e


def generate_d(e: int, n_phi: int) -> int:
    """The private exponent, inverse of `e` modulo `n_phi`."""
    return find_inverse(e, n_phi)
