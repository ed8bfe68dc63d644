"""The modular arithmetic kernel used by primality testing, key assembly and encryption.

All functions are pure and operate on Python's arbitrary precision integers, so they are safe to call from any
number of threads at once.

Typical usage example:

    c = pow_mod(42, 65537, n)
    d = find_inverse(e, phi)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def pow_mod(base: int, exponent: int, modulus: int) -> int:
    """Computes `base**exponent % modulus` by binary square-and-multiply.

    The exponent is consumed from its least significant bit upward. A zero exponent yields 1 whatever the base or
    modulus, a modulus of 0 is the caller's problem.

    Args:
        base: The base, reduced modulo `modulus` before the first step.
        exponent: The non-negative exponent.
        modulus: The modulus.

    Returns:
        The modular power.

    Raises:
        ValueError: If the exponent is negative.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if exponent == 0:
        return 1
    result = 1
    cur_base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * cur_base) % modulus
        exponent >>= 1
        cur_base = (cur_base * cur_base) % modulus
    return result


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the Euclidean algorithm. Order of the arguments does not matter."""
    while b != 0:
        a, b = b, a % b
    return a


def find_inverse(e: int, modulus: int) -> int:
    """Finds the inverse of `e` modulo `modulus` with the Extended Euclidean Algorithm.

    Only the Bezout coefficient belonging to `e` is tracked, such that old_s * e = old_r (mod modulus) holds after
    every step. `e` and `modulus` have to be coprime, otherwise the result is meaningless. That is not checked here.

    Args:
        e: The number to invert.
        modulus: The modulus of the residue ring.

    Returns:
        d in range [0, modulus) such that e * d = 1 (mod modulus).
    """
    old_r, r = modulus, e
    old_s, s = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
    if old_s < 0:
        old_s += modulus
    return old_s
