"""RSA key generation from scratch on arbitrary precision integers.

Provides concurrent prime search backed by a small prime sieve and Miller-Rabin testing, assembly of RSA key pairs
from the found primes, a plain text key file format and raw RSA encryption and decryption.

Typical usage example:

    priv, pub = generate_key_pair(1024, 4)
    c = encrypt(1234, pub)
    m = decrypt(c, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from bigrsa.config import is_valid_bit_size
from bigrsa.config import ParameterError
from bigrsa.keygen import generate_p_q
from bigrsa.keygen import is_prime
from bigrsa.keygen import Sieve
from bigrsa.numtheory import find_inverse
from bigrsa.numtheory import gcd
from bigrsa.numtheory import pow_mod
from bigrsa.rsa import decrypt
from bigrsa.rsa import encrypt
from bigrsa.rsa import generate_key_pair
from bigrsa.rsa import KeyFormatError
from bigrsa.rsa import RSAPrivateKey
from bigrsa.rsa import RSAPublicKey

__version__ = "0.1.0"
__all__ = [
    "RSAPrivateKey",
    "RSAPublicKey",
    "KeyFormatError",
    "ParameterError",
    "Sieve",
    "is_prime",
    "is_valid_bit_size",
    "generate_p_q",
    "generate_key_pair",
    "encrypt",
    "decrypt",
    "pow_mod",
    "gcd",
    "find_inverse",
]
