"""Provides the RSA key types, key pair assembly and raw RSA encryption and decryption.

Facilitates "textbook" RSA only: messages are integers, nothing is padded. Keys are stored in a plain text format
of hex encoded integer parts separated by a marker line. Public keys can additionally be exchanged as PKCS#1 PEM
files for use with other RSA tooling.

Typical usage example:

    priv, pub = generate_key_pair(1024, 4)
    pub.save(pathlib.Path("key.pub"))
    c = encrypt(1234, pub)
    m = decrypt(c, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import pathlib
import re
import warnings

from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1_modules import rfc8017

from bigrsa import config
from bigrsa import keygen
from bigrsa.numtheory import pow_mod

PEM_PKCS1_PUB = ("-----BEGIN RSA PUBLIC KEY-----", "-----END RSA PUBLIC KEY-----")

_HEX_PART = re.compile(r"[0-9a-fA-F]+")


class KeyFormatError(ValueError):
    """Raised when serialized key material cannot be parsed."""


class RSAKey:
    """Serialization capability shared by both key types.

    Holds no key material of its own. Subclasses name their integer parts in `_parts`, in the order they are
    written to disk, and take them in the same order in their constructor.
    """

    _parts: tuple[str, ...] = ()

    def get_parts(self) -> tuple[int, ...]:
        """The integer parts of the key in their serialization order."""
        return tuple(getattr(self, name) for name in self._parts)

    def serialize(self) -> str:
        """Render the key as hex encoded parts joined by the separator line."""
        return config.KEY_PART_SEPARATOR.join(into_hex(part) for part in self.get_parts())

    @classmethod
    def deserialize(cls, data: str):
        """Parse a key from its serialized text.

        Args:
            data: Text as produced by `serialize`.

        Returns:
            The parsed key.

        Raises:
            KeyFormatError: If the number of parts is off or a part is not hexadecimal.
        """
        chunks = data.split(config.KEY_PART_SEPARATOR)
        if len(chunks) != len(cls._parts):
            raise KeyFormatError(f"{cls.__name__} needs {len(cls._parts)} parts, found {len(chunks)}.")
        values = []
        for name, chunk in zip(cls._parts, chunks):
            chunk = chunk.strip()
            if not _HEX_PART.fullmatch(chunk):
                raise KeyFormatError(f"Part {name} of {cls.__name__} is not valid hexadecimal.")
            values.append(int(chunk, 16))
        return cls(*values)

    def save(self, file: pathlib.Path) -> None:
        """Write the serialized key to `file` as UTF-8 text."""
        with open(file, "w", encoding="utf-8") as f:
            f.write(self.serialize())

    @classmethod
    def load(cls, file: pathlib.Path):
        """Read a key written by `save`.

        Raises:
            KeyFormatError: If the file content is not a valid key of this type.
        """
        with open(file, "r", encoding="utf-8") as f:
            return cls.deserialize(f.read())

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.get_parts() == other.get_parts()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.get_parts()))

    def __repr__(self) -> str:
        # Only bit lengths, the exponents themselves stay out of logs and tracebacks.
        sizes = ", ".join(f"{name}=<{part.bit_length()} bits>" for name, part in zip(self._parts, self.get_parts()))
        return f"{type(self).__name__}({sizes})"


class RSAPublicKey(RSAKey):
    """An RSA Public Key, consisting of the public exponent and the modulus.

    Attributes:
        e: The public exponent.
        n: The modulus.
    """

    _parts = ("e", "n")

    def __init__(self, e: int, n: int) -> None:
        self.e = e
        self.n = n

    def encrypt(self, message: int) -> int:
        """Encrypt the integer `message`, see `encrypt`."""
        return encrypt(message, self)

    def export_pkcs1(self, file: pathlib.Path) -> None:
        """Export the public key as a PKCS#1 PEM file.

        Args:
            file: The file to export the public key to.
        """
        keydata = rfc8017.RSAPublicKey()
        keydata["modulus"] = self.n
        keydata["publicExponent"] = self.e
        write_pem(file, PEM_PKCS1_PUB, encoder.encode(keydata))

    @classmethod
    def import_pkcs1(cls, file: pathlib.Path) -> "RSAPublicKey":
        """Import a public key from a PKCS#1 PEM file.

        Args:
            file: The file to import the public key from.

        Returns:
            An RSAPublicKey with the imported exponent and modulus.
        """
        payload = read_pem(file, PEM_PKCS1_PUB)
        keydata, _ = decoder.decode(payload, asn1Spec=rfc8017.RSAPublicKey())
        pykeyd = localize.encode(keydata)
        return cls(pykeyd["publicExponent"], pykeyd["modulus"])


class RSAPrivateKey(RSAKey):
    """An RSA Private Key.

    Carries the public exponent next to the private one so a private key file describes the whole key pair. The
    primes the key was built from are not retained.

    Attributes:
        d: The private exponent.
        n: The modulus.
        e: The public exponent.
    """

    _parts = ("d", "n", "e")

    def __init__(self, d: int, n: int, e: int) -> None:
        self.d = d
        self.n = n
        self.e = e

    def decrypt(self, cipher: int) -> int:
        """Decrypt the integer `cipher`, see `decrypt`."""
        return decrypt(cipher, self)

    def public_key(self) -> RSAPublicKey:
        """The public half of this key pair."""
        return RSAPublicKey(self.e, self.n)


def generate_key_pair(bits: int, n_threads: int = config.DEFAULT_THREADS) -> tuple[RSAPrivateKey, RSAPublicKey]:
    """Generates an RSA key pair.

    Both primes are searched concurrently with `bits` bits each, so the modulus ends up about twice as long as
    `bits`. The public exponent is random rather than a fixed 65537.

    Args:
        bits: Bit length of each prime. A power of two in range [128, 8192].
        n_threads: Number of workers racing for primes. At least 2.

    Returns:
        A tuple of (private key, public key).

    Raises:
        ParameterError: If `bits` or `n_threads` are out of range.
    """
    config.check_bit_size(bits)
    config.check_thread_count(n_threads)
    p, q = keygen.generate_p_q(bits, n_threads)
    n = p * q
    n_phi = keygen.calculate_n_phi(p, q)
    del p, q
    e = keygen.generate_e(n_phi)
    d = keygen.generate_d(e, n_phi)
    return RSAPrivateKey(d, n, e), RSAPublicKey(e, n)


def _check_representative(value: int, mod: int) -> None:
    if value < 0:
        raise ValueError("Message representative must be non-negative.")
    if value >= mod:
        warnings.warn("Message representative is not smaller than the modulus and will not survive the round trip.",
                      RuntimeWarning)


def encrypt(message: int, public_key: RSAPublicKey) -> int:
    """Raw RSA encryption, message**e mod n.

    Args:
        message: The int-marshalled message to encrypt.
        public_key: The recipient's public key.

    Returns:
        The cipher integer.

    Raises:
        NotImplementedError: If a private key is passed.
        ValueError: If the message is negative.
    """
    if not isinstance(public_key, RSAPublicKey):
        raise NotImplementedError("Encryption is only supported with a public key.")
    _check_representative(message, public_key.n)
    return pow_mod(message, public_key.e, public_key.n)


def decrypt(cipher: int, private_key: RSAPrivateKey) -> int:
    """Raw RSA decryption, cipher**d mod n.

    Args:
        cipher: The cipher integer.
        private_key: The private key matching the public key used to encrypt.

    Returns:
        The int-marshalled message.

    Raises:
        NotImplementedError: If a public key is passed.
        ValueError: If the cipher is negative.
    """
    if not isinstance(private_key, RSAPrivateKey):
        raise NotImplementedError("Decryption is only supported with a private key.")
    _check_representative(cipher, private_key.n)
    return pow_mod(cipher, private_key.d, private_key.n)


def into_hex(n: int) -> str:
    """Lower-case hex of `n`, two digits per byte with the most significant byte first."""
    return integer_to_bytes(n).hex()


def read_pem(file: pathlib.Path, pem_type: tuple[str, str]) -> bytes:
    """Reads a PEM encoded file.

    Args:
        file: The file to read.
        pem_type: The header and footer lines to accept.

    Returns:
        The decoded PEM payload.

    Raises:
        IOError: If the file has invalid PEM encoding.
    """
    header, footer = pem_type
    with open(file, "r", encoding="ascii") as f:
        headline = f.readline().strip()
        if headline != header:
            raise IOError(f"PEM Headline {headline} does not match {header}")
        parcel = []
        while True:
            line = f.readline().strip()
            if not line:
                raise IOError(f"PEM File does not contain footer: {footer}")
            if line == footer:
                break
            parcel.append(line)
    return base64.b64decode("".join(parcel))


def write_pem(file: pathlib.Path, pem_type: tuple[str, str], data: bytes) -> None:
    """Writes `data` as a PEM encoded file with 64 character lines."""
    header, footer = pem_type
    payload = base64.b64encode(data).decode()
    with open(file, "w", encoding="ascii") as f:
        f.write(header + "\n")
        res = "\n".join(payload[i:i + 64] for i in range(0, len(payload), 64))
        res += "\n" if res else ""
        f.write(res)
        f.write(footer + "\n")


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to a non-negative integer, big-endian.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts a non-negative integer to bytes, big-endian.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. The shortest length holding `msg`, at least one byte, if not
            provided.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    if fixedlen is None:
        fixedlen = max(1, (msg.bit_length() + 7) // 8)
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)
