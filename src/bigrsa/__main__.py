"""The Command Line Interface for key generation, encryption, decryption and benchmarking.

A thin layer over the library: it only parses arguments, maps text to integers and back, and reports results.

Typical usage example:

    bigrsa generate -b 1024 -f mykey
    bigrsa encrypt mykey.pub "Hi there!"
    OR
    python -m bigrsa benchmark -b 512 1024 -t 2 4
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import datetime
import pathlib
import sys
import typing

import bigrsa
from bigrsa import benchmark
from bigrsa import config
from bigrsa import rsa


class HelpData(typing.NamedTuple):
    description: str
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "generate": HelpData("Key pair generation utility."),
    "encrypt": HelpData("Encryption utility, uses a public key."),
    "decrypt": HelpData("Decryption utility, uses a private key."),
    "benchmark": HelpData("Key generation benchmark."),
    "bits": HelpData(f"Bit length of each prime, power of two in range "
                     f"[{config.MIN_BIT_SIZE}, {config.MAX_BIT_SIZE}].", config.DEFAULT_BIT_SIZE),
    "threads": HelpData("Number of worker threads racing for primes, at least 2.", config.DEFAULT_THREADS),
    "key_file": HelpData("Location of the key file."),
    "message": HelpData("Message text, or path to a file containing it with --from-file."),
    "cipher": HelpData("Hex cipher, or path to a file containing it with --from-file."),
    "from_file": HelpData("Read the message or cipher from the given path."),
    "out": HelpData("Save the result to this file instead of printing it."),
    "overwrite": HelpData("Overwrite destination key files if they exist."),
    "repeats": HelpData("How often every combination is timed.", 1),
    "bm_file": HelpData("Save the benchmark results to a file.", config.BENCHMARK_FILE),
}


def bit_size(value: str) -> int:
    """argparse type for key sizes."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: {value}") from None
    if not config.is_valid_bit_size(n):
        raise argparse.ArgumentTypeError(f"Not in range or not power of 2: {n}")
    return n


def thread_count(value: str) -> int:
    """argparse type for worker counts."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number for amount of threads: {value}") from None
    if not config.is_valid_thread_count(n):
        raise argparse.ArgumentTypeError(f"At least 2 threads are required: {n}")
    return n


def default_key_name() -> str:
    """Timestamp based key file name, day-month-yearThour:minute."""
    now = datetime.datetime.now()
    return f"{now.day}-{now.month}-{now.year}T{now.hour}:{now.minute}"


fromp = argparse.ArgumentParser(add_help=False)
fromp.add_argument("--from-file", "-F", action="store_true", help=help_dict["from_file"].description)
outp = argparse.ArgumentParser(add_help=False)
outp.add_argument("--file", "-f", type=pathlib.Path, help=help_dict["out"].description)
corep = argparse.ArgumentParser(prog="bigrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {bigrsa.__version__}")
corep.add_argument("--quiet", "-q", action="store_true", help="Print results only.")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

generate = commands.add_parser("generate", help=help_dict["generate"].description)
generate.add_argument("--bits", "-b", type=bit_size, default=help_dict["bits"].default,
                      help=help_dict["bits"].description)
generate.add_argument("--threads", "-t", type=thread_count, default=help_dict["threads"].default,
                      help=help_dict["threads"].description)
generate.add_argument("--file", "-f", type=pathlib.Path, help="Private key destination, public key gets '.pub'.")
generate.add_argument("--overwrite", "-o", action="store_true", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[fromp, outp], help=help_dict["encrypt"].description)
encrypt.add_argument("key_file", type=pathlib.Path, help=help_dict["key_file"].description)
encrypt.add_argument("message", help=help_dict["message"].description)

decrypt = commands.add_parser("decrypt", parents=[fromp, outp], help=help_dict["decrypt"].description)
decrypt.add_argument("key_file", type=pathlib.Path, help=help_dict["key_file"].description)
decrypt.add_argument("cipher", help=help_dict["cipher"].description)

bench = commands.add_parser("benchmark", help=help_dict["benchmark"].description)
bench.add_argument("--bits", "-b", type=bit_size, nargs="+", default=[help_dict["bits"].default],
                   help=help_dict["bits"].description)
bench.add_argument("--threads", "-t", type=thread_count, nargs="+", default=[help_dict["threads"].default],
                   help=help_dict["threads"].description)
bench.add_argument("--repeats", "-r", type=int, default=help_dict["repeats"].default,
                   help=help_dict["repeats"].description)
bench.add_argument("--file", "-f", type=pathlib.Path, nargs="?", const=pathlib.Path(help_dict["bm_file"].default),
                   help=help_dict["bm_file"].description)


def read_payload(payload: str, from_file: bool) -> str:
    """Return `payload` itself, or the content of the file it names."""
    if from_file:
        with open(payload, "r", encoding="utf-8") as f:
            return f.read()
    return payload


def emit(result: str, file: pathlib.Path | None, label: str, pspr: typing.Callable) -> None:
    if file is None:
        pspr(f"{label}:")
        print(result)
        return
    with open(file, "w", encoding="utf-8") as f:
        f.write(result)
    pspr(f"Stored {label.lower()} to {file}")


def run(args: argparse.Namespace, pspr: typing.Callable) -> int:
    """Execute the parsed subcommand, returning the exit status."""
    match args.subcommand:
        case "generate":
            private_file = args.file if args.file is not None else pathlib.Path(default_key_name())
            public_file = private_file.with_name(private_file.name + ".pub")
            if not args.overwrite and (private_file.exists() or public_file.exists()):
                print("Destination private or public key already exists!", file=sys.stderr)
                return 1
            pspr(f"Generating {args.bits} bit primes with {args.threads} threads...")
            priv, pub = rsa.generate_key_pair(args.bits, args.threads)
            priv.save(private_file)
            pub.save(public_file)
            pspr(f"Key pair generated! Private key: {private_file}, public key: {public_file}")
        case "encrypt":
            pub = rsa.RSAPublicKey.load(args.key_file)
            message = read_payload(args.message, args.from_file)
            cipher = rsa.encrypt(rsa.bytes_to_integer(message.encode("utf-8")), pub)
            emit(rsa.into_hex(cipher), args.file, "Cipher", pspr)
        case "decrypt":
            priv = rsa.RSAPrivateKey.load(args.key_file)
            cipher = read_payload(args.cipher, args.from_file).strip()
            try:
                integer_cipher = int(cipher, 16)
            except ValueError:
                print("Unable to parse cipher to integer.", file=sys.stderr)
                return 1
            clear = rsa.integer_to_bytes(rsa.decrypt(integer_cipher, priv)).lstrip(b"\x00")
            try:
                message = clear.decode("utf-8")
            except UnicodeDecodeError:
                print("Couldn't convert message to string. Original message may have contained invalid utf-8.",
                      file=sys.stderr)
                return 1
            emit(message, args.file, "Message", pspr)
        case "benchmark":
            results = benchmark.benchmark_key_generation(args.bits, args.threads, args.repeats, pspr)
            print(benchmark.format_results(results))
            if args.file is not None:
                benchmark.save_results(results, args.file)
                pspr(f"Stored results to {args.file}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Command line entry point."""
    args = corep.parse_args(argv)

    def pspr(text: str):
        """Print only if not in quiet mode."""
        if not args.quiet:
            print(text)

    try:
        status = run(args, pspr)
    except (ValueError, NotImplementedError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        status = 1
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
