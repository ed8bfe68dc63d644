# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from bigrsa import config


@pytest.mark.parametrize("n", [128, 256, 512, 1024, 2048, 4096, 8192])
def test_valid_bit_sizes(n):
    assert config.is_valid_bit_size(n)
    assert config.check_bit_size(n) == n


@pytest.mark.parametrize("n", [127, 129, 8193, 8196, 16384, 64, 0, -128, 1000, 3072, True, "1024", 1024.0, None])
def test_invalid_bit_sizes(n):
    assert not config.is_valid_bit_size(n)
    with pytest.raises(config.ParameterError):
        config.check_bit_size(n)


@pytest.mark.parametrize("n,expected", [(2, True), (3, True), (8, True), (64, True), (1, False), (0, False),
                                        (-4, False), (True, False), ("4", False)])
def test_thread_counts(n, expected):
    assert config.is_valid_thread_count(n) == expected


def test_check_thread_count():
    assert config.check_thread_count(6) == 6
    with pytest.raises(config.ParameterError, match="At least 2"):
        config.check_thread_count(1)


def test_parameter_error_is_value_error():
    assert issubclass(config.ParameterError, ValueError)


def test_defaults():
    assert config.SIEVE_BOUND == 10000
    assert config.MILLER_RABIN_ROUNDS == 23
    assert config.DEFAULT_THREADS >= 2
    assert config.is_valid_bit_size(config.DEFAULT_BIT_SIZE)
    assert config.KEY_PART_SEPARATOR == "\n=======\n"
