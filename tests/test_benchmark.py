# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from bigrsa import benchmark
from bigrsa import config


def test_benchmark_combinations(mocker):
    timer = mocker.patch("bigrsa.benchmark.time_key_generation", return_value=10.0)
    results = benchmark.benchmark_key_generation([128, 256], [2, 4, 8], repeats=3)
    assert set(results) == {(b, t) for b in (128, 256) for t in (2, 4, 8)}
    assert all(avg == 10.0 for avg in results.values())
    assert timer.call_count == 18


def test_benchmark_averages(mocker):
    mocker.patch("bigrsa.benchmark.time_key_generation", side_effect=[10.0, 30.0, 20.0, 40.0])
    results = benchmark.benchmark_key_generation([128], [2, 4], repeats=2)
    assert results == {(128, 2): 15.0, (128, 4): 35.0}


def test_benchmark_progress(mocker):
    mocker.patch("bigrsa.benchmark.time_key_generation", return_value=5.0)
    lines = []
    benchmark.benchmark_key_generation([128], [2], repeats=2, prntr=lines.append)
    assert lines[0] == "2 repeats left"
    assert "Created 128 bit key pair in 5 ms, with 2 threads" in lines
    assert len(lines) == 4


@pytest.mark.parametrize("bits,threads,repeats", [([100], [2], 1), ([128], [1], 1), ([128], [2], 0)])
def test_benchmark_validates(mocker, bits, threads, repeats):
    timer = mocker.patch("bigrsa.benchmark.time_key_generation")
    with pytest.raises(config.ParameterError):
        benchmark.benchmark_key_generation(bits, threads, repeats)
    timer.assert_not_called()


def test_time_key_generation(mocker):
    gen = mocker.patch("bigrsa.rsa.generate_key_pair")
    elapsed = benchmark.time_key_generation(256, 4)
    gen.assert_called_once_with(256, 4)
    assert elapsed >= 0


def test_time_key_generation_real():
    assert benchmark.time_key_generation(128, 2) > 0


def test_format_and_save(tmp_path):
    results = {(256, 2): 12.4, (128, 4): 3.0, (128, 2): 5.6}
    text = benchmark.format_results(results)
    assert text.splitlines() == [
        "===Results===",
        "",
        "128 bits:",
        "\t2 Threads: 6 ms",
        "\t4 Threads: 3 ms",
        "",
        "256 bits:",
        "\t2 Threads: 12 ms",
    ]
    benchmark.save_results(results, tmp_path / "bm.txt")
    with open(tmp_path / "bm.txt", encoding="utf-8") as f:
        assert f.read() == text + "\n"
