# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pathlib

import pytest

from bigrsa import __main__ as cli
from bigrsa import rsa

standard_payload = "The quick brown fox!"


@pytest.fixture
def key_files(tmp_path, small_key_pair) -> tuple[pathlib.Path, pathlib.Path]:
    priv, pub = small_key_pair
    priv.save(tmp_path / "key")
    pub.save(tmp_path / "key.pub")
    return tmp_path / "key", tmp_path / "key.pub"


def test_generate(tmp_path, capsys):
    dest = tmp_path / "mykey"
    cli.main(["generate", "-b", "128", "-t", "2", "-f", str(dest)])
    priv = rsa.RSAPrivateKey.load(dest)
    pub = rsa.RSAPublicKey.load(tmp_path / "mykey.pub")
    assert priv.public_key() == pub
    assert "Key pair generated!" in capsys.readouterr().out


def test_generate_quiet(tmp_path, capsys):
    cli.main(["-q", "generate", "-b", "128", "-t", "2", "-f", str(tmp_path / "mykey")])
    assert capsys.readouterr().out == ""


def test_generate_refuses_overwrite(tmp_path, mocker, capsys):
    dest = tmp_path / "mykey"
    dest.write_text("precious", encoding="utf-8")
    gen = mocker.patch("bigrsa.rsa.generate_key_pair")
    with pytest.raises(SystemExit) as exc:
        cli.main(["generate", "-b", "128", "-f", str(dest)])
    assert exc.value.code == 1
    gen.assert_not_called()
    assert dest.read_text(encoding="utf-8") == "precious"
    assert "already exists" in capsys.readouterr().err


def test_generate_overwrite(tmp_path):
    dest = tmp_path / "mykey"
    dest.write_text("precious", encoding="utf-8")
    cli.main(["-q", "generate", "-b", "128", "-t", "2", "-f", str(dest), "-o"])
    rsa.RSAPrivateKey.load(dest)


def test_generate_default_name(tmp_path, monkeypatch, mocker):
    monkeypatch.chdir(tmp_path)
    mocker.patch("bigrsa.__main__.default_key_name", return_value="19-10-2026T9:5")
    cli.main(["-q", "generate", "-b", "128", "-t", "2"])
    assert (tmp_path / "19-10-2026T9:5").is_file()
    assert (tmp_path / "19-10-2026T9:5.pub").is_file()


@pytest.mark.parametrize("args", [["generate", "-b", "100"], ["generate", "-b", "abc"], ["generate", "-t", "1"],
                                  ["benchmark", "-b", "8196"], []])
def test_invalid_arguments(args):
    with pytest.raises(SystemExit) as exc:
        cli.main(args)
    assert exc.value.code == 2


def test_encrypt_decrypt(key_files, tmp_path, capsys):
    priv_file, pub_file = key_files
    cli.main(["-q", "encrypt", str(pub_file), standard_payload])
    cipher = capsys.readouterr().out.strip()
    int(cipher, 16)
    cli.main(["-q", "decrypt", str(priv_file), cipher])
    assert capsys.readouterr().out.strip() == standard_payload


def test_encrypt_decrypt_files(key_files, tmp_path):
    priv_file, pub_file = key_files
    (tmp_path / "message.txt").write_text(standard_payload, encoding="utf-8")
    cli.main(["-q", "encrypt", "-F", "-f", str(tmp_path / "cipher"), str(pub_file), str(tmp_path / "message.txt")])
    cli.main(["-q", "decrypt", "-F", "-f", str(tmp_path / "clear"), str(priv_file), str(tmp_path / "cipher")])
    assert (tmp_path / "clear").read_text(encoding="utf-8") == standard_payload


def test_encrypt_matches_library(key_files, small_key_pair, capsys):
    _, pub = small_key_pair
    cli.main(["-q", "encrypt", str(key_files[1]), "Hi"])
    cipher = int(capsys.readouterr().out.strip(), 16)
    assert cipher == rsa.encrypt(rsa.bytes_to_integer(b"Hi"), pub)


def test_encrypt_with_private_key_file(key_files, capsys):
    priv_file, _ = key_files
    with pytest.raises(SystemExit) as exc:
        cli.main(["encrypt", str(priv_file), standard_payload])
    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_decrypt_invalid_cipher(key_files, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["decrypt", str(key_files[0]), "not-hex"])
    assert exc.value.code == 1
    assert "Unable to parse cipher" in capsys.readouterr().err


def test_missing_key_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["encrypt", str(tmp_path / "absent.pub"), standard_payload])
    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_benchmark(mocker, tmp_path, capsys):
    mocker.patch("bigrsa.benchmark.time_key_generation", return_value=7.0)
    cli.main(["-q", "benchmark", "-b", "128", "256", "-t", "2", "4", "-f", str(tmp_path / "results.txt")])
    out = capsys.readouterr().out
    assert "===Results===" in out
    assert "\t4 Threads: 7 ms" in out
    assert (tmp_path / "results.txt").read_text(encoding="utf-8").startswith("===Results===")


def test_benchmark_default_file(mocker, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    mocker.patch("bigrsa.benchmark.time_key_generation", return_value=7.0)
    cli.main(["-q", "benchmark", "-b", "128", "-t", "2", "-f"])
    assert (tmp_path / "bm.txt").is_file()
