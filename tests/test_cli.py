# tests/test_cli.py
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

import toutf8
from toutf8.arbiter import DetectionResult
from toutf8.cli import main

_NIHAO_GBK = bytes([0xC4, 0xE3, 0xBA, 0xC3])


def test_cli_converts_with_explicit_charset(tmp_path: Path):
    src = tmp_path / "in.txt"
    out = tmp_path / "out.txt"
    src.write_bytes(_NIHAO_GBK)
    assert main(["-f", "gbk", str(src), "-o", str(out)]) == 0
    assert out.read_bytes() == "你好".encode()


def test_cli_converts_with_detection(tmp_path: Path):
    src = tmp_path / "in.txt"
    out = tmp_path / "out.txt"
    data = ("Héllo wörld, ça va très bien. Grüße aus München! " * 5).encode()
    src.write_bytes(data)
    assert main([str(src), "--output", str(out)]) == 0
    assert out.read_bytes() == data


def test_cli_detect_reports_best(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    monkeypatch.setattr(
        toutf8,
        "detect_all",
        lambda data: [
            DetectionResult("GB18030", "zh", 99),
            DetectionResult("Big5", "zh", 30),
        ],
    )
    src = tmp_path / "in.txt"
    src.write_bytes(_NIHAO_GBK)
    assert main(["--detect", str(src)]) == 0
    assert capsys.readouterr().out == f"{src}: GB18030 with confidence 99\n"


def test_cli_detect_all_minimal(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    monkeypatch.setattr(
        toutf8,
        "detect_all",
        lambda data: [
            DetectionResult("GB18030", "zh", 99),
            DetectionResult("Big5", "zh", 30),
        ],
    )
    src = tmp_path / "in.txt"
    src.write_bytes(_NIHAO_GBK)
    assert main(["--detect", "--all", "--minimal", str(src)]) == 0
    assert capsys.readouterr().out == "GB18030\nBig5\n"


def test_cli_detect_no_result(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    monkeypatch.setattr(toutf8, "detect_all", lambda data: [])
    src = tmp_path / "in.txt"
    src.write_bytes(b"")
    assert main(["--detect", str(src)]) == 0
    assert capsys.readouterr().out == f"{src}: no result\n"


def test_cli_unknown_charset(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    src = tmp_path / "in.txt"
    src.write_bytes(b"abc")
    assert main(["-f", "x-no-such-charset", str(src)]) == 1
    assert "x-no-such-charset" in capsys.readouterr().err


def test_cli_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_cli_output_needs_single_input(tmp_path: Path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_bytes(b"a")
    b.write_bytes(b"b")
    with pytest.raises(SystemExit) as exc_info:
        main([str(a), str(b), "-o", str(tmp_path / "out.txt")])
    assert exc_info.value.code == 2


def test_cli_stdin():
    result = subprocess.run(
        [sys.executable, "-m", "toutf8.cli", "-f", "windows-1251"],
        input="Привет".encode("cp1251"),
        capture_output=True,
    )
    assert result.returncode == 0
    assert result.stdout == "Привет".encode()


def test_cli_version():
    result = subprocess.run(
        [sys.executable, "-m", "toutf8.cli", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == f"toutf8 {toutf8.__version__}"
