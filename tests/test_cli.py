"""Tests for the custom-indices command line."""

import io
import logging
from pathlib import Path

import pytest

from indices.cli import main

EXAMPLES = Path(__file__).parent.parent / "examples"

SCENARIO = "R|A|S\nR|B|S\nR|X|+|A|B\nQ|A|10\nQ|B|5\n"


@pytest.fixture
def stdin(monkeypatch):
    def feed(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return feed


class TestMain:
    def test_end_to_end_stdin(self, stdin, capsys):
        stdin("R|A|S\nR|B|S\nR|X|+|A|B\nQ|A|10\nQ|B|5\n")
        assert main([]) == 0
        assert capsys.readouterr().out == "X: 15.00\n"

    def test_input_file(self, tmp_path, capsys):
        path = tmp_path / "quotes.txt"
        path.write_text("R|A|S\nR|B|S\nR|X|+|A|B\nR|Y|-|A|B\nQ|A|3\nQ|B|2\n")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == "X: 5.00\nY: 1.00\n"

    def test_example_with_settings(self, capsys):
        code = main([str(EXAMPLES / "basket.txt"), "--config", str(EXAMPLES / "settings.yaml")])
        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            "SPREAD: 0.1825",
            "BASKET: 2.3525",
            "BASKET2: 2.5350",
        ]

    def test_unknown_operation_prints_no_report(self, stdin, capsys):
        stdin("R|A|S\nR|B|S\nR|X|+|A|B\nR|Z|*|A|B\nQ|A|1\nQ|B|1\n")
        assert main([]) == 1
        out = capsys.readouterr().out
        assert out == "line 4: unknown operation: '*'\n"

    def test_unknown_name(self, stdin, capsys):
        stdin("R|A|S\nR|X|+|A|Ghost\n")
        assert main(["-"]) == 1
        assert "not found: 'Ghost'" in capsys.readouterr().out

    def test_unset_source(self, stdin, capsys):
        stdin("R|A|S\nR|B|S\nR|X|+|A|B\nQ|A|1\n")
        assert main([]) == 1
        assert capsys.readouterr().out == "value not set: 'B'\n"

    def test_missing_input_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert "cannot read" in capsys.readouterr().out

    def test_bad_config(self, tmp_path, stdin, capsys):
        path = tmp_path / "settings.yaml"
        path.write_text("precision: lots\n")
        stdin("R|A|S\n")
        assert main(["--config", str(path)]) == 1
        assert "invalid config" in capsys.readouterr().out

    def test_verbose_logs_to_stderr(self, stdin, capsys):
        stdin(SCENARIO)
        assert main([]) == 0
        quiet = capsys.readouterr()
        assert quiet.out == "X: 15.00\n"
        assert "DEBUG" not in quiet.err

        stdin(SCENARIO)
        assert main(["-v"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "X: 15.00\n"
        assert "DEBUG indices.cell: computed X = 15.0" in captured.err
        assert "DEBUG indices.cli: evaluated 1 indices" in captured.err
        assert logging.getLogger("indices").handlers == []

    def test_undecodable_input(self, tmp_path, capsys):
        path = tmp_path / "quotes.txt"
        path.write_bytes(b"R|A|S\nR|B|S\nR|X|+|A|B\nQ|A|1\xff\nQ|B|2\n")
        assert main([str(path)]) == 1
        out = capsys.readouterr().out
        assert out.startswith(f"cannot decode {path}: ")
        assert "X:" not in out

    def test_os_error_without_strerror(self, monkeypatch, capsys):
        def fail(source):
            raise OSError("device detached")

        monkeypatch.setattr("indices.cli._read_lines", fail)
        assert main([]) == 1
        assert capsys.readouterr().out == "cannot read -: device detached\n"
