"""Tests for the command-line front end."""
import io
import logging
import sys

import pytest

from lupivot.cli import main, prompt_size
from lupivot.errors import BadInput
from lupivot.examples import three_by_three_example


@pytest.fixture
def stdin(monkeypatch):
    def _set(text):
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    return _set


class TestPromptSize:

    def test_reprompts_until_valid(self):
        prompt = io.StringIO()
        n = prompt_size(io.StringIO("abc\n0\n3\n"), prompt, min_size=1, max_size=10)
        assert n == 3
        assert prompt.getvalue().count("n = ") == 3
        assert "size must be between 1 and 10" in prompt.getvalue()

    def test_end_of_input(self):
        with pytest.raises(BadInput):
            prompt_size(io.StringIO(""), io.StringIO())


class TestMain:

    def test_example(self, capsys):
        assert main(["--example", "3x3"]) == 0
        out = capsys.readouterr().out
        assert "Matrix L" in out
        assert "Swap vector 1 2 3" in out
        assert "swaps: 0" in out

    def test_failed_decomposition_prints_no_factors(self, capsys):
        assert main(["--example", "singular"]) == 1
        captured = capsys.readouterr()
        assert "Matrix L" not in captured.out
        assert "linearly dependent" in captured.err

    def test_stdin_with_size_prompt(self, capsys, stdin):
        stdin("2\n4 3\n6 3\n")
        assert main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("n = ")
        assert "Matrix U" in out

    def test_input_file(self, capsys, tmp_path):
        path = tmp_path / "matrix.txt"
        path.write_text("10 1000\n1 1\n", encoding="utf-8")
        assert main(["-n", "2", "--input", str(path), "--check", "--combined"]) == 0
        out = capsys.readouterr().out
        assert "Swap vector 2 1" in out
        assert "PASS" in out

    def test_bad_input(self, capsys, stdin):
        stdin("1 2 three 4")
        assert main(["-n", "2"]) == 1
        assert "bad input at (2,1)" in capsys.readouterr().err

    def test_invalid_dimension(self, capsys, stdin):
        stdin("")
        assert main(["--min-size", "0", "-n", "0"]) == 1
        assert "bad matrix dimensions" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [["-n", "0"], ["-n", "100000", "--max-size", "10"]])
    def test_size_outside_range(self, capsys, stdin, argv):
        stdin("")
        assert main(argv) == 1
        captured = capsys.readouterr()
        assert "size must be between" in captured.err
        assert "Matrix L" not in captured.out

    def test_size_rejected_with_example(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--example", "3x3", "-n", "5"])
        assert excinfo.value.code == 2
        assert "cannot be combined" in capsys.readouterr().err

    def test_json_and_excel(self, capsys, tmp_path, monkeypatch):
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
        config_path = tmp_path / "case.json"
        three_by_three_example().save(config_path)
        report = tmp_path / "out" / "lu.xlsx"
        assert main(["--json", str(config_path), "--excel", str(report), "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "Decomposing 3x3 matrix (3x3 walkthrough)" in out
        assert report.exists()

    def test_tolerance_option(self, capsys):
        assert main(["--example", "3x3", "--tolerance", "5"]) == 1
        assert "linearly dependent" in capsys.readouterr().err
