"""
Tests for CLI Commands
======================
Tests for wordgen CLI interface in wordgen/cli.py.
"""

import pytest
import sys
import subprocess
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordgen.cli import main
from wordgen.persistence import load_model


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "words.tsv"
    path.write_text("hello\t3\n", encoding="utf-8")
    return path


@pytest.fixture
def trained(tmp_path, wordlist):
    """Model that can only ever produce 'hello'."""
    model_path = tmp_path / "hello.model"
    assert main(["-q", "learn", "-d", "3", "-i", str(wordlist), "-t", str(model_path)]) == 0
    return model_path


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = subprocess.run(
            [sys.executable, "-m", "wordgen", "--version"],
            capture_output=True,
            text=True,
            cwd=str(ROOT),
        )
        assert result.returncode == 0
        assert "wordgen" in result.stdout.lower()

    def test_help_flag(self):
        """Test --help flag."""
        result = subprocess.run(
            [sys.executable, "-m", "wordgen", "--help"],
            capture_output=True,
            text=True,
            cwd=str(ROOT),
        )
        assert result.returncode == 0
        assert "generate" in result.stdout.lower()
        assert "learn" in result.stdout.lower()

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestCLILearn:
    """Tests for learn command."""

    def test_learn_writes_model(self, tmp_path, wordlist, capsys):
        model_path = tmp_path / "out.model"
        assert main(["learn", "-d", "2", "-i", str(wordlist), "-t", str(model_path)]) == 0

        model = load_model(model_path)
        assert model.depth == 2
        assert "OK:" in capsys.readouterr().out

    def test_learn_from_text_and_wordlists(self, tmp_path, wordlist):
        text = tmp_path / "book.txt"
        text.write_text("Hello there, world!\n", encoding="utf-8")
        other = tmp_path / "more.tsv"
        other.write_text("help\n", encoding="utf-8")
        model_path = tmp_path / "out.model"

        code = main(["-q", "l", "-d", "1", "-i", str(wordlist), str(other),
                     "-f", str(text), "-t", str(model_path)])

        assert code == 0
        stats = load_model(model_path).stats()
        assert stats.depth == 1
        assert stats.alphabet == len(set("hellotherworldpH"))

    def test_learn_requires_input(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["learn", "-d", "2", "-t", str(tmp_path / "x.model")])
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("depth", ["0", "two"])
    def test_learn_bad_depth(self, tmp_path, wordlist, depth):
        with pytest.raises(SystemExit) as exc_info:
            main(["learn", "-d", depth, "-i", str(wordlist), "-t", str(tmp_path / "x.model")])
        assert exc_info.value.code == 2

    def test_learn_missing_input(self, tmp_path, capsys):
        code = main(["learn", "-i", str(tmp_path / "missing.tsv"), "-t", str(tmp_path / "x.model")])
        assert code == 1
        assert "Error:" in capsys.readouterr().err
        assert not (tmp_path / "x.model").exists()

    def test_learn_malformed_wordlist(self, tmp_path, capsys):
        bad = tmp_path / "bad.tsv"
        bad.write_text("word\tmany\n", encoding="utf-8")
        code = main(["learn", "-i", str(bad), "-t", str(tmp_path / "x.model")])
        assert code == 1
        assert "bad.tsv:1" in capsys.readouterr().err


class TestCLIGenerate:
    """Tests for generate command."""

    def test_generate_count(self, trained, capsys):
        assert main(["generate", "-n", "3", "-t", str(trained)]) == 0
        assert capsys.readouterr().out.splitlines() == ["hello"] * 3

    def test_generate_quiet_still_prints_words(self, trained, capsys):
        assert main(["-q", "g", "-t", str(trained)]) == 0
        assert capsys.readouterr().out.splitlines() == ["hello"]

    def test_seed_reproducible(self, tmp_path, capsys):
        words = tmp_path / "words.txt"
        words.write_text("alpha beta gamma delta epsilon zeta eta theta\n", encoding="utf-8")
        model_path = tmp_path / "greek.model"
        assert main(["-q", "learn", "-d", "1", "-f", str(words), "-t", str(model_path)]) == 0

        main(["gen", "-n", "20", "-s", "7", "-t", str(model_path)])
        first = capsys.readouterr().out
        main(["gen", "-n", "20", "-s", "7", "-t", str(model_path)])
        second = capsys.readouterr().out

        assert first == second
        assert len(first.splitlines()) == 20

    def test_generate_missing_model(self, tmp_path, capsys):
        assert main(["generate", "-t", str(tmp_path / "none.model")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_generate_corrupt_model(self, tmp_path, capsys):
        bad = tmp_path / "bad.model"
        bad.write_bytes(b"garbage")
        assert main(["generate", "-t", str(bad)]) == 1
        assert "cannot decode model" in capsys.readouterr().err

    def test_generate_bad_seed(self, trained):
        with pytest.raises(SystemExit) as exc_info:
            main(["generate", "-s", "abc", "-t", str(trained)])
        assert exc_info.value.code == 2


class TestCLIInfo:
    """Tests for info command."""

    def test_info(self, trained, capsys):
        assert main(["info", "-t", str(trained)]) == 0
        out = capsys.readouterr().out
        assert "Depth" in out
        assert "Contexts" in out
        assert "8" in out
