import pytest

from tidycheck.tidy import FormatResult


class StripTrailingWhitespace:
    """Stand-in for perltidy: tidy code has no trailing whitespace."""

    def __init__(self, errors=""):
        self.errors = errors
        self.calls = []

    def format(self, source, perltidyrc=None):
        self.calls.append((source, perltidyrc))
        tidied = "\n".join(line.rstrip(" \t") for line in source.split("\n"))
        return FormatResult(tidied, self.errors)


class FixedOutput:
    """Formatter that always returns the same text."""

    def __init__(self, tidied, errors=""):
        self.result = FormatResult(tidied, errors)

    def format(self, source, perltidyrc=None):
        return self.result


@pytest.fixture
def formatter():
    return StripTrailingWhitespace()


@pytest.fixture
def fixed_output():
    return FixedOutput


@pytest.fixture
def perl_project(tmp_path, monkeypatch):
    """A tidy a.pm, an untidy b.pm and a staged copy under blib/."""
    (tmp_path / "a.pm").write_text("package A;\n\n1;\n")
    (tmp_path / "b.pm").write_text("package B;   \n\n1;\n")
    (tmp_path / "blib").mkdir()
    (tmp_path / "blib" / "c.pm").write_text("package C;   \n")
    monkeypatch.chdir(tmp_path)
    return tmp_path
