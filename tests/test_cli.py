import re

import pytest
from typer.testing import CliRunner

from tidycheck.cli import app

runner = CliRunner()


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


@pytest.fixture
def fake_perltidy(monkeypatch, formatter):
    """Replace the perltidy executable with the stand-in formatter."""
    executables = []

    def make(executable):
        executables.append(executable)
        return formatter

    monkeypatch.setattr("tidycheck.cli.PerlTidy", make)
    return executables


def test_cli_reports_tap(perl_project, fake_perltidy):
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "1..2" in result.stdout
    assert "ok 1 - 'a.pm'" in result.stdout
    assert "not ok 2 - 'b.pm'" in result.stdout
    assert "blib" not in result.stdout
    assert fake_perltidy == ["perltidy"]


def test_cli_all_tidy(perl_project, fake_perltidy):
    (perl_project / "b.pm").write_text("package B;\n\n1;\n")
    result = runner.invoke(app, ["."])
    assert result.exit_code == 0


def test_cli_exclude_prefix(perl_project, fake_perltidy):
    """Test that an explicit exclude replaces the blib/ default."""
    result = runner.invoke(app, [".", "--exclude", "b"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1..1", "ok 1 - 'a.pm'"]


def test_cli_exclude_regex_and_glob(perl_project, fake_perltidy):
    result = runner.invoke(app, [".", "-r", r"^b\.", "-g", "blib/"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1..1", "ok 1 - 'a.pm'"]


def test_cli_invalid_regex(perl_project, fake_perltidy):
    result = runner.invoke(app, [".", "--exclude-regex", "("])
    assert result.exit_code == 2


def test_cli_missing_directory(tmp_path, fake_perltidy):
    result = runner.invoke(app, [str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Bail out!" in result.stdout
    assert "does not exist" in strip_ansi(result.output)


def test_cli_skip_all(perl_project, fake_perltidy):
    result = runner.invoke(app, ["--skip-all"])
    assert result.exit_code == 0
    assert result.stdout == "1..0 # SKIP All tests skipped.\n"


def test_cli_no_plan(perl_project, fake_perltidy):
    result = runner.invoke(app, ["--no-plan", "--mute"])
    assert result.exit_code == 1
    tap = [line for line in result.stdout.splitlines() if not line.startswith("#")]
    assert tap == [
        "ok 1 - 'a.pm'",
        "not ok 2 - 'b.pm'",
        "1..2",
    ]
    assert "not tidy" not in result.output


def test_cli_perltidy_options(perl_project, fake_perltidy, formatter):
    result = runner.invoke(
        app, [".", "--perltidy", "/opt/bin/perltidy", "--perltidyrc", "xt/rc"]
    )
    assert result.exit_code == 1
    assert fake_perltidy == ["/opt/bin/perltidy"]
    assert {str(rc) for _, rc in formatter.calls} == {"xt/rc"}
