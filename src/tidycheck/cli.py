import re
import typer
from pathlib import Path
from typing import Optional, List
from rich.console import Console

from .reporting import TapReporter
from .rules import Glob, Pattern, Prefix, TidyConfigError
from .runner import run_tests
from .tidy import PerlTidy


def regex_callback(values: Optional[List[str]]) -> Optional[List[str]]:
    """Reject exclusion regexes that don't compile."""
    for value in values or []:
        try:
            re.compile(value)
        except re.error as e:
            raise typer.BadParameter(f"Invalid regular expression {value!r}: {e}")
    return values


app = typer.Typer(
    add_completion=False,  # Disable shell completion for simplicity
)
error_console = Console(stderr=True)


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Top-level directory containing the Perl files to test",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Path prefix to exclude (can be used multiple times)",
    ),
    exclude_regex: Optional[List[str]] = typer.Option(
        None,
        "--exclude-regex",
        "-r",
        help="Regular expression matching any part of paths to exclude",
        callback=regex_callback,
    ),
    exclude_glob: Optional[List[str]] = typer.Option(
        None,
        "--exclude-glob",
        "-g",
        help="Gitignore-style glob of paths to exclude",
    ),
    perltidyrc: Optional[Path] = typer.Option(
        None,
        "--perltidyrc",
        "-p",
        help="perltidyrc to use instead of the usual locations",
    ),
    perltidy: str = typer.Option(
        "perltidy",
        "--perltidy",
        help="perltidy executable to run",
    ),
    mute: bool = typer.Option(False, "--mute", "-m", help="Silence diagnostics"),
    skip_all: bool = typer.Option(False, "--skip-all", help="Skip all tests"),
    no_plan: bool = typer.Option(
        False,
        "--no-plan",
        help="Print the plan after the tests instead of before",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show verbose output",
    ),
) -> None:
    """Test that Perl files are tidy, reporting in TAP."""
    # Without any exclusion option the default (blib/) applies
    rules = None
    if exclude or exclude_regex or exclude_glob:
        rules = [Prefix(value) for value in exclude or []]
        rules.extend(Pattern(re.compile(value)) for value in exclude_regex or [])
        rules.extend(Glob(value) for value in exclude_glob or [])

    reporter = TapReporter()
    try:
        run_tests(
            reporter,
            exclude=rules,
            path=path,
            perltidyrc=perltidyrc,
            mute=mute,
            skip_all=skip_all,
            no_plan=no_plan,
            formatter=PerlTidy(perltidy),
            verbose=verbose,
        )
    except TidyConfigError as e:
        error_console.print(f"[red]Error:[/] {str(e)}")
        raise typer.Exit(1)

    if no_plan:
        reporter.done_testing()

    if not reporter.passed:
        if verbose:
            error_console.print(
                f"[red]Failed[/] {reporter.failed} of {reporter.count} files"
            )
        raise typer.Exit(1)
