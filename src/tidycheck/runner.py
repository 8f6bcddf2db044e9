from pathlib import Path
from typing import Optional, Sequence, Union

from .core import list_files
from .reporting import Reporter, TapReporter
from .rules import TidyConfigError
from .tidy import Formatter, PerlTidy, is_file_tidy


def run_tests(
    reporter: Optional[Reporter] = None,
    *,
    exclude: Optional[Sequence] = None,
    path: Union[str, Path] = ".",
    perltidyrc: Union[str, Path, None] = None,
    mute: bool = False,
    skip_all: bool = False,
    no_plan: bool = False,
    formatter: Optional[Formatter] = None,
    verbose: bool = False,
) -> bool:
    """
    Test all Perl files under ``path`` for tidiness, one test per file.

    Args:
        reporter: Where results go (TAP on stdout by default)
        exclude: Exclusion criteria, see ``list_files``
        path: Top-level directory containing the files to test
        perltidyrc: Profile to use instead of perltidy's usual lookup
        mute: Silence diagnostics
        skip_all: Skip the whole run
        no_plan: Don't declare the number of tests up front
        formatter: Formatter to use instead of the ``perltidy`` executable
        verbose: Print scan progress to stderr

    Returns:
        Whether every file passed, as aggregated by the reporter

    Raises:
        TidyConfigError: If the files to test can't be determined; the
            reporter bails out first
    """
    reporter = reporter or TapReporter()
    formatter = formatter or PerlTidy()

    with reporter:
        if skip_all:
            reporter.skip_all("All tests skipped.")
            return reporter.passed

        try:
            files = list_files(path, exclude=exclude, verbose=verbose)
        except TidyConfigError as e:
            reporter.bail(str(e))
            raise

        if not no_plan:
            reporter.plan(len(files))

        for file in files:
            diagnostics: list[str] = []
            name = f"'{file}'"
            if is_file_tidy(
                file,
                perltidyrc,
                mute=mute,
                diag=diagnostics.append,
                formatter=formatter,
            ):
                reporter.ok(name)
            else:
                reporter.not_ok(name, diagnostics)

    return reporter.passed
