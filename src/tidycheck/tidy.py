from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, Optional, Protocol, Sequence, Union
import subprocess

from rich.console import Console

from .core import load_file
from .diff import table_diff

error_console = Console(stderr=True)

DiagnosticSink = Callable[[str], None]


@dataclass(frozen=True)
class FormatResult:
    """Output of one formatter run: tidied text and the engine's error stream."""

    tidied: str
    errors: str = ""


class Formatter(Protocol):
    def format(
        self, source: str, perltidyrc: Union[str, Path, None] = None
    ) -> FormatResult: ...


class PerlTidy:
    """Run the ``perltidy`` executable as a filter over in-memory source."""

    def __init__(self, executable: str = "perltidy", extra_args: Sequence[str] = ()):
        self.executable = executable
        self.extra_args = list(extra_args)

    def command(self, perltidyrc: Union[str, Path, None] = None) -> list[str]:
        """Build the command line; without a profile perltidy finds its own."""
        command = [
            self.executable,
            "--standard-output",
            "--standard-error-output",
            *self.extra_args,
        ]
        if perltidyrc is not None:
            command.append(f"--profile={perltidyrc}")
        return command

    def format(
        self, source: str, perltidyrc: Union[str, Path, None] = None
    ) -> FormatResult:
        try:
            # Bytes in and out so line endings reach the comparison untouched
            result = subprocess.run(
                self.command(perltidyrc),
                input=source.encode("utf-8"),
                capture_output=True,
                check=False,
            )
        except OSError as e:
            return FormatResult("", f"Unable to run {self.executable}: {e}")

        tidied = result.stdout.decode("utf-8", errors="replace")
        errors = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0 and not errors:
            errors = f"{self.executable} exited with status {result.returncode}"
        return FormatResult(tidied, errors)


@dataclass(frozen=True)
class CheckOutcome:
    """Result of checking a single file."""

    file: str
    ok: ClassVar[bool] = False

    def diagnostics(self) -> list[str]:
        return []


@dataclass(frozen=True)
class Tidy(CheckOutcome):
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class NotTidy(CheckOutcome):
    diff: str = ""

    def diagnostics(self) -> list[str]:
        return [f"The file '{self.file}' is not tidy", self.diff]


@dataclass(frozen=True)
class LoadError(CheckOutcome):
    message: str = ""

    def diagnostics(self) -> list[str]:
        return [self.message]


@dataclass(frozen=True)
class EngineError(CheckOutcome):
    message: str = ""

    def diagnostics(self) -> list[str]:
        return ["perltidy reported the following errors:", self.message]


def check_file(
    file: Union[str, Path],
    perltidyrc: Union[str, Path, None] = None,
    formatter: Optional[Formatter] = None,
) -> CheckOutcome:
    """
    Reformat a file and compare the result with what is on disk.

    An error reported by the formatter wins over the comparison. Trailing
    line endings are ignored on both sides; line endings elsewhere are not.
    """
    name = str(file)
    code = load_file(file)
    if code is None:
        return LoadError(name, f"Unable to find or read '{name}'")

    result = (formatter or PerlTidy()).format(code, perltidyrc)
    if result.errors:
        return EngineError(name, result.errors)

    original = code.rstrip("\r\n")
    tidied = result.tidied.rstrip("\r\n")
    if original == tidied:
        return Tidy(name)
    return NotTidy(name, table_diff(original, tidied))


def print_diag(text: str) -> None:
    error_console.print(text, markup=False, highlight=False, soft_wrap=True)


def is_file_tidy(
    file: Union[str, Path],
    perltidyrc: Union[str, Path, None] = None,
    *,
    mute: bool = False,
    diag: Optional[DiagnosticSink] = None,
    formatter: Optional[Formatter] = None,
) -> bool:
    """
    Return True if the file is tidy.

    Diagnostics explaining a failure are sent to ``diag`` one message at a
    time (stderr by default). ``mute`` drops them without changing the result.
    """
    outcome = check_file(file, perltidyrc, formatter)
    if not mute:
        sink = diag or print_diag
        for message in outcome.diagnostics():
            sink(message)
    return outcome.ok
