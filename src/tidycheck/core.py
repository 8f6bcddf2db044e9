from pathlib import Path
from typing import Optional, Sequence, Union

from rich.console import Console

from .patterns import PERL_FILE_PATTERN
from .rules import TidyConfigError, as_rules, is_excluded

error_console = Console(stderr=True)


def list_files(
    path: Union[str, Path] = ".",
    exclude: Optional[Sequence] = None,
    verbose: bool = False,
) -> list[str]:
    """
    Generate the sorted list of Perl files to be tested.

    Args:
        path: Top-level directory to scan
        exclude: Exclusion criteria; strings are path prefixes, compiled
            regular expressions match any part of the path. Defaults to
            excluding ``blib/``.
        verbose: Whether to print scan progress to stderr

    Returns:
        Path strings, forward-slash separated and relative to ``path`` the
        way the walk builds them, in ascending order

    Raises:
        TidyConfigError: If ``path`` is not an existing directory or
            ``exclude`` is not a list of rules
    """
    path = Path(path or ".")

    if not path.exists():
        raise TidyConfigError(f"{path} does not exist")
    if not path.is_dir():
        raise TidyConfigError(f"{path} is not a directory")

    rules = as_rules(exclude)

    if verbose:
        error_console.print(f"Scanning directory: {path}", highlight=False)
        error_console.print(f"Exclusion rules: {len(rules)}", highlight=False)

    result = []
    skipped = 0

    for file_path in path.rglob("*"):
        # Directories are walked, never tested
        if not file_path.is_file():
            continue

        candidate = file_path.as_posix()
        if is_excluded(candidate, rules):
            skipped += 1
            continue

        if PERL_FILE_PATTERN.search(file_path.name):
            result.append(candidate)

    if verbose:
        error_console.print(
            f"Scan complete: found {len(result)} files, excluded {skipped}",
            highlight=False,
        )
    return sorted(result)


def load_file(path: Union[str, Path, None]) -> Optional[str]:
    """Load a UTF-8 encoded file, or None if it can't be found or read."""
    if path is None:
        return None
    path = Path(path)
    if not path.is_file():
        return None
    try:
        # newline="" keeps CRLF line endings as they are on disk
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        return None
