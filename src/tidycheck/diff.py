import difflib
from io import StringIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text


def _visible(line: str) -> str:
    """Show tabs and trailing whitespace, which are invisible in a table."""
    body = line.rstrip(" \t\r")
    tail = line[len(body) :]
    tail = tail.replace(" ", "\\s").replace("\t", "\\t").replace("\r", "\\r")
    return body.replace("\t", "\\t") + tail


def _cell(lines: list[str], index: int, stop: int, changed: bool) -> tuple[str, Text]:
    if index >= stop:
        return "", Text("")
    line = lines[index]
    return str(index + 1), Text(_visible(line) if changed else line.rstrip("\r"))


def table_diff(original: str, tidied: str, context: int = 3, width: int = 160) -> str:
    """
    Render a side-by-side diff of two texts as a plain-text table.

    Only hunks that differ are shown, with ``context`` unchanged lines
    around each one. Changed rows are flagged with ``*`` in the first column.
    """
    old_lines = original.split("\n")
    new_lines = tidied.split("\n")

    table = Table(box=box.ASCII, pad_edge=False)
    table.add_column("", no_wrap=True)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("original", overflow="fold")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("tidied", overflow="fold")

    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for index, group in enumerate(matcher.get_grouped_opcodes(context)):
        if index:
            table.add_section()
        for tag, i1, i2, j1, j2 in group:
            changed = tag != "equal"
            for offset in range(max(i2 - i1, j2 - j1)):
                left_no, left = _cell(old_lines, i1 + offset, i2, changed)
                right_no, right = _cell(new_lines, j1 + offset, j2, changed)
                table.add_row("*" if changed else "", left_no, left, right_no, right)

    console = Console(
        file=StringIO(),
        width=width,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
    )
    console.print(table, highlight=False)
    return console.file.getvalue().rstrip("\n")
