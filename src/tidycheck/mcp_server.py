from typing import Annotated
from fastmcp import FastMCP
from pydantic import Field

from tidycheck.core import list_files
from tidycheck.tidy import check_file

mcp = FastMCP(
    "Tidycheck",
    instructions="An MCP server for checking that Perl files are tidy.",
)


def list_perl_files(
    path: Annotated[
        str,
        Field(description="Top-level directory to scan. Defaults to the current directory."),
    ] = ".",
    exclude: Annotated[
        list[str] | None,
        Field(
            description="Path prefixes to exclude, e.g. ['blib/', 'local/']. If None (default), blib/ is excluded."
        ),
    ] = None,
) -> list[str]:
    """List the Perl files that would be tested, in test order."""
    return list_files(path, exclude=exclude)


def check_tidiness(
    files: list[str],
    perltidyrc: Annotated[
        str | None,
        Field(description="perltidyrc to use. If None (default), perltidy looks in its usual locations."),
    ] = None,
) -> list[dict]:
    """Check each file with perltidy and explain any that are not tidy."""
    results = []
    for file in files:
        outcome = check_file(file, perltidyrc)
        results.append(
            {
                "file": file,
                "tidy": outcome.ok,
                "diagnostics": outcome.diagnostics(),
            }
        )
    return results


mcp.tool(list_perl_files)
mcp.tool(check_tidiness)


if __name__ == "__main__":
    mcp.run()
