from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Sequence, Union
import re

import pathspec

from .patterns import DEFAULT_EXCLUDES


class TidyConfigError(ValueError):
    """Raised for configuration that makes the whole run meaningless."""


@dataclass(frozen=True)
class Prefix:
    """Exclude paths starting with a literal string."""

    prefix: str

    def matches(self, path: str) -> bool:
        return path.startswith(self.prefix)


@dataclass(frozen=True)
class Pattern:
    """Exclude paths where a regular expression matches anywhere."""

    regex: re.Pattern

    def matches(self, path: str) -> bool:
        return self.regex.search(path) is not None


@dataclass(frozen=True)
class Glob:
    """Exclude paths matching a gitignore-style glob."""

    glob: str

    @cached_property
    def spec(self) -> pathspec.PathSpec:
        return pathspec.PathSpec.from_lines("gitwildmatch", [self.glob])

    def matches(self, path: str) -> bool:
        return self.spec.match_file(path)


ExclusionRule = Union[Prefix, Pattern, Glob]


def as_rule(value) -> ExclusionRule:
    """Convert a caller-supplied exclusion criterion into a rule."""
    if isinstance(value, (Prefix, Pattern, Glob)):
        return value
    if isinstance(value, str):
        return Prefix(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    raise TidyConfigError(f"unsupported exclusion rule: {value!r}")


def as_rules(excludes: Optional[Sequence]) -> list[ExclusionRule]:
    """Normalize the exclude option, falling back to the default rules."""
    if excludes is None:
        excludes = DEFAULT_EXCLUDES
    if isinstance(excludes, (str, bytes)) or not isinstance(excludes, Sequence):
        raise TidyConfigError("exclude must be a list")
    return [as_rule(value) for value in excludes]


def is_excluded(path: str, rules: Sequence[ExclusionRule]) -> bool:
    """Check if any rule, in order, excludes the path."""
    if isinstance(rules, (str, bytes)) or not isinstance(rules, Sequence):
        raise TidyConfigError("exclude must be a list")
    for rule in rules:
        if as_rule(rule).matches(path):
            return True
    return False
