from .core import list_files, load_file
from .reporting import Reporter, TapReporter
from .rules import Glob, Pattern, Prefix, TidyConfigError, is_excluded
from .runner import run_tests
from .tidy import PerlTidy, check_file, is_file_tidy

__all__ = [
    "Glob",
    "Pattern",
    "PerlTidy",
    "Prefix",
    "Reporter",
    "TapReporter",
    "TidyConfigError",
    "check_file",
    "is_excluded",
    "is_file_tidy",
    "list_files",
    "load_file",
    "run_tests",
]
