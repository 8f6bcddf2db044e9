import sys
from typing import Optional, Sequence, TextIO


class Reporter:
    """
    Receives the results of a run, one test per file.

    Use as a context manager so the reporter is released on every exit
    path, including a bail out.
    """

    def __init__(self):
        self.count = 0
        self.failed = 0
        self.planned: Optional[int] = None
        self.bailed = False
        self.skipped = False

    def __enter__(self) -> "Reporter":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def begin(self) -> None:
        pass

    def release(self) -> None:
        pass

    def plan(self, count: int) -> None:
        self.planned = count

    def skip_all(self, reason: str) -> None:
        self.planned = 0
        self.skipped = True

    def ok(self, name: str) -> None:
        self.count += 1

    def not_ok(self, name: str, diagnostics: Sequence[str] = ()) -> None:
        self.count += 1
        self.failed += 1

    def diag(self, text: str) -> None:
        pass

    def bail(self, reason: str) -> None:
        self.bailed = True

    def done_testing(self) -> None:
        if self.planned is None:
            self.plan(self.count)

    @property
    def passed(self) -> bool:
        """Whether the run as a whole succeeded."""
        if self.bailed or self.failed:
            return False
        return self.planned is None or self.planned == self.count


class TapReporter(Reporter):
    """Write results in the Test Anything Protocol."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        super().__init__()
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _write(self, stream: TextIO, line: str) -> None:
        stream.write(line + "\n")
        stream.flush()

    def plan(self, count: int) -> None:
        super().plan(count)
        self._write(self.out, f"1..{count}")

    def skip_all(self, reason: str) -> None:
        super().skip_all(reason)
        self._write(self.out, f"1..0 # SKIP {reason}")

    def ok(self, name: str) -> None:
        super().ok(name)
        self._write(self.out, f"ok {self.count} - {name}")

    def not_ok(self, name: str, diagnostics: Sequence[str] = ()) -> None:
        super().not_ok(name, diagnostics)
        self._write(self.out, f"not ok {self.count} - {name}")
        self.diag(f"  Failed test {name}")
        for text in diagnostics:
            self.diag(text)

    def diag(self, text: str) -> None:
        for line in text.rstrip("\n").split("\n"):
            self._write(self.err, f"# {line}".rstrip())

    def bail(self, reason: str) -> None:
        super().bail(reason)
        self._write(self.out, f"Bail out!  {reason}")
