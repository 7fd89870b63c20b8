"""Terminal output at the user's chosen verbosity, plus yes/no prompts."""

import sys
import threading
from typing import TextIO

from .errors import InputError

AFFIRMATIVE_ANSWERS = {"", "y", "yes", "true"}


def is_affirmative(answer: str) -> bool:
    """An empty line, "y", "yes" or "true" (any case, surrounding whitespace ignored)."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


class Console:
    """Writes user-facing output; safe to call from clone worker threads.

    Levels:
        debug   only with --verbose
        info    hidden by --quiet
        notice  hidden by --quieter-quiet
        report  always shown; what a dry run would do
        error   always shown, on stderr
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        quieter_quiet: bool = False,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.verbose = verbose
        self.quieter_quiet = quieter_quiet
        self.quiet = quiet or quieter_quiet
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._lock = threading.Lock()

    def _write(self, stream: TextIO, text: str, end: str = "\n"):
        with self._lock:
            stream.write(f"{text}{end}")
            stream.flush()

    def debug(self, msg: str):
        if self.verbose:
            self._write(self._stdout, msg)

    def info(self, msg: str):
        if not self.quiet:
            self._write(self._stdout, msg)

    def notice(self, msg: str):
        if not self.quieter_quiet:
            self._write(self._stdout, msg)

    def report(self, msg: str):
        self._write(self._stdout, msg)

    def error(self, msg: str):
        self._write(self._stderr, msg)

    def confirm(self, question: str) -> bool:
        """Print question (always, prompts are never silenced) and read one line."""
        self._write(self._stdout, question, end="")
        try:
            line = self._stdin.readline()
        except OSError as e:
            raise InputError(f"Error reading input: {e}") from e
        if not line:
            raise InputError("Error reading input: unexpected end of input")
        return is_affirmative(line)
