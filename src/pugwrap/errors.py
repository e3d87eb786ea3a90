"""Errors raised while invoking the pug compiler.

Two kinds exist:
- CompilerIOError: the process could not be created, fed or waited on
- CompilerReportedError: pug ran and wrote to its error stream
"""


class CompileError(Exception):
    """Base class for all compilation failures."""


class CompilerIOError(CompileError):
    """Raised when the compiler process cannot be run or communicated with."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(str(cause))


class CompilerReportedError(CompileError):
    """Raised when pug writes anything to stderr.

    The exit code is kept for diagnostics only. A zero exit status with a
    non-empty error stream is still a failure.
    """

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)

    def __str__(self) -> str:
        return self.message
