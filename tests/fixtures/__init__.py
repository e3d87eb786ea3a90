"""Test fixtures for pugwrap.

Template files:
- hello.pug: static heading, renders to <h1>hello pug</h1>
- greeting.pug: heading interpolating #{language}
- language.json: data for greeting.pug

FakeRunner stands in for the pug process in hermetic tests.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from pugwrap.runner import ProcessOutput, ProcessRunner

FIXTURES_DIR = Path(__file__).parent

HELLO_TEMPLATE = FIXTURES_DIR / "hello.pug"
GREETING_TEMPLATE = FIXTURES_DIR / "greeting.pug"
LANGUAGE_DATA = FIXTURES_DIR / "language.json"


class FakeRunner(ProcessRunner):
    """ProcessRunner that records calls and returns canned output.

    Attributes:
        output: Output returned by every call
        error: Raised instead of returning output when set
        calls: Recorded (mode, args, stdin bytes) tuples
    """

    def __init__(
        self,
        output: ProcessOutput | None = None,
        error: OSError | None = None,
    ) -> None:
        self.output = output or ProcessOutput(stdout=b"", stderr=b"", returncode=0)
        self.error = error
        self.calls: list[tuple[str, tuple[str, ...], bytes]] = []

    def run_with_stdin(self, args: Sequence[str], stdin: BinaryIO) -> ProcessOutput:
        self.calls.append(("file", tuple(args), stdin.read()))
        return self._respond()

    def run_with_input(self, args: Sequence[str], data: bytes) -> ProcessOutput:
        self.calls.append(("pipe", tuple(args), data))
        return self._respond()

    @property
    def last_args(self) -> tuple[str, ...]:
        return self.calls[-1][1]

    def _respond(self) -> ProcessOutput:
        if self.error is not None:
            raise self.error
        return self.output
