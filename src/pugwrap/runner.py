"""Process runners used to spawn the pug executable.

The compiler talks to the operating system only through a ProcessRunner,
so tests can substitute a fake process.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOutput:
    """Fully buffered output of one finished process.

    Attributes:
        stdout: Captured standard output bytes
        stderr: Captured standard error bytes
        returncode: Process exit status
    """

    stdout: bytes
    stderr: bytes
    returncode: int


class ProcessRunner(ABC):
    """Abstract interface for spawning the compiler process."""

    @abstractmethod
    def run_with_stdin(self, args: Sequence[str], stdin: BinaryIO) -> ProcessOutput:
        """Run a process with stdin bound to an open file.

        Args:
            args: Executable followed by its arguments
            stdin: Open binary file handle used as the process's stdin

        Returns:
            Captured process output

        Raises:
            OSError: If the process cannot be spawned or waited on
        """
        pass

    @abstractmethod
    def run_with_input(self, args: Sequence[str], data: bytes) -> ProcessOutput:
        """Run a process and feed data through a stdin pipe.

        All bytes are written and the write side is closed before waiting
        for the process to exit.

        Args:
            args: Executable followed by its arguments
            data: Bytes written to the process's stdin

        Returns:
            Captured process output

        Raises:
            OSError: If the process cannot be spawned, fed or waited on
        """
        pass


class SubprocessRunner(ProcessRunner):
    """ProcessRunner backed by subprocess.Popen."""

    def run_with_stdin(self, args: Sequence[str], stdin: BinaryIO) -> ProcessOutput:
        result = subprocess.run(
            list(args),
            stdin=stdin,
            capture_output=True,
        )
        return ProcessOutput(
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    def run_with_input(self, args: Sequence[str], data: bytes) -> ProcessOutput:
        with subprocess.Popen(
            list(args),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        ) as process:
            if process.stdin is None:
                process.kill()
                raise OSError("stdin pipe of compiler process is not available")

            # pug reads until end of input, so the write side must be closed
            # before waiting
            try:
                process.stdin.write(data)
                process.stdin.close()
            except OSError:
                logger.debug("Write to compiler stdin failed, killing pid %d", process.pid)
                process.kill()
                raise

            stdout, stderr = process.communicate()

        return ProcessOutput(
            stdout=stdout,
            stderr=stderr,
            returncode=process.returncode,
        )
