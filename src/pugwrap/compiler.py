"""Invoker for the external pug compiler.

Builds the pug command line from a PugOptions value, delivers the template
over stdin (from a file handle or a pipe), and classifies the buffered
output: anything on stderr is a compiler-reported failure, regardless of
the exit status, otherwise stdout is the rendered markup.
"""

import logging
import os
import shutil
from typing import Any

from pugwrap.errors import CompileError, CompilerIOError, CompilerReportedError
from pugwrap.options import PugOptions
from pugwrap.runner import ProcessOutput, ProcessRunner, SubprocessRunner

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "pug"


def classify_output(output: ProcessOutput) -> str:
    """Turn captured process output into rendered markup.

    Args:
        output: Buffered output of a finished pug process

    Returns:
        Lossy-decoded stdout

    Raises:
        CompilerReportedError: If stderr is non-empty
    """
    if output.stderr:
        raise CompilerReportedError(
            output.stderr.decode("utf-8", errors="replace"),
            exit_code=output.returncode,
        )
    return output.stdout.decode("utf-8", errors="replace")


class PugCompiler:
    """Runs the pug executable on templates.

    Usage:
        compiler = PugCompiler()
        html = compiler.evaluate_string("h1 hello pug")

    Attributes:
        executable: Name or path of the pug executable
        runner: Process runner used to spawn pug
    """

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            executable: Name looked up on PATH, or an explicit path
            runner: Process runner (SubprocessRunner if None)
        """
        self.executable = executable
        self.runner = runner or SubprocessRunner()
        self._version: str | None = None

    @property
    def version(self) -> str | None:
        """Get the pug version (cached after first successful check)."""
        if self._version is None:
            self._version = self.get_version()
        return self._version

    def check_available(self) -> bool:
        """Check if the pug executable can be found."""
        return shutil.which(self.executable) is not None

    def get_version(self) -> str | None:
        """Ask pug for its version string.

        Returns:
            Version output, or None if pug could not report it
        """
        try:
            output = self.evaluate_string_with_options("", PugOptions().version_query())
        except CompileError as e:
            logger.debug("pug version query failed: %s", e)
            return None
        return output.strip() or None

    def evaluate(self, path: str | os.PathLike[str]) -> str:
        """Render a template file with default options."""
        return self.evaluate_with_options(path, PugOptions())

    def evaluate_with_options(
        self,
        path: str | os.PathLike[str],
        options: PugOptions,
    ) -> str:
        """Render a template file.

        The file is opened here and bound to pug's stdin; --path is set so
        pug can resolve includes relative to it.

        Args:
            path: Template file location
            options: Compiler options (consumed by this call)

        Returns:
            Rendered markup

        Raises:
            CompilerIOError: If the file cannot be opened or pug cannot run
            CompilerReportedError: If pug writes to stderr
        """
        options = options.stdin().with_path(path)
        args = self._command(options)

        try:
            with open(options.source_path, "rb") as template:
                logger.info(
                    "Running pug on %s",
                    options.source_path,
                    extra={"pug": {"executable": self.executable, "source": str(options.source_path)}},
                )
                output = self.runner.run_with_stdin(args, template)
        except OSError as e:
            raise CompilerIOError(e) from e

        return self._classify(output)

    def evaluate_string(self, text: str) -> str:
        """Render template text with default options."""
        return self.evaluate_string_with_options(text, PugOptions())

    def evaluate_string_with_options(self, text: str, options: PugOptions) -> str:
        """Render template text piped over stdin.

        Args:
            text: Template source
            options: Compiler options (consumed by this call)

        Returns:
            Rendered markup

        Raises:
            CompilerIOError: If pug cannot be spawned or fed
            CompilerReportedError: If pug writes to stderr
        """
        options = options.stdin()
        args = self._command(options)

        logger.info(
            "Running pug on %d characters of template text",
            len(text),
            extra={"pug": {"executable": self.executable, "source": "<string>"}},
        )
        try:
            output = self.runner.run_with_input(args, text.encode("utf-8"))
        except OSError as e:
            raise CompilerIOError(e) from e

        return self._classify(output)

    def get_metadata(self) -> dict[str, Any]:
        """Get compiler metadata for logging and debugging."""
        return {
            "executable": self.executable,
            "version": self.version,
            "available": self.check_available(),
        }

    def _command(self, options: PugOptions) -> tuple[str, ...]:
        """Serialize options once into the full command line."""
        args = (self.executable, *options.to_args())
        logger.debug(
            "Command: %s",
            " ".join(args),
            extra={"pug": {"executable": self.executable, "args": list(args[1:])}},
        )
        return args

    def _classify(self, output: ProcessOutput) -> str:
        fields = {
            "executable": self.executable,
            "exit_code": output.returncode,
            "stdout_bytes": len(output.stdout),
            "stderr_bytes": len(output.stderr),
        }
        try:
            html = classify_output(output)
        except CompilerReportedError as e:
            logger.warning("pug reported an error (exit code: %s)", e.exit_code, extra={"pug": fields})
            raise
        logger.debug("pug finished", extra={"pug": fields})
        return html


_default_compiler = PugCompiler()


def evaluate(path: str | os.PathLike[str]) -> str:
    """Render a template file with default options."""
    return _default_compiler.evaluate(path)


def evaluate_with_options(path: str | os.PathLike[str], options: PugOptions) -> str:
    """Render a template file with the given options."""
    return _default_compiler.evaluate_with_options(path, options)


def evaluate_string(text: str) -> str:
    """Render template text with default options."""
    return _default_compiler.evaluate_string(text)


def evaluate_string_with_options(text: str, options: PugOptions) -> str:
    """Render template text with the given options."""
    return _default_compiler.evaluate_string_with_options(text, options)
