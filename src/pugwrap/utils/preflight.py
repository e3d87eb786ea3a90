"""Checks that the tools behind pugwrap are installed.

pug itself is required. Node.js is only reported: pug-cli is a Node
script, so a missing node usually explains a pug that will not start.
"""

import shutil
import subprocess
from dataclasses import asdict, dataclass
from typing import Any

PUG_INSTALL_HINT = "npm install -g pug-cli"
NODE_INSTALL_HINT = "https://nodejs.org"


@dataclass
class ToolStatus:
    """What was found for one executable.

    Attributes:
        name: Executable name or path as configured
        path: Resolved location, None when not on PATH
        version: First line of `<tool> --version`, None if it gave nothing
        hint: Where to get the tool
    """

    name: str
    path: str | None
    version: str | None
    hint: str

    @property
    def found(self) -> bool:
        return self.path is not None


@dataclass
class PreflightReport:
    """Outcome of `pugwrap check`.

    Attributes:
        pug: Status of the configured pug executable
        node: Status of the Node.js runtime
    """

    pug: ToolStatus
    node: ToolStatus

    @property
    def exit_code(self) -> int:
        """0 when everything is found, 1 without pug, 2 without node only."""
        if not self.pug.found:
            return 1
        if not self.node.found:
            return 2
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "exit_code": self.exit_code,
            "pug": {**asdict(self.pug), "found": self.pug.found},
            "node": {**asdict(self.node), "found": self.node.found},
        }


class PreflightChecker:
    """Locates pug and node and asks each for its version.

    Every version query is bounded by ``timeout`` so a hung tool cannot
    hang the check.
    """

    def __init__(self, timeout: float = 10) -> None:
        self.timeout = timeout

    def query_version(self, executable: str) -> str | None:
        """Run `<executable> --version` and return its first line.

        Returns:
            Version line, or None on failure, timeout or empty output
        """
        try:
            result = subprocess.run(
                [executable, "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None

        if result.returncode != 0:
            return None
        lines = result.stdout.strip().splitlines()
        return lines[0] if lines else None

    def locate(self, executable: str, hint: str) -> ToolStatus:
        path = shutil.which(executable)
        version = self.query_version(path) if path else None
        return ToolStatus(name=executable, path=path, version=version, hint=hint)

    def check_all(self, executable: str = "pug") -> PreflightReport:
        """Check the configured pug executable and node.

        Args:
            executable: pug executable from configuration
        """
        return PreflightReport(
            pug=self.locate(executable, PUG_INSTALL_HINT),
            node=self.locate("node", NODE_INSTALL_HINT),
        )
