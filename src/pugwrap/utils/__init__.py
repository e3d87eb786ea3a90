"""pugwrap utility modules.

- logging: console / JSON-lines log output carrying pug invocation fields
- preflight: checks that pug and node are installed
"""

from pugwrap.utils.logging import configure_from_cli, get_logger, setup_logging
from pugwrap.utils.preflight import PreflightChecker, PreflightReport, ToolStatus

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
    "PreflightChecker",
    "PreflightReport",
    "ToolStatus",
]
