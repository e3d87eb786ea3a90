"""Unit tests for preflight checks."""

import subprocess
from unittest.mock import MagicMock, patch

from pugwrap.utils.preflight import (
    NODE_INSTALL_HINT,
    PUG_INSTALL_HINT,
    PreflightChecker,
    PreflightReport,
    ToolStatus,
)


def _status(name: str, found: bool = True) -> ToolStatus:
    path = f"/usr/bin/{name}" if found else None
    return ToolStatus(name=name, path=path, version=None, hint="")


class TestPreflightReport:
    """Tests for the exit code and JSON shape of a report."""

    def test_all_found(self) -> None:
        assert PreflightReport(pug=_status("pug"), node=_status("node")).exit_code == 0

    def test_missing_pug(self) -> None:
        report = PreflightReport(pug=_status("pug", found=False), node=_status("node", found=False))

        assert report.exit_code == 1

    def test_missing_node_only(self) -> None:
        report = PreflightReport(pug=_status("pug"), node=_status("node", found=False))

        assert report.exit_code == 2

    def test_to_dict(self) -> None:
        pug = ToolStatus(name="pug", path="/usr/bin/pug", version="pug version: 3.0.2", hint="x")
        report = PreflightReport(pug=pug, node=_status("node", found=False))

        data = report.to_dict()

        assert data["exit_code"] == 2
        assert data["pug"] == {
            "name": "pug",
            "path": "/usr/bin/pug",
            "version": "pug version: 3.0.2",
            "hint": "x",
            "found": True,
        }
        assert data["node"]["found"] is False


class TestQueryVersion:
    """Tests for asking a tool for its version."""

    def test_first_line(self) -> None:
        checker = PreflightChecker()
        completed = MagicMock(returncode=0, stdout="pug version: 3.0.2\npug-cli version: 1.0.0\n")

        with patch("pugwrap.utils.preflight.subprocess.run", return_value=completed):
            assert checker.query_version("pug") == "pug version: 3.0.2"

    def test_timeout_is_applied(self) -> None:
        """Test a tool that never answers is cut off after the checker's timeout."""
        checker = PreflightChecker(timeout=0.5)

        with patch(
            "pugwrap.utils.preflight.subprocess.run",
            side_effect=subprocess.TimeoutExpired(["pug", "--version"], 0.5),
        ) as run:
            assert checker.query_version("pug") is None

        assert run.call_args.kwargs["timeout"] == 0.5

    def test_missing_command(self) -> None:
        checker = PreflightChecker()

        with patch("pugwrap.utils.preflight.subprocess.run", side_effect=FileNotFoundError("node")):
            assert checker.query_version("node") is None

    def test_non_zero_exit(self) -> None:
        checker = PreflightChecker()
        completed = MagicMock(returncode=1, stdout="v20.11.0\n")

        with patch("pugwrap.utils.preflight.subprocess.run", return_value=completed):
            assert checker.query_version("node") is None

    def test_empty_output(self) -> None:
        checker = PreflightChecker()
        completed = MagicMock(returncode=0, stdout="\n")

        with patch("pugwrap.utils.preflight.subprocess.run", return_value=completed):
            assert checker.query_version("node") is None


class TestCheckAll:
    """Tests for locating pug and node."""

    def test_nothing_installed(self) -> None:
        checker = PreflightChecker()

        with patch("pugwrap.utils.preflight.shutil.which", return_value=None):
            report = checker.check_all("pug")

        assert report.exit_code == 1
        assert report.pug.hint == PUG_INSTALL_HINT
        assert report.node.hint == NODE_INSTALL_HINT
        assert report.pug.version is None

    def test_version_queried_at_resolved_path(self) -> None:
        checker = PreflightChecker()

        with (
            patch("pugwrap.utils.preflight.shutil.which", side_effect=lambda name: f"/opt/bin/{name}"),
            patch.object(checker, "query_version", return_value="v1") as query,
        ):
            report = checker.check_all("pug")

        assert report.exit_code == 0
        assert report.pug.path == "/opt/bin/pug"
        assert [c.args[0] for c in query.call_args_list] == ["/opt/bin/pug", "/opt/bin/node"]

    def test_locate_skips_version_when_missing(self) -> None:
        checker = PreflightChecker()

        with (
            patch("pugwrap.utils.preflight.shutil.which", return_value=None),
            patch.object(checker, "query_version") as query,
        ):
            status = checker.locate("node", NODE_INSTALL_HINT)

        assert status.found is False
        query.assert_not_called()
