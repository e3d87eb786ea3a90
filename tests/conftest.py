"""Shared pytest fixtures for pugwrap tests.

Fixtures are organized by category:
- Path fixtures: template and data files
- Runner fixtures: a FakeRunner standing in for the pug process
- Executable fixtures: a small script that mimics the pug CLI
"""

import logging
import stat
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from pugwrap.utils.logging import get_logger
from tests.fixtures import FakeRunner

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def hello_template(fixtures_dir: Path) -> Path:
    """Return the path to hello.pug."""
    return fixtures_dir / "hello.pug"


# =============================================================================
# Runner Fixtures
# =============================================================================


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a FakeRunner that succeeds with empty output."""
    return FakeRunner()


# =============================================================================
# Executable Fixtures
# =============================================================================

FAKE_PUG_SOURCE = '''
import json
import os
import re
import sys

argv = sys.argv[1:]

if os.environ.get("FAKE_PUG_ARGS"):
    with open(os.environ["FAKE_PUG_ARGS"], "w") as f:
        json.dump(argv, f)

if "--version" in argv:
    sys.stdout.write("pug version: 3.0.2\\npug-cli version: 1.0.0-alpha6\\n")
    sys.exit(0)

source = sys.stdin.read().strip()

if source.startswith("!error"):
    sys.stderr.write("Error: " + source[len("!error"):].strip())
    sys.exit(int(os.environ.get("FAKE_PUG_EXIT", "0")))

data = {}
if "--obj" in argv:
    token = argv[argv.index("--obj") + 1]
    if os.path.isfile(token):
        with open(token) as f:
            token = f.read()
    data = json.loads(token.strip().strip("'"))

tag, _, text = source.partition(" ")
text = re.sub(r"#\\{(\\w+)\\}", lambda m: str(data.get(m.group(1), "")), text)
sys.stdout.write(f"<{tag}>{text}</{tag}>")
'''


@pytest.fixture
def fake_pug(tmp_path: Path) -> Path:
    """Create an executable that mimics the pug CLI.

    It renders `tag text` as `<tag>text</tag>`, interpolates #{name} from
    --obj data, writes `!error ...` templates to stderr, and records its
    arguments to $FAKE_PUG_ARGS when set.
    """
    script = tmp_path / "bin" / "pug"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n{FAKE_PUG_SOURCE}")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def args_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make the fake pug record its arguments, return the record file."""
    path = tmp_path / "args.json"
    monkeypatch.setenv("FAKE_PUG_ARGS", str(path))
    return path


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_pugwrap_logging() -> Iterator[None]:
    """Drop handlers the CLI attaches to the pugwrap logger."""
    yield
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
