"""Local template data passed to pug through the --obj flag.

A payload is one of three variants:
- JsonPayload: a structured value, serialized as JSON wrapped in single quotes
- RawPayload: pre-serialized text, passed through unchanged
- PathPayload: a filesystem path, passed as its (lossy) string form
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def lossy_path_str(path: str | os.PathLike[str]) -> str:
    """Return the string form of a path, replacing undecodable bytes."""
    return os.fsencode(path).decode("utf-8", errors="replace")


@dataclass(frozen=True)
class JsonPayload:
    """Structured value serialized to compact JSON.

    Attributes:
        value: Any JSON-serializable value
    """

    value: Any

    def to_token(self) -> str:
        """Serialize to the quoted JSON token."""
        return f"'{json.dumps(self.value, separators=(',', ':'))}'"


@dataclass(frozen=True)
class RawPayload:
    """Pre-serialized payload text.

    Attributes:
        text: Token passed to pug verbatim
    """

    text: str

    def to_token(self) -> str:
        return self.text


@dataclass(frozen=True)
class PathPayload:
    """Path to a file holding the template data.

    Attributes:
        path: Location of the data file
    """

    path: Path

    def to_token(self) -> str:
        return lossy_path_str(self.path)


Payload = JsonPayload | RawPayload | PathPayload


def as_payload(value: Any) -> Payload:
    """Coerce a value into a payload variant.

    Strings are raw payload text, path-like objects are path payloads and
    everything else is treated as a structured value.

    Args:
        value: Payload, str, path-like or JSON-serializable value

    Returns:
        Payload variant wrapping the value
    """
    if isinstance(value, (JsonPayload, RawPayload, PathPayload)):
        return value
    if isinstance(value, str):
        return RawPayload(value)
    if isinstance(value, os.PathLike):
        return PathPayload(Path(value))
    return JsonPayload(value)
